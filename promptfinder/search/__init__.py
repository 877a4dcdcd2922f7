# Makes the folder importable as a package.
# Exports the engine, its collaborators' interfaces and the error kinds.

from .config import RankingConfig, SearchConfig
from .engine import SearchEngine
from .errors import ErrorType, InternalError, InvalidArgumentError, SearchError
from .fetcher import CandidateFetcher, RecordStore
from .matcher import FuzzyMatcher, RapidFuzzMatcher
from .types import MatchCandidate, RawMatch, RecordFilter, ScoredResult, SearchQuery, SearchResponse

__all__ = [
    "SearchEngine",
    "SearchConfig",
    "RankingConfig",
    "CandidateFetcher",
    "RecordStore",
    "FuzzyMatcher",
    "RapidFuzzMatcher",
    "ErrorType",
    "SearchError",
    "InvalidArgumentError",
    "InternalError",
    "MatchCandidate",
    "RawMatch",
    "RecordFilter",
    "ScoredResult",
    "SearchQuery",
    "SearchResponse",
]
