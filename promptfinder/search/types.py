# Data models for the search layer.
# Everything here lives for one request and is discarded with the response.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

FieldValue = Union[str, List[str]]


@dataclass(frozen=True)
class RecordFilter:
    """Equality filter understood by every RecordStore."""
    is_private: bool
    owner_id: Optional[str] = None


@dataclass(frozen=True)
class SearchQuery:
    """A validated request: trimmed text, clamped limit, optional requester."""
    text: str
    limit: int
    requester_id: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return self.requester_id is not None


@dataclass(frozen=True)
class MatchCandidate:
    """Projected record: only the searchable and display fields survive."""
    id: str
    title: str = ""
    description: str = ""
    body: str = ""
    category: str = ""
    tags: Tuple[str, ...] = ()
    is_private: bool = False
    owner_id: str = ""

    def field_value(self, name: str) -> FieldValue:
        if name == "tags":
            return list(self.tags)
        return getattr(self, name)


@dataclass
class RawMatch:
    """Fuzzy engine output for one candidate (lower raw_score = better)."""
    candidate: MatchCandidate
    raw_score: float
    matched_fields: Tuple[str, ...]
    field_values: Dict[str, FieldValue] = field(default_factory=dict)

    @property
    def candidate_id(self) -> str:
        return self.candidate.id


@dataclass
class AdjustedMatch:
    """RawMatch after the boost rules have been applied."""
    match: RawMatch
    score: float
    is_exact_match: bool


@dataclass
class ScoredResult:
    """One ranked result as returned to callers."""
    id: str
    title: str
    description: str
    text: str
    category: str
    tags: List[str]
    is_private: bool
    user_id: str
    score: float
    matched_fields: Tuple[str, ...]
    is_exact_match: bool

    def to_dict(self) -> Dict[str, Any]:
        fields_matched = list(self.matched_fields)
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "text": self.text,
            "category": self.category,
            "tags": list(self.tags),
            "isPrivate": self.is_private,
            "userId": self.user_id,
            "score": self.score,
            "fieldsMatched": fields_matched,
            "isExactMatch": self.is_exact_match,
            "matchedIn": list(fields_matched),
        }


@dataclass
class SearchResponse:
    """Final payload: ranked results plus timing for observability."""
    results: List[ScoredResult]
    duration_ms: float
    message: str

    @property
    def total(self) -> int:
        return len(self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "total": self.total,
            "durationMs": self.duration_ms,
            "message": self.message,
        }
