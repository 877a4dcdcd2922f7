# The per-request search pipeline:
#   validate -> fetch candidates -> project -> fuzzy match -> adjust -> assemble
# No state survives a call; the store and matcher are injected.

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional

from ..logs import get_logger, log_event
from .config import SearchConfig
from .errors import InternalError, SearchError
from .fetcher import CandidateFetcher, RecordStore
from .matcher import FuzzyMatcher, RapidFuzzMatcher
from .projector import project_records
from .rank import rank_matches
from .types import SearchQuery, SearchResponse
from .validator import validate_request

logger = get_logger("promptfinder.search")

EMPTY_MESSAGE = "No prompts found for search."
DONE_MESSAGE = "Search completed with exact match boost."


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000.0, 3)


class SearchEngine:
    def __init__(
        self,
        store: RecordStore,
        config: Optional[SearchConfig] = None,
        matcher: Optional[FuzzyMatcher] = None,
        store_timeout: Optional[float] = None,
    ):
        self.config = config or SearchConfig()
        self.matcher = matcher or RapidFuzzMatcher()
        self.fetcher = CandidateFetcher(store, cap=self.config.candidate_cap, timeout=store_timeout)

    def _run(self, query: SearchQuery, start: float) -> SearchResponse:
        records = self.fetcher.fetch(query)
        if not records:
            return SearchResponse(results=[], duration_ms=_elapsed_ms(start), message=EMPTY_MESSAGE)

        candidates = project_records(records)
        matches = self.matcher.match(query.text, candidates, self.config)
        results = rank_matches(matches, query.text, self.config.ranking, query.limit)
        log_event(
            logger,
            logging.DEBUG,
            "Ranked candidates",
            candidate_count=len(candidates),
            match_count=len(matches),
        )
        return SearchResponse(results=results, duration_ms=_elapsed_ms(start), message=DONE_MESSAGE)

    def search(self, data: Optional[Mapping[str, Any]], requester_id: Optional[str] = None) -> SearchResponse:
        """
        Validate `data` ({query, limit?}) and run the pipeline.

        Raises InvalidArgumentError before touching the store, and
        InternalError for any store or unexpected failure. Logged context is
        limited to query length, requester presence and timing.
        """
        start = time.perf_counter()
        try:
            query = validate_request(data, requester_id, self.config)
        except SearchError as e:
            log_event(logger, logging.WARNING, "searchPrompts rejected", error_type=e.error_type.value)
            raise
        context = {
            "query_length": len(query.text),
            "authenticated": query.authenticated,
            "limit": query.limit,
        }
        log_event(logger, logging.INFO, "searchPrompts started", **context)

        try:
            response = self._run(query, start)
        except SearchError as e:
            log_event(
                logger,
                logging.ERROR,
                "searchPrompts failed",
                error_type=e.error_type.value,
                duration_ms=_elapsed_ms(start),
                error_message=e.message,
                **context,
            )
            raise
        except Exception as e:
            log_event(
                logger,
                logging.ERROR,
                "searchPrompts failed with unexpected error",
                error_type=InternalError.error_type.value,
                duration_ms=_elapsed_ms(start),
                error_class=type(e).__name__,
                **context,
            )
            raise InternalError("Unexpected error in searchPrompts") from e

        log_event(
            logger,
            logging.INFO,
            "searchPrompts completed",
            result_count=response.total,
            duration_ms=response.duration_ms,
            **context,
        )
        return response
