from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Any, Dict, List, Optional, Protocol

from ..logs import get_logger, log_event
from .errors import InternalError
from .types import RecordFilter, SearchQuery

logger = get_logger("promptfinder.fetcher")


class RecordStore(Protocol):
    """
    Queryable record store consumed by the search engine.

    Implementations return raw record mappings using the persisted keys
    (id, title, description, text, category, tags, isPrivate, userId),
    honour the equality filter and return at most `cap` records. Failures
    are raised, never reported as partial results.
    """

    def fetch(self, record_filter: RecordFilter, cap: int) -> List[Dict[str, Any]]:
        ...


class CandidateFetcher:
    """
    Fetches the candidate set for one request: every public record, plus the
    requester's own private records when the request is authenticated.

    Privacy is enforced here: nothing downstream ever sees a private record
    that does not belong to the requester.
    """

    def __init__(self, store: RecordStore, cap: int = 1000, timeout: Optional[float] = None) -> None:
        self._store = store
        self._cap = cap
        self._timeout = timeout

    def _filters(self, requester_id: Optional[str]) -> List[RecordFilter]:
        filters = [RecordFilter(is_private=False)]
        if requester_id is not None:
            filters.append(RecordFilter(is_private=True, owner_id=requester_id))
        return filters

    def _read(self, record_filter: RecordFilter) -> List[Dict[str, Any]]:
        rows = self._store.fetch(record_filter, self._cap)
        if not isinstance(rows, (list, tuple)):
            raise InternalError("Record store returned a malformed response.")
        out: List[Dict[str, Any]] = []
        for row in rows[: self._cap]:
            if not isinstance(row, Mapping) or not row.get("id"):
                raise InternalError("Record store returned a malformed record.")
            if not self._visible(row, record_filter):
                log_event(
                    logger,
                    logging.WARNING,
                    "Dropped record outside the requested visibility class",
                    is_private=record_filter.is_private,
                )
                continue
            out.append(dict(row))
        return out

    @staticmethod
    def _visible(row: Mapping, record_filter: RecordFilter) -> bool:
        is_private = bool(row.get("isPrivate"))
        if is_private != record_filter.is_private:
            return False
        if is_private:
            return row.get("userId") == record_filter.owner_id
        return True

    def fetch(self, query: SearchQuery) -> List[Dict[str, Any]]:
        """
        Run one read per visibility class (concurrently when there are two)
        and return public records followed by the requester's private ones.
        """
        filters = self._filters(query.requester_id)
        pool = ThreadPoolExecutor(max_workers=len(filters), thread_name_prefix="fetch")
        try:
            futures = [pool.submit(self._read, f) for f in filters]
            batches = [fut.result(timeout=self._timeout) for fut in futures]
        except InternalError:
            raise
        except FutureTimeout as e:
            raise InternalError("Timed out fetching prompts from the record store.") from e
        except Exception as e:
            raise InternalError("Failed to fetch prompts from the record store.") from e
        finally:
            # a timed-out read is abandoned, not awaited
            pool.shutdown(wait=False, cancel_futures=True)

        seen = set()
        records: List[Dict[str, Any]] = []
        for batch in batches:
            for row in batch:
                if row["id"] in seen:
                    continue
                seen.add(row["id"])
                records.append(row)
        return records
