from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Optional

from ..search.types import RecordFilter


class InMemoryRecordStore:
    """
    RecordStore over a plain list of record dicts.
    Filtering is by equality on isPrivate (and userId when given); results
    keep insertion order. `calls` records every filter passed to fetch().
    """

    def __init__(self, records: Optional[Iterable[Dict[str, Any]]] = None):
        self._records: List[Dict[str, Any]] = [dict(r) for r in (records or [])]
        self.calls: List[RecordFilter] = []

    def fetch(self, record_filter: RecordFilter, cap: int) -> List[Dict[str, Any]]:
        self.calls.append(record_filter)
        out: List[Dict[str, Any]] = []
        for r in self._records:
            if bool(r.get("isPrivate")) != record_filter.is_private:
                continue
            if record_filter.owner_id is not None and r.get("userId") != record_filter.owner_id:
                continue
            out.append(copy.deepcopy(r))
            if len(out) >= cap:
                break
        return out
