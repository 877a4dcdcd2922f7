from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, List

from .types import MatchCandidate


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _tags(value: Any) -> tuple:
    if isinstance(value, (list, tuple)):
        return tuple(t for t in value if isinstance(t, str))
    return ()


def project_record(record: Mapping[str, Any]) -> MatchCandidate:
    """
    Reduce a raw store record to its searchable/display fields.
    Absent or non-string values become "" (tags: empty), the source is never mutated.
    The body is persisted as `text`; `body` is accepted too.
    """
    body = record.get("text")
    if not isinstance(body, str):
        body = record.get("body")
    return MatchCandidate(
        id=str(record["id"]),
        title=_text(record.get("title")),
        description=_text(record.get("description")),
        body=_text(body),
        category=_text(record.get("category")),
        tags=_tags(record.get("tags")),
        is_private=bool(record.get("isPrivate")),
        owner_id=_text(record.get("userId")),
    )


def project_records(records: Iterable[Mapping[str, Any]]) -> List[MatchCandidate]:
    return [project_record(r) for r in records]
