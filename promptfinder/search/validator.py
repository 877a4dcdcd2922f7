from __future__ import annotations

import math
from numbers import Real
from typing import Any, Mapping, Optional

from .config import SearchConfig
from .errors import InvalidArgumentError
from .types import SearchQuery


def clamp_limit(limit: Any, default: int = 20, maximum: int = 100) -> int:
    """
    Coerce a requested limit into [1, maximum].
    Non-numeric (including bools, NaN, inf) and out-of-range values fall back
    to `default`; in-range values are truncated to int, never rejected.
    """
    if isinstance(limit, bool) or not isinstance(limit, Real):
        return default
    if not math.isfinite(limit) or limit < 1 or limit > maximum:
        return default
    return int(limit)


def validate_request(
    data: Optional[Mapping[str, Any]],
    requester_id: Optional[str],
    config: SearchConfig,
) -> SearchQuery:
    """Turn an inbound `{query, limit?}` payload into a SearchQuery."""
    payload = data if isinstance(data, Mapping) else {}
    query = payload.get("query")
    if not isinstance(query, str) or not query.strip():
        raise InvalidArgumentError("A non-empty search query is required.")

    limit = clamp_limit(payload.get("limit"), config.default_limit, config.max_limit)

    if isinstance(requester_id, str):
        requester_id = requester_id.strip() or None
    else:
        requester_id = None

    return SearchQuery(text=query.strip(), limit=limit, requester_id=requester_id)
