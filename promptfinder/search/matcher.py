"""
Typo-tolerant, field-weighted matching of a query against projected candidates.

Per field, similarity is rapidfuzz's indel ratio in [0, 1]: `partial_ratio`
(best-aligned window) when the field is at least as long as the query, plain
`ratio` otherwise, so a short field is never treated as a substring of the
query. A field matches when its distance (1 - similarity) is within the
tolerance; for tags the best element counts.

The raw score of a candidate is

    1 - sum(weight[f] * similarity[f] for matched f) / sum(all weights)

clamped to [min_raw_score, 1.0]. Lower is better; the floor keeps every raw
score above the ranking sentinels.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Sequence

from rapidfuzz import fuzz

from .config import SearchConfig
from .types import FieldValue, MatchCandidate, RawMatch


class FuzzyMatcher(Protocol):
    def match(
        self,
        query: str,
        candidates: Sequence[MatchCandidate],
        config: SearchConfig,
    ) -> List[RawMatch]:
        """Return one RawMatch per matching candidate, in candidate order."""
        ...


def _normalize(text: str) -> str:
    return text.strip().casefold()


def similarity(query: str, value: str) -> float:
    """Similarity in [0, 1] between a normalized query and a normalized field value."""
    if not query or not value:
        return 0.0
    if len(value) >= len(query):
        return fuzz.partial_ratio(query, value) / 100.0
    return fuzz.ratio(query, value) / 100.0


class RapidFuzzMatcher:
    """Default FuzzyMatcher backed by rapidfuzz. Stateless and deterministic."""

    def _score_field(self, query: str, value: FieldValue) -> float:
        if isinstance(value, list):
            return max((similarity(query, _normalize(v)) for v in value), default=0.0)
        return similarity(query, _normalize(value))

    def match_candidate(
        self, query: str, candidate: MatchCandidate, config: SearchConfig
    ) -> Optional[RawMatch]:
        q = _normalize(query)
        floor = 1.0 - config.tolerance
        total_weight = sum(w for _, w in config.field_weights)

        matched: List[str] = []
        values: Dict[str, FieldValue] = {}
        weighted = 0.0
        for name, weight in config.field_weights:
            value = candidate.field_value(name)
            sim = self._score_field(q, value)
            if sim <= 0.0 or sim < floor:
                continue
            matched.append(name)
            values[name] = value
            weighted += weight * sim

        if not matched:
            return None

        raw = 1.0 - weighted / total_weight
        raw = min(1.0, max(config.min_raw_score, raw))
        return RawMatch(
            candidate=candidate,
            raw_score=raw,
            matched_fields=tuple(matched),
            field_values=values,
        )

    def match(
        self,
        query: str,
        candidates: Sequence[MatchCandidate],
        config: SearchConfig,
    ) -> List[RawMatch]:
        out: List[RawMatch] = []
        for c in candidates:
            m = self.match_candidate(query, c, config)
            if m is not None:
                out.append(m)
        return out

