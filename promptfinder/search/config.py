# Search behaviour knobs: field weights, typo tolerance, candidate cap,
# limit bounds and ranking constants. Built once from Settings (optionally
# overridden by a YAML file) and shared read-only by every request.

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Tuple

import yaml

DEFAULT_FIELD_WEIGHTS: Tuple[Tuple[str, float], ...] = (
    ("title", 0.4),
    ("description", 0.2),
    ("body", 0.2),
    ("category", 0.1),
    ("tags", 0.1),
)

SEARCHABLE_FIELDS = frozenset(name for name, _ in DEFAULT_FIELD_WEIGHTS)


@dataclass(frozen=True)
class RankingConfig:
    exact_match_score: float = 0.001
    prefix_match_score: float = 0.01
    multi_field_decay: float = 0.95


@dataclass(frozen=True)
class SearchConfig:
    field_weights: Tuple[Tuple[str, float], ...] = DEFAULT_FIELD_WEIGHTS
    tolerance: float = 0.4
    min_raw_score: float = 0.02
    candidate_cap: int = 1000
    default_limit: int = 20
    max_limit: int = 100
    ranking: RankingConfig = field(default_factory=RankingConfig)

    def __post_init__(self) -> None:
        if not self.field_weights:
            raise ValueError("field_weights must not be empty")
        for name, weight in self.field_weights:
            if name not in SEARCHABLE_FIELDS:
                raise ValueError(f"Unknown searchable field '{name}'")
            if not 0.0 < weight <= 1.0:
                raise ValueError(f"Weight for '{name}' must be in (0, 1], got {weight}")
        if not 0.0 <= self.tolerance <= 1.0:
            raise ValueError(f"tolerance must be in [0, 1], got {self.tolerance}")
        if not 0.0 < self.min_raw_score <= 1.0:
            raise ValueError(f"min_raw_score must be in (0, 1], got {self.min_raw_score}")
        if self.candidate_cap < 1:
            raise ValueError("candidate_cap must be >= 1")
        if not 1 <= self.default_limit <= self.max_limit:
            raise ValueError("default_limit must be within [1, max_limit]")
        self._check_ranking()

    def _check_ranking(self) -> None:
        r = self.ranking
        if not 0.0 < r.multi_field_decay <= 1.0:
            raise ValueError(f"multi_field_decay must be in (0, 1], got {r.multi_field_decay}")
        # lowest score a fuzzy match can reach after the multi-field decay
        fuzzy_floor = self.min_raw_score * r.multi_field_decay ** (len(self.field_weights) - 1)
        if not 0.0 <= r.exact_match_score < r.prefix_match_score < fuzzy_floor:
            raise ValueError(
                "ranking scores must satisfy 0 <= exact_match_score < prefix_match_score"
                f" < decayed min_raw_score ({fuzzy_floor:.6g})"
            )

    @property
    def weights(self) -> Dict[str, float]:
        return dict(self.field_weights)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.field_weights)

    @classmethod
    def from_settings(cls, settings: Any) -> "SearchConfig":
        cfg = cls(
            tolerance=settings.MATCH_TOLERANCE,
            min_raw_score=settings.MIN_RAW_SCORE,
            candidate_cap=settings.CANDIDATE_CAP,
            default_limit=settings.DEFAULT_LIMIT,
            max_limit=settings.MAX_LIMIT,
            ranking=RankingConfig(
                exact_match_score=settings.EXACT_MATCH_SCORE,
                prefix_match_score=settings.PREFIX_MATCH_SCORE,
                multi_field_decay=settings.MULTI_FIELD_DECAY,
            ),
        )
        if settings.SEARCH_CONFIG_PATH:
            cfg = cfg.with_overrides(load_search_yaml(settings.SEARCH_CONFIG_PATH))
        return cfg

    def with_overrides(self, overrides: Mapping[str, Any]) -> "SearchConfig":
        """Return a copy with the keys of a `search:` YAML mapping applied."""
        changes: Dict[str, Any] = {}
        weights = overrides.get("field_weights")
        if weights is not None:
            if not isinstance(weights, Mapping):
                raise ValueError("field_weights must be a mapping of field -> weight")
            changes["field_weights"] = tuple((str(k), float(v)) for k, v in weights.items())
        for key in ("tolerance", "min_raw_score"):
            if key in overrides:
                changes[key] = float(overrides[key])
        for key in ("candidate_cap", "default_limit", "max_limit"):
            if key in overrides:
                changes[key] = int(overrides[key])
        ranking = overrides.get("ranking")
        if ranking:
            if not isinstance(ranking, Mapping):
                raise ValueError("ranking must be a mapping of constant -> value")
            unknown = set(ranking) - {f.name for f in fields(RankingConfig)}
            if unknown:
                raise ValueError(f"Unknown ranking keys: {sorted(unknown)}")
            changes["ranking"] = replace(
                self.ranking, **{k: float(v) for k, v in ranking.items()}
            )
        return replace(self, **changes)


def load_search_yaml(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Search config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data.get("search", {}) or {}

