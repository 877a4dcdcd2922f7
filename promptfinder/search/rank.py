# Score adjustment and result assembly.
# Stateless helpers: boost raw fuzzy scores, sort (lower is better), clip.

from __future__ import annotations
from typing import List, Sequence

from .config import RankingConfig
from .types import AdjustedMatch, RawMatch, ScoredResult


def _norm(text: str) -> str:
    return text.strip().casefold()


def is_exact_match(match: RawMatch, query: str) -> bool:
    """True when a matched field (or one of its elements) equals the query."""
    q = _norm(query)
    for value in match.field_values.values():
        if isinstance(value, str):
            if _norm(value) == q:
                return True
        elif any(isinstance(v, str) and _norm(v) == q for v in value):
            return True
    return False


def adjust_score(match: RawMatch, query: str, ranking: RankingConfig) -> AdjustedMatch:
    """
    First applicable rule wins:
      1. exact match in any matched field   -> exact_match_score
      2. title starts with the query        -> prefix_match_score
      3. several fields matched             -> raw * decay ** (n - 1)
      4. otherwise                          -> raw
    """
    if is_exact_match(match, query):
        return AdjustedMatch(match=match, score=ranking.exact_match_score, is_exact_match=True)

    title = match.candidate.title
    if title and _norm(title).startswith(_norm(query)):
        return AdjustedMatch(match=match, score=ranking.prefix_match_score, is_exact_match=False)

    n = len(set(match.matched_fields))
    score = match.raw_score
    if n > 1:
        score = score * ranking.multi_field_decay ** (n - 1)
    return AdjustedMatch(match=match, score=score, is_exact_match=False)


def to_result(adjusted: AdjustedMatch) -> ScoredResult:
    c = adjusted.match.candidate
    return ScoredResult(
        id=c.id,
        title=c.title,
        description=c.description,
        text=c.body,
        category=c.category,
        tags=list(c.tags),
        is_private=c.is_private,
        user_id=c.owner_id,
        score=adjusted.score,
        matched_fields=adjusted.match.matched_fields,
        is_exact_match=adjusted.is_exact_match,
    )


def rank_matches(
    matches: Sequence[RawMatch],
    query: str,
    ranking: RankingConfig,
    limit: int,
) -> List[ScoredResult]:
    # sorted() is stable: equal scores keep candidate order
    adjusted = [adjust_score(m, query, ranking) for m in matches]
    ranked = sorted(adjusted, key=lambda a: a.score)
    return [to_result(a) for a in ranked[:limit]]
