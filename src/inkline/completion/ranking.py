"""Fuzzy ranking of completion candidates.

Score = match tier + relevance boost, where the tier is exact (1000),
starts-with (100), contains (50) or in-order subsequence (10), checked
case-insensitively against both value and label. Sorting is stable so equal
scores keep table order.
"""

from typing import Optional, Sequence

from inkline.completion.data import relevance_boost
from inkline.domain.types import CompletionItem, PatternType

EXACT_MATCH_SCORE = 1000
STARTS_WITH_SCORE = 100
CONTAINS_SCORE = 50
FUZZY_MATCH_SCORE = 10


def is_subsequence(query: str, value: str) -> bool:
    """Whether all characters of ``query`` occur in ``value`` in order."""
    remaining = iter(value)
    return all(char in remaining for char in query)


def match_score(query: str, item: CompletionItem) -> int:
    """Base tier score for ``item``; 0 means no match."""
    q = query.lower()
    value = item.value.lower()
    label = item.label.lower()

    if value == q or label == q:
        return EXACT_MATCH_SCORE
    if value.startswith(q) or label.startswith(q):
        return STARTS_WITH_SCORE
    if q in value or q in label:
        return CONTAINS_SCORE
    if is_subsequence(q, value) or is_subsequence(q, label):
        return FUZZY_MATCH_SCORE
    return 0


def score_item(query: str, item: CompletionItem, pattern_type: PatternType) -> float:
    base = match_score(query, item)
    if base == 0:
        return 0
    boost: Optional[float] = item.boost
    if boost is None:
        boost = relevance_boost(item, pattern_type)
    return base + boost


def rank_completions(
    items: Sequence[CompletionItem],
    query: str,
    pattern_type: PatternType | str,
    limit: int = 15,
) -> list[CompletionItem]:
    """
    Rank ``items`` against ``query``.

    An empty query returns the first ``limit`` items in table order.

    Args:
        items: Candidate table, in its natural order
        query: Typed text after the trigger
        pattern_type: Pattern the candidates belong to
        limit: Maximum number of items returned

    Returns:
        Matching items, best first
    """
    if not query.strip():
        return list(items[:limit])

    pattern_type = PatternType(pattern_type)
    scored = []
    for item in items:
        score = score_item(query, item, pattern_type)
        if score > 0:
            scored.append((score, item))

    # sorted() is stable, so ties keep table order
    scored = sorted(scored, key=lambda pair: pair[0], reverse=True)
    return [item for _, item in scored[:limit]]
