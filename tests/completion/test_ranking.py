"""Tests for completion ranking."""

from inkline.completion.data import ASSIGNEE_COMPLETIONS, DATE_COMPLETIONS, PRIORITY_COMPLETIONS
from inkline.completion.ranking import (
    CONTAINS_SCORE,
    EXACT_MATCH_SCORE,
    FUZZY_MATCH_SCORE,
    STARTS_WITH_SCORE,
    is_subsequence,
    match_score,
    rank_completions,
    score_item,
)
from inkline.domain.types import CompletionItem, PatternType


def values(items):
    return [item.value for item in items]


def test_prefix_beats_fuzzy():
    ranked = rank_completions(DATE_COMPLETIONS, "tod", PatternType.DATE)

    assert ranked[0].value == "today"
    assert "thursday" not in values(ranked)


def test_weekday_prefix_ranks_first():
    ranked = rank_completions(DATE_COMPLETIONS, "th", PatternType.DATE)
    assert ranked[0].value == "thursday"


def test_ties_keep_table_order():
    ranked = rank_completions(DATE_COMPLETIONS, "t", PatternType.DATE)
    assert values(ranked)[:2] == ["today", "tomorrow"]


def test_exact_match_wins():
    ranked = rank_completions(DATE_COMPLETIONS, "May", PatternType.DATE)
    assert ranked[0].value == "may"


def test_label_is_matched_too():
    ranked = rank_completions(PRIORITY_COMPLETIONS, "no priority", PatternType.PRIORITY)
    assert values(ranked) == ["none"]


def test_boost_orders_equal_tiers():
    ranked = rank_completions(ASSIGNEE_COMPLETIONS, "m", PatternType.ASSIGNEE)
    assert ranked[0].value == "me"


def test_empty_query_returns_table_head():
    ranked = rank_completions(DATE_COMPLETIONS, "", PatternType.DATE, limit=3)
    assert values(ranked) == ["today", "tomorrow", "yesterday"]


def test_no_match_and_limit():
    assert rank_completions(DATE_COMPLETIONS, "zzz", PatternType.DATE) == []
    assert len(rank_completions(DATE_COMPLETIONS, "e", PatternType.DATE, limit=4)) == 4


def test_match_tiers():
    item = CompletionItem(label="Tomorrow", value="tomorrow")

    assert match_score("tomorrow", item) == EXACT_MATCH_SCORE
    assert match_score("tom", item) == STARTS_WITH_SCORE
    assert match_score("morr", item) == CONTAINS_SCORE
    assert match_score("tmrw", item) == FUZZY_MATCH_SCORE
    assert match_score("xyz", item) == 0


def test_missing_boost_is_computed():
    item = CompletionItem(label="Today", value="today", category="Quick")
    assert score_item("today", item, PatternType.DATE) == EXACT_MATCH_SCORE + 100


def test_is_subsequence():
    assert is_subsequence("tdy", "today")
    assert is_subsequence("", "today")
    assert not is_subsequence("ydt", "today")
