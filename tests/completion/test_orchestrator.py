from typing import Optional

from inkline.completion.engine import CompletionEngine
from inkline.completion.orchestrator import CompletionOrchestrator
from inkline.completion.strategy import (
    CompletionRequest,
    CompletionStrategy,
    PatternCompletionStrategy,
)
from inkline.domain.types import CompletionItem, CompletionResult, PatternType


class StubStrategy(CompletionStrategy):
    def __init__(self, name: str, match: bool, result: list[str]):
        self.name = name
        self._match = match
        self._result = result
        self.calls = 0

    def can_handle(self, request: CompletionRequest) -> bool:
        self.calls += 1
        return self._match

    def get_candidates(self, request: CompletionRequest) -> Optional[CompletionResult]:
        return CompletionResult(
            start=0,
            end=request.cursor_position,
            pattern_type=PatternType.TAG,
            query="",
            items=tuple(CompletionItem(label=value, value=value) for value in self._result),
        )


class ExplodingStrategy(CompletionStrategy):
    def can_handle(self, request: CompletionRequest) -> bool:
        raise RuntimeError("strategy bug")

    def get_candidates(self, request: CompletionRequest) -> Optional[CompletionResult]:
        return None


def test_orchestrator_selects_first_matching_strategy() -> None:
    strategies = [
        StubStrategy("A", match=False, result=[]),
        StubStrategy("B", match=True, result=["hit"]),
        StubStrategy("C", match=True, result=["miss"]),
    ]
    orchestrator = CompletionOrchestrator(strategies)

    result = orchestrator.get_completions("/", 1)

    assert [item.value for item in result.items] == ["hit"]
    assert strategies[0].calls == 1
    assert strategies[1].calls == 1
    assert strategies[2].calls == 0


def test_orchestrator_returns_none_when_nothing_matches() -> None:
    orchestrator = CompletionOrchestrator([StubStrategy("A", match=False, result=["x"])])
    assert orchestrator.get_completions("text", 4) is None


def test_failing_strategy_is_skipped() -> None:
    fallback = StubStrategy("B", match=True, result=["fallback"])
    orchestrator = CompletionOrchestrator([ExplodingStrategy(), fallback])

    result = orchestrator.get_completions("abc", 3)

    assert [item.value for item in result.items] == ["fallback"]


def test_request_clamps_cursor() -> None:
    request = CompletionRequest("abc", 10)

    assert request.cursor_position == 3
    assert request.text_before_cursor == "abc"


def test_pattern_strategy() -> None:
    strategy = PatternCompletionStrategy(CompletionEngine())

    assert not strategy.can_handle(CompletionRequest("plain", 5))
    request = CompletionRequest("Fix #hi", 7)
    assert strategy.can_handle(request)
    assert strategy.get_candidates(request).items[0].value == "high"
