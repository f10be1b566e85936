"""Completion subsystem: context detection, ranking, caching, strategies."""

from inkline.completion.cache import CompletionCache
from inkline.completion.command_completion import CommandCompletionStrategy
from inkline.completion.context import detect_context_at, detect_pattern_context
from inkline.completion.data import COMPLETION_TABLES
from inkline.completion.engine import CompletionEngine, apply_completion
from inkline.completion.orchestrator import CompletionOrchestrator
from inkline.completion.ranking import rank_completions
from inkline.completion.strategy import (
    CompletionRequest,
    CompletionStrategy,
    PatternCompletionStrategy,
)

__all__ = [
    "COMPLETION_TABLES",
    "CommandCompletionStrategy",
    "CompletionCache",
    "CompletionEngine",
    "CompletionOrchestrator",
    "CompletionRequest",
    "CompletionStrategy",
    "PatternCompletionStrategy",
    "apply_completion",
    "detect_context_at",
    "detect_pattern_context",
    "rank_completions",
]
