"""
Strategy interfaces for completions.

Each strategy serves one family of completions (embedded patterns, ``$``/``/``
commands) so the orchestrator can try them in turn.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from inkline.completion.context import detect_context_at
from inkline.completion.engine import CompletionEngine
from inkline.domain.types import CompletionResult
from inkline.utils import clamp_cursor


@dataclass(slots=True)
class CompletionRequest:
    """Snapshot of the editor state used by completion strategies."""

    text: str
    cursor_position: int

    def __post_init__(self) -> None:
        self.cursor_position = clamp_cursor(self.text, self.cursor_position)

    @property
    def text_before_cursor(self) -> str:
        return self.text[: self.cursor_position]


class CompletionStrategy(Protocol):
    """Contract implemented by all completion strategies."""

    def can_handle(self, request: CompletionRequest) -> bool:
        """Return ``True`` when this strategy should produce candidates."""

        ...

    def get_candidates(self, request: CompletionRequest) -> Optional[CompletionResult]:
        """Return the completion result for the current state, if any."""

        ...


class PatternCompletionStrategy:
    """Completes ``@date``, ``#priority``, ``[tag]``, ``+assignee`` and ``color:``."""

    def __init__(self, engine: CompletionEngine) -> None:
        self._engine = engine

    def can_handle(self, request: CompletionRequest) -> bool:
        return detect_context_at(request.text, request.cursor_position) is not None

    def get_candidates(self, request: CompletionRequest) -> Optional[CompletionResult]:
        return self._engine.complete(request.text, request.cursor_position)
