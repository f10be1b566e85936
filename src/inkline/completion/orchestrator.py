"""
Orchestrator that coordinates completion strategies.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from inkline.domain.types import CompletionResult
from inkline.logger import get_logger

from .strategy import CompletionRequest, CompletionStrategy

logger = get_logger("completion.orchestrator")


class CompletionOrchestrator:
    """Selects the first strategy able to serve the current request."""

    def __init__(self, strategies: Sequence[CompletionStrategy]) -> None:
        self._strategies = list(strategies)

    def get_completions(self, text: str, cursor_position: int) -> Optional[CompletionResult]:
        request = CompletionRequest(text, cursor_position)
        for strategy in self._strategies:
            try:
                if strategy.can_handle(request):
                    logger.debug(f"Strategy {strategy.__class__.__name__} selected for completion")
                    return strategy.get_candidates(request)
            except Exception:
                logger.exception(f"Completion strategy {strategy.__class__.__name__} failed")
        logger.debug("No completion strategy matched current input")
        return None
