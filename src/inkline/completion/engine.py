"""Completion engine for embedded patterns.

Given the buffer and the cursor, works out which pattern is being typed,
ranks the candidate table for it and anchors the result at the typed span.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from inkline.completion.cache import CompletionCache
from inkline.completion.context import detect_context_at
from inkline.completion.data import COMPLETION_TABLES, day_completions
from inkline.completion.ranking import rank_completions
from inkline.config import EngineConfig
from inkline.domain.protocols import Ranker
from inkline.domain.types import CompletionItem, CompletionResult, PatternContext, PatternType
from inkline.logger import get_logger
from inkline.patterns.registry import PATTERN_REGISTRY

logger = get_logger("completion.engine")


class CompletionEngine:
    """Pattern completion with fuzzy ranking and a TTL cache.

    Example:
        >>> engine = CompletionEngine()
        >>> result = engine.complete("Call Bob @tod", 13)
        >>> result.items[0].value, (result.start, result.end)
        ('today', (9, 13))
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        cache: Optional[CompletionCache] = None,
        ranker: Ranker = rank_completions,
        data: Mapping[PatternType, Sequence[CompletionItem]] = COMPLETION_TABLES,
    ):
        """Initialize the engine.

        Args:
            config: Engine settings; defaults to ``EngineConfig()``
            cache: Result cache; built from ``config`` when omitted
            ranker: Candidate ranking function
            data: Candidate tables per pattern type
        """
        self.config = config or EngineConfig()
        if cache is None and self.config.enable_cache:
            cache = CompletionCache(ttl=self.config.cache_ttl_seconds, size_limit=self.config.cache_size_limit)
        self.cache = cache
        self._ranker = ranker
        self._data = data

    def complete(self, text: str, cursor_position: int) -> Optional[CompletionResult]:
        """
        Completions for the pattern being typed at ``cursor_position``.

        Returns:
            A CompletionResult anchored at ``[match_start, cursor)``, or None
            when no pattern is being typed or nothing matches
        """
        try:
            context = detect_context_at(text, cursor_position)
            if context is None:
                return None
            return self._complete_context(context)
        except Exception as e:
            logger.opt(exception=e).error(f"Completion failed at offset {cursor_position}: {e}")
            return None

    def _complete_context(self, context: PatternContext) -> Optional[CompletionResult]:
        key = (context.type, context.query)
        if self.cache is not None:
            cached = self.cache.get(key, context.match_start, context.match_end)
            if cached is not None:
                logger.debug(f"Completion cache hit for {context.type.value}:{context.query!r}")
                return cached

        items = self._rank(context)
        if not items:
            logger.debug(f"No {context.type.value} completions for {context.query!r}")
            return None

        result = CompletionResult(
            start=context.match_start,
            end=context.match_end,
            pattern_type=context.type,
            query=context.query,
            items=tuple(items),
            valid_for=PATTERN_REGISTRY[context.type].validation_regex.pattern,
        )
        if self.cache is not None:
            self.cache.set(key, result, context.match_start, context.match_end)
        return result

    def _rank(self, context: PatternContext) -> list[CompletionItem]:
        if context.partial_date is not None:
            # Day candidates are already narrowed to the typed partial day
            candidates = day_completions(context.partial_date)
            query = context.partial_date.partial_day
            limit = self.config.result_limit
        else:
            candidates = tuple(self._data.get(context.type, ()))
            query = context.query
            limit = self.config.result_limit
            if not query:
                limit = min(limit, self.config.bare_trigger_limit)
        return self._ranker(candidates, query, context.type, limit)

    def clear_cache(self) -> None:
        if self.cache is not None:
            self.cache.clear()


def apply_completion(text: str, result: CompletionResult, item: CompletionItem) -> tuple[str, int]:
    """
    Insert ``item`` into ``text`` over the span of ``result``.

    The pattern prefix is re-emitted when the span starts with it, and a tag
    gets its closing bracket unless one already follows.

    Returns:
        ``(new_text, new_cursor)``
    """
    insertion = item.value
    if result.pattern_type is None:
        # Command completions replace the typed trigger with the full trigger
        new_text = f"{text[:result.start]}{insertion}{text[result.end:]}"
        return new_text, result.start + len(insertion)

    spec = PATTERN_REGISTRY[result.pattern_type]
    current = text[result.start:result.end]
    if current.lower().startswith(spec.prefix.lower()):
        insertion = f"{spec.prefix}{insertion}"
    if spec.suffix and not text[result.end:].lstrip(" ").startswith(spec.suffix):
        insertion = f"{insertion}{spec.suffix}"
    new_text = f"{text[:result.start]}{insertion}{text[result.end:]}"
    return new_text, result.start + len(insertion)
