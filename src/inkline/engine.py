"""Engine facade.

Bundles the registry, trigger detection, extraction, switching and completion
behind one object a host editor can hold for the life of an editing session.
"""

from datetime import date
from typing import Optional

from inkline.commands.models import CommandContext, CommandResult
from inkline.commands.registry import CommandRegistry
from inkline.commands.switch import NodeTypeSwitchProcessor
from inkline.commands.trigger import TriggerResult
from inkline.completion.cache import CompletionCache
from inkline.completion.command_completion import CommandCompletionStrategy
from inkline.completion.engine import CompletionEngine
from inkline.completion.orchestrator import CompletionOrchestrator
from inkline.completion.strategy import PatternCompletionStrategy
from inkline.config import EngineConfig
from inkline.domain.event_bus import EventBus
from inkline.domain.types import CompletionResult, ExtractionResult
from inkline.logger import get_logger
from inkline.patterns.extractor import extract_embedded_patterns

logger = get_logger("engine")


class InklineEngine:
    """
    One editing session's worth of recognition state.

    Example:
        >>> engine = InklineEngine()
        >>> engine.extract("Ship it @friday #high").clean_text
        'Ship it'
        >>> engine.process_switch("Buy milk $task", 14).node_type
        'taskNode'
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        registry: Optional[CommandRegistry] = None,
        event_bus: Optional[EventBus] = None,
        cache: Optional[CompletionCache] = None,
    ):
        self.config = config or EngineConfig()
        self.event_bus = event_bus or EventBus()
        self.registry = registry or CommandRegistry.create(event_bus=self.event_bus)
        self.completion_engine = CompletionEngine(self.config, cache=cache)
        self.switch_processor = NodeTypeSwitchProcessor(self.registry)
        self.orchestrator = CompletionOrchestrator(
            [
                CommandCompletionStrategy(self.registry, limit=self.config.result_limit),
                PatternCompletionStrategy(self.completion_engine),
            ]
        )
        logger.debug(f"Engine ready with {len(self.registry)} command(s)")

    def extract(self, text: str, today: Optional[date] = None) -> ExtractionResult:
        return extract_embedded_patterns(text, today)

    def detect_trigger(self, text: str, cursor_position: Optional[int] = None) -> TriggerResult:
        return self.registry.detector.detect(text, cursor_position)

    def complete(self, text: str, cursor_position: int) -> Optional[CompletionResult]:
        """Pattern completions only; see :meth:`suggest` for commands too."""
        return self.completion_engine.complete(text, cursor_position)

    def suggest(self, text: str, cursor_position: int) -> Optional[CompletionResult]:
        """Command or pattern completions, whichever applies at the cursor."""
        return self.orchestrator.get_completions(text, cursor_position)

    def process_switch(self, text: str, cursor_position: Optional[int] = None) -> CommandResult:
        return self.switch_processor.process_switch(text, cursor_position)

    def execute(self, command_id: str, text: str, cursor_position: Optional[int] = None) -> CommandResult:
        if cursor_position is None:
            cursor_position = len(text)
        return self.registry.execute(command_id, CommandContext(text=text, cursor_position=cursor_position))

    def reset(self) -> None:
        """Drop cached completions (the command table is kept)."""
        self.completion_engine.clear_cache()
