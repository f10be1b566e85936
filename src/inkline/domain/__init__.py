"""Domain layer: types, protocols and events shared by every component."""

from inkline.domain.event_bus import EventBus
from inkline.domain.events import (
    CommandExecuted,
    CommandRegistered,
    CommandUnregistered,
    Event,
    RegistryCleared,
)
from inkline.domain.protocols import Clock, Ranker
from inkline.domain.types import (
    CommandCategory,
    CompletionItem,
    CompletionResult,
    ExtractionResult,
    PartialDate,
    PatternContext,
    PatternMatch,
    PatternType,
    TaskItem,
    TriggerType,
)

__all__ = [
    "Clock",
    "CommandCategory",
    "CommandExecuted",
    "CommandRegistered",
    "CommandUnregistered",
    "CompletionItem",
    "CompletionResult",
    "Event",
    "EventBus",
    "ExtractionResult",
    "PartialDate",
    "PatternContext",
    "PatternMatch",
    "PatternType",
    "Ranker",
    "RegistryCleared",
    "TaskItem",
    "TriggerType",
]
