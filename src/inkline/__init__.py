"""inkline: command and pattern recognition for free-form node editors."""

from inkline.commands import (
    Command,
    CommandContext,
    CommandRegistry,
    CommandResult,
    NodeTypeSwitchProcessor,
    TriggerDetector,
    TriggerResult,
    detect_trigger,
)
from inkline.completion import CompletionCache, CompletionEngine
from inkline.config import EngineConfig, load_engine_config
from inkline.domain import (
    CommandCategory,
    CompletionItem,
    CompletionResult,
    EventBus,
    ExtractionResult,
    PatternMatch,
    PatternType,
    TriggerType,
)
from inkline.engine import InklineEngine
from inkline.patterns import extract_embedded_patterns, has_embedded_patterns, parse_task_list

__version__ = "0.1.0"

__all__ = [
    "Command",
    "CommandCategory",
    "CommandContext",
    "CommandRegistry",
    "CommandResult",
    "CompletionCache",
    "CompletionEngine",
    "CompletionItem",
    "CompletionResult",
    "EngineConfig",
    "EventBus",
    "ExtractionResult",
    "InklineEngine",
    "NodeTypeSwitchProcessor",
    "PatternMatch",
    "PatternType",
    "TriggerDetector",
    "TriggerResult",
    "TriggerType",
    "detect_trigger",
    "extract_embedded_patterns",
    "has_embedded_patterns",
    "load_engine_config",
    "parse_task_list",
]
