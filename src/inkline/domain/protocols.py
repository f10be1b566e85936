"""Core protocols for type hints and abstractions.

Protocols describe the contracts that pluggable components must satisfy, so
tests and hosts can swap in their own implementations without subclassing.
"""

from typing import Callable, Protocol, Sequence

from inkline.domain.types import CompletionItem, PatternType

__all__ = [
    "Clock",
    "Ranker",
]

# Wall-clock source returning seconds, e.g. ``time.time``
Clock = Callable[[], float]


class Ranker(Protocol):
    """Scores and orders completion candidates against a typed query.

    Implementations must not mutate ``items`` and must return at most
    ``limit`` entries, best first.
    """

    def __call__(
        self,
        items: Sequence[CompletionItem],
        query: str,
        pattern_type: PatternType,
        limit: int,
    ) -> list[CompletionItem]:
        ...
