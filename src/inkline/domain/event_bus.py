"""Synchronous event bus for registry notifications.

The command registry announces changes and executions here without knowing
who is listening (a command palette, a test, an audit log). Handlers must be
plain functions; coroutine functions are rejected when subscribing.
"""

import inspect
from typing import Callable, Type, TypeVar

from inkline.domain.events import Event
from inkline.logger import get_logger

logger = get_logger("events.bus")

T = TypeVar("T", bound=Event)

EventHandler = Callable[[Event], None]


class EventBus:
    """Routes events to the handlers subscribed to their exact type.

    Example:
        ```python
        bus = EventBus()
        detach = bus.subscribe(CommandRegistered, lambda e: print(e.trigger))
        registry = CommandRegistry(event_bus=bus)
        ...
        detach()
        ```

    Not thread-safe on its own; the command registry publishes while holding
    its lock.
    """

    def __init__(self):
        self._handlers: dict[Type[Event], list[EventHandler]] = {}

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> Callable[[], None]:
        """
        Subscribe ``handler`` to events of ``event_type``.

        Subscribing the same handler twice has no effect.

        Returns:
            A function that detaches the handler again

        Raises:
            TypeError: If handler is a coroutine function
        """
        if inspect.iscoroutinefunction(handler):
            raise TypeError(
                f"Event handlers must be synchronous, "
                f"{getattr(handler, '__name__', handler)!r} is async"
            )

        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Subscribed handler for {event_type.__name__}")

        def detach() -> None:
            if handler in handlers:
                handlers.remove(handler)
                logger.debug(f"Detached handler for {event_type.__name__}")

        return detach

    def publish(self, event: Event) -> None:
        """
        Call every handler for ``event``'s type in subscription order.

        A failing handler is logged and does not stop the others.
        """
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, ()))
        if not handlers:
            return

        logger.debug(f"Publishing {event_type.__name__} to {len(handlers)} handler(s)")
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.opt(exception=e).error(f"Event handler failed for {event_type.__name__}: {e}")
