"""Synchronous pub/sub bus for match events."""

from collections import defaultdict
from typing import Callable, TypeVar

from pitchgrid.events.types import MatchEvent

T = TypeVar("T", bound=MatchEvent)
EventHandler = Callable[[MatchEvent], None]


class EventBus:
    """
    Decouples the match orchestrator from whatever consumes its results.

    Handlers registered for an event class also receive events of its
    subclasses, so subscribing to MatchEvent sees everything. Handlers
    run inline, in registration order, on the orchestrator's task.

    Example:
        bus = EventBus()

        def on_goal(event: GoalEvent):
            print(f"Round {event.round_index}: goal for {event.team.value}")

        bus.subscribe(GoalEvent, on_goal)
        bus.emit(GoalEvent(round_index=12, team=Team.A, scorer_id=14))
    """

    def __init__(self) -> None:
        self._handlers: dict[type[MatchEvent], list[EventHandler]] = defaultdict(list)
        self._global_handlers: list[EventHandler] = []
        self.emitted = 0

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for an event type and its subclasses."""
        self._handlers[event_type].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Register a handler for every event."""
        self._global_handlers.append(handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        if handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    def unsubscribe_all(self, handler: EventHandler) -> None:
        if handler in self._global_handlers:
            self._global_handlers.remove(handler)

    def emit(self, event: MatchEvent) -> None:
        """
        Deliver an event.

        Type handlers are called most-specific class first, then global
        handlers. Exceptions raised by a handler propagate to the emitter.
        """
        self.emitted += 1
        for cls in type(event).__mro__:
            if cls in self._handlers:
                for handler in list(self._handlers[cls]):
                    handler(event)
            if cls is MatchEvent:
                break

        for handler in list(self._global_handlers):
            handler(event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
        self._global_handlers.clear()

    def handler_count(self, event_type: type[MatchEvent] | None = None) -> int:
        """
        Number of registered handlers.

        Args:
            event_type: Count only handlers registered for this exact type.
                        If None, count all handlers including global.
        """
        if event_type is None:
            total = sum(len(handlers) for handlers in self._handlers.values())
            return total + len(self._global_handlers)
        return len(self._handlers.get(event_type, []))
