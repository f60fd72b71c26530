"""
event_manager.py
----------------
Notifications from the simulation to its collaborators (runner, HUD,
leaderboard) without the simulation knowing about any of them.

Subscribing to a base class receives every subclass event, so a single
BaseEvent subscriber sees the whole stream of a run.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Type

from skyclimb.core.debug.debug_logger import DebugLogger


# ===========================================================
# Event Definitions
# ===========================================================

@dataclass(frozen=True)
class BaseEvent:
    """Root of all simulation events."""


@dataclass(frozen=True)
class RunStartedEvent(BaseEvent):
    """A simulation (re)started a run."""
    run_id: int


@dataclass(frozen=True)
class DifficultyChangedEvent(BaseEvent):
    """The speed multiplier stepped to a new milestone. level indexes the multiplier ladder."""
    old_multiplier: float
    new_multiplier: float
    distance: int
    level: int


@dataclass(frozen=True)
class GameOverEvent(BaseEvent):
    """The run ended. distance is the final score in meters."""
    distance: int
    ticks: int


Handler = Callable[[BaseEvent], None]


# ===========================================================
# Event Manager
# ===========================================================

class EventManager:
    """
    Synchronous pub-sub dispatcher owned by one simulation.

    Usage:
        events = EventManager()
        cancel = events.subscribe(GameOverEvent, on_game_over)
        ...
        cancel()
    """

    def __init__(self):
        self._handlers: Dict[Type[BaseEvent], List[Handler]] = {}
        self.failed_deliveries = 0

    def subscribe(self, event_type: Type[BaseEvent], handler: Handler) -> Callable[[], None]:
        """
        Register handler for event_type and its subclasses.

        Subscribing the same handler twice is a no-op.

        Returns:
            Callable that removes this subscription
        """
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            DebugLogger.system(
                f"{_name(handler)} <- {event_type.__name__}", category="event_manager"
            )
        return lambda: self.unsubscribe(event_type, handler)

    def unsubscribe(self, event_type: Type[BaseEvent], handler: Handler) -> bool:
        """Remove a subscription. Returns False if it was not registered."""
        handlers = self._handlers.get(event_type)
        if not handlers or handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def dispatch(self, event: BaseEvent) -> int:
        """
        Deliver event to every matching handler, most specific type first.

        A handler that raises is logged and skipped so the remaining
        handlers, and the tick that produced the event, are unaffected.

        Returns:
            int: Number of handlers that completed
        """
        delivered = 0
        for event_type in type(event).__mro__:
            for handler in tuple(self._handlers.get(event_type, ())):
                try:
                    handler(event)
                except Exception as e:
                    self.failed_deliveries += 1
                    DebugLogger.fail(
                        f"{_name(handler)} failed on {type(event).__name__}: {e}",
                        category="event_manager"
                    )
                else:
                    delivered += 1
            if event_type is BaseEvent:
                break
        return delivered

    def clear_all(self) -> None:
        self._handlers.clear()

    def get_subscriber_count(self, event_type: Type[BaseEvent] = None) -> int:
        """Subscriptions registered exactly on event_type, or all of them."""
        if event_type is not None:
            return len(self._handlers.get(event_type, ()))
        return sum(len(handlers) for handlers in self._handlers.values())


def _name(handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)
