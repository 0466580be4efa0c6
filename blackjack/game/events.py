"""Table events for presentation layers."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of table events."""

    # Session and round flow
    PLAYERS_SEATED = auto()
    ROUND_STARTED = auto()
    ROUND_SETTLED = auto()
    HANDS_DISCARDED = auto()

    # Betting
    BET_PLACED = auto()
    BET_RESOLVED = auto()

    # Cards
    CARD_DEALT = auto()
    SHOE_RESHUFFLED = auto()

    # Player actions
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_BUSTS = auto()
    PLAYER_BLACKJACK = auto()

    # Dealer
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Errors
    INVALID_ACTION = auto()
    INSUFFICIENT_FUNDS = auto()
    SHOE_EXHAUSTED = auto()


ERROR_EVENTS = frozenset(
    {EventType.INVALID_ACTION, EventType.INSUFFICIENT_FUNDS, EventType.SHOE_EXHAUSTED}
)


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable table event.

    Events let a UI follow the round without polling; the engine's return
    values and exceptions stay the source of truth.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_error(self) -> bool:
        return self.event_type in ERROR_EVENTS

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


# Type alias for event handlers
EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Event emitter with per-type and catch-all subscriptions.

    Keeps a history of everything emitted so a round can be audited after
    settlement.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._history: list[GameEvent] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> bool:
        """Remove a handler. Returns False if it was not subscribed."""
        handlers = self._handlers.get(event_type, [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def emit(self, event_type: EventType, **data: Any) -> GameEvent:
        """
        Create an event, record it, and pass it to subscribers.

        Type-specific handlers run before catch-all handlers.
        """
        event = GameEvent(event_type=event_type, data=data)
        self._history.append(event)
        logger.debug("%s", event)

        for handler in self._handlers.get(event_type, []):
            handler(event)
        for handler in self._handlers.get(None, []):
            handler(event)
        return event

    def history_of(self, event_type: EventType) -> list[GameEvent]:
        """Return recorded events of one type, oldest first."""
        return [e for e in self._history if e.event_type is event_type]

    @property
    def history(self) -> list[GameEvent]:
        """Return the event history."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear the event history."""
        self._history.clear()
