"""Round engine and state management."""

from blackjack.game.events import GameEvent, EventType
from blackjack.game.state import RoundState
from blackjack.game.engine import (
    BlackjackGame,
    DealerHitResult,
    DealerStatus,
    HitResult,
    HitStatus,
)

__all__ = [
    "GameEvent",
    "EventType",
    "RoundState",
    "BlackjackGame",
    "HitResult",
    "HitStatus",
    "DealerHitResult",
    "DealerStatus",
]
