"""Multi-player blackjack round engine - 100% UI-agnostic."""

from blackjack.cards import Card, Shoe, Rank, Suit
from blackjack.errors import (
    BetExceedsBank,
    GameError,
    IllegalAction,
    InvalidBet,
    InvalidPlayerCount,
    InvalidPlayerIndex,
    ShoeExhausted,
)
from blackjack.hand import Hand
from blackjack.participants import Dealer, Player
from blackjack.settlement import Outcome

__all__ = [
    "Card",
    "Shoe",
    "Rank",
    "Suit",
    "Hand",
    "Player",
    "Dealer",
    "Outcome",
    "GameError",
    "InvalidPlayerCount",
    "InvalidPlayerIndex",
    "BetExceedsBank",
    "InvalidBet",
    "ShoeExhausted",
    "IllegalAction",
]
