"""Card and Shoe classes - immutable card representations."""

import logging
from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import TYPE_CHECKING, Iterable, Iterator

from blackjack.errors import ShoeExhausted

if TYPE_CHECKING:
    from blackjack.hand import Hand

logger = logging.getLogger(__name__)


class Suit(Enum):
    """Card suits."""

    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"
    SPADES = "S"

    def __str__(self) -> str:
        symbols = {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """Hearts and diamonds are red."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(Enum):
    """Card ranks, valued in deck order (Ace low)."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return {
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }.get(self, str(self.value))

    @property
    def points(self) -> int:
        """Return the base point value (Ace = 1, face cards = 10)."""
        return min(self.value, 10)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        """Check if this rank has a value of 10."""
        return self.points == 10


_RANK_CODES = {str(rank): rank for rank in Rank} | {"T": Rank.TEN}

_SUIT_CODES = {suit.value: suit for suit in Suit} | {str(suit): suit for suit in Suit}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def points(self) -> int:
        """Return the base point value, aces counted as 1."""
        return self.rank.points

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh', '10D'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str, suit_str = s[:-1], s[-1]
        if rank_str not in _RANK_CODES:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_CODES:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_CODES[rank_str], _SUIT_CODES[suit_str])


def standard_deck() -> list[Card]:
    """Return one ordered 52-card deck."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Shoe:
    """
    A multi-deck shoe with a draw pile and a discard pile.

    Played cards are returned through ``discard``/``discard_hand``. When the
    draw pile runs dry the discards are shuffled back in, so a draw only
    fails once every card is out on the table.
    """

    def __init__(self, num_decks: int = 6, rng: Random | None = None) -> None:
        """
        Initialize a shoe with multiple decks, in deck order.

        Args:
            num_decks: Number of 52-card decks in the shoe
            rng: Random number generator for shuffling
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")

        self._num_decks = num_decks
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self._discards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset shoe to all cards from all decks, discards emptied."""
        self._cards = [card for _ in range(self._num_decks) for card in standard_deck()]
        self._discards = []

    def shuffle(self) -> None:
        """Shuffle the draw pile in place."""
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """
        Draw the top card of the draw pile.

        An empty draw pile is refilled from the shuffled discard pile first.

        Raises:
            ShoeExhausted: if both piles are empty
        """
        if not self._cards:
            if not self._discards:
                raise ShoeExhausted()
            logger.debug("Draw pile empty, reshuffling %d discards", len(self._discards))
            self._cards.extend(self._discards)
            self._discards.clear()
            self.shuffle()
        return self._cards.pop()

    def discard(self, cards: Iterable[Card]) -> None:
        """Put played cards on the discard pile."""
        self._discards.extend(cards)

    def discard_hand(self, hand: "Hand") -> None:
        """Move all of a hand's cards to the discard pile and empty it."""
        self.discard(hand.cards)
        hand.clear()

    @property
    def needs_reshuffle(self) -> bool:
        """Check if the next draw will reshuffle the discards."""
        return not self._cards

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards in the draw pile."""
        return len(self._cards)

    @property
    def discards(self) -> int:
        """Return the number of cards in the discard pile."""
        return len(self._discards)

    @property
    def total_cards(self) -> int:
        """Return the number of cards in a full shoe."""
        return self._num_decks * 52

    @property
    def num_decks(self) -> int:
        """Return the number of decks in the shoe."""
        return self._num_decks

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
