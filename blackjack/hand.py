"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator

from blackjack.cards import Card


@dataclass
class Hand:
    """A blackjack hand with value calculation."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def clear(self) -> None:
        """Remove all cards from the hand."""
        self.cards.clear()

    @property
    def hard_value(self) -> int:
        """Return the total with every ace counted as 1."""
        return sum(card.points for card in self.cards)

    @property
    def value(self) -> int:
        """
        Calculate the best hand value.

        Aces count as 1; if the total is 11 or less and the hand holds an
        ace, one ace is promoted to 11. Promoting a second ace would always
        bust, so the adjustment is applied at most once.
        """
        total = self.hard_value
        if self.is_soft:
            total += 10
        return total

    @property
    def is_soft(self) -> bool:
        """Check if the hand is soft (has an ace counted as 11)."""
        return self.hard_value <= 11 and any(card.is_ace for card in self.cards)

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return len(self.cards) == 2 and self.value == 21

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    @property
    def upcard(self) -> Card | None:
        """Return the first card dealt, or None for an empty hand."""
        return self.cards[0] if self.cards else None

    @property
    def visible_value(self) -> int:
        """Points shown while the second card is face down."""
        return self.upcard.points if self.upcard else 0

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"
