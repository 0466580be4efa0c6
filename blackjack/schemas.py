"""Pydantic models describing the table for presentation layers."""

from pydantic import BaseModel, ConfigDict, Field

from blackjack.cards import Card
from blackjack.hand import Hand


class CardView(BaseModel):
    """Card representation."""

    model_config = ConfigDict(frozen=True)

    rank: str
    suit: str
    points: int

    @classmethod
    def from_card(cls, card: Card) -> "CardView":
        return cls(rank=str(card.rank), suit=str(card.suit), points=card.points)


class HandView(BaseModel):
    """Hand representation. ``hidden_cards`` counts face-down cards not listed."""

    cards: list[CardView]
    value: int
    hidden_cards: int = 0
    is_soft: bool = False
    is_blackjack: bool = False
    is_busted: bool = False

    @classmethod
    def from_hand(cls, hand: Hand) -> "HandView":
        return cls(
            cards=[CardView.from_card(c) for c in hand.cards],
            value=hand.value,
            is_soft=hand.is_soft,
            is_blackjack=hand.is_blackjack,
            is_busted=hand.is_busted,
        )

    @classmethod
    def hole_card_hidden(cls, hand: Hand) -> "HandView":
        """Dealer view showing only the upcard."""
        upcard = hand.upcard
        return cls(
            cards=[CardView.from_card(upcard)] if upcard else [],
            value=hand.visible_value,
            hidden_cards=max(len(hand) - 1, 0),
        )


class PlayerView(BaseModel):
    """One seat at the table."""

    index: int
    hand: HandView
    bank: int = Field(..., ge=0)
    bet: int = Field(..., ge=0)
    outcome: int = Field(..., ge=-1, le=2, description="-1 lost, 0 push, 1 won, 2 blackjack")
    finished: bool
    can_act: bool


class RoundResult(BaseModel):
    """Settled bet for one player."""

    model_config = ConfigDict(frozen=True)

    index: int
    outcome: int
    net_change: int
    bank: int


class TableSnapshot(BaseModel):
    """Current table state."""

    state: str
    round_number: int
    players: list[PlayerView]
    dealer_hand: HandView
    dealer_bank: int
    dealer_hole_revealed: bool
    cards_remaining: int
    discards: int
