"""Players and the dealer seated at a table."""

from dataclasses import dataclass, field

from blackjack.errors import BetExceedsBank, InvalidBet
from blackjack.hand import Hand
from blackjack.settlement import Outcome


@dataclass
class Player:
    """Player state across rounds."""

    hand: Hand = field(default_factory=Hand)
    bank: int = 1000
    bet: int = 10
    outcome: Outcome = Outcome.PUSH
    finished: bool = False

    @property
    def can_act(self) -> bool:
        """Check if the player may still hit or stand this round."""
        return not (self.finished or self.hand.is_busted or self.hand.is_blackjack)

    def place_bet(self, amount: int) -> None:
        """
        Set the bet for upcoming rounds.

        Raises:
            InvalidBet: if the amount is negative
            BetExceedsBank: if the amount is more than the bank
        """
        if amount < 0:
            raise InvalidBet(amount)
        if amount > self.bank:
            raise BetExceedsBank(amount, self.bank)
        self.bet = amount

    def reset(self) -> None:
        """Clear round flags. Cards are returned to the shoe by the game."""
        self.outcome = Outcome.PUSH
        self.finished = False


@dataclass
class Dealer:
    """The house hand and bank."""

    hand: Hand = field(default_factory=Hand)
    bank: int = 100000
