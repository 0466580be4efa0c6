"""Round settlement: outcome determination and bank arithmetic."""

from enum import Enum

from blackjack.hand import Hand


class Outcome(Enum):
    """Result of one player's hand against the dealer."""

    LOST = -1
    PUSH = 0
    WON = 1
    BLACKJACK = 2

    def __str__(self) -> str:
        return self.name.title()


def settle_hand(player_hand: Hand, dealer_hand: Hand) -> Outcome:
    """
    Compare a finished player hand against the dealer's final hand.

    Rules are checked in order and the first match wins, so a player
    blackjack beats a dealer bust and a dealer bust only pays players who
    are still standing.
    """
    player_bj = player_hand.is_blackjack
    dealer_bj = dealer_hand.is_blackjack

    if player_bj and dealer_bj:
        return Outcome.PUSH
    if player_bj:
        return Outcome.BLACKJACK
    if dealer_hand.is_busted and not player_hand.is_busted:
        return Outcome.WON
    if player_hand.is_busted:
        return Outcome.LOST

    player_value = player_hand.value
    dealer_value = dealer_hand.value
    if player_value > dealer_value:
        return Outcome.WON
    if player_value < dealer_value:
        return Outcome.LOST
    return Outcome.PUSH


def payout(bet: int, outcome: Outcome) -> int:
    """
    Amount credited back to the bank after the bet has been debited.

    Blackjack pays 3:2 with integer arithmetic, so odd bets lose the half
    unit.
    """
    if outcome is Outcome.PUSH:
        return bet
    if outcome is Outcome.WON:
        return 2 * bet
    if outcome is Outcome.BLACKJACK:
        return (bet * 5) // 2
    return 0


def apply_outcome(bank: int, bet: int, outcome: Outcome) -> int:
    """Return the new bank: debit the bet, then credit the payout."""
    bank -= bet
    return bank + payout(bet, outcome)


def net_change(bet: int, outcome: Outcome) -> int:
    """Return the signed bank change for a settled bet."""
    return payout(bet, outcome) - bet
