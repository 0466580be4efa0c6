"""Tests for outcome determination and payouts."""

import pytest

from blackjack.settlement import Outcome, apply_outcome, net_change, payout, settle_hand

from conftest import make_hand


class TestSettleHand:
    """Precedence of the settlement rules."""

    def test_both_blackjack_push(self):
        assert settle_hand(make_hand("AS", "KH"), make_hand("AC", "QD")) == Outcome.PUSH

    def test_player_blackjack_beats_dealer_20(self):
        assert settle_hand(make_hand("AS", "KH"), make_hand("10C", "QD")) == Outcome.BLACKJACK

    def test_player_blackjack_beats_dealer_three_card_21(self):
        dealer = make_hand("7C", "7D", "7S")
        assert settle_hand(make_hand("AS", "KH"), dealer) == Outcome.BLACKJACK

    def test_player_blackjack_beats_dealer_bust(self):
        dealer = make_hand("10C", "6D", "KS")
        assert settle_hand(make_hand("AS", "KH"), dealer) == Outcome.BLACKJACK

    def test_dealer_bust_player_wins(self):
        dealer = make_hand("10C", "6D", "KS")
        assert settle_hand(make_hand("10S", "7H"), dealer) == Outcome.WON

    def test_both_bust_player_loses(self):
        """Test both busting means player loses (house edge)."""
        player = make_hand("10S", "6H", "KC")
        dealer = make_hand("10D", "6C", "QS")
        assert settle_hand(player, dealer) == Outcome.LOST

    def test_player_bust_loses(self):
        player = make_hand("10S", "6H", "KC")
        assert settle_hand(player, make_hand("10D", "7S")) == Outcome.LOST

    def test_higher_total_wins(self):
        assert settle_hand(make_hand("10S", "9H"), make_hand("10C", "8D")) == Outcome.WON

    def test_18_against_20_loses(self):
        assert settle_hand(make_hand("10S", "8H"), make_hand("10C", "KD")) == Outcome.LOST

    def test_equal_totals_push(self):
        assert settle_hand(make_hand("10S", "KH"), make_hand("QC", "JD")) == Outcome.PUSH

    def test_dealer_blackjack_compares_as_21(self):
        """Only a player blackjack is special-cased; the dealer's is a plain 21."""
        assert settle_hand(make_hand("10S", "KH"), make_hand("AD", "KD")) == Outcome.LOST
        player = make_hand("7S", "7H", "7C")
        assert settle_hand(player, make_hand("AD", "KD")) == Outcome.PUSH

    def test_three_card_21_pushes_with_dealer_21(self):
        player = make_hand("7S", "7H", "7C")
        dealer = make_hand("5D", "6D", "KD")
        assert settle_hand(player, dealer) == Outcome.PUSH


class TestPayout:
    """Debit-then-credit bank arithmetic."""

    @pytest.mark.parametrize(
        "outcome, credit, net",
        [
            (Outcome.LOST, 0, -10),
            (Outcome.PUSH, 10, 0),
            (Outcome.WON, 20, 10),
            (Outcome.BLACKJACK, 25, 15),
        ],
    )
    def test_bet_of_ten(self, outcome, credit, net):
        assert payout(10, outcome) == credit
        assert net_change(10, outcome) == net
        assert apply_outcome(1000, 10, outcome) == 1000 + net

    def test_blackjack_odd_bet_truncates(self):
        """(bet * 5) // 2 drops the half unit on odd bets."""
        assert payout(11, Outcome.BLACKJACK) == 27
        assert net_change(11, Outcome.BLACKJACK) == 16

    def test_losing_whole_bank(self):
        assert apply_outcome(50, 50, Outcome.LOST) == 0

    def test_outcome_codes(self):
        assert [o.value for o in Outcome] == [-1, 0, 1, 2]
        assert str(Outcome.BLACKJACK) == "Blackjack"
