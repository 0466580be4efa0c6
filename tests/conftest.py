"""Pytest fixtures for round engine tests."""

import pytest
from random import Random

from hypothesis import strategies as st

from blackjack.cards import Card, Shoe, Rank, Suit
from blackjack.config import GameConfig
from blackjack.hand import Hand
from blackjack.game import BlackjackGame


def make_hand(*codes: str) -> Hand:
    """Build a hand from card strings like 'AS', '10H'."""
    hand = Hand()
    for code in codes:
        hand.add_card(Card.from_string(code))
    return hand


def stacked_shoe(*codes: str) -> Shoe:
    """
    A one-deck shoe whose draw pile yields ``codes`` in order.

    The remaining cards of the deck go to the discard pile, so the shoe
    still holds exactly 52 cards.
    """
    shoe = Shoe(num_decks=1, rng=Random(7))
    order = [Card.from_string(c) for c in codes]
    rest = list(shoe)
    for card in order:
        rest.remove(card)
    shoe._cards = list(reversed(order))
    shoe._discards = rest
    return shoe


def stacked_game(num_players: int, *codes: str) -> BlackjackGame:
    """A seated table that deals ``codes`` in order."""
    game = BlackjackGame(shoe=stacked_shoe(*codes), game_config=GameConfig(num_decks=1))
    game.create_players(num_players)
    return game


def cards_on_table(game: BlackjackGame) -> int:
    """Count every card: draw pile, discards and all hands."""
    in_hands = sum(len(p.hand) for p in game.players) + len(game.dealer.hand)
    return game.shoe.cards_remaining + game.shoe.discards + in_hands


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    s = Shoe(num_decks=6, rng=rng)
    s.shuffle()
    return s


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return make_hand("AS", "KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return make_hand("AS", "6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return make_hand("10S", "6H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return make_hand("KS", "QH", "5C")


@pytest.fixture
def game(rng):
    """A new table with a shuffled 6-deck shoe and no players."""
    return BlackjackGame(rng=rng)


@pytest.fixture
def seated_game(game):
    """A table with three players at default banks."""
    game.create_players(3)
    return game


@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=2, max_cards=6):
    """Generate a random hand."""
    cards = draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards))
    return Hand(cards=cards)
