"""Tests for the event emitter and round state table."""

import pytest

from blackjack.game.engine import BlackjackGame
from blackjack.game.events import EventEmitter, EventType
from blackjack.game.state import RoundState, is_valid_transition


class TestEventEmitter:
    """Tests for EventEmitter."""

    def test_typed_and_catch_all_handlers(self):
        emitter = EventEmitter()
        typed, everything = [], []
        emitter.subscribe(typed.append, EventType.PLAYER_HIT)
        emitter.subscribe(everything.append)

        emitter.emit(EventType.PLAYER_HIT, player=0, hand_value=15)
        emitter.emit(EventType.PLAYER_STAND, player=0)

        assert [e.event_type for e in typed] == [EventType.PLAYER_HIT]
        assert len(everything) == 2
        assert typed[0].data == {"player": 0, "hand_value": 15}

    def test_unsubscribe(self):
        emitter = EventEmitter()
        seen = []
        emitter.subscribe(seen.append)
        assert emitter.unsubscribe(seen.append)
        assert not emitter.unsubscribe(seen.append)

        emitter.emit(EventType.ROUND_STARTED)
        assert seen == []

    def test_history(self):
        emitter = EventEmitter()
        emitter.emit(EventType.ROUND_STARTED, round=1)
        emitter.emit(EventType.INVALID_ACTION, message="nope")

        assert len(emitter.history) == 2
        errors = emitter.history_of(EventType.INVALID_ACTION)
        assert len(errors) == 1
        assert errors[0].is_error
        assert not emitter.history[0].is_error

        emitter.clear_history()
        assert emitter.history == []

    def test_event_str(self):
        event = EventEmitter().emit(EventType.BET_PLACED, amount=10)
        assert str(event) == "BET_PLACED: {'amount': 10}"


class TestRoundState:
    """Tests for the state transition table."""

    def test_round_loop(self):
        assert is_valid_transition(RoundState.SETUP, RoundState.DEALING)
        assert is_valid_transition(RoundState.DEALING, RoundState.PLAYER_TURNS)
        assert is_valid_transition(RoundState.PLAYER_TURNS, RoundState.DEALER_TURN)
        assert is_valid_transition(RoundState.DEALER_TURN, RoundState.SETTLEMENT)
        assert is_valid_transition(RoundState.SETTLEMENT, RoundState.DEALING)

    def test_no_skipping_the_dealer(self):
        assert not is_valid_transition(RoundState.PLAYER_TURNS, RoundState.SETTLEMENT)
        assert not is_valid_transition(RoundState.DEALING, RoundState.SETUP)

    @pytest.mark.parametrize("source", list(RoundState))
    def test_table_matches_engine_machine(self, source):
        machine = BlackjackGame().machine
        for dest in RoundState:
            moves = machine.get_transitions(source=source.name.lower(), dest=dest.name.lower())
            assert is_valid_transition(source, dest) == bool(moves)

    def test_str(self):
        assert str(RoundState.PLAYER_TURNS) == "Player Turns"
