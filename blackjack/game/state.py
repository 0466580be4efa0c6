"""Round state enumeration."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: SETUP → DEALING → PLAYER_TURNS → DEALER_TURN → SETTLEMENT → DEALING ...
    """

    # Seating players and taking bets
    SETUP = auto()

    # Cards being dealt
    DEALING = auto()

    # Players hit or stand
    PLAYER_TURNS = auto()

    # Hole card revealed, dealer draws
    DEALER_TURN = auto()

    # Outcomes and banks settled, hands waiting to be discarded
    SETTLEMENT = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Triggers driving the round, the only transition table the engine uses
TRANSITIONS: list[dict] = [
    {
        "trigger": "seat_players",
        "source": [RoundState.SETUP, RoundState.SETTLEMENT],
        "dest": RoundState.SETUP,
    },
    {
        "trigger": "start_deal",
        "source": [RoundState.SETUP, RoundState.SETTLEMENT],
        "dest": RoundState.DEALING,
    },
    {"trigger": "begin_turns", "source": [RoundState.DEALING], "dest": RoundState.PLAYER_TURNS},
    {
        "trigger": "reveal_hole_card",
        "source": [RoundState.PLAYER_TURNS],
        "dest": RoundState.DEALER_TURN,
    },
    {
        "trigger": "finish_dealer",
        "source": [RoundState.DEALER_TURN],
        "dest": RoundState.SETTLEMENT,
    },
]

# States in which no round is in progress
BETWEEN_ROUNDS = (RoundState.SETUP, RoundState.SETTLEMENT)


def machine_transitions() -> list[dict]:
    """Return TRANSITIONS with lower-case state names for ``transitions.Machine``."""
    return [
        {
            "trigger": t["trigger"],
            "source": [s.name.lower() for s in t["source"]],
            "dest": t["dest"].name.lower(),
        }
        for t in TRANSITIONS
    ]


def is_valid_transition(from_state: RoundState, to_state: RoundState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if some trigger moves from_state to to_state
    """
    return any(from_state in t["source"] and t["dest"] == to_state for t in TRANSITIONS)
