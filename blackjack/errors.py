"""Engine error taxonomy.

Every error is caller-correctable: the engine state is left untouched when
one is raised, so a presentation layer can re-prompt or end the session.
"""


class GameError(Exception):
    """Base class for all engine errors."""


class InvalidPlayerCount(GameError):
    """Requested player count is outside the allowed range."""

    def __init__(self, count: int, minimum: int, maximum: int) -> None:
        self.count = count
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Player count must be between {minimum} and {maximum}, got {count}"
        )


class InvalidPlayerIndex(GameError, IndexError):
    """Player index outside the current player list."""

    def __init__(self, index: int, player_count: int) -> None:
        self.index = index
        self.player_count = player_count
        super().__init__(f"Invalid player index {index} (players: {player_count})")


class BetExceedsBank(GameError):
    """Bet larger than the player's bank."""

    def __init__(self, amount: int, bank: int, index: int | None = None) -> None:
        self.amount = amount
        self.bank = bank
        self.index = index
        who = f"player {index}" if index is not None else "player"
        super().__init__(f"Bet {amount} exceeds {who}'s bank of {bank}")


class InvalidBet(GameError, ValueError):
    """Bet amount that can never be placed, such as a negative one."""

    def __init__(self, amount: int, index: int | None = None) -> None:
        self.amount = amount
        self.index = index
        super().__init__(f"Bet cannot be negative, got {amount}")


class ShoeExhausted(GameError, IndexError):
    """Both the draw pile and the discard pile are empty."""

    def __init__(self) -> None:
        super().__init__("Cannot draw from empty shoe")


class IllegalAction(GameError):
    """Action not allowed for this player or in the current round state."""

    def __init__(self, message: str, index: int | None = None) -> None:
        self.index = index
        super().__init__(message)
