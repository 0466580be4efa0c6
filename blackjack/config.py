"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable."""
    return int(os.getenv(name, str(default)))


@dataclass(frozen=True)
class GameConfig:
    """Table configuration."""

    num_decks: int = field(default_factory=lambda: _env_int("BLACKJACK_NUM_DECKS", 6))
    min_players: int = 1
    max_players: int = 7
    starting_bank: int = field(
        default_factory=lambda: _env_int("BLACKJACK_STARTING_BANK", 1000)
    )
    default_bet: int = field(default_factory=lambda: _env_int("BLACKJACK_DEFAULT_BET", 10))
    dealer_bank: int = 100000
    dealer_stands_on: int = 17  # Dealer draws below this total

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.num_decks < 1:
            raise ValueError("num_decks must be at least 1")
        if not 1 <= self.min_players <= self.max_players:
            raise ValueError("player limits must satisfy 1 <= min_players <= max_players")
        if self.starting_bank < 0:
            raise ValueError("starting_bank cannot be negative")
        if not 0 <= self.default_bet <= self.starting_bank:
            raise ValueError("default_bet must be between 0 and starting_bank")
        if not 2 <= self.dealer_stands_on <= 21:
            raise ValueError("dealer_stands_on must be between 2 and 21")


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    game: GameConfig = field(default_factory=GameConfig)


def configure_logging(app_config: AppConfig | None = None) -> None:
    """Set up root logging for a presentation layer hosting the engine."""
    app_config = app_config or config
    level = logging.DEBUG if app_config.debug else app_config.log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Global configuration instance
config = AppConfig()
