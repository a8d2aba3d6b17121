"""Configuration management for PyFiction.

Configuration is loaded from (in order of precedence):
1. Environment variables (PYFICTION_*)
2. User config file (~/.pyfiction/config.json)
3. Default values

Environment variables:
    PYFICTION_START - Location id the game starts in
    PYFICTION_VARIANT - Narrative variant of the demo rooms (classic/auto)
    PYFICTION_TURN_LIMIT - Stop after this many turns (0 for no limit)
    PYFICTION_LOG_LEVEL - Logging level name (DEBUG, INFO, WARNING, ...)
"""

import json
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path


# Default config directory
CONFIG_DIR = Path.home() / ".pyfiction"
CONFIG_FILE = CONFIG_DIR / "config.json"


@dataclass
class GameConfig:
    """Game configuration."""

    start_location: str = "test_room"
    variant: str = "classic"
    turn_limit: int = 0  # 0 means play until quit

    def __post_init__(self) -> None:
        for name in ("start_location", "variant"):
            if not isinstance(getattr(self, name), str):
                raise TypeError(f"game.{name} must be a string")
        if isinstance(self.turn_limit, bool) or not isinstance(self.turn_limit, int):
            raise TypeError("game.turn_limit must be an integer")

    def get_turn_limit(self) -> int | None:
        """Get the turn limit, or None for unlimited play."""
        return self.turn_limit if self.turn_limit > 0 else None


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"

    def __post_init__(self) -> None:
        if not isinstance(self.level, str):
            raise TypeError("logging.level must be a string")


@dataclass
class Config:
    """Main configuration container."""

    game: GameConfig = field(default_factory=GameConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict:
        """Convert to dictionary for saving."""
        return {
            "game": asdict(self.game),
            "logging": asdict(self.logging),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create from dictionary."""
        config = cls()
        if "game" in data:
            config.game = GameConfig(**data["game"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])
        return config


def _get_env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.environ.get(key, "")
    try:
        return int(value)
    except ValueError:
        return default


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from environment and/or file.

    Environment variables take precedence over file config.
    """
    config_file = config_file or CONFIG_FILE
    config = Config()

    # Try to load from file first
    if config_file.exists():
        try:
            with open(config_file) as f:
                data = json.load(f)
                config = Config.from_dict(data)
        except (json.JSONDecodeError, OSError, TypeError):
            pass  # Use defaults

    # Override with environment variables
    if "PYFICTION_START" in os.environ:
        config.game.start_location = os.environ["PYFICTION_START"]
    if "PYFICTION_VARIANT" in os.environ:
        config.game.variant = os.environ["PYFICTION_VARIANT"]
    if "PYFICTION_TURN_LIMIT" in os.environ:
        config.game.turn_limit = _get_env_int("PYFICTION_TURN_LIMIT", 0)
    if "PYFICTION_LOG_LEVEL" in os.environ:
        config.logging.level = os.environ["PYFICTION_LOG_LEVEL"].upper()

    return config


def save_config(config: Config, config_file: Path | None = None) -> None:
    """Save configuration to file."""
    config_file = config_file or CONFIG_FILE
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "w") as f:
        json.dump(config.to_dict(), f, indent=2)


def get_example_config() -> str:
    """Get example configuration file content."""
    return '''{
  "game": {
    "start_location": "test_room",
    "variant": "classic",
    "turn_limit": 0
  },
  "logging": {
    "level": "WARNING"
  }
}'''


# Global config instance (lazy loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
