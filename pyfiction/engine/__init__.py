"""Game engine components for PyFiction."""

from pyfiction.engine.console import Console
from pyfiction.engine.game import (
    Continue,
    DeadLocation,
    Game,
    Location,
    LocationRegistry,
    RegistryError,
    Terminate,
    TurnResult,
)
from pyfiction.engine.parser import Intent, IntentKind, Parser, parse_intent
from pyfiction.engine.state import Flags, GameState, Inventory

__all__ = [
    "Console",
    "Continue",
    "DeadLocation",
    "Game",
    "Location",
    "LocationRegistry",
    "RegistryError",
    "Terminate",
    "TurnResult",
    "Intent",
    "IntentKind",
    "Parser",
    "parse_intent",
    "Flags",
    "GameState",
    "Inventory",
]
