"""Location registry and turn dispatcher for PyFiction."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from pyfiction.engine.console import Console
from pyfiction.engine.parser import Intent, IntentKind
from pyfiction.engine.state import GameState

logger = logging.getLogger(__name__)

DEFAULT_START = "test_room"

EXIT_QUIT = 0
EXIT_DEAD_LOCATION = 1


class RegistryError(ValueError):
    """Raised when a location registry is built incorrectly."""


@dataclass(frozen=True)
class Continue:
    """Keep playing; the next turn runs in ``next_location``."""

    next_location: str


@dataclass(frozen=True)
class Terminate:
    """Stop the game with a process exit status."""

    status: int


TurnResult = Continue | Terminate


class Location(ABC):
    """A named state of the game. Each turn it is given the shared state.

    ``advance`` prints the turn's narrative, reads exactly one intent from
    the console, applies any side effects and returns where to go next.
    Returning an identifier that is not registered is allowed; the game
    then ends on the following turn.
    """

    location_id: str = ""

    @abstractmethod
    def advance(self, state: GameState, console: Console) -> TurnResult:
        """Run one turn in this location."""

    def stay(self) -> Continue:
        """Remain in this location for the next turn."""
        return Continue(self.location_id)

    def handle_common(
        self,
        intent: Intent,
        state: GameState,
        console: Console,
    ) -> TurnResult | None:
        """Handle intents that behave the same everywhere.

        Returns None when the intent needs location-specific handling.
        """
        if intent.kind == IntentKind.QUIT:
            return Terminate(EXIT_QUIT)
        if intent.kind == IntentKind.INVENTORY:
            console.show_inventory(state.inventory)
            return self.stay()
        if intent.kind == IntentKind.LOOK:
            return self.stay()
        return None


class DeadLocation(Location):
    """Where the dispatcher goes when a location id cannot be resolved."""

    location_id = "<dead>"

    def advance(self, state: GameState, console: Console) -> TurnResult:
        console.say("Attempting to access a room that doesn't exist.")
        return Terminate(EXIT_DEAD_LOCATION)


class LocationRegistry:
    """Maps location ids to handlers. Fixed once the game starts."""

    def __init__(self, locations: Iterable[Location] = ()) -> None:
        self._locations: dict[str, Location] = {}
        self._frozen = False
        for location in locations:
            self.register(location)

    def register(self, location: Location) -> None:
        """Add a location under its id."""
        if self._frozen:
            raise RegistryError(
                f"Cannot register '{location.location_id}': registry is frozen"
            )
        if not location.location_id:
            raise RegistryError("Location has no id")
        if location.location_id in self._locations:
            raise RegistryError(
                f"Location '{location.location_id}' is already registered"
            )
        self._locations[location.location_id] = location

    def freeze(self) -> None:
        """Disallow further registration."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, location_id: str) -> Location | None:
        """Get a location by id."""
        return self._locations.get(location_id)

    def ids(self) -> list[str]:
        """Get all registered ids in registration order."""
        return list(self._locations)

    def __contains__(self, location_id: object) -> bool:
        return location_id in self._locations

    def __len__(self) -> int:
        return len(self._locations)


class Game:
    """Main turn loop - owns the state and the current location id."""

    def __init__(
        self,
        registry: LocationRegistry,
        state: GameState | None = None,
        console: Console | None = None,
        start: str = DEFAULT_START,
        turn_limit: int | None = None,
    ) -> None:
        """Initialize the game at the start location."""
        self.registry = registry
        self.registry.freeze()
        self.state = state or GameState()
        self.console = console or Console()
        self.current_location = start
        self.turn_limit = turn_limit
        self.turns = 0
        self.dead_location = DeadLocation()

    def resolve(self, location_id: str) -> Location:
        """Get the handler for an id, or the dead location if unknown."""
        location = self.registry.get(location_id)
        if location is None:
            logger.error(f"No location registered as '{location_id}'")
            return self.dead_location
        return location

    def step(self) -> TurnResult:
        """Run a single turn in the current location."""
        location = self.resolve(self.current_location)
        result = location.advance(self.state, self.console)
        self.turns += 1

        if isinstance(result, Continue):
            if result.next_location != self.current_location:
                logger.debug(
                    f"Moving {self.current_location} -> {result.next_location}"
                )
            self.current_location = result.next_location
        else:
            logger.debug(
                f"Game terminated in {self.current_location} "
                f"with status {result.status}"
            )
        return result

    def run(self) -> int:
        """Play turns until the game terminates. Returns the exit status."""
        while True:
            if self.turn_limit and self.turns >= self.turn_limit:
                logger.warning(f"Turn limit of {self.turn_limit} reached")
                return EXIT_QUIT

            result = self.step()
            if isinstance(result, Terminate):
                return result.status
