"""Tests for PyFiction engine."""

import io

import pytest

from pyfiction.engine.console import Console
from pyfiction.engine.game import (
    Continue,
    DeadLocation,
    Game,
    Location,
    LocationRegistry,
    RegistryError,
    Terminate,
)
from pyfiction.engine.parser import Intent, IntentKind
from pyfiction.engine.rooms import (
    GOLDEN_KEY,
    GOT_GOLDEN_KEY,
    OPENED_CHEST,
    SWORD,
    AutoRoomA,
    RoomA,
    build_registry,
)
from pyfiction.engine.state import Flags, GameState, Inventory


def make_console(*lines: str) -> Console:
    """Create a console fed with scripted input lines."""
    text = "".join(f"{line}\n" for line in lines)
    return Console(input_stream=io.StringIO(text), output_stream=io.StringIO())


def output_of(console: Console) -> str:
    return console.output_stream.getvalue()


class ScriptedLocation(Location):
    """Location that reads one intent and goes where it is told."""

    def __init__(self, location_id: str, moves: dict[IntentKind, str]):
        self.location_id = location_id
        self.moves = moves
        self.visits = 0

    def advance(self, state, console):
        self.visits += 1
        intent = console.read_intent()
        common = self.handle_common(intent, state, console)
        if common is not None:
            return common
        if intent.kind in self.moves:
            return Continue(self.moves[intent.kind])
        return self.stay()


class TestInventory:
    """Tests for the inventory container."""

    def test_add_remove_round_trip(self):
        """Test that removing an added item restores the prior contents."""
        inventory = Inventory()
        inventory.add("Sword", "Sharp.")
        before = list(inventory)

        inventory.add("Golden Key", "Shiny.")
        inventory.remove("Golden Key")

        assert list(inventory) == before

    def test_remove_missing_is_noop(self):
        """Test removing an item that is not held."""
        inventory = Inventory()
        inventory.add("Sword", "Sharp.")
        inventory.remove("Shield")
        assert inventory.names() == ["Sword"]

    def test_has_and_find(self):
        """Test lookups by name."""
        inventory = Inventory()
        assert not inventory.has("Sword")
        assert inventory.find("Sword") is None

        inventory.add("Lamp", "Bright.")
        inventory.add("Sword", "Sharp.")

        assert inventory.has("Sword")
        assert inventory.find("Sword") == 1
        assert inventory.description("Sword") == "Sharp."
        assert inventory.description("Shield") is None

    def test_add_does_not_deduplicate(self):
        """Test that uniqueness is left to the caller."""
        inventory = Inventory()
        inventory.add("Key", "One.")
        inventory.add("Key", "Two.")
        assert len(inventory) == 2

        inventory.remove("Key")
        assert len(inventory) == 0

    def test_format_table(self):
        """Test the bordered table rendering."""
        inventory = Inventory()
        inventory.add("Sword", "Sharp.")

        assert inventory.format_table() == (
            "--- INVENTORY ---\n"
            "Sword      | Sharp.    \n"
            "------------------\n"
        )

    def test_format_empty_table(self):
        """Test that an empty inventory still has header and footer."""
        assert str(Inventory()) == "--- INVENTORY ---\n------------------\n"


class TestFlags:
    """Tests for boolean flags."""

    def test_unset_flag_is_false(self):
        """Test that a never-set flag reads false without being created."""
        flags = Flags()
        assert not flags.is_set("door_open")
        assert "door_open" not in flags.flags

    def test_set_is_idempotent(self):
        """Test setting a flag twice."""
        flags = Flags()
        flags.set("door_open")
        flags.set("door_open")
        assert flags.is_set("door_open")
        assert flags.flags == {"door_open": True}

    def test_set_as_and_clear(self):
        """Test explicit values."""
        flags = Flags()
        flags.set_as("lamp_lit", True)
        assert flags.is_set("lamp_lit")
        flags.clear("lamp_lit")
        assert not flags.is_set("lamp_lit")

    def test_game_state_reset(self):
        """Test that reset empties both containers."""
        state = GameState()
        state.inventory.add("Sword", "Sharp.")
        state.flags.set("seen")

        state.reset()

        assert len(state.inventory) == 0
        assert not state.flags.is_set("seen")


class TestRegistry:
    """Tests for the location registry."""

    def test_register_and_get(self):
        """Test registering locations."""
        hall = ScriptedLocation("hall", {})
        registry = LocationRegistry([hall])

        assert "hall" in registry
        assert registry.get("hall") is hall
        assert registry.get("attic") is None
        assert registry.ids() == ["hall"]
        assert len(registry) == 1

    def test_duplicate_id_rejected(self):
        """Test that ids are unique."""
        registry = LocationRegistry([ScriptedLocation("hall", {})])
        with pytest.raises(RegistryError):
            registry.register(ScriptedLocation("hall", {}))

    def test_frozen_registry_rejects_new_locations(self):
        """Test that the game freezes the registry."""
        registry = LocationRegistry([ScriptedLocation("hall", {})])
        Game(registry, console=make_console(), start="hall")

        assert registry.frozen
        with pytest.raises(RegistryError):
            registry.register(ScriptedLocation("attic", {}))


class TestDispatcher:
    """Tests for the turn loop."""

    def test_quit_on_first_turn(self):
        """Test that quitting ends with status 0 after one turn."""
        hall = ScriptedLocation("hall", {IntentKind.NORTH: "attic"})
        attic = ScriptedLocation("attic", {})
        game = Game(LocationRegistry([hall, attic]), console=make_console("q"), start="hall")

        assert game.run() == 0
        assert hall.visits == 1
        assert attic.visits == 0
        assert game.current_location == "hall"

    def test_transitions(self):
        """Test moving between locations across turns."""
        hall = ScriptedLocation("hall", {IntentKind.NORTH: "attic"})
        attic = ScriptedLocation("attic", {IntentKind.SOUTH: "hall"})
        game = Game(
            LocationRegistry([hall, attic]),
            console=make_console("n", "s", "n", "Quit"),
            start="hall",
        )

        assert game.run() == 0
        assert hall.visits == 2
        assert attic.visits == 2
        assert game.current_location == "attic"
        assert game.turns == 4

    def test_unknown_location_is_fatal(self):
        """Test that an unregistered id ends the game with status 1."""
        hall = ScriptedLocation("hall", {IntentKind.NORTH: "nowhere"})
        console = make_console("n", "q")
        game = Game(LocationRegistry([hall]), console=console, start="hall")

        assert game.step() == Continue("nowhere")
        assert game.step() == Terminate(1)
        assert "Attempting to access a room that doesn't exist." in output_of(console)

    def test_forced_unknown_location(self):
        """Test forcing the current id to something unregistered."""
        hall = ScriptedLocation("hall", {})
        game = Game(LocationRegistry([hall]), console=make_console("q"), start="hall")
        game.current_location = "void"

        assert game.run() == 1
        assert hall.visits == 0

    def test_unknown_start_location(self):
        """Test that a bad start id fails on the first turn."""
        game = Game(build_registry(), console=make_console(), start="lobby")
        assert game.run() == 1

    def test_dead_location(self):
        """Test the dead location handler directly."""
        console = make_console()
        assert DeadLocation().advance(GameState(), console) == Terminate(1)

    def test_turn_limit(self):
        """Test that a turn limit stops the loop cleanly."""
        hall = ScriptedLocation("hall", {})
        game = Game(
            LocationRegistry([hall]),
            console=make_console("wait", "wait", "wait", "wait"),
            start="hall",
            turn_limit=3,
        )

        assert game.run() == 0
        assert hall.visits == 3

    def test_state_is_shared_across_turns(self):
        """Test that the same state object is handed to every turn."""
        seen = []

        class Recorder(Location):
            location_id = "hall"

            def advance(self, state, console):
                seen.append(state)
                state.flags.set(f"turn_{len(seen)}")
                return self.handle_common(console.read_intent(), state, console) or self.stay()

        game = Game(LocationRegistry([Recorder()]), console=make_console("x", "q"), start="hall")
        game.run()

        assert seen[0] is seen[1] is game.state
        assert game.state.flags.is_set("turn_1")
        assert game.state.flags.is_set("turn_2")


class TestConsole:
    """Tests for console input handling."""

    def test_prompt(self):
        """Test that the prompt has no trailing newline."""
        console = make_console("look")
        assert console.read_intent() == Intent(IntentKind.LOOK, "")
        assert output_of(console) == "> "

    def test_end_of_input_is_empty(self):
        """Test that EOF reads as an empty line."""
        console = make_console()
        assert console.read_intent() == Intent(IntentKind.OTHER, "")

    def test_read_failure_is_empty(self):
        """Test that a failing stream reads as an empty line."""
        stream = io.StringIO("north\n")
        stream.close()
        console = Console(input_stream=stream, output_stream=io.StringIO())

        assert console.read_intent() == Intent(IntentKind.OTHER, "")


class TestRooms:
    """Tests for the bundled demo rooms."""

    def test_take_key_then_inventory(self):
        """Test picking up the key and listing it."""
        console = make_console("get golden key", "i", "q")
        game = Game(build_registry(), console=console)

        assert game.run() == 0
        assert game.state.inventory.has(GOLDEN_KEY)
        assert game.state.flags.is_set(GOT_GOLDEN_KEY)

        output = output_of(console)
        assert "You pick up the gold key." in output
        assert "--- INVENTORY ---" in output
        assert "Golden Key" in output.split("--- INVENTORY ---")[1]

    def test_key_cannot_be_taken_twice(self):
        """Test that the room keeps the inventory unique."""
        game = Game(build_registry(), console=make_console("take key", "grab key", "q"))
        game.run()

        assert game.state.inventory.names() == [GOLDEN_KEY]

    def test_key_mentioned_until_taken(self):
        """Test the conditional room description."""
        console = make_console("get key", "q")
        Game(build_registry(), console=console).run()

        output = output_of(console)
        assert output.count("small golden key") == 1

    def test_open_chest_with_key(self):
        """Test the full key and chest puzzle."""
        console = make_console("get key", "n", "use golden key on chest", "q")
        game = Game(build_registry(), console=console)

        assert game.run() == 0
        assert game.current_location == "room_a"
        assert game.state.inventory.names() == [SWORD]
        assert game.state.flags.is_set(OPENED_CHEST)
        assert "found a sword inside" in output_of(console)

    def test_chest_locked_without_key(self):
        """Test trying the chest empty-handed."""
        console = make_console("n", "open the chest", "q")
        game = Game(build_registry(), console=console)
        game.run()

        assert "The chest is locked" in output_of(console)
        assert not game.state.flags.is_set(OPENED_CHEST)

    @pytest.mark.parametrize("command", ["use key", "use key on chest", "open chest"])
    def test_ways_to_open_chest(self, command):
        """Test every phrasing that opens the chest."""
        game = Game(build_registry(), console=make_console("get key", "n", command, "q"))
        game.run()

        assert game.state.flags.is_set(OPENED_CHEST)

    def test_chest_already_open(self):
        """Test opening the chest a second time."""
        console = make_console("get key", "n", "use key", "use key", "q")
        game = Game(build_registry(), console=console)
        game.run()

        assert "already open" in output_of(console)
        assert game.state.inventory.names() == [SWORD]

    def test_round_trip_between_rooms(self):
        """Test walking north and back south."""
        game = Game(build_registry(), console=make_console("n", "s", "q"))
        game.run()

        assert game.current_location == "test_room"
        assert game.turns == 3

    def test_auto_variant_opens_on_entry(self):
        """Test that the auto variant opens the chest when entering with the key."""
        console = make_console("get key", "north", "q")
        game = Game(build_registry("auto"), console=console)
        game.run()

        assert game.state.flags.is_set(OPENED_CHEST)
        assert game.state.inventory.names() == [SWORD]

    def test_auto_variant_without_key(self):
        """Test that the auto variant leaves the chest alone without the key."""
        game = Game(build_registry("auto"), console=make_console("n", "q"))
        game.run()

        assert not game.state.flags.is_set(OPENED_CHEST)

    def test_variants_use_different_room_a(self):
        """Test variant selection."""
        assert type(build_registry("classic").get("room_a")) is RoomA
        assert isinstance(build_registry("auto").get("room_a"), AutoRoomA)

    def test_unknown_variant(self):
        """Test that unknown variants are rejected."""
        with pytest.raises(ValueError):
            build_registry("deluxe")
