"""Bundled demo locations for PyFiction.

Two rooms: a bare test room holding a golden key, and Room A, where the
key opens a chest containing a sword. Room A comes in two variants:
``classic`` makes the player open the chest, ``auto`` opens it as soon as
the player walks in holding the key.
"""

from pyfiction.engine.console import Console
from pyfiction.engine.game import Continue, Location, LocationRegistry, TurnResult
from pyfiction.engine.parser import IntentKind
from pyfiction.engine.state import GameState

VARIANTS = ("classic", "auto")

# Flags
GOT_GOLDEN_KEY = "test_room_got_golden_key"
OPENED_CHEST = "room_a_opened_chest"

# Items
GOLDEN_KEY = "Golden Key"
GOLDEN_KEY_DESC = "A quaint key with an irresistible luster."
SWORD = "Sword"
SWORD_DESC = "You could do some damage with this."


class TestRoom(Location):
    """The starting room, where the golden key lies."""

    # Not a test case, despite the name
    __test__ = False

    location_id = "test_room"

    def advance(self, state: GameState, console: Console) -> TurnResult:
        console.say("You find yourself standing inside of a developer's test room.")
        if not state.flags.is_set(GOT_GOLDEN_KEY):
            console.say(
                "The room is bare, except for a small golden key gleaming "
                "gently in the middle of the room."
            )
        console.say("To the north is Room A.")

        intent = console.read_intent()
        common = self.handle_common(intent, state, console)
        if common is not None:
            return common

        if intent.kind == IntentKind.NORTH:
            return Continue(RoomA.location_id)

        if intent.kind == IntentKind.GET:
            if "key" in intent.target:
                self._take_key(state, console)
            return self.stay()

        if intent.kind == IntentKind.TALK:
            console.say("There is nobody here to talk to.")

        return self.stay()

    def _take_key(self, state: GameState, console: Console) -> None:
        if state.flags.is_set(GOT_GOLDEN_KEY) or state.inventory.has(GOLDEN_KEY):
            console.say("There is no key here anymore.")
            return
        state.flags.set(GOT_GOLDEN_KEY)
        state.inventory.add(GOLDEN_KEY, GOLDEN_KEY_DESC)
        console.say("You pick up the gold key.")


class RoomA(Location):
    """Room with a locked chest. The key has to be used on it."""

    location_id = "room_a"

    def advance(self, state: GameState, console: Console) -> TurnResult:
        self.describe(state, console)

        intent = console.read_intent()
        common = self.handle_common(intent, state, console)
        if common is not None:
            return common

        if intent.kind == IntentKind.SOUTH:
            return Continue(TestRoom.location_id)

        if intent.kind == IntentKind.USE:
            if "key" in intent.target:
                self.open_chest(state, console)
        elif intent.kind == IntentKind.USE_ON:
            if "key" in intent.target and "chest" in intent.indirect:
                self.open_chest(state, console)
        elif intent.kind == IntentKind.OTHER:
            if "open" in intent.target and "chest" in intent.target:
                self.open_chest(state, console)

        return self.stay()

    def describe(self, state: GameState, console: Console) -> None:
        console.say(
            "You find yourself standing inside of Room A. Very clearly "
            "distinct from the last room. This one has a name!"
        )
        if not state.flags.is_set(OPENED_CHEST):
            console.say("A chest sits alone in a dark corner of the room.")
        console.say("To the south is the test room.")

    def open_chest(self, state: GameState, console: Console) -> None:
        """Try to open the chest with the golden key."""
        if state.flags.is_set(OPENED_CHEST):
            console.say(
                "The chest is already open. Don't you remember the cool "
                "sword you got?"
            )
            return

        if not state.inventory.has(GOLDEN_KEY):
            console.say("The chest is locked. Maybe there's a key somewhere?")
            return

        state.inventory.remove(GOLDEN_KEY)
        state.flags.set(OPENED_CHEST)
        console.say("You opened the chest, and found a sword inside!")
        if not state.inventory.has(SWORD):
            state.inventory.add(SWORD, SWORD_DESC)


class AutoRoomA(RoomA):
    """Room A where the chest opens by itself if the key is held."""

    def describe(self, state: GameState, console: Console) -> None:
        super().describe(state, console)
        if not state.flags.is_set(OPENED_CHEST) and state.inventory.has(GOLDEN_KEY):
            console.say("The golden key grows warm in your pocket.")
            self.open_chest(state, console)


def build_registry(variant: str = "classic") -> LocationRegistry:
    """Create the frozen demo registry for a narrative variant."""
    if variant not in VARIANTS:
        raise ValueError(
            f"Unknown variant '{variant}' (expected one of: {', '.join(VARIANTS)})"
        )

    room_a = AutoRoomA() if variant == "auto" else RoomA()
    registry = LocationRegistry([TestRoom(), room_a])
    registry.freeze()
    return registry
