"""Text parser for PyFiction - turns a line of player input into an intent."""

import re
from dataclasses import dataclass
from enum import Enum, auto


class IntentKind(Enum):
    """Kinds of intent a line of input can resolve to."""

    # Meta-commands
    QUIT = auto()
    INVENTORY = auto()
    # Actions
    LOOK = auto()
    GET = auto()
    USE = auto()
    USE_ON = auto()
    TALK = auto()
    # Directions
    NORTH = auto()
    SOUTH = auto()
    EAST = auto()
    WEST = auto()
    UP = auto()
    DOWN = auto()
    # Catch-all
    OTHER = auto()


# Unicode White_Space only; the separators U+001C..U+001F stay inside tokens
_WHITESPACE = re.compile(
    "[\t\n\v\f\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+"
)


DIRECTION_KINDS = frozenset([
    IntentKind.NORTH,
    IntentKind.SOUTH,
    IntentKind.EAST,
    IntentKind.WEST,
    IntentKind.UP,
    IntentKind.DOWN,
])

# Kinds that carry no payload when rendered
_BARE_KINDS = DIRECTION_KINDS | {IntentKind.QUIT, IntentKind.INVENTORY}

_DISPLAY_NAMES = {
    IntentKind.QUIT: "Quit",
    IntentKind.INVENTORY: "Inv",
    IntentKind.LOOK: "Look",
    IntentKind.GET: "Get",
    IntentKind.USE: "Use",
    IntentKind.USE_ON: "UseOn",
    IntentKind.TALK: "Talk",
    IntentKind.NORTH: "North",
    IntentKind.SOUTH: "South",
    IntentKind.EAST: "East",
    IntentKind.WEST: "West",
    IntentKind.UP: "Up",
    IntentKind.DOWN: "Down",
    IntentKind.OTHER: "Other",
}


@dataclass(frozen=True)
class Intent:
    """Result of parsing one line of input.

    ``target`` holds the payload of LOOK, GET, USE, TALK and OTHER (for
    OTHER it is the whole rejoined line). ``indirect`` is only used by
    USE_ON, for the thing the target is used on.
    """

    kind: IntentKind
    target: str = ""
    indirect: str = ""

    @property
    def is_direction(self) -> bool:
        """Check if this intent is a move in some direction."""
        return self.kind in DIRECTION_KINDS

    def __str__(self) -> str:
        name = _DISPLAY_NAMES[self.kind]
        if self.kind in _BARE_KINDS:
            return name
        if self.kind == IntentKind.USE_ON:
            return f"{name}({self.target}, {self.indirect})"
        return f"{name}({self.target})"


class Parser:
    """Fixed-grammar parser for location commands.

    Only exact tokens are recognised; there is no case folding beyond the
    literal variants listed in the vocabulary tables below.
    """

    # Single-token directions
    DIRECTIONS = {
        "n": IntentKind.NORTH, "N": IntentKind.NORTH,
        "north": IntentKind.NORTH, "North": IntentKind.NORTH,
        "s": IntentKind.SOUTH, "S": IntentKind.SOUTH,
        "south": IntentKind.SOUTH, "South": IntentKind.SOUTH,
        "e": IntentKind.EAST, "E": IntentKind.EAST,
        "east": IntentKind.EAST, "East": IntentKind.EAST,
        "w": IntentKind.WEST, "W": IntentKind.WEST,
        "west": IntentKind.WEST, "West": IntentKind.WEST,
        "u": IntentKind.UP, "U": IntentKind.UP,
        "up": IntentKind.UP, "Up": IntentKind.UP,
        "d": IntentKind.DOWN, "D": IntentKind.DOWN,
        "down": IntentKind.DOWN, "Down": IntentKind.DOWN,
    }

    # Single-token meta-commands
    META_COMMANDS = {
        "i": IntentKind.INVENTORY, "I": IntentKind.INVENTORY,
        "inv": IntentKind.INVENTORY,
        "q": IntentKind.QUIT, "Q": IntentKind.QUIT,
        "quit": IntentKind.QUIT, "Quit": IntentKind.QUIT,
    }

    GET_VERBS = frozenset(["get", "take", "grab"])

    # Verbs with an optional linking word: "look at X", "talk to X"
    LINKED_VERBS = {
        "look": ("at", IntentKind.LOOK),
        "talk": ("to", IntentKind.TALK),
    }

    USE_PREFIXES = ("use ", "Use ")
    USE_ON_DELIMITER = " on "

    def parse(self, input_text: str) -> Intent:
        """Parse a line of input. Never fails; unknown text becomes OTHER."""
        tokens = [t for t in _WHITESPACE.split(input_text) if t]

        if len(tokens) == 1:
            word = tokens[0]
            if word in self.DIRECTIONS:
                return Intent(self.DIRECTIONS[word])
            if word in self.META_COMMANDS:
                return Intent(self.META_COMMANDS[word])

        if tokens:
            verb, rest = tokens[0], tokens[1:]
            if verb in self.GET_VERBS:
                return Intent(IntentKind.GET, " ".join(rest))
            if verb in self.LINKED_VERBS:
                link, kind = self.LINKED_VERBS[verb]
                if rest and rest[0] == link:
                    rest = rest[1:]
                return Intent(kind, " ".join(rest))

        line = " ".join(tokens)
        intent = self._parse_use(line)
        if intent is not None:
            return intent

        return Intent(IntentKind.OTHER, line)

    def _parse_use(self, line: str) -> Intent | None:
        """Match "use A on B" first, then "use A"."""
        if not line.startswith(self.USE_PREFIXES):
            return None

        remainder = line[len("use "):]
        # The last " on " wins, so "use a on b on c" uses "a on b" on "c"
        split_at = remainder.rfind(self.USE_ON_DELIMITER)
        if split_at != -1:
            return Intent(
                IntentKind.USE_ON,
                remainder[:split_at],
                remainder[split_at + len(self.USE_ON_DELIMITER):],
            )

        return Intent(IntentKind.USE, remainder)


_default_parser = Parser()


def parse_intent(input_text: str) -> Intent:
    """Parse a line with the shared default parser."""
    return _default_parser.parse(input_text)
