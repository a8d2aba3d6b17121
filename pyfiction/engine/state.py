"""Game state management for PyFiction."""

from dataclasses import dataclass, field
from typing import Iterator


class Inventory:
    """Ordered collection of (name, description) pairs owned by the player.

    Names are expected to be unique, but ``add`` does not check: callers
    must test ``has(name)`` (or an equivalent flag) before adding.
    """

    def __init__(self) -> None:
        self.items: list[tuple[str, str]] = []

    def add(self, name: str, description: str) -> None:
        """Append an item. Does not reject duplicate names."""
        self.items.append((name, description))

    def remove(self, name: str) -> None:
        """Remove the item with this name, if it is present."""
        if self.find(name) is not None:
            self.items = [item for item in self.items if item[0] != name]

    def find(self, name: str) -> int | None:
        """Get the index of the named item, or None if absent."""
        for index, (item_name, _) in enumerate(self.items):
            if item_name == name:
                return index
        return None

    def has(self, name: str) -> bool:
        """Check if an item with this name is held."""
        return self.find(name) is not None

    def description(self, name: str) -> str | None:
        """Get the description of the named item."""
        index = self.find(name)
        if index is None:
            return None
        return self.items[index][1]

    def names(self) -> list[str]:
        """Get item names in the order they were picked up."""
        return [name for name, _ in self.items]

    def format_table(self) -> str:
        """Render the inventory as a bordered two-column table."""
        lines = ["--- INVENTORY ---"]
        for name, description in self.items:
            lines.append(f"{name:<10} | {description:<10}")
        lines.append("------------------")
        return "\n".join(lines) + "\n"

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.items)

    def __str__(self) -> str:
        return self.format_table()


class Flags:
    """Named boolean flags. A flag that was never set reads as False."""

    def __init__(self) -> None:
        self.flags: dict[str, bool] = {}

    def is_set(self, flag: str) -> bool:
        """Check if a flag is both defined and true."""
        return self.flags.get(flag, False)

    def set(self, flag: str) -> None:
        """Set a flag to true."""
        self.set_as(flag, True)

    def set_as(self, flag: str, value: bool) -> None:
        """Set a flag to the given value."""
        self.flags[flag] = value

    def clear(self, flag: str) -> None:
        """Set a flag back to false."""
        self.set_as(flag, False)


@dataclass
class GameState:
    """Shared state handed to each location handler, one turn at a time."""

    inventory: Inventory = field(default_factory=Inventory)
    flags: Flags = field(default_factory=Flags)

    def reset(self) -> None:
        """Empty the inventory and forget every flag."""
        self.inventory = Inventory()
        self.flags = Flags()
