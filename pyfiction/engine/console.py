"""Console I/O for PyFiction - prompting, reading and printing."""

import logging
import sys
from typing import TextIO

from pyfiction.engine.parser import Intent, Parser
from pyfiction.engine.state import Inventory

logger = logging.getLogger(__name__)

PROMPT = "> "


class Console:
    """Reads player input one line per turn and prints narrative text."""

    def __init__(
        self,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
        parser: Parser | None = None,
    ) -> None:
        self.input_stream = input_stream or sys.stdin
        self.output_stream = output_stream or sys.stdout
        self.parser = parser or Parser()

    def say(self, text: str = "") -> None:
        """Print a line of narrative."""
        print(text, file=self.output_stream)

    def show_inventory(self, inventory: Inventory) -> None:
        """Print the inventory table."""
        self.say(inventory.format_table())

    def read_line(self) -> str:
        """Prompt and read one line.

        A failed read is treated the same as an empty line.
        """
        self.output_stream.write(PROMPT)
        self.output_stream.flush()
        try:
            return self.input_stream.readline()
        except (OSError, ValueError, UnicodeDecodeError) as e:
            logger.debug(f"Input read failed, treating as empty: {e}")
            return ""

    def read_intent(self) -> Intent:
        """Prompt, read one line and parse it."""
        intent = self.parser.parse(self.read_line())
        logger.debug(f"Parsed {intent}")
        return intent
