"""PyFiction - a small turn-based interactive fiction interpreter."""

__version__ = "0.1.0"
