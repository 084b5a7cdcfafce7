"""
Exception types raised by the Minesweeper engine.

Rule violations during play (revealing a flagged cell, chording with the
wrong number of flags, marking an open cell) are not errors; the engine
treats them as no-ops. Only caller bugs and bad configuration raise.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(MinesweeperError, ValueError):
    """Raised when a board, layout or preset is invalid."""


class OutOfBounds(MinesweeperError, IndexError):
    """Raised when a coordinate lies outside the board."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside the {rows}x{cols} board"
        )
        self.row = row
        self.col = col
        self.rows = rows
        self.cols = cols
