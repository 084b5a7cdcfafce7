"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their mark
(closed/flagged/questioned/open) and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Tuple


# ============================================================================
# Constants
# ============================================================================

class MarkState(Enum):
    """Possible states of a cell. Exactly one holds at any time."""

    CLOSED = auto()
    FLAGGED = auto()
    QUESTIONED = auto()
    OPEN = auto()


# Right-click cycle; OPEN is never part of it.
_NEXT_MARK = {
    MarkState.CLOSED: MarkState.FLAGGED,
    MarkState.FLAGGED: MarkState.QUESTIONED,
    MarkState.QUESTIONED: MarkState.CLOSED,
}

MAX_ADJACENT_MINES = 8


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        row: Row index, fixed for the lifetime of the board.
        col: Column index, fixed for the lifetime of the board.
        is_mine: Whether this cell contains a mine.
        mines_around: Count of mines in neighboring cells (0-8).
            Always 0 for a mine.
        mark: Current mark state.
    """

    row: int = 0
    col: int = 0
    is_mine: bool = False
    mines_around: int = 0
    mark: MarkState = MarkState.CLOSED

    @property
    def position(self) -> Tuple[int, int]:
        """(row, col) of this cell."""
        return self.row, self.col

    def open(self) -> bool:
        """
        Open this cell.

        Opens from any mark. The engine decides when a marked cell may
        be opened; a lost game opens flagged mines.

        Returns:
            True if the cell was opened, False if it was already open.
        """
        if self.mark == MarkState.OPEN:
            return False
        self.mark = MarkState.OPEN
        return True

    def cycle_mark(self) -> bool:
        """
        Advance the mark: closed -> flagged -> questioned -> closed.

        Returns:
            True if the mark changed, False if cell is open.
        """
        if self.mark == MarkState.OPEN:
            return False
        self.mark = _NEXT_MARK[self.mark]
        return True

    def set_mine(self) -> None:
        """Turn this cell into a mine."""
        self.is_mine = True
        self.mines_around = 0

    def set_mines_around(self, count: int) -> None:
        """Store the adjacent mine count of a safe cell."""
        if not 0 <= count <= MAX_ADJACENT_MINES:
            raise ValueError(f"Adjacent mine count out of range: {count}")
        self.mines_around = 0 if self.is_mine else count

    def reset(self) -> None:
        """Restore the freshly created state."""
        self.is_mine = False
        self.mines_around = 0
        self.mark = MarkState.CLOSED

    @property
    def is_closed(self) -> bool:
        """Check if cell is closed and unmarked."""
        return self.mark == MarkState.CLOSED

    @property
    def is_open(self) -> bool:
        """Check if cell is open."""
        return self.mark == MarkState.OPEN

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.mark == MarkState.FLAGGED

    @property
    def is_questioned(self) -> bool:
        """Check if cell is marked with a question mark."""
        return self.mark == MarkState.QUESTIONED

    def to_observation(self) -> int:
        """
        Convert cell to a compact integer code.

        Returns:
            -1: Closed cell
            -2: Flagged cell
            -3: Questioned cell
            0-8: Open cell with adjacent mine count
            9: Open mine (game over state)
        """
        if self.mark == MarkState.CLOSED:
            return -1
        if self.mark == MarkState.FLAGGED:
            return -2
        if self.mark == MarkState.QUESTIONED:
            return -3
        if self.is_mine:
            return 9
        return self.mines_around
