"""
Board module for Minesweeper game.

Implements the grid storage and adjacency geometry. The board applies no
game rules; those live in the engine.
"""
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Set, Tuple

import numpy as np

from .cell import Cell
from .errors import ConfigurationError, OutOfBounds


Coordinate = Tuple[int, int]


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 10
    cols: int = 10
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name in ("rows", "cols", "num_mines"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"{name} must be an integer, got {value!r}"
                )
        if self.rows < 1 or self.cols < 1:
            raise ConfigurationError("Board dimensions must be positive")
        if self.num_mines < 1:
            raise ConfigurationError("Board needs at least one mine")
        max_mines = self.total_cells - 1
        if self.num_mines > max_mines:
            raise ConfigurationError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be opened to win."""
        return self.total_cells - self.num_mines


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Rectangular grid of cells.

    Owns cell storage and neighbor geometry. Rule enforcement belongs
    to the GameEngine, which is the only writer of cell state.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell(row, col) for col in range(self.config.cols)]
            for row in range(self.config.rows)
        ]

    def reset(self) -> None:
        """Restore every cell to its closed, mine-free state."""
        for cell in self:
            cell.reset()

    # ========================================================================
    # Geometry (Low-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def check_position(self, row: int, col: int) -> None:
        """Raise OutOfBounds unless (row, col) is on the board."""
        if not self.is_valid_position(row, col):
            raise OutOfBounds(row, col, self.config.rows, self.config.cols)

    def cell_at(self, row: int, col: int) -> Cell:
        """
        Get the cell at a position.

        Raises:
            OutOfBounds: If the position is not on the board.
        """
        self.check_position(row, col)
        return self._grid[row][col]

    def neighbors(self, row: int, col: int) -> List[Coordinate]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples in row-major order.

        Raises:
            OutOfBounds: If the center is not on the board.
        """
        self.check_position(row, col)
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def __iter__(self) -> Iterator[Cell]:
        """Iterate over cells in row-major order."""
        for line in self._grid:
            yield from line

    # ========================================================================
    # Mines (Mid-level)
    # ========================================================================

    def place_mines(self, positions: Iterable[Coordinate]) -> None:
        """Mark the given positions as mines."""
        for row, col in positions:
            self.cell_at(row, col).set_mine()

    def compute_adjacency(self) -> None:
        """Calculate adjacent mine counts for all safe cells."""
        for cell in self:
            if not cell.is_mine:
                cell.set_mines_around(self._count_adjacent_mines(cell.row, cell.col))

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    def count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_flagged:
                count += 1
        return count

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def mine_positions(self) -> Set[Coordinate]:
        """Positions of every mine on the board."""
        return {cell.position for cell in self if cell.is_mine}

    def count_flagged(self) -> int:
        """Number of flagged cells."""
        return sum(1 for cell in self if cell.is_flagged)

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array of Cell.to_observation() codes.
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for cell in self:
            obs[cell.row, cell.col] = cell.to_observation()
        return obs
