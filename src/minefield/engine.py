"""
Game engine for Minesweeper.

Drives a Board through its life: deferred mine placement on the first
reveal, flood-fill reveal, chording, mark cycling and win/loss detection.
Every public operation either changes state and returns True, or is a
silent no-op returning False. Out-of-bounds coordinates raise before any
state is touched.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet, Iterator, List, Optional, Union

import numpy as np

from .board import Board, BoardConfig, Coordinate
from .cell import Cell, MarkState
from .placement import FixedLayout, MinePlacer, resolve_placer


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class Phase(Enum):
    """Possible phases of a game."""

    PENDING = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


TERMINAL_PHASES = frozenset({Phase.WON, Phase.LOST})


@dataclass(frozen=True)
class CellView:
    """
    Read-only snapshot of a cell for display.

    Hidden information is withheld: mines_around is None until the cell
    is open, is_mine is None until the game is over.
    """

    row: int
    col: int
    mark: MarkState
    mines_around: Optional[int]
    is_mine: Optional[bool]

    @property
    def is_open(self) -> bool:
        return self.mark == MarkState.OPEN


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    Minesweeper rules over a single board.

    The engine is the only writer of cell state. Callers read the board
    through CellView snapshots and the session-level properties.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        mine_count: int,
        *,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        placer: Union[str, MinePlacer] = "shuffle",
    ) -> None:
        """
        Initialize the engine.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            mine_count: Number of mines, 0 < mine_count < rows * cols.
            seed: Seed for the placement generator (ignored if rng given).
            rng: Generator used for mine placement.
            placer: Strategy name ("shuffle", "rejection") or placer.

        Raises:
            ConfigurationError: If dimensions, mine count or placer
                are invalid.
        """
        self.config = BoardConfig(rows, cols, mine_count)
        self._placer = resolve_placer(placer)
        if isinstance(self._placer, FixedLayout):
            self._placer.validate(self.config)
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._board = Board(self.config)
        self._phase = Phase.PENDING
        self._opened_count = 0
        self._mine_positions: FrozenSet[Coordinate] = frozenset()
        self._flagged_mines: FrozenSet[Coordinate] = frozenset()

    @classmethod
    def from_config(cls, config: BoardConfig, **kwargs) -> "GameEngine":
        """Create an engine from a BoardConfig."""
        return cls(config.rows, config.cols, config.num_mines, **kwargs)

    # ========================================================================
    # Commands
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        On the first reveal, places mines avoiding this cell. A zero
        cell opens its neighbors via flood fill. A mine loses the game.

        Returns:
            True if the board changed, False for a no-op (game over,
            cell flagged, questioned or already open).
        """
        cell = self._board.cell_at(row, col)
        if self.is_over or not cell.is_closed:
            return False

        if self._phase == Phase.PENDING:
            self._start(row, col)
        elif cell.is_mine:
            self._explode(cell)
            return True

        self._flood_open(row, col)
        self._check_win_condition()
        return True

    def toggle_mark(self, row: int, col: int) -> bool:
        """
        Cycle the mark on a cell: closed -> flagged -> questioned -> closed.

        Returns:
            True if the mark changed, False if game is over or cell is open.
        """
        cell = self._board.cell_at(row, col)
        if self.is_over:
            return False
        return cell.cycle_mark()

    def chord(self, row: int, col: int) -> bool:
        """
        Open every unflagged neighbor of a satisfied number.

        Applies when the cell is open, shows a count above zero and has
        exactly that many flagged neighbors. Opening a mine this way
        loses the game and stops the chord.

        Returns:
            True if the board changed, False otherwise.
        """
        cell = self._board.cell_at(row, col)
        if not self._can_chord(cell):
            return False

        changed = False
        for neighbor_row, neighbor_col in self._board.neighbors(row, col):
            neighbor = self._board.cell_at(neighbor_row, neighbor_col)
            if neighbor.is_open or neighbor.is_flagged:
                continue
            if neighbor.is_mine:
                self._explode(neighbor)
                return True
            if self._flood_open(neighbor_row, neighbor_col):
                changed = True

        if changed:
            self._check_win_condition()
        return changed

    def _can_chord(self, cell: Cell) -> bool:
        """Check if chord action is valid."""
        if self._phase != Phase.IN_PROGRESS:
            return False
        if not cell.is_open or cell.mines_around == 0:
            return False
        flag_count = self._board.count_adjacent_flags(cell.row, cell.col)
        return flag_count == cell.mines_around

    def reset(
        self,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Start a new game on the same board.

        Args:
            seed: If given, reseed the placement generator.
            rng: If given, place mines from this generator instead
                (takes precedence over seed).
        """
        if rng is not None:
            self._rng = rng
        elif seed is not None:
            self._rng = np.random.default_rng(seed)
        self._board.reset()
        self._phase = Phase.PENDING
        self._opened_count = 0
        self._mine_positions = frozenset()
        self._flagged_mines = frozenset()
        logger.debug("Board reset to pending state")

    # ========================================================================
    # Transitions (Low-level)
    # ========================================================================

    def _start(self, row: int, col: int) -> None:
        """Place mines around the first reveal and begin play."""
        config = self.config
        positions = self._placer(
            config.rows, config.cols, config.num_mines, (row, col), self._rng
        )
        self._board.place_mines(positions)
        self._board.compute_adjacency()
        self._mine_positions = frozenset(self._board.mine_positions())
        self._phase = Phase.IN_PROGRESS
        logger.debug(
            f"Placed {len(self._mine_positions)} mines avoiding ({row}, {col})"
        )

    def _flood_open(self, row: int, col: int) -> int:
        """
        Open a safe cell and spread through zero cells.

        Uses an explicit stack, so board size never limits depth.
        Flagged cells and mines stop the spread; questioned cells do not.

        Returns:
            Number of cells opened.
        """
        opened = 0
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            cell = self._board.cell_at(current_row, current_col)
            if cell.is_open or cell.is_flagged or cell.is_mine:
                continue
            cell.open()
            opened += 1
            if cell.mines_around == 0:
                for position in self._board.neighbors(current_row, current_col):
                    if not self._board.cell_at(*position).is_open:
                        stack.append(position)

        self._opened_count += opened
        return opened

    def _explode(self, cell: Cell) -> None:
        """Open the hit mine and every other mine; the game is lost."""
        self._flagged_mines = frozenset(
            position for position in self._mine_positions
            if self._board.cell_at(*position).is_flagged
        )
        cell.open()
        for position in self._mine_positions:
            self._board.cell_at(*position).open()
        self._phase = Phase.LOST
        logger.info(f"Mine hit at ({cell.row}, {cell.col}), game lost")

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are open."""
        if self._opened_count == self.config.safe_cells:
            self._phase = Phase.WON
            logger.info("All safe cells opened, game won")

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def mine_count(self) -> int:
        return self.config.num_mines

    @property
    def safe_cells(self) -> int:
        return self.config.safe_cells

    @property
    def rng(self) -> np.random.Generator:
        """Generator used for mine placement."""
        return self._rng

    @property
    def phase(self) -> Phase:
        """Get current game phase."""
        return self._phase

    @property
    def is_playing(self) -> bool:
        """Check if the game can still be played (pending or in progress)."""
        return self._phase not in TERMINAL_PHASES

    @property
    def is_over(self) -> bool:
        """Check if game has ended."""
        return self._phase in TERMINAL_PHASES

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._phase == Phase.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._phase == Phase.LOST

    @property
    def opened_count(self) -> int:
        """Number of opened safe cells."""
        return self._opened_count

    @property
    def mine_positions(self) -> FrozenSet[Coordinate]:
        """Mine positions; empty until the first reveal."""
        return self._mine_positions

    @property
    def flagged_mines(self) -> FrozenSet[Coordinate]:
        """Mines that carried a flag when the game was lost."""
        return self._flagged_mines

    @property
    def flag_count(self) -> int:
        return self._board.count_flagged()

    @property
    def remaining_mines(self) -> int:
        """Mine count minus flags placed; negative when over-flagged."""
        return self.config.num_mines - self.flag_count

    def is_valid_position(self, row: int, col: int) -> bool:
        return self._board.is_valid_position(row, col)

    def neighbors(self, row: int, col: int) -> List[Coordinate]:
        """In-bounds neighbor positions of a cell."""
        return self._board.neighbors(row, col)

    def cell_view(self, row: int, col: int) -> CellView:
        """
        Get a read-only view of a cell.

        Raises:
            OutOfBounds: If the position is not on the board.
        """
        return self._view(self._board.cell_at(row, col))

    def views(self) -> Iterator[CellView]:
        """Views of all cells in row-major order."""
        for cell in self._board:
            yield self._view(cell)

    def _view(self, cell: Cell) -> CellView:
        mines_around = None
        if cell.is_open and not cell.is_mine:
            mines_around = cell.mines_around
        return CellView(
            row=cell.row,
            col=cell.col,
            mark=cell.mark,
            mines_around=mines_around,
            is_mine=cell.is_mine if self.is_over else None,
        )

    def get_observation(self) -> np.ndarray:
        """Board state as an int8 array (see Cell.to_observation)."""
        return self._board.get_observation()
