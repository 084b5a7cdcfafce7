"""
Mine placement strategies.

A placer is any callable ``(rows, cols, num_mines, exclude, rng)`` that
returns ``num_mines`` distinct in-bounds positions, none equal to
``exclude``. All randomness comes from the numpy Generator passed in, so a
seeded generator reproduces the same board.
"""
from typing import Callable, Iterable, List, Tuple, Union

import numpy as np

from .board import BoardConfig, Coordinate
from .errors import ConfigurationError


MinePlacer = Callable[
    [int, int, int, Coordinate, np.random.Generator], List[Coordinate]
]


# ============================================================================
# Random Strategies
# ============================================================================

def shuffle_placement(
    rows: int,
    cols: int,
    num_mines: int,
    exclude: Coordinate,
    rng: np.random.Generator,
) -> List[Coordinate]:
    """
    Shuffle every non-excluded position and take the first num_mines.

    Runs in time proportional to the board size regardless of density.
    """
    candidates = [
        (row, col)
        for row in range(rows)
        for col in range(cols)
        if (row, col) != exclude
    ]
    order = rng.permutation(len(candidates))[:num_mines]
    return [candidates[index] for index in order]


def rejection_placement(
    rows: int,
    cols: int,
    num_mines: int,
    exclude: Coordinate,
    rng: np.random.Generator,
) -> List[Coordinate]:
    """
    Draw uniform positions until num_mines distinct ones are accepted.

    Positions already holding a mine and the excluded cell are rejected.
    Slows down sharply as num_mines approaches rows * cols - 1.
    """
    placed: List[Coordinate] = []
    taken = {exclude}
    while len(placed) < num_mines:
        position = (int(rng.integers(rows)), int(rng.integers(cols)))
        if position in taken:
            continue
        taken.add(position)
        placed.append(position)
    return placed


# ============================================================================
# Fixed Layout
# ============================================================================

class FixedLayout:
    """
    Placer that replays a known set of mine positions.

    If the first reveal lands on one of the mines, that mine is moved to
    the first free cell in row-major order, so the first reveal is still
    never a mine.
    """

    def __init__(self, positions: Iterable[Tuple[int, int]]) -> None:
        self.positions = [(int(row), int(col)) for row, col in positions]

    def validate(self, config: BoardConfig) -> None:
        """
        Check the layout against a board configuration.

        Raises:
            ConfigurationError: On a count mismatch, duplicate or
                out-of-bounds position.
        """
        if len(set(self.positions)) != len(self.positions):
            raise ConfigurationError("Fixed layout contains duplicate mines")
        if len(self.positions) != config.num_mines:
            raise ConfigurationError(
                f"Fixed layout has {len(self.positions)} mines, "
                f"board expects {config.num_mines}"
            )
        for row, col in self.positions:
            if not (0 <= row < config.rows and 0 <= col < config.cols):
                raise ConfigurationError(
                    f"Fixed mine ({row}, {col}) is outside the "
                    f"{config.rows}x{config.cols} board"
                )

    def __call__(
        self,
        rows: int,
        cols: int,
        num_mines: int,
        exclude: Coordinate,
        rng: np.random.Generator,
    ) -> List[Coordinate]:
        placed = list(self.positions)
        if exclude not in placed:
            return placed

        taken = set(placed)
        for row in range(rows):
            for col in range(cols):
                if (row, col) != exclude and (row, col) not in taken:
                    placed[placed.index(exclude)] = (row, col)
                    return placed
        # Unreachable for a validated layout: num_mines < rows * cols.
        raise ConfigurationError("No free cell to relocate the first mine")

    def __repr__(self) -> str:
        return f"FixedLayout({self.positions!r})"


# ============================================================================
# Lookup
# ============================================================================

PLACEMENT_STRATEGIES = {
    "shuffle": shuffle_placement,
    "rejection": rejection_placement,
}


def resolve_placer(placer: Union[str, MinePlacer]) -> MinePlacer:
    """
    Turn a strategy name or callable into a placer.

    Raises:
        ConfigurationError: For an unknown strategy name.
    """
    if callable(placer):
        return placer
    try:
        return PLACEMENT_STRATEGIES[placer]
    except KeyError:
        choices = ", ".join(sorted(PLACEMENT_STRATEGIES))
        raise ConfigurationError(
            f"Unknown placement strategy {placer!r} (choose from {choices})"
        ) from None
