"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell, FixedLayout, GameEngine
from session import EASY, GameSession, RecordStore


# ============================================================================
# Helpers
# ============================================================================

def make_engine(rows: int, cols: int, mines) -> GameEngine:
    """Engine whose mines sit exactly at the given positions."""
    return GameEngine(rows, cols, len(mines), placer=FixedLayout(mines))


class FakeClock:
    """Manually advanced clock for session timing."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 10x10 board with 10 mines."""
    return Board()


@pytest.fixture
def small_board() -> Board:
    """Create a 3x3 board with 1 mine for testing."""
    return Board(BoardConfig(3, 3, 1))


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def engine_factory():
    """Build engines with fixed mine layouts."""
    return make_engine


@pytest.fixture
def default_engine() -> GameEngine:
    """Create a seeded 9x9 engine with 10 mines."""
    return GameEngine(9, 9, 10, seed=7)


@pytest.fixture
def center_mine_engine() -> GameEngine:
    """3x3 board with its only mine in the center."""
    return make_engine(3, 3, [(1, 1)])


@pytest.fixture
def corner_mine_engine() -> GameEngine:
    """5x5 board with its only mine in the bottom-right corner."""
    return make_engine(5, 5, [(4, 4)])


@pytest.fixture
def wall_engine() -> GameEngine:
    """5x5 board split by a column of mines at col 2."""
    return make_engine(5, 5, [(row, 2) for row in range(5)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def closed_cell() -> Cell:
    """Create a closed cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    cell = Cell()
    cell.set_mine()
    return cell


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> RecordStore:
    return RecordStore()


@pytest.fixture
def easy_session(store: RecordStore, clock: FakeClock) -> GameSession:
    """Easy session whose mines fill the bottom row; (0, 0) wins at once."""
    mines = [(9, col) for col in range(10)]
    return GameSession(
        EASY, "Alice", store=store, clock=clock, placer=FixedLayout(mines)
    )
