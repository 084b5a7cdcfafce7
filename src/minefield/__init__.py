"""
Minesweeper game module.

Provides the core game logic: cell state, board geometry, mine placement
and the game engine, plus a Gymnasium adapter for scripted play.
"""
from .cell import Cell, MarkState
from .board import Board, BoardConfig, Coordinate
from .engine import CellView, GameEngine, Phase
from .errors import ConfigurationError, MinesweeperError, OutOfBounds
from .placement import (
    FixedLayout,
    MinePlacer,
    PLACEMENT_STRATEGIES,
    rejection_placement,
    resolve_placer,
    shuffle_placement,
)
from .environment import Command, MinesweeperEnv

__all__ = [
    "Cell",
    "MarkState",
    "Board",
    "BoardConfig",
    "Coordinate",
    "CellView",
    "GameEngine",
    "Phase",
    "ConfigurationError",
    "MinesweeperError",
    "OutOfBounds",
    "FixedLayout",
    "MinePlacer",
    "PLACEMENT_STRATEGIES",
    "rejection_placement",
    "resolve_placer",
    "shuffle_placement",
    "Command",
    "MinesweeperEnv",
]
