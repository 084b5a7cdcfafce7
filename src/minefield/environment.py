"""
Gymnasium environment wrapper for Minesweeper.

Exposes a GameEngine through the standard reset/step interface so that
scripted players and test harnesses can drive it.
"""
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple, SupportsFloat, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .cell import MarkState
from .engine import GameEngine
from .placement import MinePlacer


# ============================================================================
# Constants
# ============================================================================

class Command(IntEnum):
    """Commands selectable through the action index."""

    REVEAL = 0
    TOGGLE_MARK = 1
    CHORD = 2


WIN_REWARD = 10.0
LOSS_REWARD = -10.0
MOVE_REWARD = 1.0
NO_OP_REWARD = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array where:
        - -1 = closed cell
        - -2 = flagged cell
        - -3 = questioned cell
        - 0-8 = open cell with adjacent mine count
        - 9 = open mine (after a loss)

    Actions:
        Discrete action space of size 3 * rows * cols.
        action // (rows * cols) picks the Command, the remainder the
        cell at (index // cols, index % cols).

    Rewards:
        - +1 for a move that changed the board
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for a no-op
    """

    metadata = {"render_modes": []}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        placer: Union[str, MinePlacer] = "shuffle",
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 10x10 with 10 mines).
            placer: Mine placement strategy name or placer.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.engine = GameEngine.from_config(
            self.config, rng=self.np_random, placer=placer
        )
        self._cells = self.config.total_cells

        self.observation_space = spaces.Box(
            low=-3,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(Command) * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.engine.reset(rng=self.np_random)
        self._steps = 0
        return self.engine.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded command and cell index.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        command, row, col = self.decode_action(action)
        self._steps += 1

        changed = self._apply(command, row, col)
        reward = self._calculate_reward(changed)

        return (
            self.engine.get_observation(),
            reward,
            self.engine.is_over,
            False,
            self._get_info(),
        )

    def decode_action(self, action: int) -> Tuple[Command, int, int]:
        """Convert a flat action index to (command, row, col)."""
        action = int(action)
        command = Command(action // self._cells)
        index = action % self._cells
        return command, index // self.config.cols, index % self.config.cols

    def encode_action(self, command: Command, row: int, col: int) -> int:
        """Convert (command, row, col) to a flat action index."""
        return int(command) * self._cells + row * self.config.cols + col

    def _apply(self, command: Command, row: int, col: int) -> bool:
        if command == Command.REVEAL:
            return self.engine.reveal(row, col)
        if command == Command.TOGGLE_MARK:
            return self.engine.toggle_mark(row, col)
        return self.engine.chord(row, col)

    def _calculate_reward(self, changed: bool) -> float:
        """Reward for the move just applied."""
        if not changed:
            return NO_OP_REWARD
        if self.engine.is_won:
            return WIN_REWARD
        if self.engine.is_lost:
            return LOSS_REWARD
        return MOVE_REWARD

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.engine.opened_count,
            "total_safe": self.config.safe_cells,
            "remaining_mines": self.engine.remaining_mines,
            "game_state": self.engine.phase.name,
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the board.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.engine.is_over:
            return mask

        for view in self.engine.views():
            index = view.row * self.config.cols + view.col
            if not view.is_open:
                mask[Command.TOGGLE_MARK * self._cells + index] = True
                if view.mark == MarkState.CLOSED:
                    mask[Command.REVEAL * self._cells + index] = True
            elif view.mines_around and self._chord_ready(
                view.row, view.col, view.mines_around
            ):
                mask[Command.CHORD * self._cells + index] = True
        return mask

    def _chord_ready(self, row: int, col: int, mines_around: int) -> bool:
        """Check whether a chord on an open number would open something."""
        flags = 0
        closed = 0
        for position in self.engine.neighbors(row, col):
            neighbor = self.engine.cell_view(*position)
            if neighbor.mark == MarkState.FLAGGED:
                flags += 1
            elif not neighbor.is_open:
                closed += 1
        return flags == mines_around and closed > 0
