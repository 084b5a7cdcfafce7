"""
Game session: the assembly around one engine.

Owns the engine for the chosen difficulty, measures elapsed time with an
injectable clock and hands the result of a won game to a record store.
"""
import logging
import time
from typing import Callable, Optional, Union

from minefield import CellView, GameEngine, MinePlacer, Phase

from .difficulty import Difficulty
from .records import GameRecord, RecordStore, RecordStoreError


logger = logging.getLogger(__name__)

DEFAULT_PLAYER_NAME = "Player"


class GameSession:
    """
    One player's sequence of games on a difficulty.

    The clock starts when a game starts. On the first transition into a
    won game the elapsed whole seconds are frozen and a GameRecord is
    handed to the store, once.
    """

    def __init__(
        self,
        difficulty: Difficulty,
        player_name: str = DEFAULT_PLAYER_NAME,
        store: Optional[RecordStore] = None,
        clock: Callable[[], float] = time.monotonic,
        seed: Optional[int] = None,
        placer: Union[str, MinePlacer] = "shuffle",
    ) -> None:
        """
        Initialize the session and start the first game.

        Args:
            difficulty: Preset to play.
            player_name: Name stored with records; blank falls back
                to "Player".
            store: Where won games are reported; None keeps no records.
            clock: Returns seconds; only differences are used.
            seed: Seed for mine placement.
            placer: Mine placement strategy name or placer.
        """
        self.difficulty = difficulty
        self.player_name = player_name.strip() or DEFAULT_PLAYER_NAME
        self.store = store
        self._clock = clock
        self.engine = GameEngine.from_config(
            difficulty.config, seed=seed, placer=placer
        )
        self._started_at = 0.0
        self._finished_at: Optional[float] = None
        self.last_record: Optional[GameRecord] = None
        self.previous_best: Optional[GameRecord] = None
        self.record_saved = False
        self.new_game()

    # ========================================================================
    # Commands
    # ========================================================================

    def new_game(self, seed: Optional[int] = None) -> None:
        """Reset the board and restart the clock."""
        self.engine.reset(seed=seed)
        self._started_at = self._clock()
        self._finished_at = None
        self.last_record = None
        self.previous_best = None
        self.record_saved = False
        logger.debug(
            f"New {self.difficulty.label} game for {self.player_name}"
        )

    def reveal(self, row: int, col: int) -> bool:
        return self._after_move(self.engine.reveal(row, col))

    def toggle_mark(self, row: int, col: int) -> bool:
        return self.engine.toggle_mark(row, col)

    def chord(self, row: int, col: int) -> bool:
        return self._after_move(self.engine.chord(row, col))

    def click(self, row: int, col: int) -> bool:
        """
        Primary click: chord on an open number, reveal anywhere else.
        """
        view = self.engine.cell_view(row, col)
        if view.is_open and view.mines_around:
            return self.chord(row, col)
        return self.reveal(row, col)

    def _after_move(self, changed: bool) -> bool:
        """Stop the clock and report the outcome once the game ends."""
        if changed and self.engine.is_over and self._finished_at is None:
            self._finished_at = self._clock()
            if self.engine.phase == Phase.WON:
                self._report_win()
        return changed

    def _report_win(self) -> None:
        record = GameRecord(
            player_name=self.player_name,
            difficulty=self.difficulty.label,
            time_in_seconds=self.elapsed_seconds,
        )
        self.last_record = record
        logger.info(f"Game won: {record}")
        if self.store is None:
            return
        self.previous_best = self.store.get_player_best_record(
            record.player_name, record.difficulty
        )
        self.save_record()

    def save_record(self) -> bool:
        """
        Hand the last won game to the store.

        Called automatically on a win. A failed write is logged and
        leaves record_saved False so the caller can try again.

        Returns:
            True if the store accepted the record on this call.
        """
        if self.last_record is None or self.store is None:
            return False
        if self.record_saved:
            return False
        try:
            self.store.add_record(self.last_record)
        except RecordStoreError as exc:
            logger.error(f"Could not save {self.last_record}: {exc}")
            return False
        self.record_saved = True
        return True

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds since the game started, frozen once it ends."""
        end = self._finished_at
        if end is None:
            end = self._clock()
        return max(int(end - self._started_at), 0)

    @property
    def is_personal_best(self) -> bool:
        """Check if the last win beat the player's previous best."""
        if self.last_record is None or self.store is None:
            return False
        if self.previous_best is None:
            return True
        best = self.previous_best.time_in_seconds
        return self.last_record.time_in_seconds < best

    @property
    def remaining_mines(self) -> int:
        return self.engine.remaining_mines

    def cell_view(self, row: int, col: int) -> CellView:
        return self.engine.cell_view(row, col)
