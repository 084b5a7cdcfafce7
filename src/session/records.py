"""
Best-time records.

Keeps one best time per (player, difficulty). Names and difficulty labels
are matched case-insensitively. The store is a plain object handed to
whoever reports results; there is no process-wide instance.
"""
import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from minefield import MinesweeperError


logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


class RecordStoreError(MinesweeperError):
    """Raised when the record file cannot be read or written."""


# ============================================================================
# Game Record
# ============================================================================

@dataclass(frozen=True)
class GameRecord:
    """
    Final result of a won game.

    Attributes:
        player_name: Who played.
        difficulty: Difficulty label the game was played on.
        time_in_seconds: Whole seconds from start to win.
    """

    player_name: str
    difficulty: str
    time_in_seconds: int

    def matches(self, player_name: str, difficulty: str) -> bool:
        """Check if record belongs to this player and difficulty."""
        return (
            self.player_name.lower() == player_name.lower()
            and self.difficulty.lower() == difficulty.lower()
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameRecord":
        """Build a record from its serialized form."""
        return cls(
            player_name=str(data["player_name"]),
            difficulty=str(data["difficulty"]),
            time_in_seconds=int(data["time_in_seconds"]),
        )


# ============================================================================
# In-memory Store
# ============================================================================

class RecordStore:
    """In-memory best-time table."""

    def __init__(self, records: Optional[List[GameRecord]] = None) -> None:
        self._records: List[GameRecord] = list(records or [])

    def add_record(self, record: GameRecord) -> bool:
        """
        Store a result, keeping only the best time per player/difficulty.

        Args:
            record: Result to add.

        Returns:
            True if the table changed, False if an equal or better
            time was already stored.
        """
        for index, existing in enumerate(self._records):
            if not existing.matches(record.player_name, record.difficulty):
                continue
            if record.time_in_seconds < existing.time_in_seconds:
                self._records[index] = record
                logger.info(
                    f"Updated record for {record.player_name} on "
                    f"{record.difficulty}: {record.time_in_seconds}s"
                )
                self._changed()
                return True
            logger.info(
                f"Existing record for {record.player_name} on "
                f"{record.difficulty} is already better or equal"
            )
            return False

        self._records.append(record)
        logger.info(
            f"Added record for {record.player_name} on "
            f"{record.difficulty}: {record.time_in_seconds}s"
        )
        self._changed()
        return True

    def get_best_records(
        self, difficulty: str, limit: int = DEFAULT_LIMIT
    ) -> List[GameRecord]:
        """
        Fastest records for a difficulty.

        Args:
            difficulty: Difficulty label.
            limit: Maximum number of records to return.

        Returns:
            Records sorted by time, fastest first.
        """
        matching = [
            record for record in self._records
            if record.difficulty.lower() == difficulty.lower()
        ]
        matching.sort(key=lambda record: record.time_in_seconds)
        return matching[:max(limit, 0)]

    def get_player_best_record(
        self, player_name: str, difficulty: str
    ) -> Optional[GameRecord]:
        """Best record of a player on a difficulty, or None."""
        matching = [
            record for record in self._records
            if record.matches(player_name, difficulty)
        ]
        if not matching:
            return None
        return min(matching, key=lambda record: record.time_in_seconds)

    @property
    def records(self) -> List[GameRecord]:
        """Copy of every stored record."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def _changed(self) -> None:
        """Hook called after every change."""


# ============================================================================
# JSON-backed Store
# ============================================================================

class JsonRecordStore(RecordStore):
    """
    Record store persisted to a JSON file.

    The file holds a list of record dictionaries and is rewritten after
    every change. A missing file starts an empty table.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        """
        Load records from path.

        Raises:
            RecordStoreError: If the file exists but cannot be parsed.
        """
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> List[GameRecord]:
        if not self.path.exists():
            logger.info(f"No record file at {self.path}, starting empty")
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [GameRecord.from_dict(item) for item in data or []]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise RecordStoreError(
                f"Could not load records from {self.path}: {exc}"
            ) from exc

    def add_record(self, record: GameRecord) -> bool:
        """
        Store a result and write the file.

        Raises:
            RecordStoreError: If the file cannot be written. The
                in-memory table is left as it was before the call.
        """
        snapshot = list(self._records)
        try:
            return super().add_record(record)
        except RecordStoreError:
            self._records = snapshot
            raise

    def _changed(self) -> None:
        self.save()

    def save(self) -> None:
        """
        Write all records to the file.

        Raises:
            RecordStoreError: If the file cannot be written.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(
                    [record.to_dict() for record in self._records], f, indent=2
                )
        except OSError as exc:
            raise RecordStoreError(
                f"Could not save records to {self.path}: {exc}"
            ) from exc
