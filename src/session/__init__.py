"""
Session module for Minesweeper.

Caller-side collaborators of the engine: difficulty presets, the
best-time record store and the game session that wires them together.
"""
from .difficulty import (
    Difficulty,
    DIFFICULTIES,
    EASY,
    MEDIUM,
    HARD,
    get_difficulty,
)
from .records import (
    GameRecord,
    RecordStore,
    JsonRecordStore,
    RecordStoreError,
)
from .game_session import GameSession, DEFAULT_PLAYER_NAME

__all__ = [
    "Difficulty",
    "DIFFICULTIES",
    "EASY",
    "MEDIUM",
    "HARD",
    "get_difficulty",
    "GameRecord",
    "RecordStore",
    "JsonRecordStore",
    "RecordStoreError",
    "GameSession",
    "DEFAULT_PLAYER_NAME",
]
