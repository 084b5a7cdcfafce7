"""
Difficulty presets.

The engine accepts any valid dimensions; the named presets belong to
the caller and double as the leaderboard categories.
"""
from dataclasses import dataclass
from typing import Dict

from minefield import BoardConfig, ConfigurationError


@dataclass(frozen=True)
class Difficulty:
    """
    A named board size.

    Attributes:
        label: Name shown to players and stored with records.
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    label: str
    rows: int
    cols: int
    num_mines: int

    def __post_init__(self) -> None:
        """Validate the preset by building its board configuration."""
        if not self.label.strip():
            raise ConfigurationError("Difficulty label cannot be blank")
        BoardConfig(self.rows, self.cols, self.num_mines)

    @property
    def config(self) -> BoardConfig:
        """Board configuration for this preset."""
        return BoardConfig(self.rows, self.cols, self.num_mines)


EASY = Difficulty("Easy", 10, 10, 10)
MEDIUM = Difficulty("Medium", 12, 12, 20)
HARD = Difficulty("Hard", 14, 14, 25)

DIFFICULTIES: Dict[str, Difficulty] = {
    preset.label: preset for preset in (EASY, MEDIUM, HARD)
}


def get_difficulty(label: str) -> Difficulty:
    """
    Look up a preset by label, ignoring case.

    Raises:
        ConfigurationError: If no preset has that label.
    """
    for preset in DIFFICULTIES.values():
        if preset.label.lower() == label.strip().lower():
            return preset
    choices = ", ".join(DIFFICULTIES)
    raise ConfigurationError(
        f"Unknown difficulty {label!r} (choose from {choices})"
    )
