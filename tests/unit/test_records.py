"""
Unit tests for the best-time record store.
"""
import json

import pytest
from session import GameRecord, JsonRecordStore, RecordStore, RecordStoreError


# ============================================================================
# In-memory Store Tests
# ============================================================================

class TestAddRecord:
    """Test keeping one best time per player and difficulty."""

    def test_first_record_is_added(self, store: RecordStore) -> None:
        assert store.add_record(GameRecord("Alice", "Easy", 50)) is True
        assert len(store) == 1

    def test_faster_time_replaces(self, store: RecordStore) -> None:
        store.add_record(GameRecord("Alice", "Easy", 50))
        assert store.add_record(GameRecord("Alice", "Easy", 30)) is True
        assert store.records == [GameRecord("Alice", "Easy", 30)]

    @pytest.mark.parametrize("time_in_seconds", [50, 70])
    def test_equal_or_slower_time_is_ignored(
        self, store: RecordStore, time_in_seconds: int
    ) -> None:
        store.add_record(GameRecord("Alice", "Easy", 50))
        added = store.add_record(GameRecord("Alice", "Easy", time_in_seconds))
        assert added is False
        assert store.records == [GameRecord("Alice", "Easy", 50)]

    def test_matching_ignores_case(self, store: RecordStore) -> None:
        store.add_record(GameRecord("Alice", "Easy", 50))
        store.add_record(GameRecord("ALICE", "easy", 20))
        assert len(store) == 1
        assert store.records[0].time_in_seconds == 20

    def test_difficulties_are_kept_apart(self, store: RecordStore) -> None:
        store.add_record(GameRecord("Alice", "Easy", 50))
        store.add_record(GameRecord("Alice", "Hard", 300))
        assert len(store) == 2

    def test_records_returns_copy(self, store: RecordStore) -> None:
        store.add_record(GameRecord("Alice", "Easy", 50))
        store.records.clear()
        assert len(store) == 1


class TestQueries:
    """Test leaderboard and player lookups."""

    def test_best_records_sorted_fastest_first(
        self, store: RecordStore
    ) -> None:
        for name, seconds in [("Cy", 40), ("Al", 90), ("Bo", 15)]:
            store.add_record(GameRecord(name, "Easy", seconds))
        store.add_record(GameRecord("Di", "Medium", 5))

        best = store.get_best_records("Easy")
        assert [record.player_name for record in best] == ["Bo", "Cy", "Al"]

    def test_best_records_default_limit(self, store: RecordStore) -> None:
        for index in range(12):
            store.add_record(GameRecord(f"p{index}", "Easy", 100 - index))
        best = store.get_best_records("Easy")
        assert len(best) == 10
        assert best[0].time_in_seconds == 89

    def test_best_records_custom_limit(self, store: RecordStore) -> None:
        for index in range(5):
            store.add_record(GameRecord(f"p{index}", "Easy", index))
        assert len(store.get_best_records("easy", limit=3)) == 3

    def test_best_records_unknown_difficulty(
        self, store: RecordStore
    ) -> None:
        assert store.get_best_records("Impossible") == []

    def test_player_best_record(self, store: RecordStore) -> None:
        store.add_record(GameRecord("Alice", "Easy", 50))
        best = store.get_player_best_record("alice", "EASY")
        assert best == GameRecord("Alice", "Easy", 50)

    def test_player_without_record(self, store: RecordStore) -> None:
        assert store.get_player_best_record("Nobody", "Easy") is None


class TestGameRecord:
    """Test record serialization."""

    def test_to_dict_fields(self) -> None:
        assert GameRecord("Alice", "Easy", 12).to_dict() == {
            "player_name": "Alice",
            "difficulty": "Easy",
            "time_in_seconds": 12,
        }

    def test_records_are_immutable(self) -> None:
        record = GameRecord("Alice", "Easy", 12)
        with pytest.raises(AttributeError):
            record.time_in_seconds = 1


# ============================================================================
# JSON Store Tests
# ============================================================================

class TestJsonRecordStore:
    """Test the file-backed store."""

    def test_missing_file_starts_empty(self, tmp_path) -> None:
        path = tmp_path / "records.json"
        store = JsonRecordStore(path)
        assert len(store) == 0
        assert not path.exists()

    def test_changes_are_written(self, tmp_path) -> None:
        path = tmp_path / "records.json"
        store = JsonRecordStore(path)
        store.add_record(GameRecord("Alice", "Easy", 42))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == [
            {"player_name": "Alice", "difficulty": "Easy", "time_in_seconds": 42}
        ]

    def test_records_survive_reload(self, tmp_path) -> None:
        path = tmp_path / "records.json"
        store = JsonRecordStore(path)
        store.add_record(GameRecord("Alice", "Easy", 42))
        store.add_record(GameRecord("Bob", "Hard", 200))

        reloaded = JsonRecordStore(path)
        assert reloaded.records == store.records

    def test_creates_parent_directories(self, tmp_path) -> None:
        path = tmp_path / "nested" / "dir" / "records.json"
        JsonRecordStore(path).add_record(GameRecord("Alice", "Easy", 1))
        assert path.exists()

    def test_malformed_file_raises(self, tmp_path) -> None:
        path = tmp_path / "records.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RecordStoreError):
            JsonRecordStore(path)

    def test_missing_fields_raise(self, tmp_path) -> None:
        path = tmp_path / "records.json"
        path.write_text('[{"player_name": "Alice"}]', encoding="utf-8")
        with pytest.raises(RecordStoreError):
            JsonRecordStore(path)

    def test_unwritable_location_raises(self, tmp_path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = JsonRecordStore(blocker / "records.json")
        with pytest.raises(RecordStoreError):
            store.add_record(GameRecord("Alice", "Easy", 1))

    def test_failed_write_leaves_table_unchanged(self, tmp_path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = JsonRecordStore(blocker / "records.json")

        with pytest.raises(RecordStoreError):
            store.add_record(GameRecord("Alice", "Easy", 1))

        assert len(store) == 0
        assert store.get_player_best_record("Alice", "Easy") is None

    def test_failed_replace_keeps_old_record(self, tmp_path) -> None:
        store = JsonRecordStore(tmp_path / "records.json")
        store.add_record(GameRecord("Alice", "Easy", 50))
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store.path = blocker / "records.json"

        with pytest.raises(RecordStoreError):
            store.add_record(GameRecord("Alice", "Easy", 10))

        assert store.records == [GameRecord("Alice", "Easy", 50)]
