"""Tests for ProgressStore persistence."""

import json
import sqlite3

import pytest

from macpal.classroom import ProgressStore


CORRUPT_BYTES = b"this is not a sqlite database" * 100


def write_raw(db_path, values):
    """Store raw (already encoded) values, bypassing ProgressStore."""
    conn = sqlite3.connect(str(db_path))
    try:
        conn.executemany(
            "INSERT OR REPLACE INTO progress_state (key, value) VALUES (?, ?)",
            list(values.items()),
        )
        conn.commit()
    finally:
        conn.close()


def read_raw(db_path):
    conn = sqlite3.connect(str(db_path))
    try:
        return dict(conn.execute("SELECT key, value FROM progress_state").fetchall())
    finally:
        conn.close()


class TestLoad:

    def test_fresh_store_has_defaults(self, store):
        progress = store.load()
        assert progress.completed_lessons == set()
        assert progress.current_onboarding_index == 0
        assert progress.is_in_onboarding_mode is False

    def test_creates_parent_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "progress.db"
        ProgressStore(db_path)
        assert db_path.exists()

    def test_round_trip_through_new_instance(self, store, db_path):
        store.mark_completed("a")
        store.start_onboarding()
        store.advance_onboarding()

        reloaded = ProgressStore(db_path)
        assert reloaded.completed_lessons == {"a"}
        assert reloaded.current_onboarding_index == 1
        assert reloaded.is_in_onboarding_mode is True

    def test_partial_keys_default(self, store, db_path):
        write_raw(db_path, {"currentOnboardingIndex": "3"})
        progress = store.load()
        assert progress.current_onboarding_index == 3
        assert progress.completed_lessons == set()
        assert progress.is_in_onboarding_mode is False

    def test_duplicate_ids_load_as_set(self, store, db_path):
        write_raw(db_path, {"completedLessons": json.dumps(["a", "b", "a"])})
        assert store.load().completed_lessons == {"a", "b"}

    def test_invalid_json_falls_back(self, store, db_path):
        write_raw(db_path, {
            "completedLessons": "not json",
            "currentOnboardingIndex": "{",
            "isInOnboardingMode": "",
        })
        progress = store.load()
        assert progress.completed_lessons == set()
        assert progress.current_onboarding_index == 0
        assert progress.is_in_onboarding_mode is False

    def test_wrong_types_fall_back(self, store, db_path):
        write_raw(db_path, {
            "completedLessons": json.dumps({"a": 1}),
            "currentOnboardingIndex": json.dumps("two"),
            "isInOnboardingMode": json.dumps(1),
        })
        progress = store.load()
        assert progress.completed_lessons == set()
        assert progress.current_onboarding_index == 0
        assert progress.is_in_onboarding_mode is False

    def test_boolean_index_rejected(self, store, db_path):
        write_raw(db_path, {"currentOnboardingIndex": json.dumps(True)})
        assert store.load().current_onboarding_index == 0

    def test_non_string_ids_fall_back(self, store, db_path):
        write_raw(db_path, {"completedLessons": json.dumps(["a", 2])})
        assert store.load().completed_lessons == set()

    def test_negative_index_clamped(self, store, db_path):
        write_raw(db_path, {"currentOnboardingIndex": json.dumps(-4)})
        assert store.load().current_onboarding_index == 0

    def test_unreadable_database_uses_defaults(self, tmp_path):
        db_path = tmp_path / "progress.db"
        db_path.write_bytes(CORRUPT_BYTES)
        store = ProgressStore(db_path)
        progress = store.load()
        assert progress.completed_lessons == set()
        assert progress.current_onboarding_index == 0

    def test_progress_is_a_copy(self, store):
        snapshot = store.progress
        snapshot.completed_lessons.add("sneaky")
        assert not store.is_completed("sneaky")


class TestCompletion:

    def test_mark_completed(self, store):
        store.mark_completed("a")
        assert store.is_completed("a")
        assert not store.is_completed("b")

    def test_mark_completed_idempotent(self, store, db_path):
        store.mark_completed("a")
        store.mark_completed("a")
        assert store.completed_lessons == {"a"}
        assert json.loads(read_raw(db_path)["completedLessons"]) == ["a"]

    def test_persisted_immediately(self, store, db_path):
        store.mark_completed("b")
        store.mark_completed("a")
        assert json.loads(read_raw(db_path)["completedLessons"]) == ["a", "b"]

    def test_completion_stats(self, store):
        store.mark_completed("a")
        stats = store.get_completion_stats(4)
        assert stats == {
            "total_lessons": 4,
            "completed": 1,
            "remaining": 3,
            "completion_percent": 25.0,
        }

    def test_completion_stats_empty_catalog(self, store):
        assert store.get_completion_stats(0)["completion_percent"] == 0


class TestOnboarding:

    def test_start(self, store, db_path):
        store.start_onboarding()
        assert store.is_in_onboarding_mode
        assert store.current_onboarding_index == 0
        raw = read_raw(db_path)
        assert json.loads(raw["isInOnboardingMode"]) is True
        assert json.loads(raw["currentOnboardingIndex"]) == 0

    def test_start_restarts_index(self, store):
        store.start_onboarding()
        store.advance_onboarding()
        store.start_onboarding()
        assert store.current_onboarding_index == 0

    def test_advance_has_no_upper_clamp(self, store):
        store.start_onboarding()
        for _ in range(5):
            store.advance_onboarding()
        assert store.current_onboarding_index == 5

    def test_advance_never_regresses(self, store):
        store.start_onboarding()
        seen = [store.current_onboarding_index]
        for _ in range(3):
            store.advance_onboarding()
            seen.append(store.current_onboarding_index)
        assert seen == sorted(seen)

    def test_exit_keeps_index(self, store, db_path):
        store.start_onboarding()
        store.advance_onboarding()
        store.exit_onboarding()
        reloaded = ProgressStore(db_path)
        assert reloaded.is_in_onboarding_mode is False
        assert reloaded.current_onboarding_index == 1


class TestReset:

    def test_reset_clears_everything(self, store, db_path):
        store.mark_completed("a")
        store.start_onboarding()
        store.advance_onboarding()
        store.reset()

        reloaded = ProgressStore(db_path)
        assert reloaded.completed_lessons == set()
        assert reloaded.current_onboarding_index == 0
        assert reloaded.is_in_onboarding_mode is False

    def test_every_key_written(self, store, db_path):
        store.reset()
        assert set(read_raw(db_path)) == {
            "completedLessons",
            "currentOnboardingIndex",
            "isInOnboardingMode",
        }


class TestCorruptDatabase:

    def test_corrupt_file_moved_aside(self, tmp_path):
        db_path = tmp_path / "progress.db"
        db_path.write_bytes(CORRUPT_BYTES)
        ProgressStore(db_path)
        backup = tmp_path / "progress.db.corrupt"
        assert backup.read_bytes() == CORRUPT_BYTES
        assert set(read_raw(db_path)) == set()

    def test_writes_work_after_recovery(self, tmp_path):
        db_path = tmp_path / "progress.db"
        db_path.write_bytes(CORRUPT_BYTES)
        store = ProgressStore(db_path)
        store.mark_completed("a")
        store.start_onboarding()
        store.reset()
        store.mark_completed("b")
        assert ProgressStore(db_path).completed_lessons == {"b"}

    def test_file_corrupted_while_running(self, store, db_path):
        store.mark_completed("a")
        db_path.write_bytes(CORRUPT_BYTES)
        store.mark_completed("b")
        # the unreadable data is gone; only the new completion survives
        assert store.completed_lessons == {"b"}
        assert ProgressStore(db_path).completed_lessons == {"b"}
        assert (db_path.parent / "progress.db.corrupt").exists()

    def test_failed_write_leaves_memory_unchanged(self, store, db_path, monkeypatch):
        store.mark_completed("a")

        def broken_dumps(value):
            raise TypeError("cannot encode")

        monkeypatch.setattr(json, "dumps", broken_dumps)
        with pytest.raises(TypeError):
            store.mark_completed("b")
        monkeypatch.undo()

        assert store.completed_lessons == {"a"}
        assert ProgressStore(db_path).completed_lessons == {"a"}


class TestSharedFile:

    def test_completions_from_two_stores_both_kept(self, db_path):
        tab_a = ProgressStore(db_path)
        tab_b = ProgressStore(db_path)
        tab_a.mark_completed("a")
        tab_b.mark_completed("b")

        assert tab_b.completed_lessons == {"a", "b"}
        assert ProgressStore(db_path).completed_lessons == {"a", "b"}

    def test_onboarding_from_other_store_not_overwritten(self, db_path):
        tab_a = ProgressStore(db_path)
        tab_b = ProgressStore(db_path)
        tab_a.start_onboarding()
        tab_a.advance_onboarding()
        tab_b.mark_completed("b")

        reloaded = ProgressStore(db_path)
        assert reloaded.is_in_onboarding_mode is True
        assert reloaded.current_onboarding_index == 1
        assert reloaded.completed_lessons == {"b"}

    def test_advance_builds_on_stored_index(self, db_path):
        tab_a = ProgressStore(db_path)
        tab_b = ProgressStore(db_path)
        tab_a.start_onboarding()
        tab_a.advance_onboarding()
        tab_b.advance_onboarding()
        assert tab_b.current_onboarding_index == 2


class TestClampOnboardingIndex:

    def test_index_past_end_clamped(self, store, db_path):
        write_raw(db_path, {"currentOnboardingIndex": json.dumps(99)})
        store.load()
        store.clamp_onboarding_index(2)
        assert store.current_onboarding_index == 2
        assert json.loads(read_raw(db_path)["currentOnboardingIndex"]) == 2

    def test_index_in_range_untouched(self, store, db_path):
        store.start_onboarding()
        store.advance_onboarding()
        store.clamp_onboarding_index(1)
        store.clamp_onboarding_index(5)
        assert store.current_onboarding_index == 1
