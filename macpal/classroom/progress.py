"""
ProgressStore - Persist lesson completion and onboarding state.

Progress lives in a small SQLite key-value table (~/.macpal/progress.db by
default) with one row per key:
- completedLessons: JSON list of lesson ids (treated as a set)
- currentOnboardingIndex: JSON integer
- isInOnboardingMode: JSON boolean

Every mutation re-reads the stored rows, applies its change and rewrites all
three rows inside one write transaction. A reader never sees a half-written
snapshot, and two stores sharing a file do not overwrite each other's changes.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Callable, Optional

from macpal.schemas import Progress


logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_DIR = Path.home() / ".macpal"
DEFAULT_PROGRESS_DB = DEFAULT_PROGRESS_DIR / "progress.db"

COMPLETED_LESSONS_KEY = "completedLessons"
CURRENT_ONBOARDING_INDEX_KEY = "currentOnboardingIndex"
ONBOARDING_MODE_KEY = "isInOnboardingMode"

CORRUPT_SUFFIX = ".corrupt"


class ProgressStore:
    """
    Owner of the learner's persisted progress.

    Holds the current Progress in memory and writes it back to SQLite
    before each mutating call returns. Loading never fails: missing or
    corrupted values fall back to their defaults, and a file that is not a
    database is moved aside and replaced by an empty one.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize the store and load saved progress.

        Args:
            db_path: Path to progress.db (default: ~/.macpal/progress.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self._progress = Progress()
        self._ensure_database()
        self.load()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._create_table()
        except sqlite3.OperationalError:
            raise
        except sqlite3.DatabaseError as e:
            self._replace_corrupt_file(e)

    def _replace_corrupt_file(self, error: sqlite3.DatabaseError):
        """Move a file that is not a database aside and start a fresh one."""
        backup = self.db_path.with_name(self.db_path.name + CORRUPT_SUFFIX)
        logger.warning(f"Progress database {self.db_path} is unreadable ({error}), moving it to {backup}")
        self.db_path.replace(backup)
        self._create_table()

    def _create_table(self):
        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS progress_state (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    # -------------------------------------------------------------------------
    # Load / Save
    # -------------------------------------------------------------------------

    def _read_rows(self) -> dict[str, str]:
        conn = self._get_connection()
        try:
            cursor = conn.execute("SELECT key, value FROM progress_state")
            return {row["key"]: row["value"] for row in cursor.fetchall()}
        except sqlite3.DatabaseError as e:
            logger.warning(f"Could not read progress from {self.db_path}, using defaults: {e}")
            return {}
        finally:
            conn.close()

    def load(self) -> Progress:
        """
        Read persisted progress, replacing the in-memory copy.

        Missing keys default to an empty set, index 0 and onboarding off.
        """
        self._progress = _progress_from_rows(self._read_rows())
        return self.progress

    def _update(self, change: Callable[[Progress], Progress]) -> Progress:
        """
        Apply a change to the stored progress in one write transaction.

        The change sees the rows as they are on disk, not this store's
        possibly stale copy. Memory is only replaced after the commit.
        """
        try:
            updated = self._write(change)
        except sqlite3.OperationalError:
            raise
        except sqlite3.DatabaseError as e:
            self._replace_corrupt_file(e)
            updated = self._write(change)

        self._progress = updated
        return updated

    def _write(self, change: Callable[[Progress], Progress]) -> Progress:
        conn = self._get_connection()
        conn.isolation_level = None
        try:
            conn.execute("BEGIN IMMEDIATE")
            try:
                cursor = conn.execute("SELECT key, value FROM progress_state")
                current = _progress_from_rows({row["key"]: row["value"] for row in cursor.fetchall()})
                updated = change(current)
                conn.executemany(
                    """INSERT INTO progress_state (key, value)
                       VALUES (?, ?)
                       ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                    [(key, json.dumps(value)) for key, value in updated.model_dump(by_alias=True).items()]
                )
                conn.execute("COMMIT")
            except Exception:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
        finally:
            conn.close()
        return updated

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def progress(self) -> Progress:
        """Copy of the current progress."""
        return self._progress.model_copy(deep=True)

    @property
    def completed_lessons(self) -> frozenset[str]:
        return frozenset(self._progress.completed_lessons)

    @property
    def current_onboarding_index(self) -> int:
        return self._progress.current_onboarding_index

    @property
    def is_in_onboarding_mode(self) -> bool:
        return self._progress.is_in_onboarding_mode

    def is_completed(self, lesson_id: str) -> bool:
        return lesson_id in self._progress.completed_lessons

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def mark_completed(self, lesson_id: str):
        """Add a lesson to the completed set. Repeated calls change nothing."""
        self._update(lambda p: p.model_copy(update={"completed_lessons": p.completed_lessons | {lesson_id}}))
        logger.info(f"Lesson completed: {lesson_id}")

    def start_onboarding(self):
        self._update(lambda p: p.model_copy(update={
            "is_in_onboarding_mode": True,
            "current_onboarding_index": 0,
        }))
        logger.info("Onboarding started")

    def advance_onboarding(self):
        """
        Move to the next onboarding lesson.

        There is no upper clamp: index == lesson count means the run is
        finished, which the caller detects.
        """
        updated = self._update(lambda p: p.model_copy(update={
            "current_onboarding_index": p.current_onboarding_index + 1,
        }))
        logger.info(f"Onboarding advanced to index {updated.current_onboarding_index}")

    def exit_onboarding(self):
        """Leave onboarding mode, keeping the index so the run can resume."""
        self._update(lambda p: p.model_copy(update={"is_in_onboarding_mode": False}))
        logger.info("Onboarding exited")

    def clamp_onboarding_index(self, lesson_count: int):
        """
        Pull a stored index above lesson_count back to lesson_count.

        lesson_count itself is the valid "run finished" value, so only
        larger values are rewritten.
        """
        if self._progress.current_onboarding_index <= lesson_count:
            return
        logger.warning(
            f"{CURRENT_ONBOARDING_INDEX_KEY} {self._progress.current_onboarding_index} "
            f"is past the last lesson, clamping to {lesson_count}"
        )
        self._update(lambda p: p.model_copy(update={
            "current_onboarding_index": min(p.current_onboarding_index, lesson_count),
        }))

    def reset(self):
        """Clear all progress."""
        self._update(lambda p: Progress())
        logger.info("Progress reset")

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_completion_stats(self, total_lessons: int) -> dict:
        """
        Get completion statistics.

        Args:
            total_lessons: Total number of lessons in the catalog

        Returns:
            Dictionary with completion stats
        """
        completed = len(self._progress.completed_lessons)
        return {
            "total_lessons": total_lessons,
            "completed": completed,
            "remaining": max(total_lessons - completed, 0),
            "completion_percent": round(completed / total_lessons * 100, 1) if total_lessons > 0 else 0,
        }


def _progress_from_rows(rows: dict[str, str]) -> Progress:
    """Build a Progress from stored rows, defaulting anything missing or malformed."""
    completed = _decode(rows, COMPLETED_LESSONS_KEY)
    if not isinstance(completed, list) or not all(isinstance(i, str) for i in completed):
        if completed is not None:
            logger.warning(f"Ignoring malformed {COMPLETED_LESSONS_KEY}: {completed!r}")
        completed = []

    index = _decode(rows, CURRENT_ONBOARDING_INDEX_KEY)
    if not isinstance(index, int) or isinstance(index, bool):
        if index is not None:
            logger.warning(f"Ignoring malformed {CURRENT_ONBOARDING_INDEX_KEY}: {index!r}")
        index = 0
    elif index < 0:
        logger.warning(f"Negative {CURRENT_ONBOARDING_INDEX_KEY} {index}, resetting to 0")
        index = 0

    active = _decode(rows, ONBOARDING_MODE_KEY)
    if not isinstance(active, bool):
        if active is not None:
            logger.warning(f"Ignoring malformed {ONBOARDING_MODE_KEY}: {active!r}")
        active = False

    return Progress(
        completed_lessons=set(completed),
        current_onboarding_index=index,
        is_in_onboarding_mode=active,
    )


def _decode(rows: dict[str, str], key: str) -> Any:
    """JSON-decode one stored value; None when absent or not valid JSON."""
    raw = rows.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Stored {key} is not valid JSON: {raw!r}")
        return None
