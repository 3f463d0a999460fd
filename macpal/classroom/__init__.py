"""
MacPal Classroom - Runtime components for lessons and progress.

This module provides:
- LessonCatalog: Built-in lessons and device-specific lookups
- ProgressStore: Persisted completion and onboarding state
- Navigator: Screen/step state machine driven by user actions
"""

from .catalog import (
    LessonCatalog,
    ALL_LESSONS,
    DEFAULT_CATALOG,
    MOUSE_TRACKPAD_LESSON,
    OPENING_CLOSING_WINDOW_LESSON,
)

from .progress import (
    ProgressStore,
    DEFAULT_PROGRESS_DIR,
    DEFAULT_PROGRESS_DB,
)

from .navigator import (
    Navigator,
    NavigationState,
    NavigatorSnapshot,
    LessonRow,
    Screen,
)

__all__ = [
    # Catalog
    "LessonCatalog",
    "ALL_LESSONS",
    "DEFAULT_CATALOG",
    "MOUSE_TRACKPAD_LESSON",
    "OPENING_CLOSING_WINDOW_LESSON",
    # Progress
    "ProgressStore",
    "DEFAULT_PROGRESS_DIR",
    "DEFAULT_PROGRESS_DB",
    # Navigator
    "Navigator",
    "NavigationState",
    "NavigatorSnapshot",
    "LessonRow",
    "Screen",
]
