"""
MacPal Schemas - Pydantic models for lessons and progress.

- Lesson: DeviceType, DeviceVariant, LessonStep, Lesson
- Progress: Progress (persisted completion and onboarding state)
"""

from .lesson import (
    DeviceType,
    DeviceVariant,
    LessonStep,
    Lesson,
)

from .progress import (
    Progress,
)

__all__ = [
    # Lesson
    'DeviceType',
    'DeviceVariant',
    'LessonStep',
    'Lesson',
    # Progress
    'Progress',
]
