"""Shared fixtures for MacPal tests."""

import pytest

from macpal.classroom import LessonCatalog, Navigator, ProgressStore
from macpal.schemas import Lesson, LessonStep


def make_lesson(lesson_id: str, step_count: int = 1, requires_device_selection: bool = False) -> Lesson:
    return Lesson(
        id=lesson_id,
        title=f"Lesson {lesson_id}",
        description=f"About {lesson_id}",
        steps=tuple(LessonStep.simple(f"{lesson_id} step {i}") for i in range(step_count)),
        requires_device_selection=requires_device_selection,
    )


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "progress.db"


@pytest.fixture
def store(db_path):
    return ProgressStore(db_path)


@pytest.fixture
def single_step_catalog():
    """Two one-step lessons, no device selection."""
    return LessonCatalog([make_lesson("first"), make_lesson("second")])


@pytest.fixture
def three_step_catalog():
    return LessonCatalog([make_lesson("three", step_count=3)])


@pytest.fixture
def device_lesson():
    """Two steps: step 0 has mouse and trackpad text, step 1 has neither."""
    return Lesson(
        id="pointer",
        title="Pointer",
        description="Pointing device basics",
        requires_device_selection=True,
        steps=(
            LessonStep.for_devices(
                instruction="Move the pointer",
                mouse_instruction="Move the mouse",
                trackpad_instruction="Slide one finger",
                mouse_help_image="MouseMove",
                trackpad_help_image="TrackpadMove",
            ),
            LessonStep.simple("Well done"),
        ),
    )


@pytest.fixture
def completions():
    return []


@pytest.fixture
def make_navigator(store, completions):
    def factory(catalog: LessonCatalog) -> Navigator:
        return Navigator(catalog, store, on_complete=completions.append)
    return factory
