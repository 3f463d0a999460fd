"""
Navigator - Screen and step state machine for lessons and onboarding.

Provides:
- Lesson selection with optional device selection
- Step navigation (next/back) with completion detection
- Help and completion overlays
- Guided onboarding through every lesson in catalog order
- Read-only snapshots for the rendering surface
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from macpal.errors import UnknownLessonError
from macpal.schemas import DeviceType, Lesson, LessonStep

from .catalog import LessonCatalog
from .progress import ProgressStore


logger = logging.getLogger(__name__)


class Screen(str, Enum):
    """Which screen the rendering surface should show."""
    HOME = "home"
    DEVICE_SELECTION = "device_selection"
    LESSON = "lesson"


@dataclass
class NavigationState:
    """In-memory position; discarded whenever the user returns home."""
    lesson: Optional[Lesson] = None
    step_index: int = 0
    device: Optional[DeviceType] = None
    help_visible: bool = False
    completion_visible: bool = False

    def reset(self):
        self.lesson = None
        self.step_index = 0
        self.device = None
        self.help_visible = False
        self.completion_visible = False


@dataclass(frozen=True)
class LessonRow:
    """One entry of the home screen's lesson list."""
    id: str
    title: str
    description: str
    completed: bool


@dataclass(frozen=True)
class NavigatorSnapshot:
    """Everything the rendering surface needs after a transition."""
    screen: Screen
    lesson_id: Optional[str] = None
    lesson_title: Optional[str] = None
    lesson_description: Optional[str] = None
    step_text: Optional[str] = None
    help_image: Optional[str] = None
    step_index: int = 0
    total_steps: int = 0
    is_last_step: bool = False
    can_go_back: bool = False
    help_available: bool = False
    help_visible: bool = False
    completion_visible: bool = False
    requires_device_selection: bool = False
    device: Optional[DeviceType] = None
    in_onboarding: bool = False
    # Home screen
    lessons: tuple[LessonRow, ...] = field(default_factory=tuple)
    completed_count: int = 0
    total_lessons: int = 0
    onboarding_next_lesson_id: Optional[str] = None
    onboarding_next_lesson_title: Optional[str] = None
    onboarding_position: Optional[int] = None


class Navigator:
    """
    Drive the app's screens from discrete user actions.

    Combines LessonCatalog (content) with ProgressStore (persisted state).
    Every action is total: actions that do not apply to the current screen
    are ignored, and step indices are bounds-checked where they change.
    Each action returns the resulting snapshot.
    """

    def __init__(
        self,
        catalog: LessonCatalog,
        progress: ProgressStore,
        on_complete: Optional[Callable[[Lesson], None]] = None,
    ):
        """
        Initialize navigator on the home screen.

        Args:
            catalog: LessonCatalog providing lessons in order
            progress: ProgressStore owning completion and onboarding state
            on_complete: Called with the lesson each time a completion is acknowledged
        """
        self.catalog = catalog
        self.progress = progress
        self.on_complete = on_complete
        self.state = NavigationState()
        self.progress.clamp_onboarding_index(len(self.catalog))

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def screen(self) -> Screen:
        lesson = self.state.lesson
        if lesson is None:
            return Screen.HOME
        if lesson.requires_device_selection and self.state.device is None:
            return Screen.DEVICE_SELECTION
        return Screen.LESSON

    @property
    def current_step(self) -> Optional[LessonStep]:
        if self.screen != Screen.LESSON:
            return None
        return self.state.lesson.steps[self.state.step_index]

    @property
    def is_last_step(self) -> bool:
        lesson = self.state.lesson
        return lesson is not None and self.state.step_index == lesson.last_step_index

    @property
    def help_available(self) -> bool:
        step = self.current_step
        return step is not None and step.has_help(self.state.device)

    def _onboarding_next_lesson(self) -> Optional[Lesson]:
        """Lesson to resume, while onboarding is active and unfinished."""
        if not self.progress.is_in_onboarding_mode:
            return None
        return self.catalog.lesson_at(self.progress.current_onboarding_index)

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def select_lesson(self, lesson_id: str) -> NavigatorSnapshot:
        """Open a lesson from the home screen."""
        lesson = self.catalog.get_lesson(lesson_id)
        if lesson is None:
            raise UnknownLessonError(lesson_id)
        if self.screen != Screen.HOME:
            logger.debug(f"Ignoring select_lesson({lesson_id}) on {self.screen.value}")
            return self.snapshot()
        self._open(lesson)
        return self.snapshot()

    def select_device(self, device: DeviceType) -> NavigatorSnapshot:
        device = DeviceType(device)
        if self.screen != Screen.DEVICE_SELECTION:
            logger.debug(f"Ignoring select_device({device.value}) on {self.screen.value}")
            return self.snapshot()
        self.state.device = device
        self.state.step_index = 0
        logger.info(f"Device selected for {self.state.lesson.id}: {device.value}")
        return self.snapshot()

    def next(self) -> NavigatorSnapshot:
        """Advance one step, or raise the completion overlay on the last step."""
        if self.screen != Screen.LESSON or self.state.completion_visible:
            logger.debug("Ignoring next")
            return self.snapshot()
        self.state.help_visible = False
        if self.is_last_step:
            self.state.completion_visible = True
        else:
            self.state.step_index += 1
        return self.snapshot()

    def back(self) -> NavigatorSnapshot:
        """Go back one step; nothing happens on the first step."""
        if self.screen != Screen.LESSON or self.state.completion_visible:
            logger.debug("Ignoring back")
            return self.snapshot()
        self.state.help_visible = False
        if self.state.step_index > 0:
            self.state.step_index -= 1
        return self.snapshot()

    def toggle_help(self) -> NavigatorSnapshot:
        """Show or hide help; only possible when the step has a help image."""
        if not self.help_available or self.state.completion_visible:
            logger.debug("Ignoring toggle_help")
            return self.snapshot()
        self.state.help_visible = not self.state.help_visible
        return self.snapshot()

    def exit(self) -> NavigatorSnapshot:
        """
        Return home, dropping step position and device choice.

        Onboarding stays active in the store so it can be resumed. Ignored
        under the completion overlay, which only acknowledge_completion closes.
        """
        if self.screen == Screen.HOME or self.state.completion_visible:
            logger.debug("Ignoring exit")
            return self.snapshot()
        logger.info(f"Exited lesson {self.state.lesson.id} at step {self.state.step_index + 1}")
        self.state.reset()
        return self.snapshot()

    def acknowledge_completion(self) -> NavigatorSnapshot:
        """
        Finish the lesson shown under the completion overlay.

        Marks it completed, notifies on_complete, then either continues
        onboarding with the next lesson or returns home.
        """
        if not self.state.completion_visible:
            logger.debug("Ignoring acknowledge_completion")
            return self.snapshot()

        lesson = self.state.lesson
        self.progress.mark_completed(lesson.id)
        if self.on_complete is not None:
            self.on_complete(lesson)

        self.state.reset()
        if self.progress.is_in_onboarding_mode:
            self.progress.advance_onboarding()
            next_lesson = self.catalog.lesson_at(self.progress.current_onboarding_index)
            if next_lesson is not None:
                self._open(next_lesson)
            else:
                self.progress.exit_onboarding()
                logger.info("Onboarding finished")
        return self.snapshot()

    def start_onboarding(self) -> NavigatorSnapshot:
        """Begin a guided run from the first lesson."""
        if self.screen != Screen.HOME:
            logger.debug("Ignoring start_onboarding")
            return self.snapshot()
        self.progress.start_onboarding()
        first = self.catalog.first_lesson()
        if first is None:
            self.progress.exit_onboarding()
        else:
            self._open(first)
        return self.snapshot()

    def continue_onboarding(self) -> NavigatorSnapshot:
        """Reopen the lesson at the saved onboarding position."""
        lesson = self._onboarding_next_lesson()
        if self.screen != Screen.HOME or lesson is None:
            logger.debug("Ignoring continue_onboarding")
            return self.snapshot()
        self._open(lesson)
        return self.snapshot()

    def reset_progress(self) -> NavigatorSnapshot:
        """Clear all saved progress and return home, from any screen."""
        self.state.reset()
        self.progress.reset()
        return self.snapshot()

    def _open(self, lesson: Lesson):
        self.state.reset()
        self.state.lesson = lesson
        logger.info(f"Opened lesson {lesson.id}")

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    def snapshot(self) -> NavigatorSnapshot:
        """Read-only view of the current state."""
        screen = self.screen
        in_onboarding = self.progress.is_in_onboarding_mode

        if screen == Screen.HOME:
            rows = tuple(
                LessonRow(
                    id=lesson.id,
                    title=lesson.title,
                    description=lesson.description,
                    completed=self.progress.is_completed(lesson.id),
                )
                for lesson in self.catalog
            )
            next_lesson = self._onboarding_next_lesson()
            return NavigatorSnapshot(
                screen=screen,
                in_onboarding=in_onboarding,
                lessons=rows,
                completed_count=sum(1 for row in rows if row.completed),
                total_lessons=len(self.catalog),
                onboarding_next_lesson_id=next_lesson.id if next_lesson else None,
                onboarding_next_lesson_title=next_lesson.title if next_lesson else None,
                onboarding_position=self.progress.current_onboarding_index + 1 if next_lesson else None,
            )

        lesson = self.state.lesson
        common = dict(
            screen=screen,
            lesson_id=lesson.id,
            lesson_title=lesson.title,
            lesson_description=lesson.description,
            total_steps=lesson.step_count,
            requires_device_selection=lesson.requires_device_selection,
            device=self.state.device,
            in_onboarding=in_onboarding,
            total_lessons=len(self.catalog),
        )
        if screen == Screen.DEVICE_SELECTION:
            return NavigatorSnapshot(**common)

        step = self.current_step
        return NavigatorSnapshot(
            **common,
            step_text=step.instruction_for(self.state.device),
            help_image=step.help_image_for(self.state.device),
            step_index=self.state.step_index,
            is_last_step=self.is_last_step,
            can_go_back=self.state.step_index > 0,
            help_available=self.help_available,
            help_visible=self.state.help_visible,
            completion_visible=self.state.completion_visible,
        )
