"""
LessonCatalog - Ordered, read-only lesson content.

The built-in lessons are defined here as constants; the catalog never
changes at runtime.
"""

from typing import Iterable, Iterator, Optional

from macpal.errors import CatalogError
from macpal.schemas import DeviceType, Lesson, LessonStep


class LessonCatalog:
    """
    Ordered collection of lessons with lookup by id and position.

    Device-specific text and help images are resolved through
    instruction_for() and help_image_for(), falling back to the step's
    default when the device has no override.
    """

    def __init__(self, lessons: Iterable[Lesson]):
        self._lessons: tuple[Lesson, ...] = tuple(lessons)
        self._index: dict[str, int] = {}
        for idx, lesson in enumerate(self._lessons):
            if lesson.id in self._index:
                raise CatalogError(f"Duplicate lesson id: {lesson.id}")
            self._index[lesson.id] = idx

    def __len__(self) -> int:
        return len(self._lessons)

    def __iter__(self) -> Iterator[Lesson]:
        return iter(self._lessons)

    @property
    def lessons(self) -> tuple[Lesson, ...]:
        return self._lessons

    def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        """Get a lesson by id, or None if not in the catalog."""
        idx = self._index.get(lesson_id)
        return self._lessons[idx] if idx is not None else None

    def index_of(self, lesson_id: str) -> Optional[int]:
        return self._index.get(lesson_id)

    def lesson_at(self, index: int) -> Optional[Lesson]:
        """Get the lesson at a 0-based position; None when out of range."""
        if 0 <= index < len(self._lessons):
            return self._lessons[index]
        return None

    def first_lesson(self) -> Optional[Lesson]:
        return self.lesson_at(0)

    # -------------------------------------------------------------------------
    # Device resolution
    # -------------------------------------------------------------------------

    @staticmethod
    def instruction_for(step: LessonStep, device: Optional[DeviceType] = None) -> str:
        return step.instruction_for(device)

    @staticmethod
    def help_image_for(step: LessonStep, device: Optional[DeviceType] = None) -> Optional[str]:
        return step.help_image_for(device)


# -----------------------------------------------------------------------------
# Lesson 1: Using the Mouse/Trackpad
# -----------------------------------------------------------------------------

MOUSE_TRACKPAD_LESSON = Lesson(
    id="mouse-trackpad",
    title="Using the Mouse/Trackpad",
    description="Learn the basics of pointing, clicking, and scrolling",
    requires_device_selection=True,
    steps=(
        LessonStep.for_devices(
            instruction="Move your mouse or slide a finger on your trackpad and watch how the arrow (called the cursor) moves on the screen.",
            mouse_instruction="Place your hand on the mouse and move it around on your desk. Watch how the arrow (called the cursor) moves on the screen. The cursor follows your mouse movements.",
            trackpad_instruction="Place one finger on the trackpad (the flat rectangular area below your keyboard). Slide your finger around and watch how the arrow (called the cursor) moves on the screen. The cursor follows your finger.",
            mouse_help_image="MouseMove",
            trackpad_help_image="TrackpadMove",
        ),
        LessonStep.for_devices(
            instruction="Press and release once to 'click'. You use clicking to select things.",
            mouse_instruction="Find the left button on your mouse (it's the bigger button on the left side). Press it once and release - this is called a 'click'. You use clicking to select things.",
            trackpad_instruction="Press down on the trackpad until you feel a click, then release. Or simply tap the trackpad lightly with one finger. This is called a 'click'. You use clicking to select things.",
            mouse_help_image="MouseClick",
            trackpad_help_image="TrackpadClick",
        ),
        LessonStep.for_devices(
            instruction="Click twice very quickly - this is called a 'double-click'. Double-clicking opens things like folders and applications.",
            mouse_instruction="Now try clicking the left button twice very quickly - click-click! This is called a 'double-click'. Double-clicking opens things like folders and applications.",
            trackpad_instruction="Now try tapping the trackpad twice very quickly - tap-tap! This is called a 'double-click'. Double-clicking opens things like folders and applications.",
            mouse_help_image="MouseDoubleClick",
            trackpad_help_image="TrackpadDoubleClick",
        ),
        LessonStep.for_devices(
            instruction="A 'right-click' opens a menu with options. Click anywhere else to close the menu.",
            mouse_instruction="Find the right button on your mouse (the smaller button on the right side). Press it once - this is called a 'right-click'. A menu with options will appear. Click anywhere else to close the menu.",
            trackpad_instruction="Tap the trackpad with two fingers at the same time. This is called a 'right-click'. A menu with options will appear. Tap anywhere else to close the menu.",
            mouse_help_image="MouseRightClick",
            trackpad_help_image="TrackpadRightClick",
        ),
        LessonStep.for_devices(
            instruction="Scrolling moves the page up and down, letting you see more content.",
            mouse_instruction="Find the scroll wheel on your mouse (the wheel between the two buttons). Roll it up and down with your finger. This scrolls the page up and down, letting you see more content.",
            trackpad_instruction="Place two fingers on the trackpad and slide them up or down together. This scrolls the page up and down, letting you see more content.",
            mouse_help_image="MouseScroll",
            trackpad_help_image="TrackpadScroll",
        ),
        LessonStep.for_devices(
            instruction="Press and hold, then move while still holding. This is called 'dragging'. Release when done.",
            mouse_instruction="Press and hold the left button, then move the mouse while still holding the button. This is called 'dragging'. You can use this to move files or select text. Release the button when done.",
            trackpad_instruction="Press and hold down on the trackpad, then move your finger while still pressing. This is called 'dragging'. You can use this to move files or select text. Release when done.",
            mouse_help_image="MouseDrag",
            trackpad_help_image="TrackpadDrag",
        ),
        LessonStep.simple(
            "Congratulations! You've learned the essential mouse and trackpad skills: moving the cursor, clicking, double-clicking, right-clicking, scrolling, and dragging. These are the building blocks for everything you'll do on your Mac!",
        ),
    ),
)


# -----------------------------------------------------------------------------
# Lesson 2: Opening and Closing a Window
# -----------------------------------------------------------------------------

OPENING_CLOSING_WINDOW_LESSON = Lesson(
    id="opening-closing-window",
    title="Opening and Closing a Window",
    description="Learn to open and close windows using the colored buttons",
    steps=(
        LessonStep.simple(
            "Look at the bottom of your screen. You'll see a row of icons - this is called the Dock. Find the icon that looks like a blue and white smiling face. This is called Finder.",
            help_image="DockFinder",
        ),
        LessonStep.simple(
            "Move your cursor over the Finder icon (the blue and white smiling face) and click once. A new window will appear on your screen.",
            help_image="DockFinder",
        ),
        LessonStep.simple(
            "Look at the window that just opened. In the very top-left corner of this window, you'll see three small colored circles next to each other: a red one, a yellow one, and a green one.",
            help_image="WindowButtons",
        ),
        LessonStep.simple(
            "Move your cursor over the red circle (the leftmost one) and click it once. The window will close and disappear from your screen.",
            help_image="WindowButtons",
        ),
        LessonStep.simple(
            "Congratulations! You just opened a Finder window and closed it. You can use these three colored circles on any window: red to close, yellow to minimize, and green to make it bigger.",
        ),
    ),
)


ALL_LESSONS: tuple[Lesson, ...] = (
    MOUSE_TRACKPAD_LESSON,
    OPENING_CLOSING_WINDOW_LESSON,
)

DEFAULT_CATALOG = LessonCatalog(ALL_LESSONS)
