"""Exception types raised by MacPal."""


class MacPalError(Exception):
    """Base class for MacPal errors."""


class CatalogError(MacPalError, ValueError):
    """Lesson catalog content is inconsistent (e.g. duplicate lesson ids)."""


class UnknownLessonError(MacPalError, KeyError):
    """A lesson id was requested that the catalog does not contain."""

    def __init__(self, lesson_id: str):
        super().__init__(lesson_id)
        self.lesson_id = lesson_id

    def __str__(self) -> str:
        return f"Unknown lesson: {self.lesson_id}"
