"""
Lesson content schemas for MacPal.

Defines Pydantic models for:
- Device types (mouse, trackpad)
- Device-specific values with a default fallback
- Lesson steps and lessons
"""

from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class DeviceType(str, Enum):
    MOUSE = "mouse"
    TRACKPAD = "trackpad"

    @property
    def label(self) -> str:
        """Human-readable name for buttons."""
        return self.value.capitalize()


class DeviceVariant(BaseModel, Generic[T]):
    """
    A value with optional per-device overrides.

    resolve() returns the override for the given device when one exists,
    otherwise the default. No device means the default.
    """
    model_config = ConfigDict(frozen=True)

    default: T
    overrides: dict[DeviceType, T] = {}

    def resolve(self, device: Optional[DeviceType] = None) -> T:
        if device is not None and device in self.overrides:
            return self.overrides[device]
        return self.default


# -----------------------------------------------------------------------------
# Steps and lessons
# -----------------------------------------------------------------------------

class LessonStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    instruction: DeviceVariant[str]
    help_image: DeviceVariant[Optional[str]] = DeviceVariant[Optional[str]](default=None)

    @classmethod
    def simple(cls, instruction: str, help_image: Optional[str] = None) -> "LessonStep":
        """Step without device variants."""
        return cls(
            instruction=DeviceVariant[str](default=instruction),
            help_image=DeviceVariant[Optional[str]](default=help_image),
        )

    @classmethod
    def for_devices(
        cls,
        instruction: str,
        mouse_instruction: Optional[str] = None,
        trackpad_instruction: Optional[str] = None,
        help_image: Optional[str] = None,
        mouse_help_image: Optional[str] = None,
        trackpad_help_image: Optional[str] = None,
    ) -> "LessonStep":
        """Step with mouse and/or trackpad variants over a device-neutral default."""
        instructions = {}
        if mouse_instruction is not None:
            instructions[DeviceType.MOUSE] = mouse_instruction
        if trackpad_instruction is not None:
            instructions[DeviceType.TRACKPAD] = trackpad_instruction

        images = {}
        if mouse_help_image is not None:
            images[DeviceType.MOUSE] = mouse_help_image
        if trackpad_help_image is not None:
            images[DeviceType.TRACKPAD] = trackpad_help_image

        return cls(
            instruction=DeviceVariant[str](default=instruction, overrides=instructions),
            help_image=DeviceVariant[Optional[str]](default=help_image, overrides=images),
        )

    def instruction_for(self, device: Optional[DeviceType] = None) -> str:
        return self.instruction.resolve(device)

    def help_image_for(self, device: Optional[DeviceType] = None) -> Optional[str]:
        return self.help_image.resolve(device)

    def has_help(self, device: Optional[DeviceType] = None) -> bool:
        return self.help_image_for(device) is not None


class Lesson(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    description: str
    steps: tuple[LessonStep, ...] = Field(..., min_length=1)
    requires_device_selection: bool = False

    @property
    def step_count(self) -> int:
        return len(self.steps)

    @property
    def last_step_index(self) -> int:
        return len(self.steps) - 1
