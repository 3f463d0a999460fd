"""
Progress schemas for MacPal.

Field aliases are the persisted key names, so a Progress can be dumped
straight into the key-value store and read back from it.
"""

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class Progress(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    completed_lessons: set[str] = Field(default_factory=set, alias="completedLessons")
    current_onboarding_index: int = Field(default=0, ge=0, alias="currentOnboardingIndex")
    is_in_onboarding_mode: bool = Field(default=False, alias="isInOnboardingMode")

    @field_serializer("completed_lessons")
    def _serialize_completed(self, value: set[str]) -> list[str]:
        # Order carries no meaning; sorted keeps stored values stable.
        return sorted(value)
