from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from healthvault.storage.types import MOOD_MAX, MOOD_MIN


class WellnessCreate(BaseModel):
    mood: int = Field(strict=True)
    notes: str | None = None

    @field_validator("mood")
    @classmethod
    def mood_in_range(cls, v: int) -> int:
        if not MOOD_MIN <= v <= MOOD_MAX:
            raise ValueError(f"Mood must be between {MOOD_MIN} and {MOOD_MAX}")
        return v

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class WellnessEntryOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    user_id: int
    mood: int
    notes: str | None = None
    created_at: datetime


class WellnessEntryResponse(BaseModel):
    message: str
    entry: WellnessEntryOut


class WellnessListResponse(BaseModel):
    entries: list[WellnessEntryOut]
