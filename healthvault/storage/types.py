"""
Plain records returned by every storage backend.

Backends never hand out ORM objects, so callers cannot tell which backend is
active. ``New*`` classes are the candidates handed to ``create_*``; they
check the invariants both backends rely on.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from healthvault.core.errors import ValidationError

MOOD_MIN = 1
MOOD_MAX = 5


@dataclass(frozen=True)
class User:
    id: int
    username: str
    email: str
    created_at: datetime


@dataclass(frozen=True)
class UserWithPassword(User):
    password: str = ""

    def public(self) -> User:
        return User(id=self.id, username=self.username, email=self.email, created_at=self.created_at)


@dataclass(frozen=True)
class NewUser:
    username: str
    email: str
    password: str  # already hashed


@dataclass(frozen=True)
class NewMedicalRecord:
    file_name: str
    original_name: str
    file_type: str
    file_size: int
    download_url: str

    def __post_init__(self):
        if self.file_size <= 0:
            raise ValidationError("File size must be positive")
        if not self.file_name or not self.original_name or not self.file_type:
            raise ValidationError("File name and type are required")


@dataclass(frozen=True)
class MedicalRecord:
    id: int
    user_id: int
    file_name: str
    original_name: str
    file_type: str
    file_size: int
    download_url: str
    uploaded_at: datetime


@dataclass(frozen=True)
class NewWellnessEntry:
    mood: int
    notes: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.mood, bool) or not isinstance(self.mood, int):
            raise ValidationError("Mood must be an integer")
        if not MOOD_MIN <= self.mood <= MOOD_MAX:
            raise ValidationError(f"Mood must be between {MOOD_MIN} and {MOOD_MAX}")


@dataclass(frozen=True)
class WellnessEntry:
    id: int
    user_id: int
    mood: int
    notes: Optional[str]
    created_at: datetime
