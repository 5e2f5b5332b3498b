"""
Storage interface shared by the in-memory and SQL backends.
"""

from __future__ import annotations

from typing import Optional, Protocol

from healthvault.storage.types import (
    MedicalRecord,
    NewMedicalRecord,
    NewUser,
    NewWellnessEntry,
    User,
    UserWithPassword,
    WellnessEntry,
)


class Storage(Protocol):
    """Operations the API needs from persistence.

    Every record read or delete takes the owner id and filters on it, so a
    record that belongs to someone else looks exactly like one that does not
    exist.
    """

    name: str

    def init(self) -> None:
        ...

    def close(self) -> None:
        ...

    def get_user(self, user_id: int) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    def get_user_with_password(self, email: str) -> Optional[UserWithPassword]:
        ...

    def create_user(self, candidate: NewUser) -> User:
        """Raises ConflictError when the username or email is taken."""
        ...

    def create_medical_record(self, owner_id: int, metadata: NewMedicalRecord) -> MedicalRecord:
        ...

    def list_medical_records(self, owner_id: int) -> list[MedicalRecord]:
        """Newest upload first."""
        ...

    def get_medical_record(self, record_id: int, owner_id: int) -> Optional[MedicalRecord]:
        ...

    def delete_medical_record(self, record_id: int, owner_id: int) -> bool:
        """False when the record is absent or owned by someone else."""
        ...

    def create_wellness_entry(self, owner_id: int, entry: NewWellnessEntry) -> WellnessEntry:
        ...

    def list_wellness_entries(self, owner_id: int) -> list[WellnessEntry]:
        """Newest entry first."""
        ...
