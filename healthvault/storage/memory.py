"""
Dict-backed storage for development and tests.

Data lives only as long as the process, and only one process may use it.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import asdict
from typing import Optional

from healthvault.core.errors import ConflictError
from healthvault.models.base import utcnow
from healthvault.storage.types import (
    MedicalRecord,
    NewMedicalRecord,
    NewUser,
    NewWellnessEntry,
    User,
    UserWithPassword,
    WellnessEntry,
)


class MemoryStorage:
    name = "memory"

    def __init__(self):
        self._users: dict[int, UserWithPassword] = {}
        self._medical_records: dict[int, MedicalRecord] = {}
        self._wellness_entries: dict[int, WellnessEntry] = {}
        self._user_ids = itertools.count(1)
        self._record_ids = itertools.count(1)
        self._entry_ids = itertools.count(1)
        # sync endpoints run in a threadpool
        self._lock = threading.Lock()

    def init(self) -> None:
        return None

    def close(self) -> None:
        return None

    def get_user(self, user_id: int) -> Optional[User]:
        user = self._users.get(user_id)
        return user.public() if user else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        user = self.get_user_with_password(email)
        return user.public() if user else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        for user in list(self._users.values()):
            if user.username == username:
                return user.public()
        return None

    def get_user_with_password(self, email: str) -> Optional[UserWithPassword]:
        for user in list(self._users.values()):
            if user.email == email:
                return user
        return None

    def create_user(self, candidate: NewUser) -> User:
        with self._lock:
            for existing in self._users.values():
                if existing.email == candidate.email:
                    raise ConflictError("User already exists with this email")
                if existing.username == candidate.username:
                    raise ConflictError("Username already taken")
            user = UserWithPassword(
                id=next(self._user_ids),
                username=candidate.username,
                email=candidate.email,
                created_at=utcnow(),
                password=candidate.password,
            )
            self._users[user.id] = user
        return user.public()

    def create_medical_record(self, owner_id: int, metadata: NewMedicalRecord) -> MedicalRecord:
        with self._lock:
            record = MedicalRecord(
                id=next(self._record_ids),
                user_id=owner_id,
                uploaded_at=utcnow(),
                **asdict(metadata),
            )
            self._medical_records[record.id] = record
        return record

    def list_medical_records(self, owner_id: int) -> list[MedicalRecord]:
        records = [r for r in list(self._medical_records.values()) if r.user_id == owner_id]
        return sorted(records, key=lambda r: (r.uploaded_at, r.id), reverse=True)

    def get_medical_record(self, record_id: int, owner_id: int) -> Optional[MedicalRecord]:
        record = self._medical_records.get(record_id)
        if record is None or record.user_id != owner_id:
            return None
        return record

    def delete_medical_record(self, record_id: int, owner_id: int) -> bool:
        with self._lock:
            record = self._medical_records.get(record_id)
            if record is None or record.user_id != owner_id:
                return False
            del self._medical_records[record_id]
        return True

    def create_wellness_entry(self, owner_id: int, entry: NewWellnessEntry) -> WellnessEntry:
        with self._lock:
            created = WellnessEntry(
                id=next(self._entry_ids),
                user_id=owner_id,
                mood=entry.mood,
                notes=entry.notes,
                created_at=utcnow(),
            )
            self._wellness_entries[created.id] = created
        return created

    def list_wellness_entries(self, owner_id: int) -> list[WellnessEntry]:
        entries = [e for e in list(self._wellness_entries.values()) if e.user_id == owner_id]
        return sorted(entries, key=lambda e: (e.created_at, e.id), reverse=True)
