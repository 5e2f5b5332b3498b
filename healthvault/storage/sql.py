"""
SQLModel-backed storage (SQLite or Postgres).

Ownership is part of every query predicate; there is no fetch-then-compare.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import delete
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from healthvault import models
from healthvault.core.database import create_db_engine, init_db
from healthvault.core.errors import AppError, ConflictError, StorageError
from healthvault.models.base import as_utc
from healthvault.storage.types import (
    MedicalRecord,
    NewMedicalRecord,
    NewUser,
    NewWellnessEntry,
    User,
    UserWithPassword,
    WellnessEntry,
)

log = logging.getLogger("healthvault.storage")


def _user(row: models.User) -> User:
    return User(id=row.id, username=row.username, email=row.email, created_at=as_utc(row.created_at))


def _medical_record(row: models.MedicalRecord) -> MedicalRecord:
    return MedicalRecord(
        id=row.id,
        user_id=row.user_id,
        file_name=row.file_name,
        original_name=row.original_name,
        file_type=row.file_type,
        file_size=row.file_size,
        download_url=row.download_url,
        uploaded_at=as_utc(row.uploaded_at),
    )


def _wellness_entry(row: models.WellnessEntry) -> WellnessEntry:
    return WellnessEntry(
        id=row.id,
        user_id=row.user_id,
        mood=row.mood,
        notes=row.notes,
        created_at=as_utc(row.created_at),
    )


class SqlStorage:
    name = "sql"

    def __init__(self, database_url: str, engine: Engine | None = None):
        self.database_url = database_url
        self._engine = engine

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StorageError("Storage used before init()")
        return self._engine

    def init(self) -> None:
        if self._engine is None:
            self._engine = create_db_engine(self.database_url)
        init_db(self._engine)

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with Session(self.engine, expire_on_commit=False) as db:
            try:
                yield db
            except AppError:
                db.rollback()
                raise
            except SQLAlchemyError as e:
                db.rollback()
                log.exception("Storage error: %s", e)
                raise StorageError() from e

    def get_user(self, user_id: int) -> Optional[User]:
        with self._session() as db:
            row = db.get(models.User, user_id)
            return _user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session() as db:
            row = db.exec(select(models.User).where(models.User.email == email)).first()
            return _user(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as db:
            row = db.exec(select(models.User).where(models.User.username == username)).first()
            return _user(row) if row else None

    def get_user_with_password(self, email: str) -> Optional[UserWithPassword]:
        with self._session() as db:
            row = db.exec(select(models.User).where(models.User.email == email)).first()
            if not row:
                return None
            return UserWithPassword(
                id=row.id,
                username=row.username,
                email=row.email,
                created_at=as_utc(row.created_at),
                password=row.password,
            )

    def create_user(self, candidate: NewUser) -> User:
        with self._session() as db:
            row = models.User(username=candidate.username, email=candidate.email, password=candidate.password)
            db.add(row)
            try:
                db.commit()
            except IntegrityError as e:
                # unique constraint on username or email
                db.rollback()
                raise ConflictError("Username or email already taken") from e
            db.refresh(row)
            return _user(row)

    def create_medical_record(self, owner_id: int, metadata: NewMedicalRecord) -> MedicalRecord:
        with self._session() as db:
            row = models.MedicalRecord(
                user_id=owner_id,
                file_name=metadata.file_name,
                original_name=metadata.original_name,
                file_type=metadata.file_type,
                file_size=metadata.file_size,
                download_url=metadata.download_url,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return _medical_record(row)

    def list_medical_records(self, owner_id: int) -> list[MedicalRecord]:
        stmt = (
            select(models.MedicalRecord)
            .where(models.MedicalRecord.user_id == owner_id)
            .order_by(models.MedicalRecord.uploaded_at.desc(), models.MedicalRecord.id.desc())
        )
        with self._session() as db:
            return [_medical_record(row) for row in db.exec(stmt).all()]

    def get_medical_record(self, record_id: int, owner_id: int) -> Optional[MedicalRecord]:
        stmt = select(models.MedicalRecord).where(
            models.MedicalRecord.id == record_id,
            models.MedicalRecord.user_id == owner_id,
        )
        with self._session() as db:
            row = db.exec(stmt).first()
            return _medical_record(row) if row else None

    def delete_medical_record(self, record_id: int, owner_id: int) -> bool:
        stmt = delete(models.MedicalRecord).where(
            models.MedicalRecord.id == record_id,
            models.MedicalRecord.user_id == owner_id,
        )
        with self._session() as db:
            result = db.execute(stmt)
            db.commit()
            return result.rowcount > 0

    def create_wellness_entry(self, owner_id: int, entry: NewWellnessEntry) -> WellnessEntry:
        with self._session() as db:
            row = models.WellnessEntry(user_id=owner_id, mood=entry.mood, notes=entry.notes)
            db.add(row)
            db.commit()
            db.refresh(row)
            return _wellness_entry(row)

    def list_wellness_entries(self, owner_id: int) -> list[WellnessEntry]:
        stmt = (
            select(models.WellnessEntry)
            .where(models.WellnessEntry.user_id == owner_id)
            .order_by(models.WellnessEntry.created_at.desc(), models.WellnessEntry.id.desc())
        )
        with self._session() as db:
            return [_wellness_entry(row) for row in db.exec(stmt).all()]
