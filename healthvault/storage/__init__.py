"""
Storage backends and the startup-time selection between them.
"""

from __future__ import annotations

import logging

from healthvault.core.config import Settings
from healthvault.core.errors import ConfigurationError
from healthvault.storage.base import Storage
from healthvault.storage.memory import MemoryStorage
from healthvault.storage.sql import SqlStorage
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


def build_storage(settings: Settings) -> Storage:
    """
    Pick the backend named by ``settings.storage_backend``.

    ``auto`` uses SQL when a database URL is configured. Without one it falls
    back to memory, which loses every record on restart, so production
    refuses the fallback unless ``allow_memory_storage`` is set.
    """
    backend = settings.storage_backend
    if backend == "sql":
        if not settings.database_url:
            raise ConfigurationError("STORAGE_BACKEND=sql requires DATABASE_URL")
        return SqlStorage(settings.database_url)
    if backend == "auto" and settings.database_url:
        return SqlStorage(settings.database_url)
    if settings.is_production and not settings.allow_memory_storage:
        raise ConfigurationError(
            "In-memory storage is not durable; set DATABASE_URL or ALLOW_MEMORY_STORAGE=true in production"
        )
    if backend == "auto":
        log.warning("DATABASE_URL not set: using in-memory storage, data is lost on restart")
    else:
        log.warning("STORAGE_BACKEND=memory: data is lost on restart")
    return MemoryStorage()


__all__ = [
    "MedicalRecord",
    "MemoryStorage",
    "NewMedicalRecord",
    "NewUser",
    "NewWellnessEntry",
    "SqlStorage",
    "Storage",
    "User",
    "UserWithPassword",
    "WellnessEntry",
    "build_storage",
]
