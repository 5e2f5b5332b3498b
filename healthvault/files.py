"""
File store for uploaded documents: local disk and an in-memory test double.
"""

from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

log = logging.getLogger("healthvault.files")

UPLOADS_URL_PREFIX = "/uploads"


def generate_file_name(original_name: str) -> str:
    """``file-<ms>-<random>.<ext>``; the extension is taken from the upload."""
    ext = Path(original_name).suffix.lower()
    return f"file-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"


def download_url(file_name: str) -> str:
    return f"{UPLOADS_URL_PREFIX}/{file_name}"


class FileStore(Protocol):
    """Defines the operations the API needs from file storage."""

    def save(self, file_name: str, content: bytes) -> None:
        ...

    def delete(self, file_name: str) -> bool:
        ...

    def read(self, file_name: str) -> bytes:
        ...


@dataclass
class InMemoryFileStore:
    """Test double for file storage."""

    stored_files: dict = field(default_factory=dict)

    def save(self, file_name: str, content: bytes) -> None:
        self.stored_files[file_name] = bytes(content)

    def delete(self, file_name: str) -> bool:
        return self.stored_files.pop(file_name, None) is not None

    def read(self, file_name: str) -> bytes:
        stored = self.stored_files.get(file_name)
        if stored is None:
            raise FileNotFoundError(file_name)
        return stored


@dataclass
class LocalFileStore:
    """Writes uploads under ``root``; served statically at /uploads."""

    root: Path

    def __post_init__(self):
        self.root = Path(self.root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, file_name: str) -> Path:
        path = (self.root / file_name).resolve()
        if path.parent != self.root.resolve():
            raise ValueError(f"Invalid file name: {file_name!r}")
        return path

    def save(self, file_name: str, content: bytes) -> None:
        self._path(file_name).write_bytes(content)

    def delete(self, file_name: str) -> bool:
        try:
            self._path(file_name).unlink()
        except FileNotFoundError:
            log.warning("Stored file already missing: %s", file_name)
            return False
        return True

    def read(self, file_name: str) -> bytes:
        return self._path(file_name).read_bytes()
