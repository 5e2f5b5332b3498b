"""Uploaded medical documents: owner, stored file name, original name, MIME type, size."""
from datetime import datetime

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field, SQLModel

from .base import timestamp_column, utcnow


class MedicalRecord(SQLModel, table=True):
    __tablename__ = "medical_records"
    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    file_name: str  # name assigned by the file store
    original_name: str  # name the user uploaded
    file_type: str  # MIME
    file_size: int
    download_url: str
    uploaded_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column(index=True))
