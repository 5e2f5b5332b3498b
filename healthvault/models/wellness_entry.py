from datetime import datetime

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer
from sqlmodel import Field, SQLModel

from .base import timestamp_column, utcnow


class WellnessEntry(SQLModel, table=True):
    __tablename__ = "wellness_entries"
    __table_args__ = (CheckConstraint("mood >= 1 AND mood <= 5", name="ck_wellness_entries_mood"),)
    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    mood: int  # 1-5 scale
    notes: str | None = None
    created_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column(index=True))
