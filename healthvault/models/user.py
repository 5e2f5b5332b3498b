from datetime import datetime

from sqlmodel import Field, SQLModel

from .base import timestamp_column, utcnow


class User(SQLModel, table=True):
    __tablename__ = "users"
    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)
    email: str = Field(unique=True, index=True)
    password: str  # bcrypt hash, never returned
    created_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())
