from sqlmodel import SQLModel, Field
from uuid import UUID, uuid4
from datetime import datetime, timezone

from sqlalchemy import DateTime


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class User(SQLModel, table=True):
    user_id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    created_at: datetime = Field(default_factory=_utcnow, sa_type=DateTime(timezone=True))
    __tablename__ = "user"
