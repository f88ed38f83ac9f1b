from sqlmodel import SQLModel, Field
from uuid import UUID, uuid4
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class Todo(SQLModel, table=True):
    """
    Row of the hosted `todos` table.
    - user_id / updated_at stay NULL in single-user mode
    """
    __tablename__ = "todos"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: Optional[UUID] = Field(default=None, index=True, foreign_key="user.user_id")
    text: str
    completed: bool = False
    created_at: datetime = Field(default_factory=_utcnow, sa_type=DateTime(timezone=True))
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
