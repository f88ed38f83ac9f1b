# todoapp/services/todo_table.py
"""
Hosted `todos` table access.

Each method is one round trip and maps to one query of the table contract:
select-by-owner ordered by created_at desc, insert returning the row,
update/delete by id (and owner), delete completed (and owner).
When owner_id is None (single-user mode) no owner filter is applied.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from todoapp.models.todo import Todo
from todoapp.schemas.todo import TodoRead

log = logging.getLogger(__name__)

_UPDATABLE = {"text", "completed", "updated_at"}


class RemoteError(Exception):
    """Any failure reported by the hosted table (network, constraint, driver)."""


def _describe(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig or exc).strip() or exc.__class__.__name__


class TodoTable:
    def __init__(self, engine: Engine):
        self._engine = engine

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with Session(self._engine) as s:
                yield s
        except SQLAlchemyError as exc:
            raise RemoteError(_describe(exc)) from exc

    @staticmethod
    def _owned(stmt, owner_id: Optional[UUID]):
        if owner_id is None:
            return stmt
        return stmt.where(Todo.user_id == owner_id)

    def select_by_owner(self, owner_id: Optional[UUID]) -> List[TodoRead]:
        stmt = self._owned(select(Todo), owner_id).order_by(Todo.created_at.desc())
        with self._session() as s:
            return [TodoRead.model_validate(row) for row in s.exec(stmt).all()]

    def insert(
        self,
        text: str,
        owner_id: Optional[UUID] = None,
        now: Optional[datetime] = None,
    ) -> TodoRead:
        now = now or datetime.now(tz=timezone.utc)
        todo = Todo(
            text=text,
            completed=False,
            user_id=owner_id,
            created_at=now,
            # updated_at is only tracked for owned rows
            updated_at=now if owner_id is not None else None,
        )
        with self._session() as s:
            s.add(todo)
            s.commit()
            s.refresh(todo)
            return TodoRead.model_validate(todo)

    def update(self, todo_id: UUID, changes: Dict[str, Any], owner_id: Optional[UUID] = None) -> None:
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise ValueError(f"Not updatable: {', '.join(sorted(unknown))}")
        stmt = self._owned(update(Todo).where(Todo.id == todo_id), owner_id).values(**changes)
        with self._session() as s:
            s.execute(stmt)
            s.commit()

    def delete(self, todo_id: UUID, owner_id: Optional[UUID] = None) -> None:
        stmt = self._owned(delete(Todo).where(Todo.id == todo_id), owner_id)
        with self._session() as s:
            s.execute(stmt)
            s.commit()

    def delete_completed(self, owner_id: Optional[UUID] = None) -> int:
        stmt = self._owned(delete(Todo).where(Todo.completed == True), owner_id)  # noqa: E712
        with self._session() as s:
            result = s.execute(stmt)
            s.commit()
            log.debug("cleared %s completed todos (owner=%s)", result.rowcount, owner_id)
            return result.rowcount
