# tests/fakes.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from todoapp.schemas.todo import TodoRead
from todoapp.services.todo_table import RemoteError

BASE_TIME = datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc)


class FakeTodoTable:
    """
    In-memory TodoTable for unit tests.

    - Records every remote call in `calls` as (method, args)
    - Methods named in `failing` raise RemoteError instead of writing
    """

    def __init__(self) -> None:
        self.rows: List[TodoRead] = []
        self.calls: List[tuple[str, tuple]] = []
        self.failing: set[str] = set()
        self._tick = 0

    def seed(
        self,
        text: str,
        completed: bool = False,
        owner_id: Optional[UUID] = None,
        todo_id: Optional[UUID] = None,
    ) -> TodoRead:
        self._tick += 1
        created = BASE_TIME + timedelta(minutes=self._tick)
        row = TodoRead(
            id=todo_id or uuid4(),
            text=text,
            completed=completed,
            created_at=created,
            updated_at=created if owner_id is not None else None,
            user_id=owner_id,
        )
        self.rows.append(row)
        return row

    def _call(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if name in self.failing:
            raise RemoteError(f"{name} failed: connection refused")

    def _owned(self, owner_id: Optional[UUID]) -> List[TodoRead]:
        return [r for r in self.rows if owner_id is None or r.user_id == owner_id]

    def called(self, name: str) -> int:
        return sum(1 for n, _ in self.calls if n == name)

    def select_by_owner(self, owner_id: Optional[UUID]) -> List[TodoRead]:
        self._call("select_by_owner", owner_id)
        return sorted(self._owned(owner_id), key=lambda r: r.created_at, reverse=True)

    def insert(self, text: str, owner_id: Optional[UUID] = None, now: Optional[datetime] = None) -> TodoRead:
        self._call("insert", text, owner_id)
        now = now or BASE_TIME
        row = TodoRead(
            id=uuid4(),
            text=text,
            completed=False,
            created_at=now,
            updated_at=now if owner_id is not None else None,
            user_id=owner_id,
        )
        self.rows.append(row)
        return row

    def update(self, todo_id: UUID, changes: Dict[str, Any], owner_id: Optional[UUID] = None) -> None:
        self._call("update", todo_id, dict(changes), owner_id)
        owned = {r.id for r in self._owned(owner_id)}
        self.rows = [
            r.model_copy(update=changes) if r.id == todo_id and r.id in owned else r
            for r in self.rows
        ]

    def delete(self, todo_id: UUID, owner_id: Optional[UUID] = None) -> None:
        self._call("delete", todo_id, owner_id)
        owned = {r.id for r in self._owned(owner_id)}
        self.rows = [r for r in self.rows if not (r.id == todo_id and r.id in owned)]

    def delete_completed(self, owner_id: Optional[UUID] = None) -> int:
        self._call("delete_completed", owner_id)
        owned = {r.id for r in self._owned(owner_id)}
        before = len(self.rows)
        self.rows = [r for r in self.rows if not (r.completed and r.id in owned)]
        return before - len(self.rows)
