# todoapp/services/todo_store.py
"""
Local mirror of one owner's todos.

Every mutation follows the same order: remote call, confirmation, local apply.
The mirror is never changed before the table confirms the write, so on any
failure the previous state stays in place and only `error` changes.
There is no version check; the current value is read from the mirror, so a
stale mirror produces a stale write (last write wins).
"""
from __future__ import annotations

import functools
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union
from uuid import UUID

from todoapp.schemas.todo import FilterMode, TodoRead, TodoState
from todoapp.services.todo_table import RemoteError, TodoTable

logger = logging.getLogger(__name__)

EMPTY_TEXT_MESSAGE = "Todo text cannot be empty"
NOT_FOUND_MESSAGE = "Todo not found"
NOT_EDITING_MESSAGE = "No todo is being edited"
EDIT_REQUIRES_OWNER_MESSAGE = "Editing is only available when signed in"


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def _serialized(method):
    """Hold the store lock for the whole remote call plus local apply."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class TodoStore:
    def __init__(
        self,
        table: TodoTable,
        owner_id: Optional[UUID] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._table = table
        self._clock = clock
        self.owner_id = owner_id
        self.state = TodoState()
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """Reentrant; hold it to run several operations as one step."""
        return self._lock

    @property
    def tracks_updates(self) -> bool:
        # updated_at and editing exist only for owned (signed-in) lists
        return self.owner_id is not None

    # ── internals ──────────────────────────────────────────────────────────
    def _apply(self, **changes: Any) -> TodoState:
        self.state = self.state.model_copy(update=changes)
        return self.state

    def _find(self, todo_id: UUID) -> Optional[TodoRead]:
        return next((t for t in self.state.todos if t.id == todo_id), None)

    def _replaced(self, todo_id: UUID, changes: Dict[str, Any]) -> tuple[TodoRead, ...]:
        return tuple(
            t.model_copy(update=changes) if t.id == todo_id else t
            for t in self.state.todos
        )

    def _failed(self, action: str, exc: RemoteError) -> TodoState:
        logger.error("Error %s: %s", action, exc)
        return self._apply(error=str(exc))

    def _stamped(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        if self.tracks_updates:
            changes["updated_at"] = self._clock()
        return changes

    # ── operations ─────────────────────────────────────────────────────────
    @_serialized
    def load(self) -> TodoState:
        self._apply(loading=True)
        try:
            rows = self._table.select_by_owner(self.owner_id)
        except RemoteError as exc:
            self._apply(todos=(), loading=False)
            return self._failed("fetching todos", exc)
        return self._apply(todos=tuple(rows), loading=False, error=None)

    @_serialized
    def add(self, text: Optional[str]) -> TodoState:
        self._apply(error=None, validation_error=None)
        cleaned = (text or "").strip()
        if not cleaned:
            return self._apply(validation_error=EMPTY_TEXT_MESSAGE)
        try:
            created = self._table.insert(cleaned, owner_id=self.owner_id, now=self._clock())
        except RemoteError as exc:
            return self._failed("adding todo", exc)
        return self._apply(todos=(created, *self.state.todos))

    @_serialized
    def toggle(self, todo_id: UUID) -> TodoState:
        todo = self._find(todo_id)
        if todo is None:
            return self._apply(error=NOT_FOUND_MESSAGE)
        changes = self._stamped({"completed": not todo.completed})
        try:
            self._table.update(todo_id, changes, owner_id=self.owner_id)
        except RemoteError as exc:
            return self._failed("updating todo", exc)
        return self._apply(todos=self._replaced(todo_id, changes))

    @_serialized
    def start_edit(self, todo_id: UUID) -> TodoState:
        if not self.tracks_updates:
            return self._apply(error=EDIT_REQUIRES_OWNER_MESSAGE)
        todo = self._find(todo_id)
        if todo is None:
            return self._apply(error=NOT_FOUND_MESSAGE)
        return self._apply(editing_id=todo.id, edit_text=todo.text, edit_error=None)

    @_serialized
    def save_edit(self, text: Optional[str] = None) -> TodoState:
        """Push the draft; text defaults to the captured edit_text."""
        todo_id = self.state.editing_id
        if todo_id is None:
            return self._apply(error=NOT_EDITING_MESSAGE)
        draft = self.state.edit_text if text is None else text
        cleaned = draft.strip()
        if not cleaned:
            return self._apply(edit_text=draft, edit_error=EMPTY_TEXT_MESSAGE)
        changes = self._stamped({"text": cleaned})
        try:
            self._table.update(todo_id, changes, owner_id=self.owner_id)
        except RemoteError as exc:
            self._apply(edit_text=draft)
            return self._failed("updating todo", exc)
        return self._apply(
            todos=self._replaced(todo_id, changes),
            editing_id=None,
            edit_text="",
            edit_error=None,
        )

    @_serialized
    def cancel_edit(self) -> TodoState:
        return self._apply(editing_id=None, edit_text="", edit_error=None)

    @_serialized
    def delete(self, todo_id: UUID) -> TodoState:
        try:
            self._table.delete(todo_id, owner_id=self.owner_id)
        except RemoteError as exc:
            return self._failed("deleting todo", exc)
        changes: Dict[str, Any] = {
            "todos": tuple(t for t in self.state.todos if t.id != todo_id),
        }
        if self.state.editing_id == todo_id:
            changes.update(editing_id=None, edit_text="")
        return self._apply(**changes)

    @_serialized
    def clear_completed(self) -> TodoState:
        try:
            self._table.delete_completed(owner_id=self.owner_id)
        except RemoteError as exc:
            return self._failed("clearing completed todos", exc)
        remaining = tuple(t for t in self.state.todos if not t.completed)
        changes: Dict[str, Any] = {"todos": remaining}
        if self.state.editing_id is not None and all(t.id != self.state.editing_id for t in remaining):
            changes.update(editing_id=None, edit_text="")
        return self._apply(**changes)

    @_serialized
    def set_filter(self, mode: Union[FilterMode, str]) -> TodoState:
        return self._apply(filter_mode=FilterMode(mode))

    @_serialized
    def dismiss_error(self) -> TodoState:
        return self._apply(error=None, validation_error=None, edit_error=None)
