from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class FilterMode(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class TodoRead(BaseModel):
    """One confirmed row of the local mirror."""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    text: str
    completed: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None
    user_id: Optional[UUID] = None


class TodoState(BaseModel):
    """
    View state owned by a TodoStore. Never mutated in place:
    every transition builds a new value with model_copy(update=...).
    """
    model_config = ConfigDict(frozen=True)

    todos: tuple[TodoRead, ...] = ()
    filter_mode: FilterMode = FilterMode.ALL
    loading: bool = True
    error: Optional[str] = None
    validation_error: Optional[str] = None
    editing_id: Optional[UUID] = None
    edit_text: str = ""
    edit_error: Optional[str] = None

    @property
    def visible_todos(self) -> tuple[TodoRead, ...]:
        if self.filter_mode is FilterMode.ACTIVE:
            return tuple(t for t in self.todos if not t.completed)
        if self.filter_mode is FilterMode.COMPLETED:
            return tuple(t for t in self.todos if t.completed)
        return self.todos

    @property
    def has_completed(self) -> bool:
        return any(t.completed for t in self.todos)


class TodoTextIn(BaseModel):
    text: str = ""


class TodoStateOut(BaseModel):
    todos: list[TodoRead]
    total: int
    filter: FilterMode
    loading: bool
    error: Optional[str] = None
    validation_error: Optional[str] = None
    editing_id: Optional[UUID] = None
    edit_text: str = ""
    edit_error: Optional[str] = None
    has_completed: bool

    @classmethod
    def from_state(cls, state: TodoState) -> "TodoStateOut":
        return cls(
            todos=list(state.visible_todos),
            total=len(state.todos),
            filter=state.filter_mode,
            loading=state.loading,
            error=state.error,
            validation_error=state.validation_error,
            editing_id=state.editing_id,
            edit_text=state.edit_text,
            edit_error=state.edit_error,
            has_completed=state.has_completed,
        )
