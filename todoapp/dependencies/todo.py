from typing import Optional
from uuid import UUID

from fastapi import Depends

from todoapp.db.session import engine
from todoapp.dependencies.auth import require_api_user, require_view_user
from todoapp.services.store_registry import registry
from todoapp.services.todo_store import TodoStore
from todoapp.services.todo_table import TodoTable


def get_todo_table() -> TodoTable:
    return TodoTable(engine)


def get_view_store(
    owner_id: Optional[UUID] = Depends(require_view_user),
    table: TodoTable = Depends(get_todo_table),
) -> TodoStore:
    return registry.get(owner_id, table)


def get_api_store(
    owner_id: Optional[UUID] = Depends(require_api_user),
    table: TodoTable = Depends(get_todo_table),
) -> TodoStore:
    return registry.get(owner_id, table)
