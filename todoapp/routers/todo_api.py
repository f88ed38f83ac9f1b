# todoapp/routers/todo_api.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends

from todoapp.dependencies.todo import get_api_store
from todoapp.schemas.todo import FilterMode, TodoStateOut, TodoTextIn
from todoapp.services.todo_store import TodoStore

router = APIRouter(prefix="/api/todos", tags=["Todos"])


@router.get("", response_model=TodoStateOut)
def get_todos(
    filter: Optional[FilterMode] = None,
    store: TodoStore = Depends(get_api_store),
):
    if filter is not None:
        store.set_filter(filter)
    return TodoStateOut.from_state(store.state)


@router.post("", response_model=TodoStateOut)
def add_todo(body: TodoTextIn, store: TodoStore = Depends(get_api_store)):
    return TodoStateOut.from_state(store.add(body.text))


@router.post("/reload", response_model=TodoStateOut)
def reload_todos(store: TodoStore = Depends(get_api_store)):
    return TodoStateOut.from_state(store.load())


@router.post("/clear-completed", response_model=TodoStateOut)
def clear_completed(store: TodoStore = Depends(get_api_store)):
    return TodoStateOut.from_state(store.clear_completed())


@router.post("/edit/cancel", response_model=TodoStateOut)
def cancel_edit(store: TodoStore = Depends(get_api_store)):
    return TodoStateOut.from_state(store.cancel_edit())


@router.post("/error/dismiss", response_model=TodoStateOut)
def dismiss_error(store: TodoStore = Depends(get_api_store)):
    return TodoStateOut.from_state(store.dismiss_error())


@router.post("/{todo_id}/toggle", response_model=TodoStateOut)
def toggle_todo(todo_id: UUID, store: TodoStore = Depends(get_api_store)):
    return TodoStateOut.from_state(store.toggle(todo_id))


@router.post("/{todo_id}/edit", response_model=TodoStateOut)
def start_edit(todo_id: UUID, store: TodoStore = Depends(get_api_store)):
    return TodoStateOut.from_state(store.start_edit(todo_id))


@router.put("/{todo_id}", response_model=TodoStateOut)
def save_edit(todo_id: UUID, body: TodoTextIn, store: TodoStore = Depends(get_api_store)):
    with store.lock:
        if store.state.editing_id != todo_id:
            store.start_edit(todo_id)
        if store.state.editing_id != todo_id:
            return TodoStateOut.from_state(store.state)
        return TodoStateOut.from_state(store.save_edit(body.text))


@router.delete("/{todo_id}", response_model=TodoStateOut)
def delete_todo(todo_id: UUID, store: TodoStore = Depends(get_api_store)):
    return TodoStateOut.from_state(store.delete(todo_id))
