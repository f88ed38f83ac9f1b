# todoapp/routers/todo.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse

from todoapp.core.config import settings
from todoapp.core.templating import templates
from todoapp.dependencies.todo import get_view_store
from todoapp.schemas.todo import FilterMode
from todoapp.services.todo_store import TodoStore

router = APIRouter(tags=["Todos (view)"])


def _back_to_list() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@router.get("/")
def todo_page(
    request: Request,
    filter: Optional[FilterMode] = None,
    reload: bool = False,
    store: TodoStore = Depends(get_view_store),
):
    if reload:
        store.load()
    if filter is not None:
        store.set_filter(filter)
    return templates.TemplateResponse(
        request,
        "todos.html",
        {
            "state": store.state,
            "filter_modes": list(FilterMode),
            "can_edit": store.tracks_updates,
            "signed_in": not settings.single_user,
        },
    )


@router.post("/todos")
def add_todo(text: str = Form(""), store: TodoStore = Depends(get_view_store)):
    store.add(text)
    return _back_to_list()


@router.post("/todos/clear-completed")
def clear_completed(store: TodoStore = Depends(get_view_store)):
    store.clear_completed()
    return _back_to_list()


@router.post("/todos/edit/cancel")
def cancel_edit(store: TodoStore = Depends(get_view_store)):
    store.cancel_edit()
    return _back_to_list()


@router.post("/todos/{todo_id}/toggle")
def toggle_todo(todo_id: UUID, store: TodoStore = Depends(get_view_store)):
    store.toggle(todo_id)
    return _back_to_list()


@router.post("/todos/{todo_id}/edit")
def start_edit(todo_id: UUID, store: TodoStore = Depends(get_view_store)):
    store.start_edit(todo_id)
    return _back_to_list()


@router.post("/todos/{todo_id}/save")
def save_edit(
    todo_id: UUID,
    text: str = Form(""),
    store: TodoStore = Depends(get_view_store),
):
    # a stale form for another row restarts editing on that row first
    with store.lock:
        if store.state.editing_id != todo_id:
            store.start_edit(todo_id)
        if store.state.editing_id == todo_id:
            store.save_edit(text)
    return _back_to_list()


@router.post("/todos/{todo_id}/delete")
def delete_todo(todo_id: UUID, store: TodoStore = Depends(get_view_store)):
    store.delete(todo_id)
    return _back_to_list()


@router.post("/error/dismiss")
def dismiss_error(store: TodoStore = Depends(get_view_store)):
    store.dismiss_error()
    return _back_to_list()
