# todoapp/services/store_registry.py
from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Callable, Optional
from uuid import UUID

from todoapp.core.config import settings
from todoapp.services.todo_store import TodoStore
from todoapp.services.todo_table import TodoTable

log = logging.getLogger(__name__)

# single-user mode shares one store under this key
_SHARED = "shared"


class _Entry:
    __slots__ = ("store", "last_seen")

    def __init__(self, store: TodoStore, last_seen: float):
        self.store = store
        self.last_seen = last_seen


class StoreRegistry:
    """
    One TodoStore per signed-in identity, loaded on first access.
    - entries idle longer than idle_seconds are dropped, so the next visit reloads
    - at most max_entries stores are kept (least recently used go first)
    """

    def __init__(
        self,
        idle_seconds: float = 300.0,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.idle_seconds = idle_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._stores: "OrderedDict[str, _Entry]" = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def _key(owner_id: Optional[UUID]) -> str:
        return str(owner_id) if owner_id is not None else _SHARED

    def _evict_idle(self, now: float) -> None:
        # oldest access first
        while self._stores:
            key, entry = next(iter(self._stores.items()))
            if now - entry.last_seen <= self.idle_seconds:
                break
            del self._stores[key]
            log.info("todo store evicted after idle (owner=%s)", key)

    def get(self, owner_id: Optional[UUID], table: TodoTable) -> TodoStore:
        key = self._key(owner_id)
        with self._lock:
            now = self._clock()
            self._evict_idle(now)
            entry = self._stores.get(key)
            if entry is None:
                store = TodoStore(table, owner_id)
                store.load()
                entry = self._stores[key] = _Entry(store, now)
                log.info("todo store loaded (owner=%s, todos=%d)", key, len(store.state.todos))
                while len(self._stores) > self.max_entries:
                    evicted, _ = self._stores.popitem(last=False)
                    log.info("todo store evicted, registry full (owner=%s)", evicted)
            else:
                entry.last_seen = now
                self._stores.move_to_end(key)
            return entry.store

    def discard(self, owner_id: Optional[UUID]) -> None:
        with self._lock:
            self._stores.pop(self._key(owner_id), None)

    def clear(self) -> None:
        with self._lock:
            self._stores.clear()

    def __contains__(self, owner_id: Optional[UUID]) -> bool:
        return self._key(owner_id) in self._stores

    def __len__(self) -> int:
        return len(self._stores)


registry = StoreRegistry(
    idle_seconds=settings.store_idle_seconds,
    max_entries=settings.store_max_entries,
)
