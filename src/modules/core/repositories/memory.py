"""Thread-safe dictionary store shared by the in-memory repositories.

One ``threading.Lock`` guards the map.  It is held only for the
read-modify-write of a single entity, so operations on unrelated ids
never wait on each other for longer than a dictionary access.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Optional, TypeVar

from modules.core.repositories.interfaces import IRepository

T = TypeVar("T")


class InMemoryRepository(IRepository[T]):
    """Dict-backed ``IRepository`` keyed by ``entity.id``."""

    def __init__(self) -> None:
        self._items: Dict[str, T] = {}
        self._lock = threading.Lock()

    def get_by_id(self, id: str) -> Optional[T]:
        with self._lock:
            return self._items.get(str(id))

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        with self._lock:
            items = list(self._items.values())
        if filters:
            items = [
                item
                for item in items
                if all(getattr(item, key) == value for key, value in filters.items())
            ]
        return items

    def save(self, entity: T) -> T:
        with self._lock:
            self._items[entity.id] = entity  # type: ignore[attr-defined]
        return entity

    def delete(self, id: str) -> bool:
        with self._lock:
            return self._items.pop(str(id), None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def _replace(self, id: str, change: Callable[[T], T]) -> Optional[T]:
        """Swap the stored value for ``change(current)`` atomically.

        Returns ``None`` when ``id`` is unknown.  If ``change`` raises, the
        stored value is left untouched and the exception propagates.
        """
        with self._lock:
            current = self._items.get(str(id))
            if current is None:
                return None
            updated = change(current)
            self._items[str(id)] = updated
            return updated
