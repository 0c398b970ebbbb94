"""In-memory resource store.

Used by tests and by embedders that want a throwaway target. Items are deep
copied on the way in and on the way out, so callers can never mutate the
stored state.
"""

from __future__ import annotations

import copy
import threading
from typing import Any

from capplane.core.errors import ResourceExistsError, ResourceNotFoundError
from capplane.store.base import Identity, identity_of


class InMemoryResourceStore:
    """Thread-safe dict-backed :class:`~capplane.core.protocols.ResourceStore`."""

    def __init__(self, items: list[dict[str, Any]] | None = None) -> None:
        self._items: dict[Identity, dict[str, Any]] = {}
        self._lock = threading.Lock()
        for item in items or ():
            self.create(item)

    def list(self, kind: str, namespace: str | None = None) -> list[dict[str, Any]]:
        with self._lock:
            return [
                copy.deepcopy(item)
                for (item_kind, item_namespace, _), item in self._items.items()
                if item_kind == kind and (namespace is None or item_namespace == namespace)
            ]

    def get(self, kind: str, name: str, namespace: str = "") -> dict[str, Any]:
        with self._lock:
            item = self._items.get((kind, namespace, name))
            if item is None:
                raise ResourceNotFoundError(kind, namespace, name)
            return copy.deepcopy(item)

    def create(self, item: dict[str, Any]) -> dict[str, Any]:
        key = identity_of(item)
        with self._lock:
            if key in self._items:
                raise ResourceExistsError(*key)
            self._items[key] = copy.deepcopy(item)
            return copy.deepcopy(item)

    def update(self, item: dict[str, Any]) -> dict[str, Any]:
        key = identity_of(item)
        with self._lock:
            if key not in self._items:
                raise ResourceNotFoundError(*key)
            self._items[key] = copy.deepcopy(item)
            return copy.deepcopy(item)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
