"""Helpers shared by resource store implementations."""

from __future__ import annotations

from typing import Any

from capplane.core.errors import StoreError

Identity = tuple[str, str, str]


def identity_of(item: dict[str, Any]) -> Identity:
    """``(kind, namespace, name)`` of a store item.

    Raises:
        StoreError: If the item has no ``kind`` or no ``metadata.name``.
    """
    metadata = item.get("metadata") or {}
    kind = item.get("kind")
    name = metadata.get("name")
    if not kind or not name:
        raise StoreError("Store items need 'kind' and 'metadata.name'")
    return str(kind), str(metadata.get("namespace") or ""), str(name)
