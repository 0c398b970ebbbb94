"""
Contracts for the external collaborators of the capplane core.

The core never constructs cluster clients, never walks the cache directory
layout itself and never creates environments; it only talks to objects
matching these protocols.

Architecture:
    ::

        protocols.py
        ├── ResourceStore      : key-addressed store (cluster stand-in)
        ├── CapabilityCache    : locally installed capabilities (read-only)
        └── EnvironmentStore   : configured environments (read-only)

    Implementations:
        ResourceStore    → capplane.store.memory.InMemoryResourceStore
                           capplane.store.sqlite.SqliteResourceStore
        CapabilityCache  → capplane.capabilities.cache.LocalCapabilityCache
        EnvironmentStore → capplane.environments.FileEnvironmentStore
                           capplane.environments.StaticEnvironmentStore
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResourceStore(Protocol):
    """Generic key-addressed resource store of the target environment.

    Items are plain dicts shaped like Kubernetes objects: ``kind``,
    ``metadata.name``, ``metadata.namespace`` and a free-form ``spec``.
    Identity is ``(kind, namespace, name)``; cluster-scoped items use an
    empty namespace.

    Errors are reported with :class:`capplane.core.errors.StoreError`
    subclasses: ``create`` raises ``ResourceExistsError`` when the identity
    is taken, ``get`` and ``update`` raise ``ResourceNotFoundError`` when it
    is not.
    """

    def list(self, kind: str, namespace: str | None = None) -> list[dict[str, Any]]:
        """List items of *kind*, in insertion order. ``None`` means all namespaces."""
        ...

    def get(self, kind: str, name: str, namespace: str = "") -> dict[str, Any]:
        """Fetch one item."""
        ...

    def create(self, item: dict[str, Any]) -> dict[str, Any]:
        """Persist a new item and return the stored copy."""
        ...

    def update(self, item: dict[str, Any]) -> dict[str, Any]:
        """Replace an existing item and return the stored copy."""
        ...


@runtime_checkable
class CapabilityCache(Protocol):
    """Locally installed capability definitions (plugins)."""

    def list_installed(self, kind: str) -> list[dict[str, Any]]:
        """Raw cache entries of *kind* (``workload`` or ``trait``)."""
        ...

    def get_installed(self, kind: str, name_or_alias: str) -> dict[str, Any]:
        """One raw cache entry, raising ``NotFoundError`` when absent."""
        ...


@runtime_checkable
class EnvironmentStore(Protocol):
    """Source of configured environments."""

    def load(self) -> dict[str, dict[str, Any]]:
        """Raw environment configs keyed by (case-sensitive) name."""
        ...
