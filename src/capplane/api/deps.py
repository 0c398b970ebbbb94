"""
FastAPI dependency injection - shared singletons and per-request factories.

Usage in routers::

    from capplane.api.deps import OpContext

    @router.get("/traits")
    def list_traits(ctx: OpContext):
        ...

Tests replace :func:`get_backends` through ``app.dependency_overrides`` to
point the API at in-memory collaborators.
"""

from __future__ import annotations

import uuid
from collections.abc import Generator
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from capplane.api.settings import CapPlaneAPISettings
from capplane.capabilities.cache import LocalCapabilityCache
from capplane.core.protocols import CapabilityCache, EnvironmentStore, ResourceStore
from capplane.environments import FileEnvironmentStore
from capplane.ops.context import OperationContext
from capplane.store.sqlite import SqliteResourceStore

# ── Settings (singleton) ─────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_settings() -> CapPlaneAPISettings:
    """Cached settings - loaded once per process."""
    return CapPlaneAPISettings()


# ── Collaborators (per-request) ──────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Backends:
    """External collaborators one request works against."""

    store: ResourceStore
    cache: CapabilityCache | None
    environments: EnvironmentStore


def get_backends(
    settings: Annotated[CapPlaneAPISettings, Depends(get_settings)],
) -> Generator[Backends, None, None]:
    """Yield collaborators built from settings for the request lifespan."""
    store = SqliteResourceStore(settings.resolved_store_path)
    try:
        yield Backends(
            store=store,
            cache=LocalCapabilityCache(settings.resolved_cache_dir),
            environments=FileEnvironmentStore(settings.resolved_environments_file),
        )
    finally:
        store.close()


# ── Operation context (per-request) ──────────────────────────────────────


def get_operation_context(
    request: Request,
    backends: Annotated[Backends, Depends(get_backends)],
    settings: Annotated[CapPlaneAPISettings, Depends(get_settings)],
) -> OperationContext:
    """Build an :class:`OperationContext` from the current request."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    return OperationContext(
        store=backends.store,
        cache=backends.cache,
        environments=backends.environments,
        request_id=request_id,
        caller="api",
        concurrent_fetch=settings.concurrent_fetch,
    )


# ── Convenience type aliases ─────────────────────────────────────────────

OpContext = Annotated[OperationContext, Depends(get_operation_context)]
