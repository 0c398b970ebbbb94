"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument. The context replaces any ambient "current cluster/environment"
state: the resource store, the capability cache and the environment source
are threaded through explicitly, once per request.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from typing import Any

from capplane.capabilities.registry import CapabilityRegistry
from capplane.core.protocols import CapabilityCache, EnvironmentStore, ResourceStore
from capplane.environments import EnvironmentResolver, StaticEnvironmentStore


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        store: Target resource store (cluster stand-in).
        cache: Locally installed capability cache, if any.
        environments: Source of configured environments.
        request_id: Unique ID for this invocation (auto-generated).
        caller: Origin of the request: ``"api"``, ``"cli"`` or ``"sdk"``.
        dry_run: When ``True``, workload runs are staged instead of applied.
        concurrent_fetch: Run the two registry fetches in parallel.
        cancel_event: Set to cancel the request around the store call.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    store: ResourceStore
    cache: CapabilityCache | None = None
    environments: EnvironmentStore | None = None
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    dry_run: bool = False
    concurrent_fetch: bool = True
    cancel_event: threading.Event = field(default_factory=threading.Event)
    metadata: dict[str, Any] = field(default_factory=dict)

    def registry(self) -> CapabilityRegistry:
        """A registry over this request's definition sources."""
        return CapabilityRegistry(self.store, self.cache, concurrent=self.concurrent_fetch)

    def resolver(self) -> EnvironmentResolver:
        """An environment resolver over this request's environment source."""
        if self.environments is None:
            return EnvironmentResolver(StaticEnvironmentStore())
        return EnvironmentResolver(self.environments)

    def cancel(self) -> None:
        """Request cancellation of the in-flight operation."""
        self.cancel_event.set()
