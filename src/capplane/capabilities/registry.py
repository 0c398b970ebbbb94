"""Capability registry - one consistent view over both definition sources.

Definitions come from two independent sources:

- the cluster: ``WorkloadDefinition``/``TraitDefinition`` resources in the
  :class:`~capplane.core.protocols.ResourceStore` (authoritative)
- the local cache: installed capabilities in a
  :class:`~capplane.core.protocols.CapabilityCache` (supplementary)

Every call to :meth:`CapabilityRegistry.snapshot` fetches both sources and
builds a fresh, immutable :class:`RegistrySnapshot`. There is no
incremental update path and no caching across requests.

Failure policy:
    - cluster fetch fails  → :class:`RegistryFetchError`, never a silent
      fallback to cache-only data
    - cache fetch fails    → logged, recorded as a snapshot warning, and the
      snapshot is built from cluster data alone

Merge:
    Keyed by name within each kind. Cluster definitions come first in source
    order, then cache-only definitions in source order. On a name collision
    the cluster definition wins and the cached one is discarded. The result
    does not depend on which fetch completes first.

Tags:
    capplane, capabilities, registry, merge, discovery
"""

from __future__ import annotations

import contextvars
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from capplane.capabilities.codec import DEFINITION_RESOURCE_KINDS, decode_cache_entry, decode_cluster_item
from capplane.core.errors import DefinitionFormatError, NotFoundError, RegistryFetchError
from capplane.core.logging import get_logger
from capplane.core.models import CapabilityDefinition, CapabilityKind
from capplane.core.protocols import CapabilityCache, ResourceStore

logger = get_logger(__name__)

_KINDS: tuple[CapabilityKind, ...] = (CapabilityKind.WORKLOAD, CapabilityKind.TRAIT)


@dataclass(frozen=True, slots=True)
class RegistrySnapshot:
    """Merged capability set for the lifetime of one query."""

    workloads: tuple[CapabilityDefinition, ...] = ()
    traits: tuple[CapabilityDefinition, ...] = ()
    warnings: tuple[str, ...] = field(default=(), compare=False)

    def list(self, kind: CapabilityKind | str) -> tuple[CapabilityDefinition, ...]:
        if CapabilityKind.parse(kind) is CapabilityKind.WORKLOAD:
            return self.workloads
        return self.traits

    def find(self, kind: CapabilityKind | str, name_or_alias: str) -> CapabilityDefinition | None:
        """First definition whose name or short alias matches exactly."""
        for definition in self.list(kind):
            if definition.matches(name_or_alias):
                return definition
        return None

    def get(self, kind: CapabilityKind | str, name_or_alias: str) -> CapabilityDefinition:
        """Like :meth:`find` but raises :class:`NotFoundError`."""
        definition = self.find(kind, name_or_alias)
        if definition is None:
            raise NotFoundError(CapabilityKind.parse(kind).value, name_or_alias)
        return definition


def merge_definitions(
    cluster: Iterable[CapabilityDefinition],
    local: Iterable[CapabilityDefinition],
) -> tuple[CapabilityDefinition, ...]:
    """Reduce two definition sequences of one kind by name, cluster first.

    Within a single source the first definition of a name is kept.
    """
    merged: dict[str, CapabilityDefinition] = {}
    for definition in cluster:
        merged.setdefault(definition.name, definition)
    for definition in local:
        if definition.name in merged:
            logger.debug(
                "capability_collision_resolved",
                name=definition.name,
                kind=definition.kind.value,
                kept="cluster",
            )
            continue
        merged[definition.name] = definition
    return tuple(merged.values())


def _decode_all(
    items: Sequence[dict[str, Any]],
    kind: CapabilityKind,
    decode: Callable[[dict[str, Any], CapabilityKind], CapabilityDefinition],
    source: str,
    warnings: list[str],
) -> list[CapabilityDefinition]:
    definitions: list[CapabilityDefinition] = []
    for item in items:
        try:
            definitions.append(decode(item, kind))
        except DefinitionFormatError as exc:
            logger.warning("capability_definition_skipped", source=source, kind=kind.value, error=exc.message)
            warnings.append(f"skipped malformed {source} {kind.value} definition: {exc.message}")
    return definitions


class CapabilityRegistry:
    """Builds registry snapshots from the cluster store and the local cache.

    Args:
        store: Resource store holding cluster-registered definitions.
        cache: Local installed-capability cache, or ``None`` when there is none.
        concurrent: Run the two source fetches in parallel.
    """

    def __init__(
        self,
        store: ResourceStore,
        cache: CapabilityCache | None = None,
        *,
        concurrent: bool = True,
    ) -> None:
        self._store = store
        self._cache = cache
        self._concurrent = concurrent

    # ------------------------------------------------------------------ #
    # Source fetches
    # ------------------------------------------------------------------ #

    def _fetch_cluster(self) -> dict[CapabilityKind, list[dict[str, Any]]]:
        return {kind: self._store.list(DEFINITION_RESOURCE_KINDS[kind]) for kind in _KINDS}

    def _fetch_local(self) -> dict[CapabilityKind, list[dict[str, Any]]]:
        if self._cache is None:
            return {kind: [] for kind in _KINDS}
        return {kind: self._cache.list_installed(kind.value) for kind in _KINDS}

    def _fetch_both(self):
        """Run both fetches; return ``(cluster, cluster_exc, local, local_exc)``."""
        if not self._concurrent:
            cluster, cluster_exc = _capture(self._fetch_cluster)
            local, local_exc = _capture(self._fetch_local)
            return cluster, cluster_exc, local, local_exc

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="capplane-registry") as pool:
            # Each worker runs in its own copy of the caller's context (request_id, caller).
            cluster_future = pool.submit(contextvars.copy_context().run, _capture, self._fetch_cluster)
            local_future = pool.submit(contextvars.copy_context().run, _capture, self._fetch_local)
            cluster, cluster_exc = cluster_future.result()
            local, local_exc = local_future.result()
        return cluster, cluster_exc, local, local_exc

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def snapshot(self) -> RegistrySnapshot:
        """Fetch both sources and build a fresh merged snapshot.

        Raises:
            RegistryFetchError: If the cluster-origin fetch fails.
        """
        cluster, cluster_exc, local, local_exc = self._fetch_both()

        if cluster_exc is not None:
            logger.error("cluster_definitions_fetch_failed", error=str(cluster_exc))
            raise RegistryFetchError(
                f"Failed to fetch capability definitions from the cluster: {cluster_exc}",
                cause=cluster_exc,
            )

        warnings: list[str] = []
        if local_exc is not None:
            logger.warning("local_cache_fetch_failed", error=str(local_exc))
            warnings.append(f"local capability cache unavailable: {local_exc}")
            local = {kind: [] for kind in _KINDS}

        merged: dict[CapabilityKind, tuple[CapabilityDefinition, ...]] = {}
        for kind in _KINDS:
            merged[kind] = merge_definitions(
                _decode_all(cluster[kind], kind, decode_cluster_item, "cluster", warnings),
                _decode_all(local[kind], kind, decode_cache_entry, "cache", warnings),
            )

        return RegistrySnapshot(
            workloads=merged[CapabilityKind.WORKLOAD],
            traits=merged[CapabilityKind.TRAIT],
            warnings=tuple(warnings),
        )

    def list_capabilities(self, kind: CapabilityKind | str) -> tuple[CapabilityDefinition, ...]:
        """All merged definitions of *kind*, in source order."""
        return self.snapshot().list(kind)

    def get_capability(self, kind: CapabilityKind | str, name_or_alias: str) -> CapabilityDefinition:
        """One definition by exact name or short alias.

        Raises:
            RegistryFetchError: If the cluster-origin fetch fails.
            NotFoundError: If no definition of *kind* matches.
        """
        return self.snapshot().get(kind, name_or_alias)


def _capture(fetch: Callable[[], Any]) -> tuple[Any, Exception | None]:
    try:
        return fetch(), None
    except Exception as exc:  # noqa: BLE001 - reported per source by the caller
        return None, exc
