"""
Shared pytest fixtures for capplane tests.

This module provides:
- A small capability catalogue registered in an in-memory cluster store
- A local capability cache on disk with one colliding and two cache-only entries
- Static environments (``dev``, ``shop``)
- A ready-to-use ``OperationContext``

Catalogue::

    cluster   workloads: webservice (ws)   port:int=8080, image:string
                         worker (wk)       replicas:int=1, queue:string required
              traits:    scaler (scale)    → webservice, worker
                         ingress           → webservice
                         orphan            → (nothing)
    cache     workloads: cron, webservice (collides, loses)
              traits:    sidecar           → worker, cron
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Ensure capplane package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from capplane.capabilities.cache import LocalCapabilityCache
from capplane.capabilities.codec import encode_cluster_item
from capplane.core.models import (
    CapabilityDefinition,
    CapabilityKind,
    ParameterSpec,
    ParamType,
    SourceOrigin,
)
from capplane.environments import StaticEnvironmentStore
from capplane.ops.context import OperationContext
from capplane.store.memory import InMemoryResourceStore

# =============================================================================
# Catalogue
# =============================================================================


WEBSERVICE = CapabilityDefinition(
    name="webservice",
    kind=CapabilityKind.WORKLOAD,
    source_origin=SourceOrigin.CLUSTER,
    short_alias="ws",
    definition_ref="deployments.apps",
    parameters=(
        ParameterSpec(name="port", type=ParamType.INT, default=8080, usage="Container port"),
        ParameterSpec(name="image", type=ParamType.STRING, usage="Container image"),
    ),
)

WORKER = CapabilityDefinition(
    name="worker",
    kind=CapabilityKind.WORKLOAD,
    source_origin=SourceOrigin.CLUSTER,
    short_alias="wk",
    definition_ref="deployments.apps",
    parameters=(
        ParameterSpec(name="replicas", type=ParamType.INT, default=1),
        ParameterSpec(name="queue", type=ParamType.STRING, required=True),
        ParameterSpec(name="debug", type=ParamType.BOOL, default=False),
    ),
)

SCALER = CapabilityDefinition(
    name="scaler",
    kind=CapabilityKind.TRAIT,
    source_origin=SourceOrigin.CLUSTER,
    short_alias="scale",
    definition_ref="manualscalertraits.core.oam.dev",
    applies_to_workloads=("webservice", "worker"),
    parameters=(ParameterSpec(name="replicas", type=ParamType.INT, default=1),),
)

INGRESS = CapabilityDefinition(
    name="ingress",
    kind=CapabilityKind.TRAIT,
    source_origin=SourceOrigin.CLUSTER,
    definition_ref="ingresses.networking.k8s.io",
    applies_to_workloads=("webservice",),
)

ORPHAN = CapabilityDefinition(
    name="orphan",
    kind=CapabilityKind.TRAIT,
    source_origin=SourceOrigin.CLUSTER,
    definition_ref="orphans.example.dev",
)

CLUSTER_DEFINITIONS = (WEBSERVICE, WORKER, SCALER, INGRESS, ORPHAN)

CACHE_ENTRIES = {
    "workloads/cron.json": {
        "name": "cron",
        "type": "workload",
        "short": "cj",
        "definition": "cronjobs.batch",
        "parameters": [{"name": "schedule", "type": "string", "default": "@daily"}],
    },
    "workloads/webservice.json": {
        "name": "webservice",
        "type": "workload",
        "short": "web",
        "definition": "local.webservice",
        "parameters": [{"name": "port", "type": "int", "default": 9090}],
    },
    "traits/sidecar.json": {
        "name": "sidecar",
        "type": "trait",
        "definition": "sidecars.example.dev",
        "appliesTo": ["worker", "cron"],
    },
}

ENVIRONMENTS = {
    "dev": {"namespace": "dev-ns", "cluster": "https://dev.example:6443"},
    "shop": {
        "namespace": "shop-ns",
        "app_group": "shop",
        "workload_hints": ["webservice"],
        "overrides": {"replicas": "2", "port": "8443"},
    },
}


def cluster_items() -> list[dict]:
    return [encode_cluster_item(definition) for definition in CLUSTER_DEFINITIONS]


def write_cache(root: Path, entries: dict[str, dict] = CACHE_ENTRIES) -> Path:
    for relative, entry in entries.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(entry), encoding="utf-8")
    return root


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture()
def store() -> InMemoryResourceStore:
    """Cluster stand-in with the catalogue's definitions registered."""
    return InMemoryResourceStore(items=cluster_items())


@pytest.fixture()
def cache_dir(tmp_path: Path) -> Path:
    return write_cache(tmp_path / "capabilities")


@pytest.fixture()
def cache(cache_dir: Path) -> LocalCapabilityCache:
    return LocalCapabilityCache(cache_dir)


@pytest.fixture()
def environments() -> StaticEnvironmentStore:
    return StaticEnvironmentStore(ENVIRONMENTS)


@pytest.fixture()
def ctx(store, cache, environments) -> OperationContext:
    """Operation context wired to the in-memory collaborators."""
    return OperationContext(store=store, cache=cache, environments=environments, caller="test")
