"""
Typed response objects for operations.

Each dataclass is the *output* of one operation beyond the generic
:class:`~capplane.ops.result.OperationResult` envelope. Responses carry only
domain data: no HTTP status codes, no table formatting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ------------------------------------------------------------------ #
# Capability responses
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class CapabilitySummary:
    """One listing row: ``{name, shortAlias, definitionRef, appliesTo, status}``."""

    name: str
    short_alias: str
    definition_ref: str
    applies_to: str
    status: str


@dataclass(frozen=True, slots=True)
class ParameterSummary:
    """One declared parameter of a capability."""

    name: str
    type: str
    default: Any = None
    required: bool = False
    usage: str = ""
    short: str = ""


@dataclass(frozen=True, slots=True)
class WorkloadDetail:
    """Result payload for :func:`capplane.ops.capabilities.get_workload`."""

    name: str
    short_alias: str
    definition_ref: str
    status: str
    source: str
    description: str = ""
    parameters: list[ParameterSummary] = field(default_factory=list)
    traits: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class TraitDetail:
    """Result payload for :func:`capplane.ops.capabilities.get_trait`."""

    name: str
    short_alias: str
    definition_ref: str
    status: str
    source: str
    description: str = ""
    applies_to_workloads: list[str] = field(default_factory=list)
    parameters: list[ParameterSummary] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class TraitApplicabilitySummary:
    """Traits declared compatible with one workload type."""

    workload: str
    traits: list[str] = field(default_factory=list)


# ------------------------------------------------------------------ #
# Environment responses
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class EnvironmentSummary:
    """One configured environment."""

    name: str
    namespace: str
    cluster: str = ""
    app_group: str = ""


@dataclass(frozen=True, slots=True)
class EnvironmentDetail:
    """Result payload for :func:`capplane.ops.environments.get_environment`."""

    name: str
    namespace: str
    cluster: str = ""
    app_group: str = ""
    workload_hints: list[str] = field(default_factory=list)
    overrides: dict[str, str] = field(default_factory=dict)


# ------------------------------------------------------------------ #
# Workload run responses
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class WorkloadRunResult:
    """Result payload for :func:`capplane.ops.workloads.run_workload`.

    ``outcome`` is ``"staged"`` or ``"applied"``; ``resource`` is the staged
    render or the persisted copy.
    """

    outcome: str
    name: str
    namespace: str
    environment: str
    capability: str
    message: str
    created: bool = False
    resource: dict[str, Any] = field(default_factory=dict)
