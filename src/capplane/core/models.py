"""
Domain models for capabilities, environments and workloads.

All models are immutable value objects. A registry snapshot, an environment
context and a workload instance are request-scoped: they are rebuilt for
every request and never shared across requests.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Neutral marker rendered where a listing column has no meaningful value.
NEUTRAL_MARKER = "-"

STATUS_INSTALLED = "installed"
STATUS_UNINSTALLED = "uninstalled"


class CapabilityKind(str, Enum):
    """Kind of a capability definition."""

    WORKLOAD = "workload"
    TRAIT = "trait"

    @classmethod
    def parse(cls, value: str | CapabilityKind) -> CapabilityKind:
        """Parse ``workload``/``trait`` (case-insensitive, plural tolerated)."""
        if isinstance(value, cls):
            return value
        normalized = value.strip().lower().rstrip("s")
        return cls(normalized)


class SourceOrigin(str, Enum):
    """Provenance of a capability definition."""

    CLUSTER = "cluster"
    LOCAL_CACHE = "local_cache"


class ParamType(str, Enum):
    """Primitive parameter type tags."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"

    @classmethod
    def parse(cls, value: str) -> ParamType:
        """Parse a type tag, accepting the common aliases."""
        normalized = value.strip().lower()
        return _PARAM_TYPE_ALIASES.get(normalized) or cls(normalized)


_PARAM_TYPE_ALIASES: dict[str, ParamType] = {
    "str": ParamType.STRING,
    "integer": ParamType.INT,
    "number": ParamType.FLOAT,
    "boolean": ParamType.BOOL,
}


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """One declared parameter of a capability.

    Attributes:
        name: Parameter name as supplied by users.
        type: Primitive type tag the raw text value is coerced into.
        default: Typed default, ``None`` when the parameter has no default.
        required: Whether the parameter must end up with a value.
        usage: Human-readable help text.
        short: Optional one-letter flag alias.
    """

    name: str
    type: ParamType = ParamType.STRING
    default: Any = None
    required: bool = False
    usage: str = ""
    short: str = ""


@dataclass(frozen=True, slots=True)
class CapabilityDefinition:
    """One workload type or trait type.

    ``applies_to_workloads`` is only meaningful for traits. An empty tuple
    means the trait applies to no workload, never to all of them.
    """

    name: str
    kind: CapabilityKind
    source_origin: SourceOrigin
    short_alias: str = ""
    definition_ref: str = ""
    applies_to_workloads: tuple[str, ...] = ()
    parameters: tuple[ParameterSpec, ...] = ()
    description: str = ""

    @property
    def status(self) -> str:
        if self.source_origin is SourceOrigin.CLUSTER:
            return STATUS_INSTALLED
        return STATUS_UNINSTALLED

    def matches(self, name_or_alias: str) -> bool:
        """Exact, case-sensitive match on ``name`` or ``short_alias``."""
        if self.name == name_or_alias:
            return True
        return bool(self.short_alias) and self.short_alias == name_or_alias

    def parameter(self, name: str) -> ParameterSpec | None:
        for spec in self.parameters:
            if spec.name == name:
                return spec
        return None


@dataclass(frozen=True, slots=True)
class TraitMeta:
    """One row of a trait (or workload) listing."""

    name: str
    short_alias: str
    definition_ref: str
    applies_to: str
    status: str


@dataclass(frozen=True, slots=True)
class TraitApplicability:
    """Derived view: the traits declared compatible with one workload type."""

    workload: str
    traits: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class TypedConfig:
    """Bound parameters for one capability.

    Attributes:
        values: Schema parameters with typed values, in schema order.
        passthrough: Names unknown to the schema, passed through opaquely.
        unset: Schema parameters left without a value (no input, no default).
        defaulted: Schema parameters whose value came from the declared default.
    """

    values: Mapping[str, Any] = field(default_factory=dict)
    passthrough: Mapping[str, str] = field(default_factory=dict)
    unset: tuple[str, ...] = ()
    defaulted: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", dict(self.values))
        object.__setattr__(self, "passthrough", dict(self.passthrough))


@dataclass(frozen=True, slots=True)
class EnvironmentContext:
    """A resolved environment. Immutable for the duration of one request."""

    name: str
    namespace: str
    cluster: str = ""
    app_group: str = ""
    workload_hints: tuple[str, ...] = ()
    overrides: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "overrides", dict(self.overrides))


@dataclass(frozen=True, slots=True)
class WorkloadInstance:
    """An assembled workload, exclusively owned by the request that built it."""

    name: str
    capability: str
    definition_ref: str
    environment: str
    namespace: str
    app_group: str
    parameters: Mapping[str, Any]
    options: Mapping[str, str]
    staging: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", dict(self.parameters))
        object.__setattr__(self, "options", dict(self.options))

    @property
    def identity(self) -> str:
        return f"{self.namespace}/{self.name}"


class ApplyOutcome(str, Enum):
    """Terminal state of the apply pipeline."""

    STAGED = "staged"
    APPLIED = "applied"


@dataclass(frozen=True, slots=True)
class ApplyResult:
    """Outcome of :meth:`ApplyPipeline.apply`."""

    outcome: ApplyOutcome
    name: str
    namespace: str
    environment: str
    capability: str
    resource: dict[str, Any]
    message: str
    created: bool = False
