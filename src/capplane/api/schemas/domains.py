"""
Domain schemas for the capplane API.

Field names are snake_case in Python and camelCase on the wire
(``shortAlias``, ``appliesTo``, ``envName`` ...). Both spellings are
accepted on input.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Capabilities ─────────────────────────────────────────────────────────


class CapabilitySummarySchema(CamelModel):
    """One listing row: ``{name, shortAlias, definitionRef, appliesTo, status}``."""

    name: str
    short_alias: str = ""
    definition_ref: str = ""
    applies_to: str = ""
    status: str = ""


class ParameterSchema(CamelModel):
    """One declared capability parameter."""

    name: str
    type: str
    default: Any = None
    required: bool = False
    usage: str = ""
    short: str = ""


class WorkloadDetailSchema(CamelModel):
    """Workload type with its parameters and compatible traits."""

    name: str
    short_alias: str = ""
    definition_ref: str = ""
    status: str = ""
    source: str = ""
    description: str = ""
    parameters: list[ParameterSchema] = Field(default_factory=list)
    traits: list[str] = Field(default_factory=list)


class TraitDetailSchema(CamelModel):
    """Trait with the workload types it applies to."""

    name: str
    short_alias: str = ""
    definition_ref: str = ""
    status: str = ""
    source: str = ""
    description: str = ""
    applies_to_workloads: list[str] = Field(default_factory=list)
    parameters: list[ParameterSchema] = Field(default_factory=list)


class TraitApplicabilitySchema(CamelModel):
    """Traits declared compatible with one workload type."""

    workload: str
    traits: list[str] = Field(default_factory=list)


# ── Environments ─────────────────────────────────────────────────────────


class EnvironmentSummarySchema(CamelModel):
    name: str
    namespace: str
    cluster: str = ""
    app_group: str = ""


class EnvironmentDetailSchema(EnvironmentSummarySchema):
    workload_hints: list[str] = Field(default_factory=list)
    overrides: dict[str, str] = Field(default_factory=dict)


# ── Workload runs ────────────────────────────────────────────────────────


class FlagSchema(CamelModel):
    """One raw parameter. Non-text JSON values are sent on as text."""

    name: str = Field(..., min_length=1)
    value: str = ""

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class RunWorkloadBody(CamelModel):
    """Request body for ``POST /workloads``."""

    env_name: str = Field(..., description="Target environment (case-sensitive)")
    workload_type: str = Field(..., description="Workload type name or short alias")
    workload_name: str = Field(default="", description="Resource name; derived when empty")
    app_group: str = Field(default="", description="Application group; derived when empty")
    staging: bool = Field(default=False, description="Render only, do not persist")
    flags: list[FlagSchema] = Field(default_factory=list, description="Parameters in input order")


class WorkloadRunSchema(CamelModel):
    """Outcome of a workload run."""

    outcome: str
    name: str
    namespace: str
    environment: str
    capability: str
    message: str
    created: bool = False
    resource: dict[str, Any] = Field(default_factory=dict)
