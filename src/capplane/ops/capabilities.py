"""
Capability operations.

Listings and detail views over a freshly built registry snapshot. Every
function builds its own snapshot, so results always reflect the current
state of both definition sources.
"""

from __future__ import annotations

from capplane.capabilities.matcher import compatible_traits, match_traits, trait_applicability, workload_rows
from capplane.core.errors import CapPlaneError
from capplane.core.logging import get_logger
from capplane.core.models import CapabilityDefinition, CapabilityKind, ParameterSpec, TraitMeta
from capplane.ops.context import OperationContext
from capplane.ops.requests import ListTraitsRequest
from capplane.ops.responses import (
    CapabilitySummary,
    ParameterSummary,
    TraitApplicabilitySummary,
    TraitDetail,
    WorkloadDetail,
)
from capplane.ops.result import OperationResult, PagedResult, start_timer

logger = get_logger(__name__)


# ------------------------------------------------------------------ #
# Traits
# ------------------------------------------------------------------ #


def list_traits(
    ctx: OperationContext,
    request: ListTraitsRequest,
) -> PagedResult[CapabilitySummary]:
    """List traits, optionally only those applying to one workload type."""
    timer = start_timer()

    try:
        snapshot = ctx.registry().snapshot()
        rows = [_row_to_summary(row) for row in match_traits(snapshot, request.workload)]
        return PagedResult.from_items(
            rows,
            warnings=list(snapshot.warnings),
            elapsed_ms=timer.elapsed_ms,
        )
    except CapPlaneError as exc:
        return PagedResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="list_traits", error=str(exc))
        return PagedResult.fail("INTERNAL", f"Failed to list traits: {exc}", elapsed_ms=timer.elapsed_ms)


def get_trait(
    ctx: OperationContext,
    name: str,
) -> OperationResult[TraitDetail]:
    """Get one trait by name or short alias."""
    timer = start_timer()

    try:
        snapshot = ctx.registry().snapshot()
        trait = snapshot.get(CapabilityKind.TRAIT, name)
        detail = TraitDetail(
            name=trait.name,
            short_alias=trait.short_alias,
            definition_ref=trait.definition_ref,
            status=trait.status,
            source=trait.source_origin.value,
            description=trait.description,
            applies_to_workloads=list(trait.applies_to_workloads),
            parameters=_parameter_summaries(trait),
        )
        return OperationResult.ok(detail, warnings=list(snapshot.warnings), elapsed_ms=timer.elapsed_ms)
    except CapPlaneError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="get_trait", error=str(exc))
        return OperationResult.fail("INTERNAL", f"Failed to get trait: {exc}", elapsed_ms=timer.elapsed_ms)


def list_trait_applicability(
    ctx: OperationContext,
) -> PagedResult[TraitApplicabilitySummary]:
    """For every workload type, the traits declared compatible with it."""
    timer = start_timer()

    try:
        snapshot = ctx.registry().snapshot()
        rows = [
            TraitApplicabilitySummary(workload=view.workload, traits=list(view.traits))
            for view in trait_applicability(snapshot)
        ]
        return PagedResult.from_items(rows, warnings=list(snapshot.warnings), elapsed_ms=timer.elapsed_ms)
    except CapPlaneError as exc:
        return PagedResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="list_trait_applicability", error=str(exc))
        return PagedResult.fail(
            "INTERNAL",
            f"Failed to compute trait applicability: {exc}",
            elapsed_ms=timer.elapsed_ms,
        )


# ------------------------------------------------------------------ #
# Workloads
# ------------------------------------------------------------------ #


def list_workloads(ctx: OperationContext) -> PagedResult[CapabilitySummary]:
    """List workload types."""
    timer = start_timer()

    try:
        snapshot = ctx.registry().snapshot()
        rows = [_row_to_summary(row) for row in workload_rows(snapshot)]
        return PagedResult.from_items(rows, warnings=list(snapshot.warnings), elapsed_ms=timer.elapsed_ms)
    except CapPlaneError as exc:
        return PagedResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="list_workloads", error=str(exc))
        return PagedResult.fail("INTERNAL", f"Failed to list workloads: {exc}", elapsed_ms=timer.elapsed_ms)


def get_workload(
    ctx: OperationContext,
    name: str,
) -> OperationResult[WorkloadDetail]:
    """Get one workload type with its parameters and compatible traits."""
    timer = start_timer()

    try:
        snapshot = ctx.registry().snapshot()
        workload = snapshot.get(CapabilityKind.WORKLOAD, name)
        detail = WorkloadDetail(
            name=workload.name,
            short_alias=workload.short_alias,
            definition_ref=workload.definition_ref,
            status=workload.status,
            source=workload.source_origin.value,
            description=workload.description,
            parameters=_parameter_summaries(workload),
            traits=list(compatible_traits(snapshot, workload.name)),
        )
        return OperationResult.ok(detail, warnings=list(snapshot.warnings), elapsed_ms=timer.elapsed_ms)
    except CapPlaneError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="get_workload", error=str(exc))
        return OperationResult.fail("INTERNAL", f"Failed to get workload: {exc}", elapsed_ms=timer.elapsed_ms)


# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


def _row_to_summary(row: TraitMeta) -> CapabilitySummary:
    return CapabilitySummary(
        name=row.name,
        short_alias=row.short_alias,
        definition_ref=row.definition_ref,
        applies_to=row.applies_to,
        status=row.status,
    )


def _param_to_summary(spec: ParameterSpec) -> ParameterSummary:
    return ParameterSummary(
        name=spec.name,
        type=spec.type.value,
        default=spec.default,
        required=spec.required,
        usage=spec.usage,
        short=spec.short,
    )


def _parameter_summaries(capability: CapabilityDefinition) -> list[ParameterSummary]:
    return [_param_to_summary(spec) for spec in capability.parameters]
