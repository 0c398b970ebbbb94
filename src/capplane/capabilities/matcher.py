"""Trait matching - which traits apply to which workload types.

Both views here are derived from a :class:`RegistrySnapshot` on every call
and never stored.

``match_traits(snapshot, workload_filter)``:
    - empty filter: every trait, ``applies_to`` = its ``applies_to_workloads``
      joined with ``", "`` in declared order
    - non-empty filter: only traits whose ``applies_to_workloads`` contains
      the filter exactly; ``applies_to`` = the filter itself
    - rows whose ``applies_to`` ends up empty are dropped, so a trait that
      applies to no workload never appears

Rows keep the snapshot's source order.
"""

from __future__ import annotations

from capplane.capabilities.registry import RegistrySnapshot
from capplane.core.models import (
    NEUTRAL_MARKER,
    CapabilityDefinition,
    TraitApplicability,
    TraitMeta,
)

APPLIES_TO_SEPARATOR = ", "


def effective_applies_to(trait: CapabilityDefinition, workload_filter: str = "") -> str:
    """The ``applies_to`` text for *trait* under *workload_filter* (may be empty)."""
    if not workload_filter:
        return APPLIES_TO_SEPARATOR.join(trait.applies_to_workloads)
    if workload_filter in trait.applies_to_workloads:
        return workload_filter
    return ""


def match_traits(snapshot: RegistrySnapshot, workload_filter: str = "") -> list[TraitMeta]:
    """Trait listing rows, optionally restricted to one workload type."""
    rows: list[TraitMeta] = []
    for trait in snapshot.traits:
        applies_to = effective_applies_to(trait, workload_filter)
        if not applies_to:
            continue
        rows.append(
            TraitMeta(
                name=trait.name,
                short_alias=trait.short_alias,
                definition_ref=trait.definition_ref,
                applies_to=applies_to,
                status=trait.status,
            )
        )
    return rows


def workload_rows(snapshot: RegistrySnapshot) -> list[TraitMeta]:
    """Workload listing rows; workloads apply to nothing, so ``applies_to`` is neutral."""
    return [
        TraitMeta(
            name=workload.name,
            short_alias=workload.short_alias,
            definition_ref=workload.definition_ref,
            applies_to=NEUTRAL_MARKER,
            status=workload.status,
        )
        for workload in snapshot.workloads
    ]


def trait_applicability(snapshot: RegistrySnapshot) -> list[TraitApplicability]:
    """For every workload type, the traits declared compatible with it."""
    return [
        TraitApplicability(workload=workload.name, traits=compatible_traits(snapshot, workload.name))
        for workload in snapshot.workloads
    ]


def compatible_traits(snapshot: RegistrySnapshot, workload: str) -> tuple[str, ...]:
    """Names of the traits declared compatible with *workload*."""
    return tuple(trait.name for trait in snapshot.traits if workload in trait.applies_to_workloads)
