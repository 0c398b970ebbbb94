"""
Typed request objects for operations.

Each dataclass is the *input* contract for one operation function. Both the
CLI and the HTTP API map their raw input onto these shapes before reaching
the core; requests never carry argv lists or HTTP bodies.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from capplane.capabilities.params import RawParam

# ------------------------------------------------------------------ #
# Capability listings
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class ListTraitsRequest:
    """Request for :func:`capplane.ops.capabilities.list_traits`."""

    workload: str = ""  # empty → every trait with a non-empty appliesTo


# ------------------------------------------------------------------ #
# Workload runs
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class RunWorkloadRequest:
    """Request for :func:`capplane.ops.workloads.run_workload`.

    Attributes:
        env: Environment name (exact, case-sensitive).
        workload_type: Workload capability name or short alias.
        workload_name: Resource name; derived when empty.
        app_group: Application group; derived when empty.
        staging: Render only, do not persist.
        parameters: Raw name/value pairs in input order.
    """

    env: str
    workload_type: str
    workload_name: str = ""
    app_group: str = ""
    staging: bool = False
    parameters: list[RawParam] = field(default_factory=list)
