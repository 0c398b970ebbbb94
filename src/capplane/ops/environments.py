"""
Environment operations.

Read-only inspection of the configured environments. Environments are
never created here.
"""

from __future__ import annotations

from capplane.core.errors import CapPlaneError
from capplane.core.logging import get_logger
from capplane.core.models import EnvironmentContext
from capplane.ops.context import OperationContext
from capplane.ops.responses import EnvironmentDetail, EnvironmentSummary
from capplane.ops.result import OperationResult, PagedResult, start_timer

logger = get_logger(__name__)


def list_environments(ctx: OperationContext) -> PagedResult[EnvironmentSummary]:
    """List configured environments in configuration order."""
    timer = start_timer()

    try:
        summaries = [_to_summary(env) for env in ctx.resolver().list()]
        return PagedResult.from_items(summaries, elapsed_ms=timer.elapsed_ms)
    except CapPlaneError as exc:
        return PagedResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="list_environments", error=str(exc))
        return PagedResult.fail("INTERNAL", f"Failed to list environments: {exc}", elapsed_ms=timer.elapsed_ms)


def get_environment(
    ctx: OperationContext,
    name: str,
) -> OperationResult[EnvironmentDetail]:
    """Resolve one environment by its exact name."""
    timer = start_timer()

    try:
        env = ctx.resolver().resolve(name)
        detail = EnvironmentDetail(
            name=env.name,
            namespace=env.namespace,
            cluster=env.cluster,
            app_group=env.app_group,
            workload_hints=list(env.workload_hints),
            overrides=dict(env.overrides),
        )
        return OperationResult.ok(detail, elapsed_ms=timer.elapsed_ms)
    except CapPlaneError as exc:
        return OperationResult.from_error(exc, elapsed_ms=timer.elapsed_ms)
    except Exception as exc:
        logger.exception("op_failed", op="get_environment", error=str(exc))
        return OperationResult.fail("INTERNAL", f"Failed to get environment: {exc}", elapsed_ms=timer.elapsed_ms)


def _to_summary(env: EnvironmentContext) -> EnvironmentSummary:
    return EnvironmentSummary(
        name=env.name,
        namespace=env.namespace,
        cluster=env.cluster,
        app_group=env.app_group,
    )
