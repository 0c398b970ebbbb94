"""
Workload operations.

``run_workload`` is the single entry point both the CLI and the HTTP API use
to instantiate a workload. One call is one self-contained pass:

    registry snapshot → parameter binding → environment resolution
        → assembly → stage or apply

Any typed error from those steps ends the pass and comes back as a failed
:class:`OperationResult`; nothing is retried.
"""

from __future__ import annotations

from capplane.capabilities.params import ParameterBinder
from capplane.core.errors import CapPlaneError
from capplane.core.logging import LogContext, get_logger
from capplane.core.models import ApplyResult, CapabilityKind
from capplane.ops.context import OperationContext
from capplane.ops.requests import RunWorkloadRequest
from capplane.ops.responses import WorkloadRunResult
from capplane.ops.result import OperationResult, start_timer
from capplane.workloads.assembler import WorkloadAssembler
from capplane.workloads.pipeline import ApplyPipeline

logger = get_logger(__name__)


def run_workload(
    ctx: OperationContext,
    request: RunWorkloadRequest,
) -> OperationResult[WorkloadRunResult]:
    """Stage or apply one workload.

    The run is staged when either ``request.staging`` or ``ctx.dry_run`` is set.
    """
    timer = start_timer()
    staging = request.staging or ctx.dry_run
    warnings: list[str] = []

    with LogContext(request_id=ctx.request_id, caller=ctx.caller):
        try:
            snapshot = ctx.registry().snapshot()
            warnings.extend(snapshot.warnings)

            capability = snapshot.get(CapabilityKind.WORKLOAD, request.workload_type)
            typed_config = ParameterBinder().bind(capability, request.parameters)
            env_context = ctx.resolver().resolve(request.env)

            instance = WorkloadAssembler().assemble(
                capability,
                typed_config,
                env_context,
                app_group=request.app_group,
                staging=staging,
                name=request.workload_name,
            )
            outcome = ApplyPipeline(ctx.store).apply(instance, cancel_event=ctx.cancel_event)
        except CapPlaneError as exc:
            exc.with_context(request_id=ctx.request_id)
            logger.info(
                "workload_run_failed",
                env=request.env,
                workload_type=request.workload_type,
                code=exc.code,
                error=exc.message,
            )
            return OperationResult.from_error(exc, warnings=warnings, elapsed_ms=timer.elapsed_ms)
        except Exception as exc:
            logger.exception("op_failed", op="run_workload", error=str(exc))
            return OperationResult.fail(
                "INTERNAL",
                f"Failed to run workload: {exc}",
                warnings=warnings,
                elapsed_ms=timer.elapsed_ms,
            )

    return OperationResult.ok(_to_response(outcome), warnings=warnings, elapsed_ms=timer.elapsed_ms)


def _to_response(outcome: ApplyResult) -> WorkloadRunResult:
    return WorkloadRunResult(
        outcome=outcome.outcome.value,
        name=outcome.name,
        namespace=outcome.namespace,
        environment=outcome.environment,
        capability=outcome.capability,
        message=outcome.message,
        created=outcome.created,
        resource=outcome.resource,
    )
