"""
Workloads router - workload types and workload runs.

Endpoints:
    GET  /workloads           List workload types
    GET  /workloads/{name}    One workload type with parameters and traits
    POST /workloads           Stage or apply a workload

The POST body is mapped onto the same ``RunWorkloadRequest`` the CLI
builds, so both entry points behave identically.
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Request, Response

from capplane.api.deps import OpContext
from capplane.api.schemas.common import PagedResponse, SuccessResponse
from capplane.api.schemas.domains import (
    CapabilitySummarySchema,
    RunWorkloadBody,
    WorkloadDetailSchema,
    WorkloadRunSchema,
)
from capplane.api.utils import _handle_error, _paged, _single

router = APIRouter(prefix="/workloads")


@router.get("", response_model=PagedResponse[CapabilitySummarySchema])
def list_workloads(request: Request, ctx: OpContext):
    """List workload types in registry order."""
    from capplane.ops.capabilities import list_workloads as _list

    result = _list(ctx)
    if not result.success:
        return _handle_error(result, instance=str(request.url))
    return _paged(result)


@router.get("/{name}", response_model=SuccessResponse[WorkloadDetailSchema])
def get_workload(
    request: Request,
    ctx: OpContext,
    name: str = Path(..., description="Workload type name or short alias"),
):
    """Get one workload type."""
    from capplane.ops.capabilities import get_workload as _get

    result = _get(ctx, name)
    if not result.success:
        return _handle_error(result, instance=str(request.url))
    return _single(result)


@router.post("", response_model=SuccessResponse[WorkloadRunSchema])
def run_workload(
    request: Request,
    response: Response,
    ctx: OpContext,
    body: RunWorkloadBody,
):
    """Stage or apply a workload.

    Returns 201 when a new resource was created, 200 when it was staged or
    an existing resource was updated.
    """
    from capplane.capabilities.params import RawParam
    from capplane.ops.requests import RunWorkloadRequest
    from capplane.ops.workloads import run_workload as _run

    run_request = RunWorkloadRequest(
        env=body.env_name,
        workload_type=body.workload_type,
        workload_name=body.workload_name,
        app_group=body.app_group,
        staging=body.staging,
        parameters=[RawParam(name=flag.name, value=flag.value) for flag in body.flags],
    )
    result = _run(ctx, run_request)
    if not result.success:
        return _handle_error(result, instance=str(request.url))

    if result.data.created:
        response.status_code = 201
    return _single(result)
