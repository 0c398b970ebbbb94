"""
Environments router - read-only view of configured environments.

Endpoints:
    GET /environments           List environments
    GET /environments/{name}    One environment (exact, case-sensitive)
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Request

from capplane.api.deps import OpContext
from capplane.api.schemas.common import PagedResponse, SuccessResponse
from capplane.api.schemas.domains import EnvironmentDetailSchema, EnvironmentSummarySchema
from capplane.api.utils import _handle_error, _paged, _single

router = APIRouter(prefix="/environments")


@router.get("", response_model=PagedResponse[EnvironmentSummarySchema])
def list_environments(request: Request, ctx: OpContext):
    """List configured environments."""
    from capplane.ops.environments import list_environments as _list

    result = _list(ctx)
    if not result.success:
        return _handle_error(result, instance=str(request.url))
    return _paged(result)


@router.get("/{name}", response_model=SuccessResponse[EnvironmentDetailSchema])
def get_environment(
    request: Request,
    ctx: OpContext,
    name: str = Path(..., description="Environment name"),
):
    """Resolve one environment."""
    from capplane.ops.environments import get_environment as _get

    result = _get(ctx, name)
    if not result.success:
        return _handle_error(result, instance=str(request.url))
    return _single(result)
