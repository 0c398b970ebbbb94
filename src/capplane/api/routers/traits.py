"""
Traits router - trait listings and trait detail.

Endpoints:
    GET /traits                    List traits (optionally ?workload=TYPE)
    GET /traits/applicability      Traits compatible with each workload type
    GET /traits/{name}             One trait by name or short alias
"""

from __future__ import annotations

from fastapi import APIRouter, Path, Query, Request

from capplane.api.deps import OpContext
from capplane.api.schemas.common import PagedResponse, SuccessResponse
from capplane.api.schemas.domains import CapabilitySummarySchema, TraitApplicabilitySchema, TraitDetailSchema
from capplane.api.utils import _handle_error, _paged, _single

router = APIRouter(prefix="/traits")


@router.get("", response_model=PagedResponse[CapabilitySummarySchema])
def list_traits(
    request: Request,
    ctx: OpContext,
    workload: str = Query("", description="Only traits applying to this workload type"),
):
    """List traits in registry order.

    Without a filter every trait with at least one applicable workload type
    is listed, ``appliesTo`` joined with ``", "``. With a filter only traits
    declaring that workload type are listed, and ``appliesTo`` is the filter.
    """
    from capplane.ops.capabilities import list_traits as _list
    from capplane.ops.requests import ListTraitsRequest

    result = _list(ctx, ListTraitsRequest(workload=workload))
    if not result.success:
        return _handle_error(result, instance=str(request.url))
    return _paged(result)


@router.get("/applicability", response_model=PagedResponse[TraitApplicabilitySchema])
def trait_applicability(request: Request, ctx: OpContext):
    """For every workload type, the traits declared compatible with it."""
    from capplane.ops.capabilities import list_trait_applicability

    result = list_trait_applicability(ctx)
    if not result.success:
        return _handle_error(result, instance=str(request.url))
    return _paged(result)


@router.get("/{name}", response_model=SuccessResponse[TraitDetailSchema])
def get_trait(
    request: Request,
    ctx: OpContext,
    name: str = Path(..., description="Trait name or short alias"),
):
    """Get one trait."""
    from capplane.ops.capabilities import get_trait as _get

    result = _get(ctx, name)
    if not result.success:
        return _handle_error(result, instance=str(request.url))
    return _single(result)
