"""
Health router.

Endpoints:
    GET /health        Liveness plus service identity
"""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health(request: Request) -> dict[str, str]:
    """Always 200 while the process serves requests."""
    settings = request.app.state.settings
    return {"status": "healthy", "service": "capplane", "version": settings.api_version}
