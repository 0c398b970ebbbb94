"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers and lifespan
events into a single ``FastAPI`` instance. It is the only place in the
codebase that touches ``FastAPI`` directly.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from capplane.api.deps import get_settings
from capplane.api.middleware.errors import unhandled_exception_handler
from capplane.api.middleware.request_id import RequestIDMiddleware
from capplane.api.settings import CapPlaneAPISettings
from capplane.core.logging import configure_logging, get_logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup / shutdown hooks."""
    log = get_logger("capplane.api")
    settings = app.state.settings
    log.info(
        "capplane_api_starting",
        version=app.version,
        store=str(settings.resolved_store_path),
        cache_dir=str(settings.resolved_cache_dir),
    )
    yield
    log.info("capplane_api_stopping")


def create_app(
    *,
    settings: CapPlaneAPISettings | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : CapPlaneAPISettings | None
        Override settings (useful for testing). When ``None`` the cached
        singleton from :func:`get_settings` is used.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json, service="capplane-api")

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from capplane.api.routers import environments, health, traits, workloads

    prefix = settings.api_prefix

    # Root-level health for container probes, plus the prefixed one.
    app.include_router(health.router, tags=["health"])
    app.include_router(health.router, prefix=prefix, tags=["health"])
    app.include_router(traits.router, prefix=prefix, tags=["traits"])
    app.include_router(workloads.router, prefix=prefix, tags=["workloads"])
    app.include_router(environments.router, prefix=prefix, tags=["environments"])

    return app
