"""
API-specific settings.

Extends :class:`~capplane.core.settings.CapPlaneSettings` with parameters
that govern the REST transport (bind address, prefix, CORS).

All values can be overridden via environment variables prefixed with
``CAPPLANE_`` (for example ``CAPPLANE_API_PREFIX``).
"""

from __future__ import annotations

from pydantic import Field

from capplane import __version__
from capplane.core.settings import CapPlaneSettings


class CapPlaneAPISettings(CapPlaneSettings):
    """Settings for the capplane REST API.

    Order of precedence (highest → lowest):
        1. Environment variables (``CAPPLANE_API_PREFIX``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=12100, description="Bind port")
    debug: bool = Field(default=False, description="Expose exception text in 500 responses")

    # ── API ──────────────────────────────────────────────────────────────
    api_prefix: str = Field(default="/api/v1", description="URL prefix for all endpoints")
    api_title: str = Field(default="capplane API", description="OpenAPI title")
    api_version: str = Field(default=__version__, description="OpenAPI version string")

    # ── CORS ─────────────────────────────────────────────────────────────
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
