"""Shared settings for capplane.

``CapPlaneSettings`` locates the local state the control plane works
against: the resource store, the installed capability cache and the
environments file. Transports (CLI, API) build their collaborators from
these settings.

Fields can be overridden via environment variables prefixed with
``CAPPLANE_`` or a ``.env`` file.

Examples:
    >>> from capplane.core.settings import CapPlaneSettings
    >>> settings = CapPlaneSettings(data_dir="/tmp/capplane")
    >>> settings.resolved_cache_dir
    PosixPath('/tmp/capplane/capabilities')
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CapPlaneSettings(BaseSettings):
    """Common settings shared by the CLI and the API.

    Fields
    ──────
    data_dir          : Root directory for local state
    store_path        : SQLite file backing the resource store
    cache_dir         : Installed capability cache directory
    environments_file : YAML file with the configured environments
    log_level         : structlog log level
    log_json          : Force JSON logs (``None`` auto-detects)
    concurrent_fetch  : Fetch cluster and cache definitions in parallel
    """

    model_config = SettingsConfigDict(
        env_prefix="CAPPLANE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Storage ──────────────────────────────────────────────────
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".capplane",
        description="Root directory for local state",
    )
    store_path: Path | None = Field(default=None, description="SQLite resource store file")
    cache_dir: Path | None = Field(default=None, description="Installed capability cache directory")
    environments_file: Path | None = Field(default=None, description="Environments YAML file")

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    log_json: bool | None = None

    # ── Registry ─────────────────────────────────────────────────
    concurrent_fetch: bool = True

    @property
    def resolved_store_path(self) -> Path:
        return self.store_path or self.data_dir.expanduser() / "store.db"

    @property
    def resolved_cache_dir(self) -> Path:
        return self.cache_dir or self.data_dir.expanduser() / "capabilities"

    @property
    def resolved_environments_file(self) -> Path:
        return self.environments_file or self.data_dir.expanduser() / "environments.yaml"
