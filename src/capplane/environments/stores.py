"""Environment configuration sources.

``FileEnvironmentStore`` reads the YAML environments file::

    environments:
      dev:
        namespace: dev-ns
        cluster: https://dev.example:6443
        app_group: dev-apps
        workload_hints: [webservice]
        overrides:
          replicas: "1"

``StaticEnvironmentStore`` serves a fixed mapping (embedding, tests).
Neither store creates environments.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from capplane.core.errors import ValidationError


class FileEnvironmentStore:
    """Environments loaded from a YAML file on every call."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, dict[str, Any]]:
        """Raw environment configs keyed by name; empty when the file is absent."""
        if not self._path.exists():
            return {}

        with self._path.open(encoding="utf-8") as fh:
            document = yaml.safe_load(fh) or {}

        if not isinstance(document, dict):
            raise ValidationError("environments", f"{self._path} must contain a mapping")
        environments = document.get("environments") or {}
        if not isinstance(environments, dict):
            raise ValidationError("environments", f"{self._path}: 'environments' must be a mapping")
        loaded: dict[str, dict[str, Any]] = {}
        for name, config in environments.items():
            if config is not None and not isinstance(config, dict):
                raise ValidationError("environments", f"{self._path}: environment '{name}' must be a mapping")
            loaded[str(name)] = dict(config or {})
        return loaded


class StaticEnvironmentStore:
    """Environments served from an in-memory mapping."""

    def __init__(self, environments: dict[str, dict[str, Any]] | None = None) -> None:
        self._environments = {name: dict(config) for name, config in (environments or {}).items()}

    def load(self) -> dict[str, dict[str, Any]]:
        return {name: dict(config) for name, config in self._environments.items()}
