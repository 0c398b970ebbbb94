"""Resolve a logical environment name to its concrete target.

Lookup is exact and case-sensitive against the configured environments.
There is no default-environment fallback: an unknown name is a
:class:`NotFoundError` for the whole request.
"""

from __future__ import annotations

from typing import Any

from capplane.core.errors import NotFoundError, ValidationError
from capplane.core.models import EnvironmentContext
from capplane.core.protocols import EnvironmentStore


def build_context(name: str, config: dict[str, Any]) -> EnvironmentContext:
    """Turn one raw environment config into an :class:`EnvironmentContext`."""
    namespace = config.get("namespace")
    if not namespace:
        raise ValidationError("namespace", f"environment '{name}' has no namespace")

    hints = config.get("workload_hints") or ()
    if not isinstance(hints, list | tuple):
        raise ValidationError("workload_hints", f"environment '{name}': workload_hints must be a list")
    overrides = config.get("overrides") or {}
    if not isinstance(overrides, dict):
        raise ValidationError("overrides", f"environment '{name}': overrides must be a mapping")

    return EnvironmentContext(
        name=name,
        namespace=str(namespace),
        cluster=str(config.get("cluster", "")),
        app_group=str(config.get("app_group", "")),
        workload_hints=tuple(str(hint) for hint in hints),
        overrides={str(key): str(value) for key, value in overrides.items()},
    )


class EnvironmentResolver:
    """Resolve environment names against an :class:`EnvironmentStore`."""

    def __init__(self, store: EnvironmentStore) -> None:
        self._store = store

    def resolve(self, environment_name: str) -> EnvironmentContext:
        """
        Resolve *environment_name* exactly.

        Raises:
            NotFoundError: If no environment has exactly this name.
            ValidationError: If the environment's configuration is unusable.
        """
        environments = self._store.load()
        if environment_name not in environments:
            raise NotFoundError("environment", environment_name)
        return build_context(environment_name, environments[environment_name])

    def list(self) -> list[EnvironmentContext]:
        """Every configured environment, in configuration order."""
        return [build_context(name, config) for name, config in self._store.load().items()]
