"""Environment resolution."""

from capplane.environments.resolver import EnvironmentResolver, build_context
from capplane.environments.stores import FileEnvironmentStore, StaticEnvironmentStore

__all__ = [
    "EnvironmentResolver",
    "FileEnvironmentStore",
    "StaticEnvironmentStore",
    "build_context",
]
