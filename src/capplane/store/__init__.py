"""Resource store implementations (stand-ins for the cluster object store)."""

from capplane.store.base import identity_of
from capplane.store.memory import InMemoryResourceStore
from capplane.store.sqlite import SqliteResourceStore

__all__ = ["InMemoryResourceStore", "SqliteResourceStore", "identity_of"]
