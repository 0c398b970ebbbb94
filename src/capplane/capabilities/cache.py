"""Locally installed capability cache.

Installed capabilities (plugins) live as one JSON file per capability::

    <cache_dir>/
        workloads/
            webservice.json
            worker.json
        traits/
            scaler.json

Files are read in file-name order, which fixes the source order the registry
and the listings preserve. A missing kind directory means nothing of that
kind is installed. Unparseable files are skipped with a warning; I/O errors
propagate so the registry can degrade to cluster-only data.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from capplane.core.errors import NotFoundError
from capplane.core.logging import get_logger
from capplane.core.models import CapabilityKind

logger = get_logger(__name__)

_KIND_DIRS: dict[CapabilityKind, str] = {
    CapabilityKind.WORKLOAD: "workloads",
    CapabilityKind.TRAIT: "traits",
}


class LocalCapabilityCache:
    """Read-only view over the installed capability directory."""

    def __init__(self, cache_dir: str | Path) -> None:
        self._root = Path(cache_dir).expanduser()

    @property
    def root(self) -> Path:
        return self._root

    def kind_dir(self, kind: str | CapabilityKind) -> Path:
        return self._root / _KIND_DIRS[CapabilityKind.parse(kind)]

    def list_installed(self, kind: str) -> list[dict[str, Any]]:
        """Return the raw entries installed for *kind*, in file-name order."""
        directory = self.kind_dir(kind)
        if not directory.is_dir():
            return []

        entries: list[dict[str, Any]] = []
        for path in sorted(directory.glob("*.json")):
            try:
                entry = json.loads(path.read_text(encoding="utf-8"))
            except ValueError as exc:
                # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
                logger.warning("cache_entry_unreadable", path=str(path), error=str(exc))
                continue
            if not isinstance(entry, dict):
                logger.warning("cache_entry_not_an_object", path=str(path))
                continue
            entries.append(entry)
        return entries

    def get_installed(self, kind: str, name_or_alias: str) -> dict[str, Any]:
        """Return the first installed entry whose name or short alias matches exactly."""
        for entry in self.list_installed(kind):
            if entry.get("name") == name_or_alias:
                return entry
            if entry.get("short") and entry.get("short") == name_or_alias:
                return entry
        raise NotFoundError(f"installed {CapabilityKind.parse(kind).value}", name_or_alias)

    def __repr__(self) -> str:
        return f"LocalCapabilityCache({str(self._root)!r})"
