"""SQLite-backed resource store.

The default local target for the CLI and the HTTP service: every item is a
JSON document keyed by ``(kind, namespace, name)`` in a single table. Listing
order is insertion order; an update keeps the item's original position.

Usage::

    from capplane.store.sqlite import SqliteResourceStore

    store = SqliteResourceStore("~/.capplane/store.db")
    store.create({"kind": "Workload", "metadata": {"name": "web", "namespace": "dev-ns"}})
    store.get("Workload", "web", namespace="dev-ns")
"""

from __future__ import annotations

import json
import sqlite3
import threading
from pathlib import Path
from typing import Any

from capplane.core.errors import ResourceExistsError, ResourceNotFoundError, StoreError
from capplane.store.base import identity_of

_SCHEMA = """
CREATE TABLE IF NOT EXISTS resources (
    seq       INTEGER PRIMARY KEY AUTOINCREMENT,
    kind      TEXT NOT NULL,
    namespace TEXT NOT NULL DEFAULT '',
    name      TEXT NOT NULL,
    body      TEXT NOT NULL,
    UNIQUE (kind, namespace, name)
)
"""


class SqliteConnection:
    """Thin wrapper over ``sqlite3.Connection`` with a single shared cursor."""

    def __init__(self, path: str = ":memory:", *, row_factory: Any = sqlite3.Row) -> None:
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = row_factory
        self._cursor = self._conn.cursor()

    def execute(self, sql: str, params: tuple = ()) -> Any:
        self._cursor.execute(sql, params)
        return self._cursor

    def fetchall(self) -> list:
        return self._cursor.fetchall()

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    def close(self) -> None:
        self._conn.close()

    def __repr__(self) -> str:
        return f"SqliteConnection({self._conn!r})"


class SqliteResourceStore:
    """:class:`~capplane.core.protocols.ResourceStore` persisted in SQLite."""

    def __init__(self, path: str | Path = ":memory:") -> None:
        target = str(path)
        if target != ":memory:":
            resolved = Path(target).expanduser()
            resolved.parent.mkdir(parents=True, exist_ok=True)
            target = str(resolved)
        self._lock = threading.Lock()
        try:
            self._conn = SqliteConnection(target)
            self._conn.execute(_SCHEMA)
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot open resource store at {target}: {exc}", cause=exc) from exc

    def list(self, kind: str, namespace: str | None = None) -> list[dict[str, Any]]:
        if namespace is None:
            sql, params = "SELECT body FROM resources WHERE kind = ? ORDER BY seq", (kind,)
        else:
            sql = "SELECT body FROM resources WHERE kind = ? AND namespace = ? ORDER BY seq"
            params = (kind, namespace)
        with self._lock:
            rows = self._query(sql, params)
        return [json.loads(row["body"]) for row in rows]

    def get(self, kind: str, name: str, namespace: str = "") -> dict[str, Any]:
        with self._lock:
            rows = self._query(
                "SELECT body FROM resources WHERE kind = ? AND namespace = ? AND name = ?",
                (kind, namespace, name),
            )
        if not rows:
            raise ResourceNotFoundError(kind, namespace, name)
        return json.loads(rows[0]["body"])

    def create(self, item: dict[str, Any]) -> dict[str, Any]:
        kind, namespace, name = identity_of(item)
        body = json.dumps(item)
        with self._lock:
            try:
                self._conn.execute(
                    "INSERT INTO resources (kind, namespace, name, body) VALUES (?, ?, ?, ?)",
                    (kind, namespace, name, body),
                )
                self._conn.commit()
            except sqlite3.IntegrityError as exc:
                self._conn.rollback()
                raise ResourceExistsError(kind, namespace, name) from exc
            except sqlite3.Error as exc:
                self._conn.rollback()
                raise StoreError(f"create failed: {exc}", cause=exc) from exc
        return json.loads(body)

    def update(self, item: dict[str, Any]) -> dict[str, Any]:
        kind, namespace, name = identity_of(item)
        body = json.dumps(item)
        with self._lock:
            try:
                cursor = self._conn.execute(
                    "UPDATE resources SET body = ? WHERE kind = ? AND namespace = ? AND name = ?",
                    (body, kind, namespace, name),
                )
                updated = cursor.rowcount
                self._conn.commit()
            except sqlite3.Error as exc:
                self._conn.rollback()
                raise StoreError(f"update failed: {exc}", cause=exc) from exc
        if not updated:
            raise ResourceNotFoundError(kind, namespace, name)
        return json.loads(body)

    def close(self) -> None:
        self._conn.close()

    def _query(self, sql: str, params: tuple) -> list[Any]:
        try:
            self._conn.execute(sql, params)
            return self._conn.fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"query failed: {exc}", cause=exc) from exc
