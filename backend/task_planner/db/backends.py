"""Storage backends that persist the raw task and category collections.

Both backends rewrite whole collections on every save. A backend reports an
absent collection as `None` so the store can tell "never written" apart from
"written empty".
"""

from __future__ import annotations

import json
import os
from collections.abc import MutableMapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from task_planner.core.errors import PersistenceError
from task_planner.core.logging import get_logger

logger = get_logger(__name__)

TASKS_KEY = "taskPlanner_tasks"
CATEGORIES_KEY = "taskPlanner_categories"

Record = dict[str, Any]


@dataclass(slots=True)
class StoredCollections:
    """Raw JSON records as read from or written to a backend."""

    tasks: list[Record] | None = None
    categories: list[Record] | None = None


class StorageBackend(Protocol):
    """Load/save contract shared by every persistence backend."""

    description: str

    def load(self) -> StoredCollections:
        """Read both collections; raise `PersistenceError` when unreadable."""
        ...

    def save(self, collections: StoredCollections) -> None:
        """Overwrite both collections; raise `PersistenceError` on failure."""
        ...


def _as_record_list(value: object) -> list[Record] | None:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, dict)]


class JsonFileBackend:
    """Single JSON document `{"tasks": [...], "categories": [...]}` on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.description = f"file:{self.path}"

    def load(self) -> StoredCollections:
        if not self.path.exists():
            return StoredCollections()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            msg = f"Could not read data file {self.path}: {exc}"
            raise PersistenceError(msg) from exc
        if not isinstance(data, dict):
            msg = f"Data file {self.path} does not contain a JSON object"
            raise PersistenceError(msg)
        return StoredCollections(
            tasks=_as_record_list(data.get("tasks")),
            categories=_as_record_list(data.get("categories")),
        )

    def save(self, collections: StoredCollections) -> None:
        document = {
            "tasks": collections.tasks or [],
            "categories": collections.categories or [],
        }
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            msg = f"Could not write data file {self.path}: {exc}"
            raise PersistenceError(msg) from exc
        logger.debug("store.backend.saved", extra={"backend": self.description})


class KeyValueBackend:
    """Collections stored as JSON strings under fixed keys of a string mapping.

    Any `MutableMapping[str, str]` works: a plain dict for an in-memory store,
    or a `shelve`/dbm handle for a local storage area.
    """

    def __init__(self, storage: MutableMapping[str, str] | None = None) -> None:
        self.storage: MutableMapping[str, str] = {} if storage is None else storage
        self.description = f"kv:{type(self.storage).__name__}"

    def _read(self, key: str) -> list[Record] | None:
        raw = self.storage.get(key)
        if raw is None:
            return None
        try:
            value = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as exc:
            msg = f"Could not decode stored value for {key}: {exc}"
            raise PersistenceError(msg) from exc
        return _as_record_list(value)

    def load(self) -> StoredCollections:
        return StoredCollections(
            tasks=self._read(TASKS_KEY),
            categories=self._read(CATEGORIES_KEY),
        )

    def save(self, collections: StoredCollections) -> None:
        try:
            self.storage[TASKS_KEY] = json.dumps(collections.tasks or [])
            self.storage[CATEGORIES_KEY] = json.dumps(collections.categories or [])
        except (OSError, TypeError, ValueError) as exc:
            msg = f"Could not write to {self.description}: {exc}"
            raise PersistenceError(msg) from exc
