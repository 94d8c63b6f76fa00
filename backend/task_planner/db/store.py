"""In-memory entity store with an explicit open/flush/close lifecycle."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from task_planner.core.errors import PersistenceError
from task_planner.core.logging import get_logger
from task_planner.core.storage_mode import StorageMode
from task_planner.core.time import localnow
from task_planner.db.backends import (
    JsonFileBackend,
    KeyValueBackend,
    Record,
    StorageBackend,
    StoredCollections,
)
from task_planner.db.seed import seed_categories, seed_tasks
from task_planner.models.categories import Category
from task_planner.models.tasks import Task

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence
    from datetime import datetime

    from task_planner.core.config import Settings

logger = get_logger(__name__)


def _parse_tasks(records: Sequence[Record]) -> list[Task]:
    return [Task.model_validate(record) for record in records]


def _parse_categories(records: Sequence[Record]) -> list[Category]:
    return [Category.model_validate(record) for record in records]


class EntityStore:
    """Sole owner of the task and category collections.

    Every mutation happens inside `mutation()`, which holds the store lock and
    flushes both collections to the backend when the block exits cleanly.
    """

    def __init__(
        self,
        backend: StorageBackend,
        *,
        seed_on_first_run: bool = True,
        clock: Callable[[], datetime] = localnow,
    ) -> None:
        self.backend = backend
        self.seed_on_first_run = seed_on_first_run
        self.clock = clock
        self._tasks: list[Task] = []
        self._categories: list[Category] = []
        self._lock = threading.RLock()
        self._is_open = False

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def tasks(self) -> list[Task]:
        self._require_open()
        return self._tasks

    @property
    def categories(self) -> list[Category]:
        self._require_open()
        return self._categories

    def _require_open(self) -> None:
        if not self._is_open:
            msg = "EntityStore is not open"
            raise RuntimeError(msg)

    def open(self) -> None:
        """Load both collections, seeding any collection that was never written."""
        with self._lock:
            try:
                stored = self.backend.load()
                tasks = _parse_tasks(stored.tasks) if stored.tasks is not None else None
                categories = (
                    _parse_categories(stored.categories)
                    if stored.categories is not None
                    else None
                )
            except (PersistenceError, PydanticValidationError) as exc:
                # Keep the unreadable data in place until the next mutation overwrites it.
                logger.error(
                    "store.load.failed",
                    extra={"backend": self.backend.description, "error": str(exc)},
                )
                self._tasks = self._default_tasks()
                self._categories = self._default_categories()
                self._is_open = True
                return

            seeded = False
            if tasks is None:
                tasks = self._default_tasks()
                seeded = self.seed_on_first_run
            if categories is None:
                categories = self._default_categories()
                seeded = self.seed_on_first_run
            self._tasks = tasks
            self._categories = categories
            self._is_open = True
            logger.info(
                "store.opened",
                extra={
                    "backend": self.backend.description,
                    "tasks": len(self._tasks),
                    "categories": len(self._categories),
                    "seeded": seeded,
                },
            )
            if seeded:
                self.flush()

    def _default_tasks(self) -> list[Task]:
        return seed_tasks(self.clock()) if self.seed_on_first_run else []

    def _default_categories(self) -> list[Category]:
        return seed_categories() if self.seed_on_first_run else []

    def flush(self) -> None:
        """Write both collections to the backend in full."""
        with self._lock:
            self._require_open()
            collections = StoredCollections(
                tasks=[task.model_dump(mode="json", by_alias=True) for task in self._tasks],
                categories=[
                    category.model_dump(mode="json", by_alias=True)
                    for category in self._categories
                ],
            )
            try:
                self.backend.save(collections)
            except PersistenceError as exc:
                logger.error(
                    "store.flush.failed",
                    extra={"backend": self.backend.description, "error": str(exc)},
                )
                raise

    def close(self) -> None:
        """Release the store; further access requires `open()` again."""
        with self._lock:
            if not self._is_open:
                return
            self._is_open = False
            logger.info("store.closed", extra={"backend": self.backend.description})

    @contextmanager
    def mutation(self) -> Iterator[None]:
        """Serialize a read-modify-persist cycle and flush on success."""
        with self._lock:
            self._require_open()
            yield
            self.flush()

    def replace(
        self,
        *,
        tasks: list[Task] | None = None,
        categories: list[Category] | None = None,
    ) -> None:
        """Swap out whole collections; `None` leaves a collection untouched."""
        with self.mutation():
            if tasks is not None:
                self._tasks = list(tasks)
            if categories is not None:
                self._categories = list(categories)

    def snapshot(self) -> tuple[list[Task], list[Category]]:
        """Return copies of both collections taken under one lock acquisition."""
        with self._lock:
            self._require_open()
            return (
                [task.model_copy() for task in self._tasks],
                [category.model_copy() for category in self._categories],
            )


def build_backend(config: Settings) -> StorageBackend:
    """Construct the backend selected by *config*."""
    if config.storage_backend == StorageMode.MEMORY:
        return KeyValueBackend()
    return JsonFileBackend(config.data_path)


def build_store(config: Settings) -> EntityStore:
    """Construct an unopened store wired to the configured backend."""
    return EntityStore(build_backend(config), seed_on_first_run=config.seed_on_first_run)
