"""Full-store export, import, and reset."""

from __future__ import annotations

from datetime import UTC
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from task_planner.core.errors import ValidationError
from task_planner.core.logging import get_logger
from task_planner.db.seed import seed_categories, seed_tasks
from task_planner.models.categories import Category
from task_planner.models.tasks import Task
from task_planner.schemas.categories import CategoryRead
from task_planner.schemas.data_transfer import EXPORT_VERSION, DataExport
from task_planner.schemas.tasks import TaskRead

if TYPE_CHECKING:
    from task_planner.db.store import EntityStore
    from task_planner.schemas.data_transfer import DataImport

logger = get_logger(__name__)


def _validate_records(
    model: type[Task] | type[Category],
    records: list[Any],
    label: str,
) -> list[Any]:
    try:
        return [model.model_validate(record, from_attributes=True) for record in records]
    except PydanticValidationError as exc:
        msg = f"Import contains invalid {label} records ({exc.error_count()} error(s))"
        raise ValidationError(msg) from exc


class DataTransferService:
    """Moves whole snapshots in and out of the store.

    Imported records are validated before anything is replaced, so a rejected
    import leaves both collections untouched. Record order is preserved.
    """

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def export(self) -> DataExport:
        tasks, categories = self.store.snapshot()
        return DataExport(
            tasks=[TaskRead.model_validate(task, from_attributes=True) for task in tasks],
            categories=[
                CategoryRead.model_validate(category, from_attributes=True)
                for category in categories
            ],
            export_date=self.store.clock().astimezone(UTC),
            version=EXPORT_VERSION,
        )

    def import_snapshot(self, snapshot: DataImport) -> None:
        tasks = (
            _validate_records(Task, snapshot.tasks, "task")
            if isinstance(snapshot.tasks, list)
            else None
        )
        categories = (
            _validate_records(Category, snapshot.categories, "category")
            if isinstance(snapshot.categories, list)
            else None
        )
        self.store.replace(tasks=tasks, categories=categories)
        logger.info(
            "data.imported",
            extra={
                "tasks": len(tasks) if tasks is not None else None,
                "categories": len(categories) if categories is not None else None,
            },
        )

    def reset(self) -> None:
        """Replace both collections with the built-in seed data."""
        self.store.replace(tasks=seed_tasks(self.store.clock()), categories=seed_categories())
        logger.info("data.reset")
