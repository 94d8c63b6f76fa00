"""Task repository: CRUD, completion toggling, and filtering over the store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, timedelta
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from task_planner.core.errors import NotFoundError, ValidationError
from task_planner.core.logging import get_logger
from task_planner.core.storage_mode import WeekStart
from task_planner.core.time import local_day
from task_planner.models.tasks import Task, TaskPriority
from task_planner.services.windows import Calendar, DateWindow

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date, datetime

    from task_planner.db.store import EntityStore
    from task_planner.schemas.tasks import TaskCreate, TaskUpdate

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TaskFilter:
    """AND-combined task predicates; `None` disables a predicate."""

    category: str | None = None
    completed: bool | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None
    due_from: date | None = None
    due_to: date | None = None
    window: DateWindow | None = None


def sort_by_due_date(tasks: list[Task]) -> list[Task]:
    """Stable ascending sort on due date, then time of day."""
    return sorted(tasks, key=lambda task: task.sort_key)


def _validation_message(exc: PydanticValidationError) -> str:
    fields = sorted({str(error["loc"][0]) for error in exc.errors() if error.get("loc")})
    if not fields:
        return "Invalid task payload"
    return f"Invalid task field(s): {', '.join(fields)}"


class TaskRepository:
    """Task operations against an open `EntityStore`."""

    def __init__(
        self,
        store: EntityStore,
        *,
        week_start: WeekStart = WeekStart.SUNDAY,
    ) -> None:
        self.store = store
        self.week_start = week_start

    @property
    def clock(self) -> Callable[[], datetime]:
        return self.store.clock

    def _index_of(self, task_id: str) -> int:
        for index, task in enumerate(self.store.tasks):
            if task.id == task_id:
                return index
        raise NotFoundError("Task", task_id)

    def get_all(self) -> list[Task]:
        """All tasks in store order."""
        return [task.model_copy() for task in self.store.tasks]

    def get_by_id(self, task_id: str) -> Task:
        return self.store.tasks[self._index_of(task_id)].model_copy()

    def create(self, payload: TaskCreate) -> Task:
        """Create a task with defaults applied; `title` and `category` are required."""
        title = (payload.title or "").strip()
        category = (payload.category or "").strip()
        if not title or not category:
            msg = "Title and category are required"
            raise ValidationError(msg)

        now = self.clock()
        task = Task(
            title=title,
            description=payload.description or "",
            category=category,
            priority=payload.priority or TaskPriority.MEDIUM,
            due_date=payload.due_date or local_day(now) + timedelta(days=1),
            time=payload.time or "",
            completed=False,
            created_at=now.astimezone(UTC),
        )
        with self.store.mutation():
            self.store.tasks.append(task)
        logger.info("task.created", extra={"task_id": task.id, "category": task.category})
        return task.model_copy()

    def update(self, task_id: str, payload: TaskUpdate) -> Task:
        """Shallow-merge the fields present in *payload* onto the stored task.

        The category is not checked against existing categories, but `title`
        and `category` may not be set blank.
        """
        changes = payload.model_dump(exclude_unset=True)
        for field in ("title", "category"):
            if field not in changes:
                continue
            value = (changes[field] or "").strip()
            if not value:
                msg = f"Task {field} cannot be blank"
                raise ValidationError(msg)
            changes[field] = value
        for field in ("description", "time"):
            if field in changes and changes[field] is None:
                changes[field] = ""
        with self.store.mutation():
            index = self._index_of(task_id)
            current = self.store.tasks[index]
            try:
                updated = Task.model_validate({**current.model_dump(), **changes})
            except PydanticValidationError as exc:
                raise ValidationError(_validation_message(exc)) from exc
            self.store.tasks[index] = updated
        logger.info(
            "task.updated",
            extra={"task_id": task_id, "fields": sorted(changes)},
        )
        return updated.model_copy()

    def delete(self, task_id: str) -> None:
        """Remove a task; a missing id raises `NotFoundError`."""
        with self.store.mutation():
            index = self._index_of(task_id)
            del self.store.tasks[index]
        logger.info("task.deleted", extra={"task_id": task_id})

    def toggle_completion(self, task_id: str) -> Task:
        with self.store.mutation():
            task = self.store.tasks[self._index_of(task_id)]
            task.completed = not task.completed
        logger.info(
            "task.toggled",
            extra={"task_id": task_id, "completed": task.completed},
        )
        return task.model_copy()

    def filter(self, criteria: TaskFilter) -> list[Task]:
        """Tasks matching every set predicate, sorted by due date ascending."""
        calendar = Calendar.at(self.clock(), self.week_start)
        matches = [task for task in self.get_all() if _matches(task, criteria, calendar)]
        return sort_by_due_date(matches)


def _matches(task: Task, criteria: TaskFilter, calendar: Calendar) -> bool:
    if criteria.category is not None and task.category != criteria.category:
        return False
    if criteria.completed is not None and task.completed != criteria.completed:
        return False
    if criteria.priority is not None and task.priority != criteria.priority:
        return False
    if criteria.due_date is not None and task.due_date != criteria.due_date:
        return False
    if criteria.due_from is not None and task.due_date < criteria.due_from:
        return False
    if criteria.due_to is not None and task.due_date > criteria.due_to:
        return False
    return criteria.window is None or calendar.contains(criteria.window, task)
