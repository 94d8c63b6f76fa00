"""Domain error types raised by the store and repositories."""

from __future__ import annotations


class TaskPlannerError(Exception):
    """Base class for errors the API layer maps onto HTTP responses."""

    code = "task_planner_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(TaskPlannerError):
    """An operation targeted an id that is not in the store."""

    code = "not_found"

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.entity_id = entity_id


class ValidationError(TaskPlannerError):
    """A required field is missing or a payload is malformed."""

    code = "validation_error"


class CategoryInUseError(TaskPlannerError):
    """A category delete was blocked by tasks still referencing its name."""

    code = "category_in_use"

    def __init__(self, name: str, count: int) -> None:
        super().__init__(
            f'Cannot delete category "{name}" because it is being used by {count} task(s). '
            "Please reassign or delete those tasks first.",
        )
        self.name = name
        self.count = count


class PersistenceError(TaskPlannerError):
    """Reading or writing the storage backend failed."""

    code = "persistence_failure"
