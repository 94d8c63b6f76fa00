"""Schemas for task create, update, and read payloads."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import Field, field_validator
from sqlmodel import SQLModel
from sqlmodel._compat import SQLModelConfig

from task_planner.models.tasks import TaskPriority, coerce_due_date, validate_time_of_day

RUNTIME_ANNOTATION_TYPES = (date, datetime)


class _TaskFields(SQLModel):
    model_config = SQLModelConfig(validate_by_name=True)

    @field_validator("due_date", mode="before", check_fields=False)
    @classmethod
    def _coerce_due_date(cls, value: object) -> object:
        return coerce_due_date(value)

    @field_validator("time", mode="before", check_fields=False)
    @classmethod
    def _validate_time(cls, value: object) -> str | None:
        return validate_time_of_day(value)


class TaskCreate(_TaskFields):
    """Payload for creating a task.

    `title` and `category` are required by the repository; they are optional
    here so a missing value is reported as a 400 rather than a schema error.
    """

    title: str | None = None
    description: str | None = None
    category: str | None = None
    priority: TaskPriority | None = None
    due_date: date | None = Field(default=None, alias="dueDate")
    time: str | None = None

    @field_validator("priority", "due_date", mode="before")
    @classmethod
    def _blank_means_default(cls, value: object) -> object:
        # Forms post "" for fields left unfilled.
        if isinstance(value, str) and not value.strip():
            return None
        return value


class TaskUpdate(_TaskFields):
    """Partial task update; only fields present in the payload are merged.

    An explicit null clears `description` or `time` to an empty string.
    """

    title: str | None = None
    description: str | None = None
    category: str | None = None
    priority: TaskPriority | None = None
    due_date: date | None = Field(default=None, alias="dueDate")
    time: str | None = None
    completed: bool | None = None


class TaskRead(SQLModel):
    """Task payload returned by read endpoints."""

    model_config = SQLModelConfig(validate_by_name=True)

    id: str
    title: str
    description: str
    category: str
    priority: TaskPriority
    due_date: date = Field(alias="dueDate")
    time: str
    completed: bool
    created_at: datetime = Field(alias="createdAt")
