"""Task model representing a single unit of planned work."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from enum import Enum
from uuid import uuid4

from pydantic import Field, field_validator
from sqlmodel import SQLModel
from sqlmodel._compat import SQLModelConfig

from task_planner.core.time import local_day, localnow, utcnow

RUNTIME_ANNOTATION_TYPES = (date, datetime)
DEFAULT_REMINDER_TIME = "10:00"
_TIME_OF_DAY = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class TaskPriority(str, Enum):
    """Supported task priorities."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def new_id() -> str:
    """Generate an opaque record identifier."""
    return str(uuid4())


def default_due_date() -> date:
    """Tomorrow, as a local calendar day."""
    return local_day(localnow()) + timedelta(days=1)


def coerce_due_date(value: object) -> object:
    """Reduce ISO timestamps (and datetimes) to their local calendar day.

    Plain `YYYY-MM-DD` strings and `date` values pass through untouched.
    """
    if isinstance(value, datetime):
        return local_day(value)
    if isinstance(value, str) and len(value) > 10 and "T" in value:
        try:
            return local_day(datetime.fromisoformat(value))
        except ValueError:
            return value
    return value


def validate_time_of_day(value: object) -> str | None:
    """Accept `HH:MM` (24h) or an empty string."""
    if value is None or value == "":
        return value
    if not isinstance(value, str) or not _TIME_OF_DAY.match(value.strip()):
        msg = "time must use the HH:MM 24-hour format"
        raise ValueError(msg)
    return value.strip()


class Task(SQLModel):
    """Persisted task record; JSON keys follow the camelCase storage format."""

    model_config = SQLModelConfig(validate_by_name=True)

    id: str = Field(default_factory=new_id)
    title: str = Field(min_length=1)
    description: str = ""
    # Joins on Category.name, not Category.id.
    category: str = Field(min_length=1)
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date = Field(default_factory=default_due_date, alias="dueDate")
    time: str = ""
    completed: bool = False
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")

    @field_validator("due_date", mode="before")
    @classmethod
    def _coerce_due_date(cls, value: object) -> object:
        return coerce_due_date(value)

    @field_validator("time", mode="before")
    @classmethod
    def _validate_time(cls, value: object) -> str:
        return validate_time_of_day(value) or ""

    @property
    def sort_key(self) -> tuple[date, str]:
        """Ordering used wherever tasks are presented by due date."""
        return (self.due_date, self.time)
