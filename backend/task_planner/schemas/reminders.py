"""Schemas for computed task reminders."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field
from sqlmodel import SQLModel
from sqlmodel._compat import SQLModelConfig

RUNTIME_ANNOTATION_TYPES = (datetime,)


class ReminderRead(SQLModel):
    """When a task's reminder fires and whether the task is already past due."""

    model_config = SQLModelConfig(validate_by_name=True)

    task_id: str = Field(alias="taskId")
    title: str
    remind_at: datetime = Field(alias="remindAt")
    overdue: bool
