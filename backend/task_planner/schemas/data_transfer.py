"""Schemas for full-store export and import documents."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field
from sqlmodel import SQLModel
from sqlmodel._compat import SQLModelConfig

from task_planner.schemas.categories import CategoryRead
from task_planner.schemas.tasks import TaskRead

RUNTIME_ANNOTATION_TYPES = (datetime,)
EXPORT_VERSION = "1.0"


class DataExport(SQLModel):
    """Portable snapshot of every task and category."""

    model_config = SQLModelConfig(validate_by_name=True)

    tasks: list[TaskRead]
    categories: list[CategoryRead]
    export_date: datetime = Field(alias="exportDate")
    version: str = EXPORT_VERSION


class DataImport(SQLModel):
    """Import document; each half is applied only when it is a list."""

    tasks: Any = None
    categories: Any = None
