"""Category model grouping tasks under a named, colored label."""

from __future__ import annotations

from pydantic import Field
from sqlmodel import SQLModel

from task_planner.models.tasks import new_id

DEFAULT_CATEGORY_COLOR = "#6B7280"


class Category(SQLModel):
    """Persisted category record."""

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1)
    color: str = DEFAULT_CATEGORY_COLOR
