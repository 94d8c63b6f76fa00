"""Schemas for derived task statistics."""

from __future__ import annotations

from datetime import date

from pydantic import Field
from sqlmodel import SQLModel
from sqlmodel._compat import SQLModelConfig

RUNTIME_ANNOTATION_TYPES = (date,)


class CategoryBreakdown(SQLModel):
    """Task totals for one category."""

    category: str
    total: int
    completed: int
    color: str


class StatisticsRead(SQLModel):
    """Aggregate counts recomputed from the current task and category snapshot."""

    model_config = SQLModelConfig(validate_by_name=True)

    total_tasks: int = Field(alias="totalTasks")
    completed_tasks: int = Field(alias="completedTasks")
    completion_rate: float = Field(
        alias="completionRate",
        ge=0,
        le=100,
        description="Percentage of completed tasks, rounded to 2 places; 0 with no tasks.",
    )
    tasks_by_category: list[CategoryBreakdown] = Field(
        default_factory=list,
        alias="tasksByCategory",
    )
    tasks_this_week: int = Field(alias="tasksThisWeek")
    upcoming_tasks: int = Field(alias="upcomingTasks")
    overdue_tasks: int = Field(alias="overdueTasks")
    today_tasks: int = Field(alias="todayTasks")
    tomorrow_tasks: int = Field(alias="tomorrowTasks")


class DailyProgress(SQLModel):
    """Tasks created on one day and how many of them are completed."""

    model_config = SQLModelConfig(validate_by_name=True)

    day: date = Field(alias="date")
    total: int
    completed: int
    completion_rate: float = Field(alias="completionRate")
