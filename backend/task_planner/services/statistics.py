"""Statistics engine: aggregates derived from a task and category snapshot.

Everything here is a pure function of its inputs; nothing is cached.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from task_planner.core.storage_mode import WeekStart
from task_planner.core.time import local_day
from task_planner.schemas.statistics import CategoryBreakdown, DailyProgress, StatisticsRead
from task_planner.services.windows import Calendar, DateWindow

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date, datetime

    from task_planner.db.store import EntityStore
    from task_planner.models.categories import Category
    from task_planner.models.tasks import Task

PROGRESS_DAYS = 30


def completion_rate(completed: int, total: int) -> float:
    """Percentage rounded to 2 places; 0 when there is nothing to complete."""
    if total <= 0:
        return 0.0
    return round(completed / total * 100, 2)


def compute_statistics(
    tasks: Sequence[Task],
    categories: Sequence[Category],
    *,
    now: datetime,
    week_start: WeekStart = WeekStart.SUNDAY,
) -> StatisticsRead:
    calendar = Calendar.at(now, week_start)

    def count(window: DateWindow) -> int:
        return sum(1 for task in tasks if calendar.contains(window, task))

    total = len(tasks)
    completed = sum(1 for task in tasks if task.completed)
    breakdown = [
        CategoryBreakdown(
            category=category.name,
            total=sum(1 for task in tasks if task.category == category.name),
            completed=sum(
                1 for task in tasks if task.category == category.name and task.completed
            ),
            color=category.color,
        )
        for category in categories
    ]
    return StatisticsRead(
        total_tasks=total,
        completed_tasks=completed,
        completion_rate=completion_rate(completed, total),
        tasks_by_category=breakdown,
        tasks_this_week=count(DateWindow.WEEK),
        upcoming_tasks=count(DateWindow.UPCOMING),
        overdue_tasks=count(DateWindow.OVERDUE),
        today_tasks=count(DateWindow.TODAY),
        tomorrow_tasks=count(DateWindow.TOMORROW),
    )


def progress_over_time(
    tasks: Sequence[Task],
    *,
    now: datetime,
    days: int = PROGRESS_DAYS,
) -> list[DailyProgress]:
    """Per-day creation and completion counts for the last *days* days, oldest first."""
    today = local_day(now)
    created_on: dict[date, list[Task]] = {}
    for task in tasks:
        created_on.setdefault(local_day(task.created_at), []).append(task)

    progress: list[DailyProgress] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        day_tasks = created_on.get(day, [])
        done = sum(1 for task in day_tasks if task.completed)
        progress.append(
            DailyProgress(
                day=day,
                total=len(day_tasks),
                completed=done,
                completion_rate=completion_rate(done, len(day_tasks)),
            ),
        )
    return progress


class StatisticsService:
    """Reads one store snapshot per call and feeds it to the pure functions."""

    def __init__(
        self,
        store: EntityStore,
        *,
        week_start: WeekStart = WeekStart.SUNDAY,
    ) -> None:
        self.store = store
        self.week_start = week_start

    def get_all(self) -> StatisticsRead:
        tasks, categories = self.store.snapshot()
        return compute_statistics(
            tasks,
            categories,
            now=self.store.clock(),
            week_start=self.week_start,
        )

    def progress(self, days: int = PROGRESS_DAYS) -> list[DailyProgress]:
        tasks, _ = self.store.snapshot()
        return progress_over_time(tasks, now=self.store.clock(), days=days)
