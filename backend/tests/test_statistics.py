# ruff: noqa: INP001
"""Statistics engine aggregates over fixed snapshots."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from task_planner.core.errors import CategoryInUseError
from task_planner.core.storage_mode import WeekStart
from task_planner.db.backends import KeyValueBackend
from task_planner.db.seed import seed_categories, seed_tasks
from task_planner.db.store import EntityStore
from task_planner.models.categories import Category
from task_planner.models.tasks import Task
from task_planner.schemas.categories import CategoryCreate
from task_planner.schemas.tasks import TaskCreate
from task_planner.services.categories import CategoryRepository
from task_planner.services.statistics import (
    StatisticsService,
    completion_rate,
    compute_statistics,
    progress_over_time,
)
from task_planner.services.tasks import TaskRepository

NOW = datetime(2024, 1, 10, 12, 0)


def test_seed_scenario_statistics() -> None:
    stats = compute_statistics(seed_tasks(NOW), seed_categories(), now=NOW)

    assert stats.total_tasks == 3
    assert stats.completed_tasks == 1
    assert stats.completion_rate == pytest.approx(33.33)
    assert stats.tasks_this_week == 3
    assert stats.upcoming_tasks == 2
    assert stats.overdue_tasks == 0
    assert stats.today_tasks == 1
    assert stats.tomorrow_tasks == 1


def test_breakdown_lists_every_category_including_empty_ones() -> None:
    stats = compute_statistics(seed_tasks(NOW), seed_categories(), now=NOW)

    by_name = {row.category: row for row in stats.tasks_by_category}
    assert list(by_name) == ["Cloud", "DevOps", "AI", "Backend", "Frontend", "Mobile", "Database"]
    assert (by_name["Cloud"].total, by_name["Cloud"].completed) == (1, 0)
    assert (by_name["DevOps"].total, by_name["DevOps"].completed) == (1, 1)
    assert (by_name["AI"].total, by_name["AI"].completed) == (0, 0)
    assert by_name["AI"].color == "#8B5CF6"


def test_tasks_on_unknown_categories_count_only_in_totals() -> None:
    tasks = [Task(title="orphan", category="Gone", due_date=date(2024, 1, 10))]

    stats = compute_statistics(tasks, [Category(name="Cloud")], now=NOW)

    assert stats.total_tasks == 1
    assert stats.tasks_by_category[0].total == 0


def test_empty_store_has_zero_completion_rate() -> None:
    stats = compute_statistics([], [], now=NOW)

    assert stats.total_tasks == 0
    assert stats.completion_rate == 0.0
    assert stats.tasks_by_category == []


@pytest.mark.parametrize(
    ("completed", "total", "expected"),
    [(0, 0, 0.0), (0, 4, 0.0), (1, 3, 33.33), (2, 3, 66.67), (5, 5, 100.0)],
)
def test_completion_rate_is_a_rounded_percentage(
    completed: int,
    total: int,
    expected: float,
) -> None:
    assert completion_rate(completed, total) == expected


def test_overdue_excludes_completed_and_week_honors_start_day() -> None:
    tasks = [
        Task(title="late", category="AI", due_date=date(2024, 1, 8)),
        Task(title="late but done", category="AI", due_date=date(2024, 1, 8), completed=True),
        Task(title="sunday", category="AI", due_date=date(2024, 1, 14)),
    ]

    sunday_stats = compute_statistics(tasks, [], now=NOW)
    monday_stats = compute_statistics(tasks, [], now=NOW, week_start=WeekStart.MONDAY)

    assert sunday_stats.overdue_tasks == 1
    assert sunday_stats.tasks_this_week == 2
    assert monday_stats.tasks_this_week == 3


def test_progress_over_time_buckets_by_creation_day() -> None:
    progress = progress_over_time(seed_tasks(NOW), now=NOW, days=3)

    assert [row.day for row in progress] == [
        date(2024, 1, 8),
        date(2024, 1, 9),
        date(2024, 1, 10),
    ]
    assert (progress[0].total, progress[0].completion_rate) == (0, 0.0)
    assert (progress[1].total, progress[1].completed, progress[1].completion_rate) == (1, 1, 100.0)
    assert (progress[2].total, progress[2].completed) == (2, 0)


def test_service_reads_current_store_snapshot() -> None:
    store = EntityStore(KeyValueBackend(), clock=lambda: NOW)
    store.open()
    service = StatisticsService(store)

    assert service.get_all().total_tasks == 3
    store.replace(tasks=[])
    assert service.get_all().total_tasks == 0
    assert len(service.progress()) == 30


def test_work_category_scenario() -> None:
    store = EntityStore(KeyValueBackend(), seed_on_first_run=False, clock=lambda: NOW)
    store.open()
    categories = CategoryRepository(store)
    tasks = TaskRepository(store)
    stats = StatisticsService(store)

    work = categories.create(CategoryCreate(name="Work", color="#111111"))
    task = tasks.create(TaskCreate(title="X", category="Work", due_date=date(2024, 1, 10)))
    before = stats.get_all()
    tasks.toggle_completion(task.id)
    after = stats.get_all()

    assert (before.total_tasks, before.completed_tasks, before.completion_rate) == (1, 0, 0.0)
    assert (after.completed_tasks, after.completion_rate) == (1, 100.0)
    with pytest.raises(CategoryInUseError) as exc:
        categories.delete(work.id)
    assert exc.value.count == 1

    tasks.delete(task.id)
    categories.delete(work.id)

    assert categories.get_all() == []
