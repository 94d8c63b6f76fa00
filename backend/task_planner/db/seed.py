"""Default records written to an empty store on first run."""

from __future__ import annotations

from datetime import datetime, timedelta

from task_planner.core.time import local_day
from task_planner.models.categories import Category
from task_planner.models.tasks import Task, TaskPriority

_DEFAULT_CATEGORIES = (
    ("1", "Cloud", "#3B82F6"),
    ("2", "DevOps", "#10B981"),
    ("3", "AI", "#8B5CF6"),
    ("4", "Backend", "#F59E0B"),
    ("5", "Frontend", "#EF4444"),
    ("6", "Mobile", "#EC4899"),
    ("7", "Database", "#06B6D4"),
)


def seed_categories() -> list[Category]:
    """Return the built-in category set."""
    return [Category(id=id_, name=name, color=color) for id_, name, color in _DEFAULT_CATEGORIES]


def seed_tasks(now: datetime) -> list[Task]:
    """Return the sample tasks, dated relative to *now*."""
    today = local_day(now)
    return [
        Task(
            id="1",
            title="Study Kubernetes networking",
            description="Learn about pods, services, and ingress controllers",
            category="Cloud",
            priority=TaskPriority.HIGH,
            due_date=today + timedelta(days=1),
            created_at=now,
        ),
        Task(
            id="2",
            title="Review Spring Boot security",
            description="Understand authentication and authorization mechanisms",
            category="Backend",
            priority=TaskPriority.MEDIUM,
            due_date=today + timedelta(days=2),
            created_at=now,
        ),
        Task(
            id="3",
            title="Learn Docker containerization",
            description="Practice with Dockerfile and docker-compose",
            category="DevOps",
            priority=TaskPriority.HIGH,
            due_date=today,
            completed=True,
            created_at=now - timedelta(days=1),
        ),
    ]
