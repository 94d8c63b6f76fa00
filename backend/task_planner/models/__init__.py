"""Model exports for the persisted task and category records."""

from task_planner.models.categories import Category
from task_planner.models.tasks import Task, TaskPriority

__all__ = [
    "Category",
    "Task",
    "TaskPriority",
]
