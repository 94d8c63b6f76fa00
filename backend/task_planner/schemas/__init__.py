"""Public schema exports shared across API route modules."""

from task_planner.schemas.categories import (
    CategoryCreate,
    CategoryRead,
    CategoryReassign,
    CategoryReassignResult,
    CategoryUpdate,
)
from task_planner.schemas.common import OkResponse
from task_planner.schemas.data_transfer import DataExport, DataImport
from task_planner.schemas.errors import CategoryInUseResponse, ErrorResponse
from task_planner.schemas.health import HealthStatusResponse, ReadinessStatusResponse
from task_planner.schemas.reminders import ReminderRead
from task_planner.schemas.statistics import CategoryBreakdown, DailyProgress, StatisticsRead
from task_planner.schemas.tasks import TaskCreate, TaskRead, TaskUpdate

__all__ = [
    "CategoryBreakdown",
    "CategoryCreate",
    "CategoryInUseResponse",
    "CategoryRead",
    "CategoryReassign",
    "CategoryReassignResult",
    "CategoryUpdate",
    "DailyProgress",
    "DataExport",
    "DataImport",
    "ErrorResponse",
    "HealthStatusResponse",
    "OkResponse",
    "ReadinessStatusResponse",
    "ReminderRead",
    "StatisticsRead",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
]
