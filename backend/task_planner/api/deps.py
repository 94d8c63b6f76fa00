"""Reusable FastAPI dependencies that hand the shared store to route handlers.

The store is created and opened by the application lifespan and kept on
`app.state.store`. Routes never touch it directly; they depend on one of the
repository/service factories below, and tests swap the store by overriding
`get_store`.
"""

from __future__ import annotations

from fastapi import Depends, Request

from task_planner.core.config import settings
from task_planner.db.store import EntityStore
from task_planner.services.categories import CategoryRepository
from task_planner.services.data_transfer import DataTransferService
from task_planner.services.reminders import ReminderService
from task_planner.services.statistics import StatisticsService
from task_planner.services.tasks import TaskRepository


def get_store(request: Request) -> EntityStore:
    """Return the open store attached to the running application."""
    store = getattr(request.app.state, "store", None)
    if not isinstance(store, EntityStore):
        msg = "Entity store is not initialized"
        raise RuntimeError(msg)
    return store


STORE_DEP = Depends(get_store)


def get_task_repository(store: EntityStore = STORE_DEP) -> TaskRepository:
    return TaskRepository(store, week_start=settings.week_starts_on)


def get_category_repository(store: EntityStore = STORE_DEP) -> CategoryRepository:
    return CategoryRepository(store)


def get_statistics_service(store: EntityStore = STORE_DEP) -> StatisticsService:
    return StatisticsService(store, week_start=settings.week_starts_on)


def get_reminder_service(store: EntityStore = STORE_DEP) -> ReminderService:
    return ReminderService(store)


def get_data_transfer_service(store: EntityStore = STORE_DEP) -> DataTransferService:
    return DataTransferService(store)
