"""Reminder schedule endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from task_planner.api.deps import get_reminder_service
from task_planner.schemas.reminders import ReminderRead
from task_planner.services.reminders import ReminderService

router = APIRouter(prefix="/reminders", tags=["reminders"])
REMINDERS_DEP = Depends(get_reminder_service)


@router.get("", response_model=list[ReminderRead])
async def list_reminders(service: ReminderService = REMINDERS_DEP) -> list[ReminderRead]:
    """Upcoming reminder times for incomplete tasks, earliest first."""
    return service.get_all()
