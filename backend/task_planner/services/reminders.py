"""Reminder scheduling for incomplete tasks. Delivery happens elsewhere."""

from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import TYPE_CHECKING

from task_planner.models.tasks import DEFAULT_REMINDER_TIME
from task_planner.schemas.reminders import ReminderRead

if TYPE_CHECKING:
    from collections.abc import Sequence

    from task_planner.db.store import EntityStore
    from task_planner.models.tasks import Task


def due_at(task: Task, *, now: datetime) -> datetime:
    """Moment the task is due: its due date at `time` (default 10:00) in now's timezone."""
    hour, minute = (task.time or DEFAULT_REMINDER_TIME).split(":")
    return datetime.combine(
        task.due_date,
        time(int(hour), int(minute)),
        tzinfo=now.tzinfo,
    )


def reminder_at(task: Task, *, now: datetime) -> datetime:
    """When the reminder fires; a due moment already past moves to the next day."""
    moment = due_at(task, now=now)
    if moment < now:
        moment += timedelta(days=1)
    return moment


def due_reminders(tasks: Sequence[Task], *, now: datetime) -> list[ReminderRead]:
    """Reminders for every incomplete task, earliest first."""
    if now.tzinfo is not None:
        now = now.astimezone()
    reminders = [
        ReminderRead(
            task_id=task.id,
            title=task.title,
            remind_at=reminder_at(task, now=now),
            overdue=due_at(task, now=now) < now,
        )
        for task in tasks
        if not task.completed
    ]
    reminders.sort(key=lambda reminder: reminder.remind_at)
    return reminders


class ReminderService:
    """Computes reminders from the current store snapshot."""

    def __init__(self, store: EntityStore) -> None:
        self.store = store

    def get_all(self) -> list[ReminderRead]:
        tasks, _ = self.store.snapshot()
        return due_reminders(tasks, now=self.store.clock())
