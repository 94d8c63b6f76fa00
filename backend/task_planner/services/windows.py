"""Calendar-day windows (today, tomorrow, week, overdue, ...) relative to `now`."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from task_planner.core.storage_mode import WeekStart
from task_planner.core.time import local_day
from task_planner.models.tasks import Task

UPCOMING_DAYS = 7
_FIRST_WEEKDAY = {WeekStart.MONDAY: 0, WeekStart.SUNDAY: 6}


class DateWindow(str, Enum):
    """Named due-date windows understood by task filters and statistics."""

    TODAY = "today"
    TOMORROW = "tomorrow"
    WEEK = "week"
    PAST = "past"
    OVERDUE = "overdue"
    UPCOMING = "upcoming"


@dataclass(frozen=True, slots=True)
class Calendar:
    """Day boundaries derived from a single reading of the clock."""

    today: date
    week_start: WeekStart = WeekStart.SUNDAY

    @classmethod
    def at(cls, now: datetime, week_start: WeekStart = WeekStart.SUNDAY) -> Calendar:
        return cls(today=local_day(now), week_start=week_start)

    @property
    def tomorrow(self) -> date:
        return self.today + timedelta(days=1)

    @property
    def start_of_week(self) -> date:
        offset = (self.today.weekday() - _FIRST_WEEKDAY[self.week_start]) % 7
        return self.today - timedelta(days=offset)

    @property
    def end_of_week(self) -> date:
        return self.start_of_week + timedelta(days=6)

    @property
    def upcoming_end(self) -> date:
        return self.today + timedelta(days=UPCOMING_DAYS)

    def contains(self, window: DateWindow, task: Task) -> bool:
        """Whether *task* falls inside *window*; all bounds are inclusive."""
        due = task.due_date
        if window is DateWindow.TODAY:
            return due == self.today
        if window is DateWindow.TOMORROW:
            return due == self.tomorrow
        if window is DateWindow.WEEK:
            return self.start_of_week <= due <= self.end_of_week
        if window is DateWindow.PAST:
            return due < self.today
        if window is DateWindow.OVERDUE:
            return not task.completed and due < self.today
        if window is DateWindow.UPCOMING:
            return not task.completed and self.today <= due <= self.upcoming_end
        msg = f"Unsupported date window: {window}"
        raise ValueError(msg)
