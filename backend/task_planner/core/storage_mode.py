"""Shared enum values for storage and calendar configuration."""

from __future__ import annotations

from enum import Enum


class StorageMode(str, Enum):
    """Supported persistence backends for the entity store."""

    FILE = "file"
    MEMORY = "memory"


class WeekStart(str, Enum):
    """First day of the calendar week used by the `week` date window."""

    SUNDAY = "sunday"
    MONDAY = "monday"
