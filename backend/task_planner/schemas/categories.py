"""Schemas for category payloads and task reassignment."""

from __future__ import annotations

from sqlmodel import SQLModel


class CategoryCreate(SQLModel):
    """Payload for creating a category; a missing name is reported as a 400."""

    name: str | None = None
    color: str | None = None


class CategoryUpdate(SQLModel):
    """Payload for updating a category; `name` is required, `color` is kept when omitted."""

    name: str | None = None
    color: str | None = None


class CategoryRead(SQLModel):
    """Category payload returned by read endpoints."""

    id: str
    name: str
    color: str


class CategoryReassign(SQLModel):
    """Target category name for moving every task off a category."""

    target: str


class CategoryReassignResult(SQLModel):
    """Number of tasks moved by a reassignment."""

    moved: int
