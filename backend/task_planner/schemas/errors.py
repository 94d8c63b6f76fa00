"""Structured error payload schemas used by API responses."""

from __future__ import annotations

from pydantic import Field
from sqlmodel import SQLModel


class ErrorResponse(SQLModel):
    """Standard error payload produced by the installed exception handlers."""

    detail: str | dict[str, object] | list[object] = Field(
        description="Human-readable message, or a list of field errors for 422 responses.",
        examples=["Task not found", "Title and category are required"],
    )
    request_id: str | None = Field(
        default=None,
        description="Request correlation identifier injected by middleware.",
    )
    code: str | None = Field(
        default=None,
        description="Optional machine-readable error code.",
        examples=["not_found", "category_in_use", "persistence_failure"],
    )
    retryable: bool | None = Field(
        default=None,
        description="Whether a client may retry once the storage problem is resolved.",
    )


class CategoryInUseResponse(ErrorResponse):
    """Error payload for a category delete blocked by dependent tasks."""

    task_count: int = Field(
        description="Number of tasks still referencing the category by name.",
        examples=[1],
    )
