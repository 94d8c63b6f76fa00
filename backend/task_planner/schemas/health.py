"""Health and readiness probe response schemas."""

from __future__ import annotations

from pydantic import Field
from sqlmodel import SQLModel


class HealthStatusResponse(SQLModel):
    """Standard payload for service liveness/readiness checks."""

    ok: bool = Field(
        description="Indicates whether the probe check succeeded.",
        examples=[True],
    )


class ReadinessStatusResponse(HealthStatusResponse):
    """Readiness payload naming the storage backend the store was opened on."""

    backend: str | None = Field(
        default=None,
        description="Description of the open storage backend, when one is attached.",
        examples=["file:backend/data/data.json", "kv:dict"],
    )
