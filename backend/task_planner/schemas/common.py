"""Small response envelopes shared across routers."""

from __future__ import annotations

from sqlmodel import SQLModel


class OkResponse(SQLModel):
    """Acknowledgement payload for actions without a resource body."""

    ok: bool = True
