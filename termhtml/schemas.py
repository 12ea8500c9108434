from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class LogCreate(BaseModel):
    name: str | None = None
    content: str


class LogRead(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str | None
    size_bytes: int
    created_at: datetime
