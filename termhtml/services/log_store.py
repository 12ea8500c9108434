from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from termhtml.config import settings
from termhtml.models import Log
from termhtml.schemas import LogCreate
from termhtml.services.terminal_emulator import InputTooLargeError


async def create_log(session: AsyncSession, payload: LogCreate) -> Log:
    size = len(payload.content.encode("utf-8"))
    if size > settings.max_input_bytes:
        raise InputTooLargeError(f"Log of {size} bytes exceeds the {settings.max_input_bytes} byte limit")
    log = Log(name=payload.name, content=payload.content, size_bytes=size)
    session.add(log)
    await session.commit()
    await session.refresh(log)
    logging.info("Stored log %s (%d bytes)", log.id, size)
    return log


async def get_log(session: AsyncSession, log_id: str) -> Log | None:
    return await session.get(Log, log_id)


async def list_logs(session: AsyncSession) -> list[Log]:
    result = await session.execute(select(Log).order_by(Log.created_at.desc()))
    return list(result.scalars().all())
