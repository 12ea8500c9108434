from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from termhtml.api.render import render_response
from termhtml.db import get_session
from termhtml.enums import OutputFormat
from termhtml.models import Log
from termhtml.schemas import LogCreate, LogRead
from termhtml.services.log_store import create_log, get_log, list_logs
from termhtml.services.terminal_emulator import InputTooLargeError

router = APIRouter(prefix="/logs", tags=["logs"])


async def _require_log(session: AsyncSession, log_id: str) -> Log:
    log = await get_log(session, log_id)
    if not log:
        raise HTTPException(status_code=404, detail="Log not found")
    return log


@router.post("", response_model=LogRead)
async def store_log(payload: LogCreate, session: AsyncSession = Depends(get_session)) -> LogRead:
    try:
        log = await create_log(session, payload)
    except InputTooLargeError as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from exc
    return LogRead.model_validate(log)


@router.get("", response_model=List[LogRead])
async def list_stored_logs(session: AsyncSession = Depends(get_session)) -> list[LogRead]:
    logs = await list_logs(session)
    return [LogRead.model_validate(log) for log in logs]


@router.get("/{log_id}", response_model=LogRead)
async def get_stored_log(log_id: str, session: AsyncSession = Depends(get_session)) -> LogRead:
    log = await _require_log(session, log_id)
    return LogRead.model_validate(log)


@router.get("/{log_id}/html")
async def get_log_html(
    log_id: str,
    preview: bool = False,
    session: AsyncSession = Depends(get_session),
) -> Response:
    log = await _require_log(session, log_id)
    return render_response(log.content, OutputFormat.html, preview, log.name)


@router.get("/{log_id}/text")
async def get_log_text(log_id: str, session: AsyncSession = Depends(get_session)) -> Response:
    log = await _require_log(session, log_id)
    return render_response(log.content, OutputFormat.text)
