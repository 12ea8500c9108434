from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from termhtml.enums import OutputFormat
from termhtml.services.preview import wrap_preview
from termhtml.services.terminal_emulator import InputTooLargeError, TerminalEmulator

router = APIRouter(tags=["render"])


def render_response(
    raw: bytes | str,
    output: OutputFormat = OutputFormat.html,
    preview: bool = False,
    title: str | None = None,
) -> Response:
    emulator = TerminalEmulator()
    try:
        if output == OutputFormat.text:
            return PlainTextResponse(emulator.render_text(raw))
        html = emulator.render(raw)
    except InputTooLargeError as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from exc
    if preview:
        html = wrap_preview(html, title)
    return HTMLResponse(html)


@router.post("/render")
async def render_terminal_output(
    request: Request,
    format: OutputFormat = OutputFormat.html,
    preview: bool = False,
    title: str | None = None,
) -> Response:
    raw = await request.body()
    return render_response(raw, format, preview, title)
