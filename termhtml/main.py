from __future__ import annotations

from fastapi import FastAPI

from termhtml.api import logs, render

app = FastAPI(title="Terminal to HTML", version="0.1.0")

app.include_router(render.router)
app.include_router(logs.router)
