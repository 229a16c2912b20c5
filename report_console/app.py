from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import timezone, tzinfo
from typing import AsyncIterator
from zoneinfo import ZoneInfo

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from report_console.application import JobListPoller, JobPresenter, ReportWorkflow
from report_console.core.config import Settings
from report_console.core.logsetup import setup_logging
from report_console.domain import ConsoleSession
from report_console.infrastructure import ReportServiceClient
from report_console.routes import reports


def _resolve_timezone(name: str) -> tzinfo:
    if name.upper() in {"UTC", "Z"}:
        return timezone.utc
    return ZoneInfo(name)


def create_app(settings: Settings | None = None, *, http_client: httpx.AsyncClient | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level, json_output=settings.log_json)
    display_tz = _resolve_timezone(settings.display_timezone)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client = ReportServiceClient(
            settings.service_url,
            session_cookie=settings.session_cookie,
            timeout=settings.timeout,
            http_client=http_client,
        )
        poller = JobListPoller(client.list_reports, interval=settings.poll_interval)
        workflow = ReportWorkflow(client, ConsoleSession(poller=poller))
        app.state.workflow = workflow
        await workflow.mount()
        try:
            yield
        finally:
            await workflow.unmount()
            await client.aclose()

    app = FastAPI(title="Report Console API", version="0.1.0", lifespan=lifespan)
    app.state.presenter = JobPresenter(display_tz=display_tz)
    app.state.display_tz = display_tz

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(reports.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "Report Console API",
                "docs": "/docs",
                "health": "/api/console/reports",
            }
        )

    return app


app = create_app()
