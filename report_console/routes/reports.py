from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from report_console.application import JobPresenter, ReportWorkflow
from report_console.application.presenter import EMPTY_MESSAGE
from report_console.core.errors import PreconditionError, TransportError, ValidationError
from report_console.core.filters import (
    FilterCriteria,
    describe_date_range,
    full_day_range,
    status_options,
    type_options,
)
from report_console.core.reasons import ALL_REASONS_LABEL, reason_options

router = APIRouter(prefix="/console", tags=["reports"])


class CreateReportRequest(BaseModel):
    status: str | None = None
    reject_reason: str | None = None
    type: str | None = None
    type_note_id: str | None = None
    date_from: date | None = None
    date_to: date | None = None


def _workflow(request: Request) -> ReportWorkflow:
    return request.app.state.workflow


def _presenter(request: Request) -> JobPresenter:
    return request.app.state.presenter


def _options(pairs: list[tuple[str, str]]) -> list[dict[str, str]]:
    return [{"value": value, "label": label} for value, label in pairs]


@router.get("/session")
async def get_session(request: Request) -> dict:
    workflow = _workflow(request)
    await workflow.ensure_current_user()
    session = workflow.session
    user = session.current_user
    return {
        "user": user.model_dump() if user else None,
        "notifications": [item.as_dict() for item in session.notifications],
    }


@router.get("/filters")
async def get_filter_options() -> dict:
    return {
        "status": _options(status_options()),
        "reject_reasons": {"all_label": ALL_REASONS_LABEL, "items": _options(reason_options())},
        "type": _options(type_options()),
        "date_range_placeholder": describe_date_range(None, None),
    }


@router.get("/reports")
async def list_reports(request: Request) -> dict:
    poller = _workflow(request).session.poller
    rows = _presenter(request).rows(poller.jobs)
    error = poller.last_error
    return {
        "items": [row.as_dict() for row in rows],
        "loading": poller.is_loading,
        "stale": poller.is_stale,
        "error": error.message if error and poller.is_loading else None,
        "empty_message": EMPTY_MESSAGE if not rows else None,
        "updated_at": poller.last_updated.isoformat() if poller.last_updated else None,
    }


@router.post("/reports")
async def create_report(request: Request, payload: CreateReportRequest) -> JSONResponse:
    tz = request.app.state.display_tz
    date_from, date_to = full_day_range(payload.date_from, payload.date_to, tz)
    try:
        criteria = FilterCriteria(
            status=payload.status,
            reject_reason=payload.reject_reason,
            type=payload.type,
            type_note_id=payload.type_note_id,
            date_from=date_from,
            date_to=date_to,
        )
    except SchemaError as exc:
        detail = [{"loc": list(error["loc"]), "msg": error["msg"]} for error in exc.errors()]
        raise HTTPException(status_code=422, detail=detail) from exc

    outcome = await _workflow(request).create_report(criteria)
    body: dict[str, object] = {
        "notification": outcome.notification.as_dict(),
        "date_range": describe_date_range(payload.date_from, payload.date_to),
    }
    if outcome.report is not None:
        body["report"] = outcome.report

    if isinstance(outcome.error, ValidationError):
        status_code = 400
    elif isinstance(outcome.error, PreconditionError):
        status_code = 409
    elif isinstance(outcome.error, TransportError):
        status_code = 502
    elif outcome.notification.level == "info":
        status_code = 409
    else:
        status_code = 200
    return JSONResponse(body, status_code=status_code)


@router.get("/reports/{job_id}/download")
async def download_report(request: Request, job_id: str) -> Response:
    outcome = await _workflow(request).resolve_download(job_id)
    if outcome.url:
        return RedirectResponse(outcome.url, status_code=307)

    notification = outcome.notification.as_dict() if outcome.notification else None
    status_code = 502 if outcome.error is not None else 404
    return JSONResponse({"notification": notification}, status_code=status_code)
