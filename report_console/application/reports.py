"""Report workflow use cases for a console session."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from report_console.core.errors import (
    PreconditionError,
    ReportServiceError,
    TransportError,
    ValidationError,
)
from report_console.core.filters import FilterCriteria, build_request
from report_console.domain import ConsoleSession, Notification
from report_console.infrastructure import ReportServiceClient

logger = logging.getLogger(__name__)

MISSING_USER_MESSAGE = "Kullanıcı oturumu bulunamadı."
USER_LOAD_FAILED_MESSAGE = "Kullanıcı bilgileri alınamadı."
CREATE_SUCCESS_MESSAGE = "Rapor başarıyla oluşturuldu!"
CREATE_IN_PROGRESS_MESSAGE = "Rapor oluşturuluyor..."
CREATE_FAILED_MESSAGE = "Rapor oluşturulamadı."
DETAIL_FAILED_MESSAGE = "Rapor detayları alınamadı. Lütfen tekrar deneyin."
DOWNLOAD_NOT_READY_MESSAGE = "Rapor henüz indirilmeye hazır değil."


@dataclass(slots=True)
class CreateOutcome:
    notification: Notification
    report: dict[str, Any] | None = None
    error: ReportServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class DownloadOutcome:
    url: str | None
    notification: Notification | None = None
    error: ReportServiceError | None = None


class ReportWorkflow:
    """Coordinates report actions for one console session.

    Every failure is turned into a notification here; nothing raised by the
    report service escapes to the view.
    """

    def __init__(self, client: ReportServiceClient, session: ConsoleSession) -> None:
        self._client = client
        self._session = session

    @property
    def session(self) -> ConsoleSession:
        return self._session

    # ------------------------------------------------------------------
    # session lifecycle
    # ------------------------------------------------------------------
    async def load_current_user(self) -> Notification | None:
        try:
            self._session.current_user = await self._client.fetch_current_user()
        except ReportServiceError as exc:
            logger.error("current user could not be loaded: %s", exc.message)
            notification = Notification("error", USER_LOAD_FAILED_MESSAGE)
            if notification not in self._session.notifications:
                self._session.notifications.append(notification)
            return notification
        self._session.notifications.clear()
        logger.info("console session opened for user %s", self._session.current_user.id)
        return None

    async def ensure_current_user(self) -> None:
        """Retry the user load when the session mounted without one."""

        if self._session.current_user is None:
            await self.load_current_user()

    async def mount(self) -> None:
        await self.load_current_user()
        await self._session.poller.invalidate()
        self._session.poller.start(immediate=False)

    async def unmount(self) -> None:
        await self._session.poller.stop()
        self._session.current_user = None
        self._session.notifications.clear()

    # ------------------------------------------------------------------
    # report creation
    # ------------------------------------------------------------------
    async def submit(self, criteria: FilterCriteria) -> dict[str, Any]:
        """Create a report job and refresh the job list before returning.

        Raises the report service errors untouched; ``create_report`` is the
        notification-producing wrapper.
        """

        user = self._session.current_user
        if user is None:
            raise PreconditionError(MISSING_USER_MESSAGE)

        payload = build_request(criteria, user.id)
        result = await self._client.create_report(payload)
        await self._session.poller.invalidate()
        return result

    async def create_report(self, criteria: FilterCriteria) -> CreateOutcome:
        if self._session.creating:
            return CreateOutcome(notification=Notification("info", CREATE_IN_PROGRESS_MESSAGE))

        self._session.creating = True
        try:
            report = await self.submit(criteria)
        except PreconditionError as exc:
            logger.warning("report creation blocked: %s", exc.message)
            return CreateOutcome(notification=Notification("error", exc.message), error=exc)
        except ValidationError as exc:
            return CreateOutcome(notification=Notification("error", exc.message), error=exc)
        except TransportError as exc:
            return CreateOutcome(notification=Notification("error", exc.message or CREATE_FAILED_MESSAGE), error=exc)
        finally:
            self._session.creating = False

        return CreateOutcome(notification=Notification("success", CREATE_SUCCESS_MESSAGE), report=report)

    # ------------------------------------------------------------------
    # downloads
    # ------------------------------------------------------------------
    async def resolve_download(self, job_id: str) -> DownloadOutcome:
        try:
            detail = await self._client.fetch_report(job_id)
        except ReportServiceError as exc:
            logger.error("report detail lookup failed for %s: %s", job_id, exc.message)
            return DownloadOutcome(url=None, notification=Notification("error", DETAIL_FAILED_MESSAGE), error=exc)

        if not detail.download_url:
            return DownloadOutcome(url=None, notification=Notification("info", DOWNLOAD_NOT_READY_MESSAGE))
        return DownloadOutcome(url=detail.download_url)


__all__ = [
    "CreateOutcome",
    "DownloadOutcome",
    "ReportWorkflow",
]
