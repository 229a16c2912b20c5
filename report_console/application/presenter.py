"""Row models for the report job table."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import timezone, tzinfo
from typing import Iterable

from report_console.core.schema import ReportJob, sort_newest_first

UNKNOWN_REQUESTER = "Bilinmiyor"
EMPTY_MESSAGE = "Rapor bulunamadı."
STATUS_COMPLETED_LABEL = "Tamamlandı"
STATUS_WAITING_LABEL = "Bekliyor"
SHORT_ID_LENGTH = 8


@dataclass(slots=True, frozen=True)
class JobRow:
    id: str
    short_id: str
    created_at: str
    requester: str
    status: str
    status_label: str
    downloadable: bool
    download_path: str | None = None

    def as_dict(self) -> dict[str, object]:
        return asdict(self)


class JobPresenter:
    def __init__(self, *, display_tz: tzinfo = timezone.utc, download_route: str = "/api/console/reports/{id}/download") -> None:
        self._display_tz = display_tz
        self._download_route = download_route

    def _format_created(self, job: ReportJob) -> str:
        created = job.created_at
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return created.astimezone(self._display_tz).strftime("%d.%m.%y %H:%M")

    def row(self, job: ReportJob) -> JobRow:
        ready = job.is_ready
        return JobRow(
            id=job.id,
            short_id=f"{job.id[:SHORT_ID_LENGTH]}...",
            created_at=self._format_created(job),
            requester=job.created_by_username or UNKNOWN_REQUESTER,
            status=job.status,
            status_label=STATUS_COMPLETED_LABEL if ready else STATUS_WAITING_LABEL,
            downloadable=ready,
            download_path=self._download_route.format(id=job.id) if ready else None,
        )

    def rows(self, jobs: Iterable[ReportJob]) -> list[JobRow]:
        return [self.row(job) for job in sort_newest_first(list(jobs))]


__all__ = ["EMPTY_MESSAGE", "JobPresenter", "JobRow", "UNKNOWN_REQUESTER"]
