from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

COMPLETED = "completed"
PENDING = "pending"


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ReportJob(WireModel):
    id: str
    codename: str | None = None
    status: str = PENDING
    created_by: str | None = Field(default=None, alias="createdBy")
    created_by_username: str | None = Field(default=None, alias="createdByUsername")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    download_url: str | None = Field(default=None, alias="downloadUrl")

    @property
    def is_ready(self) -> bool:
        return self.status == COMPLETED


class CurrentUser(WireModel):
    id: str
    role: str
    username: str | None = None


class CurrentUserEnvelope(WireModel):
    success: bool
    data: CurrentUser | None = None
    message: str | None = None


def _created_key(job: ReportJob) -> datetime:
    created = job.created_at
    # naive timestamps are taken as UTC so mixed payloads still compare
    if created.tzinfo is None:
        return created.replace(tzinfo=timezone.utc)
    return created


def sort_newest_first(jobs: list[ReportJob]) -> list[ReportJob]:
    return sorted(jobs, key=_created_key, reverse=True)
