"""Filter criteria for report jobs and their request payload."""
from __future__ import annotations

from datetime import date, datetime, time, timezone, tzinfo
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .reasons import RejectReason

DATE_RANGE_PLACEHOLDER = "Tarih Aralığı Seçin"


class StatusFilter(str, Enum):
    ALL = ("all", "Çekim Durumu (Tümü)")
    PENDING = ("pending", "Bekleyen")
    APPROVED = ("approved", "Onaylanan")
    REJECTED = ("rejected", "Reddedilen")

    def __new__(cls, code: str, label: str) -> "StatusFilter":
        member = str.__new__(cls, code)
        member._value_ = code
        member.label = label
        return member


class TransactionType(str, Enum):
    BONUS = ("bonus", "Bonus")
    DEPOSIT = ("deposit", "Yatırım")
    WITHDRAWAL = ("withdrawal", "Çekim")
    CASHBACK = ("cashback", "Cashback")
    CORRECTION_UP = ("correction_up", "Düzeltme")

    def __new__(cls, code: str, label: str) -> "TransactionType":
        member = str.__new__(cls, code)
        member._value_ = code
        member.label = label
        return member


ALL_TYPES_LABEL = "Son Finansal İşlem (Tümü)"


class FilterCriteria(BaseModel):
    """Operator-selected constraints narrowing which records a report covers.

    Every dimension is optional. ``"all"`` is accepted for ``type`` and
    normalised to ``None`` so it can never reach the wire.
    """

    model_config = ConfigDict(frozen=True)

    status: StatusFilter = StatusFilter.ALL
    reject_reason: RejectReason | None = None
    type: TransactionType | None = None
    type_note_id: str = ""
    date_from: datetime | None = None
    date_to: datetime | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _blank_status(cls, value: Any) -> Any:
        return StatusFilter.ALL if value in (None, "") else value

    @field_validator("reject_reason", "type", mode="before")
    @classmethod
    def _drop_all_sentinel(cls, value: Any) -> Any:
        if value in (None, "", "all"):
            return None
        return value

    @field_validator("type_note_id", mode="before")
    @classmethod
    def _strip_note(cls, value: Any) -> Any:
        if value is None:
            return ""
        return str(value).strip()


def to_wire_instant(value: datetime) -> str:
    """Render ``value`` as an ISO 8601 UTC instant with millisecond precision."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    rendered = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return rendered.replace("+00:00", "Z")


def build_request(criteria: FilterCriteria, requester_id: str) -> dict[str, Any]:
    body: dict[str, Any] = {"requesterId": requester_id}

    if criteria.status is not StatusFilter.ALL:
        body["status"] = criteria.status.value

    if criteria.reject_reason is not None:
        body["rejectReasons"] = [criteria.reject_reason.value]

    if criteria.date_from is not None:
        body["fromDate"] = to_wire_instant(criteria.date_from)
    if criteria.date_to is not None:
        body["toDate"] = to_wire_instant(criteria.date_to)

    if criteria.type is not None:
        body["type"] = criteria.type.value

    note = criteria.type_note_id.strip()
    if note:
        body["typeNoteId"] = note

    return body


def full_day_range(
    start: date | None,
    end: date | None,
    tz: tzinfo = timezone.utc,
) -> tuple[datetime | None, datetime | None]:
    """Expand calendar days into an inclusive instant range in ``tz``."""

    date_from = datetime.combine(start, time.min, tzinfo=tz) if start else None
    date_to = datetime.combine(end, time.max, tzinfo=tz) if end else None
    return date_from, date_to


def describe_date_range(start: date | None, end: date | None) -> str:
    if start is None:
        return DATE_RANGE_PLACEHOLDER
    if end is None:
        return f"{start:%d.%m.%y} -"
    return f"{start:%d.%m.%y} - {end:%d.%m.%y}"


def status_options() -> list[tuple[str, str]]:
    return [(status.value, status.label) for status in StatusFilter]


def type_options() -> list[tuple[str, str]]:
    options = [("all", ALL_TYPES_LABEL)]
    options.extend((kind.value, kind.label) for kind in TransactionType)
    return options


__all__ = [
    "FilterCriteria",
    "StatusFilter",
    "TransactionType",
    "build_request",
    "describe_date_range",
    "full_day_range",
    "status_options",
    "to_wire_instant",
    "type_options",
]
