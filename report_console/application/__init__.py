"""Application services."""

from .polling import JobListPoller
from .presenter import JobPresenter, JobRow
from .reports import CreateOutcome, DownloadOutcome, ReportWorkflow

__all__ = [
    "CreateOutcome",
    "DownloadOutcome",
    "JobListPoller",
    "JobPresenter",
    "JobRow",
    "ReportWorkflow",
]
