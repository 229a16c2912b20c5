"""Infrastructure layer exports."""

from .reports import ReportServiceClient

__all__ = [
    "ReportServiceClient",
]
