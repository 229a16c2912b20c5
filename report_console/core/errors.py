"""Error taxonomy shared by the report client and the console workflow."""
from __future__ import annotations


class ReportServiceError(RuntimeError):
    """Raised when the remote report service cannot fulfil a request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(ReportServiceError):
    """Non-success HTTP status or network failure."""


class ValidationError(ReportServiceError):
    """The report service rejected a job request with a structured message."""


class PreconditionError(ReportServiceError):
    """An action was attempted before its local requirements were met."""


__all__ = [
    "PreconditionError",
    "ReportServiceError",
    "TransportError",
    "ValidationError",
]
