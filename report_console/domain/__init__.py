"""Domain layer definitions."""

from .session import ConsoleSession, Notification

__all__ = [
    "ConsoleSession",
    "Notification",
]
