"""
Single non-blocking notification channel (toast equivalent).

Domain models publish success and failure notices here; routes drain them into
responses. Every notice is also logged so no failure goes unrecorded.
"""

from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel

from networknote.errors import NetworkNoteError
from networknote.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

Variant = Literal["default", "destructive"]


class Notification(BaseModel):
    title: str
    description: str
    variant: Variant = "default"


class NotificationChannel:
    def __init__(self):
        self._pending: list[Notification] = []
        self._listeners: list[Callable[[Notification], None]] = []

    def subscribe(self, listener: Callable[[Notification], None]) -> None:
        self._listeners.append(listener)

    def notify(self, title: str, description: str, variant: Variant = "default") -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self._pending.append(notification)

        if variant == "destructive":
            logger.warning("User notified of failure", title=title, description=description)
        else:
            logger.info("User notified", title=title, description=description)

        for listener in self._listeners:
            listener(notification)
        return notification

    def error(self, error: NetworkNoteError | Exception, fallback_message: str = "An error occurred") -> Notification:
        if isinstance(error, NetworkNoteError):
            return self.notify(error.title, error.message or fallback_message, "destructive")
        return self.notify("Error", str(error) or fallback_message, "destructive")

    def drain(self) -> list[Notification]:
        pending, self._pending = self._pending, []
        return pending

    @property
    def pending(self) -> list[Notification]:
        return list(self._pending)
