"""
Error taxonomy shared by services and routes.

Every error carries a short `title` and a human-readable message so it can be
published to the notification channel unchanged.
"""

from collections.abc import Iterable


class NetworkNoteError(Exception):
    """Base exception for NetworkNote errors."""

    title = "Error"

    def __init__(self, message: str, title: str | None = None, recoverable: bool = True):
        super().__init__(message)
        self.message = message
        if title:
            self.title = title
        self.recoverable = recoverable


class ValidationError(NetworkNoteError):
    """Required input missing or malformed. Never leaves the caller."""

    title = "Missing information"

    def __init__(
        self,
        message: str,
        title: str | None = None,
        missing_fields: Iterable[str] = (),
    ):
        super().__init__(message, title=title)
        self.missing_fields = list(missing_fields)

    @classmethod
    def for_missing(cls, missing_fields: Iterable[str]) -> "ValidationError":
        fields = list(missing_fields)
        return cls(
            f"Please fill in all required fields: {', '.join(fields)}",
            title="Missing fields",
            missing_fields=fields,
        )


class AuthFailure(NetworkNoteError):
    """Session lookup or credential exchange failed; caller goes back to login."""

    title = "Authentication failed"

    def __init__(self, message: str, title: str | None = None, status_code: int | None = None):
        super().__init__(message, title=title)
        self.status_code = status_code


class PermissionDenied(NetworkNoteError):
    """The resolved role may not perform this action."""

    title = "Not allowed"


class GenerationProxyFailure(NetworkNoteError):
    """The text-generation proxy errored or returned an unusable payload."""

    title = "Generation failed"

    def __init__(self, message: str, feature: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.feature = feature
        self.status_code = status_code


class PersistenceFailure(NetworkNoteError):
    """The external store is unreachable or returned an error."""

    title = "Database Connection Failed"

    def __init__(self, message: str, operation: str = "unknown"):
        super().__init__(message)
        self.operation = operation
