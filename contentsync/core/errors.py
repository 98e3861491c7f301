from typing import Optional


class ContentSyncError(Exception):
    """Base class for failures raised by the content services."""


class ConfigurationError(ContentSyncError, ValueError):
    """Required deployment settings are missing. Fix the environment, do not retry."""


class ValidationError(ContentSyncError, ValueError):
    """Caller-supplied data failed a shape check before any network call."""


class UploadError(ContentSyncError):
    """The media host rejected or failed an upload.

    ``status`` is the HTTP status code, or ``None`` when no response arrived.
    ``body`` keeps the host's response text for diagnostics.
    """

    def __init__(self, status: Optional[int], body: str, message: Optional[str] = None):
        self.status = status
        self.body = body
        super().__init__(message or f"Media upload failed: {status} {body}")


class PersistenceError(ContentSyncError):
    """A document store read or write failed for an infrastructure reason."""

    def __init__(self, message: str, cause: BaseException):
        self.cause = cause
        super().__init__(f"{message}: {cause}")
