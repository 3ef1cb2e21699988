"""Exception hierarchy for zotsync."""


class ZotSyncError(Exception):
    """Base exception for all zotsync errors."""


class ConfigurationError(ZotSyncError):
    """A required configuration value is missing or invalid."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Missing configuration: {field}")


class NoEligibleAttachmentError(ZotSyncError):
    """Item has no PDF or TXT attachment with a local file."""

    def __init__(self, message: str = "no eligible attachment"):
        super().__init__(message)


class FileTooLargeError(ZotSyncError):
    """Resolved file exceeds the upload size ceiling."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__("file too large")


class FileUnreadableError(ZotSyncError):
    """File does not exist or cannot be read."""

    def __init__(self, path: str, reason: str | None = None):
        self.path = path
        message = f"File does not exist or is not readable: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UploadError(ZotSyncError):
    """Base class for document upload failures."""


class UploadHttpError(UploadError):
    """Indexing service answered with a non-2xx status."""

    def __init__(self, status: int, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(f"Upload failed ({status}): {body or 'unknown error'}")


class UploadNetworkError(UploadError):
    """Upload request failed at the transport level."""


class RemoteListParseError(ZotSyncError):
    """Knowledge base list response had an unexpected shape."""


class KnowledgeBaseListError(ZotSyncError):
    """Listing knowledge bases failed."""

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)


__all__ = [
    "ZotSyncError",
    "ConfigurationError",
    "NoEligibleAttachmentError",
    "FileTooLargeError",
    "FileUnreadableError",
    "UploadError",
    "UploadHttpError",
    "UploadNetworkError",
    "RemoteListParseError",
    "KnowledgeBaseListError",
]
