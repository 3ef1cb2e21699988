"""Core domain models and interfaces."""

from .models import (
    Attachment,
    ConnectionResult,
    ConnectionStatus,
    Creator,
    DocumentMetadata,
    KnowledgeBase,
    LibraryItem,
    SyncContext,
    SyncFailure,
    SyncProgress,
    SyncResult,
    SyncStage,
    UploadTarget,
)
from .protocols import (
    AttachmentFileAccess,
    ConfigStore,
    LibraryStore,
)
from .exceptions import (
    ZotSyncError,
    ConfigurationError,
    NoEligibleAttachmentError,
    FileTooLargeError,
    FileUnreadableError,
    UploadError,
    UploadHttpError,
    UploadNetworkError,
    RemoteListParseError,
    KnowledgeBaseListError,
)

__all__ = [
    # Models
    "Attachment",
    "ConnectionResult",
    "ConnectionStatus",
    "Creator",
    "DocumentMetadata",
    "KnowledgeBase",
    "LibraryItem",
    "SyncContext",
    "SyncFailure",
    "SyncProgress",
    "SyncResult",
    "SyncStage",
    "UploadTarget",
    # Protocols
    "AttachmentFileAccess",
    "ConfigStore",
    "LibraryStore",
    # Exceptions
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
