"""Core domain models for zotsync."""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer

from .exceptions import ConfigurationError

PDF_MIME_TYPE = "application/pdf"
TEXT_MIME_TYPE = "text/plain"


class Creator(BaseModel):
    """An author, editor or other contributor of a library item."""

    model_config = ConfigDict(frozen=True)

    first_name: str = ""
    last_name: str = ""
    name: str = ""  # single-field mode (institutions, mononyms)
    creator_type: str = "author"

    def display_name(self) -> str:
        """Render as "Last, First", falling back to last name then single name."""
        if self.first_name and self.last_name:
            return f"{self.last_name}, {self.first_name}"
        return self.last_name or self.name or ""


class Attachment(BaseModel):
    """A file (or link) attached to a library item."""

    model_config = ConfigDict(frozen=True)

    key: str
    content_type: str = ""
    filename: str = ""
    path: str | None = None
    link_mode: str | None = None
    parent_key: str | None = None

    @property
    def is_pdf(self) -> bool:
        return self.content_type == PDF_MIME_TYPE

    @property
    def is_text(self) -> bool:
        return self.content_type == TEXT_MIME_TYPE or self.filename.lower().endswith(".txt")


class LibraryItem(BaseModel):
    """Represents an item from the user's Zotero library.

    Regular items carry their child attachments in ``attachments``. A
    standalone attachment item (``item_type == "attachment"``) carries its own
    file fields instead.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    library_id: int | None = None
    item_type: str = "document"
    title: str = ""
    year: str = ""
    publication_title: str = ""
    publisher: str = ""
    abstract: str = ""
    doi: str = ""
    url: str = ""
    creators: list[Creator] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    collections: list[str] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)
    # Only set on standalone attachment items
    content_type: str = ""
    filename: str = ""
    path: str | None = None
    parent_key: str | None = None

    @property
    def is_attachment(self) -> bool:
        return self.item_type == "attachment"

    @property
    def is_note(self) -> bool:
        return self.item_type == "note"

    @property
    def is_regular(self) -> bool:
        return not (self.is_attachment or self.is_note)

    def as_attachment(self) -> Attachment:
        """View a standalone attachment item as an Attachment."""
        return Attachment(
            key=self.key,
            content_type=self.content_type,
            filename=self.filename,
            path=self.path,
            parent_key=self.parent_key,
        )

    @classmethod
    def from_zotero_api(
        cls,
        item: dict[str, object],
        attachments: list[Attachment] | None = None,
    ) -> "LibraryItem":
        """Parse item from Zotero API response."""
        data = item.get("data", {})
        library = item.get("library") or {}
        creators = [
            Creator(
                first_name=c.get("firstName") or "",
                last_name=c.get("lastName") or "",
                name=c.get("name") or "",
                creator_type=c.get("creatorType") or "author",
            )
            for c in data.get("creators", [])
            if isinstance(c, dict)
        ]
        return cls(
            key=data.get("key") or item.get("key"),
            library_id=library.get("id") if isinstance(library, dict) else None,
            item_type=data.get("itemType") or "document",
            title=data.get("title") or "",
            year=_safe_year(data.get("date")),
            publication_title=data.get("publicationTitle") or "",
            publisher=data.get("publisher") or "",
            abstract=data.get("abstractNote") or "",
            doi=data.get("DOI") or "",
            url=data.get("url") or "",
            creators=creators,
            tags=[t.get("tag") for t in data.get("tags", []) if isinstance(t, dict) and t.get("tag")],
            collections=data.get("collections", []),
            attachments=attachments or [],
            content_type=data.get("contentType") or "",
            filename=data.get("filename") or "",
            path=data.get("path"),
            parent_key=data.get("parentItem"),
        )


def _safe_year(value: str | None) -> str:
    """Pull a four-digit year out of a free-form date string."""
    if not value:
        return ""
    for part in value.replace("/", "-").replace(" ", "-").split("-"):
        if len(part) == 4 and part.isdigit():
            return part
    return ""


class DocumentMetadata(BaseModel):
    """Flat metadata record derived from a library item."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    authors: list[str] = Field(default_factory=list)
    year: str = ""
    item_type: str = ""
    publication_title: str = ""
    publisher: str = ""
    doi: str = ""
    url: str = ""
    tags: list[str] = Field(default_factory=list)
    abstract: str = ""
    source_key: str = ""
    source_library_id: int | None = None
    imported_from: str = "Zotero"
    imported_at: str = ""

    @model_serializer(mode="wrap")
    def _drop_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, object]:
        # Serialized form never carries "", [] or None
        return {key: value for key, value in handler(self).items() if value is not None and value != "" and value != []}

    def to_payload(self) -> dict[str, object]:
        """Serialize for the ``doc_metadata`` field of an upload."""
        return self.model_dump()


class UploadTarget(BaseModel):
    """The single local file chosen for upload for one item."""

    file_path: str
    mime_type: str
    display_filename: str


class KnowledgeBase(BaseModel):
    """A named document collection on the indexing service."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class ConnectionStatus(str, Enum):
    """Outcome classes of a connection test."""

    SUCCESS = "success"
    WARNING = "warning"
    AUTH_ERROR = "auth_error"
    NOT_FOUND = "not_found"
    ERROR = "error"


class ConnectionResult(BaseModel):
    """Result of verifying credentials against one knowledge base."""

    status: ConnectionStatus
    message: str
    knowledge_base_name: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == ConnectionStatus.SUCCESS


class SyncFailure(BaseModel):
    """One item that could not be synced."""

    title: str
    reason: str


@dataclass
class SyncResult:
    """Outcome of one sync run.

    Attributes:
        success_count: Items uploaded successfully.
        failed_count: Items recorded as failed.
        failures: Title and reason for each failed item, in processing order.
        cancelled: Whether the run stopped early on request.
    """

    success_count: int = 0
    failed_count: int = 0
    failures: list[SyncFailure] = field(default_factory=list)
    cancelled: bool = False

    @property
    def total(self) -> int:
        return self.success_count + self.failed_count

    def record_success(self) -> None:
        self.success_count += 1

    def record_failure(self, title: str, reason: str) -> None:
        self.failed_count += 1
        self.failures.append(SyncFailure(title=title, reason=reason))

    def summary_message(self) -> str:
        """User-facing one-line report."""
        if self.failed_count and not self.success_count:
            return f"All items failed to sync. Failed: {self.failed_count}. See the log for details."
        message = f"Sync complete. Succeeded: {self.success_count}, failed: {self.failed_count}."
        if self.cancelled:
            message += " Sync was cancelled before all items were processed."
        return message


@dataclass
class SyncContext:
    """Everything one sync invocation needs, constructed once per call."""

    api_key: str
    base_url: str
    dataset_id: str
    items: list[LibraryItem] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.base_url = (self.base_url or "").rstrip("/")

    def validate(self) -> None:
        """Raise ConfigurationError for the first missing setting."""
        if not self.api_key:
            raise ConfigurationError("dify-api-key", "API key is not configured")
        if not self.base_url:
            raise ConfigurationError("dify-base-url", "Server URL is not configured")
        if not self.dataset_id:
            raise ConfigurationError("dify-kb-id", "No knowledge base selected")


class SyncStage(str, Enum):
    """Per-item pipeline stages reported to progress listeners."""

    RESOLVING = "resolving"
    UPLOADING = "uploading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    DONE = "done"


@dataclass
class SyncProgress:
    """Progress event emitted by the orchestrator."""

    stage: SyncStage
    index: int
    total: int
    title: str = ""
    percent: int = 0
    message: str = ""


__all__ = [
    "PDF_MIME_TYPE",
    "TEXT_MIME_TYPE",
    "Creator",
    "Attachment",
    "LibraryItem",
    "DocumentMetadata",
    "UploadTarget",
    "KnowledgeBase",
    "ConnectionStatus",
    "ConnectionResult",
    "SyncFailure",
    "SyncResult",
    "SyncContext",
    "SyncStage",
    "SyncProgress",
]
