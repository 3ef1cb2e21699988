"""Capability interfaces the host application provides to the core.

The sync pipeline makes no host-specific calls; a Zotero plugin (or any other
embedding) supplies these three capabilities instead.
"""

from typing import Any, Protocol, runtime_checkable

from .models import Attachment, LibraryItem


@runtime_checkable
class LibraryStore(Protocol):
    """Read-only access to the host's bibliographic store."""

    def get_item(self, key: str) -> LibraryItem | None:
        """Get item by key."""
        ...

    def get_collection_items(self, collection_id: str) -> list[LibraryItem]:
        """Items directly contained in a collection."""
        ...

    def get_child_collections(self, collection_id: str) -> list[str]:
        """IDs of the direct sub-collections of a collection."""
        ...


@runtime_checkable
class AttachmentFileAccess(Protocol):
    """Resolves attachments to local files and reads them."""

    def get_file_path(self, attachment: Attachment) -> str | None:
        """Local path of the attachment's file, or None if it has none."""
        ...

    def get_file_size(self, path: str) -> int:
        """Size in bytes; raises OSError if the file is not accessible."""
        ...

    def read_bytes(self, path: str, limit: int | None = None) -> bytes:
        """Read the file (or its first ``limit`` bytes); raises OSError on failure."""
        ...


@runtime_checkable
class ConfigStore(Protocol):
    """Host preference store."""

    def get(self, key: str) -> Any | None:
        """Get preference value by full key."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Set preference value."""
        ...


__all__ = [
    "LibraryStore",
    "AttachmentFileAccess",
    "ConfigStore",
]
