"""Document metadata extraction."""

from datetime import datetime

from zotsync.core.models import DocumentMetadata, LibraryItem
from zotsync.utils.datetime import to_timestamp


def extract_metadata(item: LibraryItem, now: datetime | None = None) -> DocumentMetadata:
    """Map a library item to a flat document metadata record.

    Missing fields are left empty and dropped by ``DocumentMetadata.to_payload``.

    Args:
        item: Library item to describe.
        now: Import timestamp; defaults to the current UTC time.

    Returns:
        Metadata record for the item.
    """
    authors = [name for name in (c.display_name() for c in item.creators) if name]
    return DocumentMetadata(
        title=item.title,
        authors=authors,
        year=item.year,
        item_type=item.item_type,
        publication_title=item.publication_title,
        publisher=item.publisher,
        doi=item.doi,
        url=item.url,
        tags=[t for t in item.tags if t],
        abstract=item.abstract,
        source_key=item.key,
        source_library_id=item.library_id,
        imported_from="Zotero",
        imported_at=to_timestamp(now),
    )


__all__ = ["extract_metadata"]
