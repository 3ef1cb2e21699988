"""Collection traversal for collection-based syncs."""

import logging
from collections.abc import Iterable

from zotsync.core.models import LibraryItem
from zotsync.core.protocols import LibraryStore

logger = logging.getLogger(__name__)


def iter_collection_ids(
    library: LibraryStore,
    collection_ids: Iterable[str],
    include_subcollections: bool = False,
) -> list[str]:
    """Expand collection ids depth-first, visiting each collection once."""
    ordered: list[str] = []
    seen: set[str] = set()

    def visit(collection_id: str) -> None:
        if collection_id in seen:
            return
        seen.add(collection_id)
        ordered.append(collection_id)
        if include_subcollections:
            for child_id in library.get_child_collections(collection_id):
                visit(child_id)

    for collection_id in collection_ids:
        visit(str(collection_id))
    return ordered


def collect_items(
    library: LibraryStore,
    collection_ids: Iterable[str],
    include_subcollections: bool = False,
) -> list[LibraryItem]:
    """Gather the items to sync from one or more collections.

    Notes are dropped, items are de-duplicated by key in first-seen order, and
    a standalone attachment whose parent is also collected is dropped so each
    item contributes at most one file.

    Args:
        library: Host library store.
        collection_ids: Collections to read.
        include_subcollections: Recurse into sub-collections.

    Returns:
        Items in traversal order.
    """
    expanded = iter_collection_ids(library, collection_ids, include_subcollections)
    items: dict[str, LibraryItem] = {}
    for collection_id in expanded:
        for item in library.get_collection_items(collection_id):
            if item.is_note or item.key in items:
                continue
            items[item.key] = item

    result = [
        item
        for item in items.values()
        if not (item.is_attachment and item.parent_key and item.parent_key in items)
    ]
    logger.info("Collected %d items from %d collections", len(result), len(expanded))
    return result


__all__ = ["iter_collection_ids", "collect_items"]
