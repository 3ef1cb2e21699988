"""In-memory library store."""

import logging
from collections.abc import Iterable

from zotsync.core.models import Attachment, LibraryItem

logger = logging.getLogger(__name__)


class InMemoryLibrary:
    """LibraryStore over a fixed set of items and a collection tree.

    Collection membership comes from each item's ``collections`` field.
    """

    def __init__(
        self,
        items: Iterable[LibraryItem] = (),
        child_collections: dict[str, list[str]] | None = None,
    ):
        self._items: dict[str, LibraryItem] = {}
        for item in items:
            self._items[item.key] = item
        self._children = {k: list(v) for k, v in (child_collections or {}).items()}

    def __len__(self) -> int:
        return len(self._items)

    def get_item(self, key: str) -> LibraryItem | None:
        return self._items.get(key)

    def get_collection_items(self, collection_id: str) -> list[LibraryItem]:
        return [item for item in self._items.values() if collection_id in item.collections]

    def get_child_collections(self, collection_id: str) -> list[str]:
        return list(self._children.get(collection_id, []))

    @classmethod
    def from_zotero_api(
        cls,
        items: Iterable[dict],
        collections: Iterable[dict] = (),
    ) -> "InMemoryLibrary":
        """Build a library from Zotero Web API ``items`` and ``collections`` records.

        Child attachments are attached to their parent item; attachments whose
        parent is not in ``items`` stay standalone.
        """
        raw_items = list(items)
        keys = {(r.get("data") or {}).get("key") or r.get("key") for r in raw_items}

        children: dict[str, list[Attachment]] = {}
        top_level: list[dict] = []
        for raw in raw_items:
            data = raw.get("data") or {}
            parent = data.get("parentItem")
            if data.get("itemType") == "attachment" and parent and parent in keys:
                children.setdefault(parent, []).append(
                    Attachment(
                        key=data.get("key") or raw.get("key"),
                        content_type=data.get("contentType") or "",
                        filename=data.get("filename") or "",
                        path=data.get("path"),
                        link_mode=data.get("linkMode"),
                        parent_key=parent,
                    )
                )
            elif data.get("itemType") == "note" and parent:
                continue
            else:
                top_level.append(raw)

        library_items = [
            LibraryItem.from_zotero_api(raw, attachments=children.get((raw.get("data") or {}).get("key") or raw.get("key")))
            for raw in top_level
        ]

        tree: dict[str, list[str]] = {}
        for raw in collections:
            data = raw.get("data") or {}
            parent = data.get("parentCollection")
            if parent:
                tree.setdefault(str(parent), []).append(str(data.get("key") or raw.get("key")))

        logger.debug("Loaded %d items and %d collection links", len(library_items), sum(len(v) for v in tree.values()))
        return cls(library_items, tree)


__all__ = ["InMemoryLibrary"]
