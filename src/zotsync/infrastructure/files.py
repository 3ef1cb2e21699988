"""Local attachment file access."""

import logging
from pathlib import Path

from zotsync.core.models import Attachment

logger = logging.getLogger(__name__)

STORAGE_PREFIX = "storage:"
ATTACHMENTS_PREFIX = "attachments:"


class LocalFileAccess:
    """AttachmentFileAccess over a Zotero data directory.

    Stored files live under ``<storage_dir>/<attachment key>/<filename>``;
    linked files keep an absolute path, or a path relative to the linked
    attachment base directory when prefixed with ``attachments:``.
    """

    def __init__(self, storage_dir: str | Path, linked_base_dir: str | Path | None = None):
        self.storage_dir = Path(storage_dir).expanduser()
        self.linked_base_dir = Path(linked_base_dir).expanduser() if linked_base_dir else None

    def _candidate(self, attachment: Attachment) -> Path | None:
        path = attachment.path
        if not path:
            if attachment.filename:
                return self.storage_dir / attachment.key / attachment.filename
            return None
        if path.startswith(STORAGE_PREFIX):
            return self.storage_dir / attachment.key / path[len(STORAGE_PREFIX) :]
        if path.startswith(ATTACHMENTS_PREFIX):
            if self.linked_base_dir is None:
                logger.debug("No linked attachment base directory for %s", attachment.key)
                return None
            return self.linked_base_dir / path[len(ATTACHMENTS_PREFIX) :]
        return Path(path).expanduser()

    def get_file_path(self, attachment: Attachment) -> str | None:
        candidate = self._candidate(attachment)
        if candidate is None or not candidate.is_file():
            return None
        return str(candidate)

    def get_file_size(self, path: str) -> int:
        return Path(path).stat().st_size

    def read_bytes(self, path: str, limit: int | None = None) -> bytes:
        with open(path, "rb") as f:
            return f.read() if limit is None else f.read(limit)


__all__ = ["LocalFileAccess"]
