"""Attachment selection for upload."""

import logging
import os

from zotsync.core.models import (
    PDF_MIME_TYPE,
    TEXT_MIME_TYPE,
    Attachment,
    LibraryItem,
    UploadTarget,
)
from zotsync.core.protocols import AttachmentFileAccess

logger = logging.getLogger(__name__)


class AttachmentResolver:
    """Picks the single file to upload for an item.

    Policy, in order:
    1. The item itself, when it is a PDF attachment.
    2. The first PDF attachment with a local file.
    3. The first plain-text attachment (by content type or ``.txt`` name)
       with a local file.
    """

    def __init__(self, file_access: AttachmentFileAccess):
        self.file_access = file_access

    def resolve(self, item: LibraryItem) -> UploadTarget | None:
        """Return the upload target for ``item``, or None if nothing is eligible."""
        if item.is_attachment:
            attachment = item.as_attachment()
            if attachment.is_pdf:
                return self._target(attachment, PDF_MIME_TYPE)
            logger.debug("Attachment item %s is not a PDF (%s)", item.key, attachment.content_type)
            return None

        for attachment in item.attachments:
            if attachment.is_pdf:
                target = self._target(attachment, PDF_MIME_TYPE)
                if target:
                    logger.debug("PDF attachment selected for %s: %s", item.key, target.file_path)
                    return target

        for attachment in item.attachments:
            if attachment.is_text:
                target = self._target(attachment, TEXT_MIME_TYPE)
                if target:
                    logger.debug("TXT attachment selected for %s: %s", item.key, target.file_path)
                    return target

        logger.debug("No PDF or TXT attachment found for %s", item.key)
        return None

    def _target(self, attachment: Attachment, mime_type: str) -> UploadTarget | None:
        path = self.file_access.get_file_path(attachment)
        if not path:
            return None
        return UploadTarget(
            file_path=path,
            mime_type=mime_type,
            display_filename=attachment.filename or os.path.basename(path),
        )


__all__ = ["AttachmentResolver"]
