"""Sync orchestration: resolve, extract and upload each item in turn."""

import logging
import threading
import time
from collections.abc import Callable

from zotsync.client.http_client import DEFAULT_TIMEOUT
from zotsync.client.uploader import DocumentUploader
from zotsync.core.exceptions import (
    FileTooLargeError,
    FileUnreadableError,
    NoEligibleAttachmentError,
    UploadHttpError,
    ZotSyncError,
)
from zotsync.core.models import LibraryItem, SyncContext, SyncProgress, SyncResult, SyncStage, UploadTarget
from zotsync.core.protocols import AttachmentFileAccess
from zotsync.utils.text import extract_error_message, extract_html_title

from .attachments import AttachmentResolver
from .metadata import extract_metadata

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 15 * 1024 * 1024
PACING_DELAY = 0.5

REASON_NO_ATTACHMENT = "no eligible attachment"
REASON_TOO_LARGE = "file too large"
REASON_UNREADABLE = "file unreadable"

ProgressCallback = Callable[[SyncProgress], None]


class CancellationToken:
    """Thread-safe flag a host can set to stop a running sync between items."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; returns True if cancelled meanwhile."""
        return self._event.wait(timeout)


def describe_error(exc: Exception) -> str:
    """Turn a per-item exception into a short failure reason."""
    if isinstance(exc, NoEligibleAttachmentError):
        return REASON_NO_ATTACHMENT
    if isinstance(exc, FileTooLargeError):
        return REASON_TOO_LARGE
    if isinstance(exc, FileUnreadableError):
        return REASON_UNREADABLE
    if isinstance(exc, UploadHttpError):
        detail = extract_error_message(exc.body)
        return f"HTTP {exc.status}: {detail}" if detail else f"HTTP {exc.status}"
    message = str(exc) or exc.__class__.__name__
    return extract_html_title(message) or message


class SyncOrchestrator:
    """Drives items through attachment resolution, metadata extraction and upload.

    Items are processed strictly one after another with a fixed pause between
    uploads. Per-item failures are recorded and never abort the batch.
    """

    def __init__(
        self,
        file_access: AttachmentFileAccess,
        uploader: DocumentUploader | None = None,
        resolver: AttachmentResolver | None = None,
        max_file_size: int = MAX_FILE_SIZE,
        pacing_delay: float = PACING_DELAY,
        attach_metadata: bool = False,
        on_progress: ProgressCallback | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the orchestrator.

        Args:
            file_access: Resolves and reads attachment files.
            uploader: Uploader to use; built from the sync context when None.
            resolver: Attachment resolver; defaults to one over ``file_access``.
            max_file_size: Largest file size in bytes that is uploaded.
            pacing_delay: Seconds to wait between consecutive uploads.
            attach_metadata: Send extracted metadata with each document.
            on_progress: Called with a SyncProgress event at each stage.
            timeout: Request timeout for a uploader built from the context.
        """
        self.file_access = file_access
        self.uploader = uploader
        self.resolver = resolver or AttachmentResolver(file_access)
        self.max_file_size = max_file_size
        self.pacing_delay = pacing_delay
        self.attach_metadata = attach_metadata
        self.on_progress = on_progress
        self.timeout = timeout

    def run(self, context: SyncContext, cancel_token: CancellationToken | None = None) -> SyncResult:
        """Sync every item of ``context`` to its knowledge base.

        Raises:
            ConfigurationError: API key, base URL or knowledge base id is missing.
        """
        context.validate()
        uploader = self.uploader or DocumentUploader(
            api_key=context.api_key,
            base_url=context.base_url,
            file_access=self.file_access,
            attach_metadata=self.attach_metadata,
            timeout=self.timeout,
        )

        result = SyncResult()
        total = len(context.items)
        logger.info("Starting sync of %d items to knowledge base %s", total, context.dataset_id)

        for index, item in enumerate(context.items):
            if cancel_token and cancel_token.cancelled:
                logger.info("Sync cancelled after %d of %d items", index, total)
                result.cancelled = True
                break

            uploaded = self._sync_item(uploader, context.dataset_id, item, index, total, result)

            if uploaded and index < total - 1 and self.pacing_delay > 0:
                if cancel_token:
                    cancel_token.wait(self.pacing_delay)
                else:
                    time.sleep(self.pacing_delay)

        logger.info(
            "Sync finished: %d succeeded, %d failed%s",
            result.success_count,
            result.failed_count,
            " (cancelled)" if result.cancelled else "",
        )
        self._emit(SyncStage.DONE, total, total, message=result.summary_message(), percent=100)
        return result

    def _sync_item(
        self,
        uploader: DocumentUploader,
        dataset_id: str,
        item: LibraryItem,
        index: int,
        total: int,
        result: SyncResult,
    ) -> bool:
        """Process one item; returns True if an upload was attempted."""
        title = item.title or item.key

        self._emit(SyncStage.RESOLVING, index, total, title)
        try:
            target = self._prepare(item)
        except ZotSyncError as exc:
            logger.info("Skipping %s: %s", item.key, exc)
            self._fail(result, index, total, title, describe_error(exc))
            return False
        except Exception as exc:
            reason = describe_error(exc)
            logger.error("Failed to resolve a file for %s: %s", item.key, reason)
            self._fail(result, index, total, title, reason)
            return False

        metadata = extract_metadata(item)
        self._emit(SyncStage.UPLOADING, index, total, title, percent=30, message=target.display_filename)
        try:
            uploader.upload(
                target.file_path,
                metadata,
                dataset_id,
                mime_type=target.mime_type,
                filename=target.display_filename,
            )
        except Exception as exc:
            reason = describe_error(exc)
            logger.error("Failed to sync %s (%s, %s): %s", item.key, target.display_filename, target.mime_type, reason)
            self._fail(result, index, total, title, reason)
            return True

        logger.info("Uploaded %s (%s) for %s", target.display_filename, target.mime_type, item.key)
        result.record_success()
        self._emit(SyncStage.SUCCEEDED, index, total, title, percent=100)
        return True

    def _prepare(self, item: LibraryItem) -> UploadTarget:
        """Resolve the file to upload and check it against the size ceiling.

        Raises:
            NoEligibleAttachmentError: No PDF or TXT attachment with a local file.
            FileUnreadableError: The file size cannot be read.
            FileTooLargeError: The file is larger than ``max_file_size``.
        """
        target = self.resolver.resolve(item)
        if target is None:
            raise NoEligibleAttachmentError()
        try:
            size = self.file_access.get_file_size(target.file_path)
        except OSError as exc:
            raise FileUnreadableError(target.file_path, exc.strerror or str(exc)) from exc
        if size > self.max_file_size:
            raise FileTooLargeError(size, self.max_file_size)
        return target

    def _fail(self, result: SyncResult, index: int, total: int, title: str, reason: str) -> None:
        result.record_failure(title, reason)
        self._emit(SyncStage.FAILED, index, total, title, message=reason)

    def _emit(
        self,
        stage: SyncStage,
        index: int,
        total: int,
        title: str = "",
        percent: int = 0,
        message: str = "",
    ) -> None:
        if self.on_progress is None:
            return
        try:
            self.on_progress(
                SyncProgress(stage=stage, index=index, total=total, title=title, percent=percent, message=message)
            )
        except Exception as exc:
            logger.warning("Progress callback failed: %s", exc)


__all__ = [
    "MAX_FILE_SIZE",
    "PACING_DELAY",
    "REASON_NO_ATTACHMENT",
    "REASON_TOO_LARGE",
    "REASON_UNREADABLE",
    "CancellationToken",
    "SyncOrchestrator",
    "describe_error",
]
