"""Entry points called by the host application.

The host keeps UI concerns (menus, preference pane, progress windows) and calls
these methods; each returns a result object for the host to render.
"""

import logging
from collections.abc import Sequence

import requests

from zotsync.client.http_client import DEFAULT_TIMEOUT
from zotsync.client.knowledge_base import KnowledgeBaseClient
from zotsync.client.uploader import DocumentUploader
from zotsync.config.settings import LAST_SYNC_TIME, Settings, pref_key
from zotsync.core.models import ConnectionResult, KnowledgeBase, LibraryItem, SyncResult
from zotsync.core.protocols import AttachmentFileAccess, ConfigStore, LibraryStore
from zotsync.pipeline.collections import collect_items
from zotsync.pipeline.sync import PACING_DELAY, CancellationToken, ProgressCallback, SyncOrchestrator
from zotsync.utils.datetime import to_timestamp

logger = logging.getLogger(__name__)


class KnowledgeBaseSync:
    """Wires host capabilities to the sync pipeline and the service clients."""

    def __init__(
        self,
        library: LibraryStore,
        file_access: AttachmentFileAccess,
        config: ConfigStore,
        on_progress: ProgressCallback | None = None,
        pacing_delay: float = PACING_DELAY,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        """Initialize the facade.

        Args:
            library: Host bibliographic store.
            file_access: Host attachment file access.
            config: Host preference store.
            on_progress: Progress listener for sync runs.
            pacing_delay: Seconds between consecutive uploads.
            timeout: HTTP request timeout in seconds.
            session: Optional shared HTTP session (for testing).
        """
        self.library = library
        self.file_access = file_access
        self.config = config
        self.on_progress = on_progress
        self.pacing_delay = pacing_delay
        self.timeout = timeout
        self.session = session

    @property
    def settings(self) -> Settings:
        """Current settings, read fresh from the preference store."""
        return Settings.from_store(self.config)

    def _kb_client(self, settings: Settings) -> KnowledgeBaseClient:
        return KnowledgeBaseClient.from_settings(settings, timeout=self.timeout, session=self.session)

    def _orchestrator(self, settings: Settings) -> SyncOrchestrator:
        uploader = DocumentUploader(
            api_key=settings.api_key,
            base_url=settings.base_url,
            file_access=self.file_access,
            attach_metadata=settings.attach_metadata,
            timeout=self.timeout,
            session=self.session,
        )
        return SyncOrchestrator(
            self.file_access,
            uploader=uploader,
            pacing_delay=self.pacing_delay,
            on_progress=self.on_progress,
        )

    def run_connection_test(self, dataset_id: str | None = None) -> ConnectionResult:
        """Check the configured credentials against a knowledge base."""
        settings = self.settings
        result = self._kb_client(settings).test_connection(dataset_id or settings.kb_id)
        logger.info("Connection test: %s - %s", result.status.value, result.message)
        return result

    def list_knowledge_bases(self) -> list[KnowledgeBase]:
        """List knowledge bases available to the configured API key."""
        return self._kb_client(self.settings).list_knowledge_bases()

    def sync_now(self, cancel_token: CancellationToken | None = None) -> SyncResult:
        """Sync the configured collections to the configured knowledge base.

        Raises:
            ConfigurationError: Settings are incomplete; nothing was uploaded.
        """
        settings = self.settings
        settings.to_context().validate()
        items = collect_items(self.library, settings.selected_collections, settings.include_subcollections)
        result = self._orchestrator(settings).run(settings.to_context(items), cancel_token)
        self.config.set(pref_key(LAST_SYNC_TIME), to_timestamp())
        return result

    def sync_items(
        self,
        items: Sequence[LibraryItem],
        dataset_id: str,
        cancel_token: CancellationToken | None = None,
    ) -> SyncResult:
        """Sync explicitly selected items to the given knowledge base.

        Raises:
            ConfigurationError: API key, base URL or knowledge base id is missing.
        """
        if not items:
            logger.info("No items selected; nothing to sync")
            return SyncResult()
        settings = self.settings
        return self._orchestrator(settings).run(settings.to_context(items, dataset_id), cancel_token)


__all__ = ["KnowledgeBaseSync"]
