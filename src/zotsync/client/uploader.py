"""Document upload to a knowledge base."""

import json
import logging
import os

import requests

from zotsync.core.exceptions import FileUnreadableError, UploadHttpError, UploadNetworkError
from zotsync.core.models import PDF_MIME_TYPE, DocumentMetadata
from zotsync.core.protocols import AttachmentFileAccess
from zotsync.utils.text import truncate

from .http_client import DEFAULT_TIMEOUT, BaseKnowledgeBaseHTTPClient

logger = logging.getLogger(__name__)

# Indexing configuration sent with every document
INDEXING_TECHNIQUE = "economy"
SEGMENT_SEPARATOR = "\n\n"
SEGMENT_MAX_TOKENS = 500
PRE_PROCESSING_RULES = ("remove_extra_spaces", "remove_urls_emails")


def build_process_payload(metadata: DocumentMetadata | None = None) -> dict:
    """Build the JSON ``data`` part of an upload request.

    Args:
        metadata: When given, sent as ``doc_metadata``.

    Returns:
        Dict of indexing configuration.
    """
    payload: dict = {
        "indexing_technique": INDEXING_TECHNIQUE,
        "process_rule": {
            "rules": {
                "pre_processing_rules": [{"id": rule_id, "enabled": True} for rule_id in PRE_PROCESSING_RULES],
                "segmentation": {
                    "separator": SEGMENT_SEPARATOR,
                    "max_tokens": SEGMENT_MAX_TOKENS,
                },
            },
            "mode": "custom",
        },
    }
    if metadata is not None:
        payload["doc_metadata"] = metadata.to_payload()
    return payload


class DocumentUploader(BaseKnowledgeBaseHTTPClient):
    """Uploads one file per call as a new knowledge base document."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        file_access: AttachmentFileAccess,
        attach_metadata: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize uploader.

        Args:
            api_key: API key sent as a bearer token.
            base_url: Service base URL.
            file_access: Reads the files to upload.
            attach_metadata: Send extracted metadata with the document.
            timeout: Request timeout in seconds.
            session: Optional pre-configured session (for testing).
        """
        super().__init__(api_key=api_key, base_url=base_url, timeout=timeout, session=session)
        self.file_access = file_access
        self.attach_metadata = attach_metadata

    def upload_url(self, dataset_id: str) -> str:
        return f"{self.base_url}/datasets/{dataset_id}/document/create_by_file"

    def upload(
        self,
        file_path: str,
        metadata: DocumentMetadata,
        dataset_id: str,
        mime_type: str = PDF_MIME_TYPE,
        filename: str | None = None,
    ) -> dict:
        """Upload a file to a knowledge base.

        Args:
            file_path: Local file to upload.
            metadata: Extracted metadata; only sent when ``attach_metadata`` is set.
            dataset_id: Target knowledge base id.
            mime_type: MIME type of the file part.
            filename: Filename of the file part; defaults to the path's basename.

        Returns:
            Parsed JSON response, or an empty dict if the body is not JSON.

        Raises:
            FileUnreadableError: The file does not exist or cannot be read.
            UploadHttpError: The service answered with a non-2xx status.
            UploadNetworkError: The request failed at the transport level.
        """
        content = self._read_file(file_path)
        filename = filename or os.path.basename(file_path)
        payload = build_process_payload(metadata if self.attach_metadata else None)
        url = self.upload_url(dataset_id)

        logger.info("Uploading %s (%s, %d bytes) to %s", filename, mime_type, len(content), url)
        files = {
            "data": (None, json.dumps(payload), "application/json"),
            "file": (filename, content, mime_type),
        }
        try:
            response = self._post(url, files=files)
        except requests.RequestException as exc:
            logger.warning("Network error uploading %s: %s", filename, exc)
            raise UploadNetworkError(f"Network error, upload failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            body = response.text or ""
            logger.warning("Upload of %s failed with HTTP %d: %s", filename, response.status_code, truncate(body, 200))
            raise UploadHttpError(response.status_code, body)

        logger.debug("Upload of %s succeeded: %s", filename, truncate(response.text, 200))
        try:
            return response.json()
        except ValueError:
            return {}

    def _read_file(self, file_path: str) -> bytes:
        """Probe then read the whole file."""
        try:
            self.file_access.read_bytes(file_path, limit=1)
            return self.file_access.read_bytes(file_path)
        except OSError as exc:
            raise FileUnreadableError(file_path, exc.strerror or str(exc)) from exc


__all__ = ["DocumentUploader", "build_process_payload"]
