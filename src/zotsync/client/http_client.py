"""Base class for clients of the knowledge base service."""

import logging

import requests

from zotsync.config.settings import Settings
from zotsync.utils.text import mask_secret

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


class BaseKnowledgeBaseHTTPClient:
    """Shared session handling and authentication for the indexing service.

    Requests are never retried; callers decide how to record failures.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            api_key: API key sent as a bearer token.
            base_url: Service base URL, e.g. ``http://host/api/v1``.
            timeout: Request timeout in seconds.
            session: Optional pre-configured session (for testing).
        """
        self.api_key = api_key
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs):
        """Create client from settings."""
        return cls(api_key=settings.api_key, base_url=settings.base_url, **kwargs)

    def _build_headers(self, json_body: bool = False) -> dict[str, str]:
        """Build HTTP headers including authorization."""
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _get(self, url: str, **kwargs) -> requests.Response:
        logger.debug("GET %s (key %s)", url, mask_secret(self.api_key))
        return self._session.get(url, headers=self._build_headers(json_body=True), timeout=self.timeout, **kwargs)

    def _post(self, url: str, **kwargs) -> requests.Response:
        logger.debug("POST %s (key %s)", url, mask_secret(self.api_key))
        return self._session.post(url, headers=self._build_headers(), timeout=self.timeout, **kwargs)


__all__ = ["BaseKnowledgeBaseHTTPClient", "DEFAULT_TIMEOUT"]
