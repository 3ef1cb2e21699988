"""Knowledge base listing and connection checks."""

import logging
import re

import requests

from zotsync.core.exceptions import ConfigurationError, KnowledgeBaseListError, RemoteListParseError
from zotsync.core.models import ConnectionResult, ConnectionStatus, KnowledgeBase
from zotsync.utils.text import extract_json_message, truncate

from .http_client import BaseKnowledgeBaseHTTPClient

logger = logging.getLogger(__name__)

LIST_PAGE = 1
LIST_LIMIT = 100


class KnowledgeBaseClient(BaseKnowledgeBaseHTTPClient):
    """Lists knowledge bases and verifies access to one of them."""

    def list_url(self) -> str:
        root = re.sub(r"/v1$", "", self.base_url).rstrip("/")
        return f"{root}/v1/datasets?page={LIST_PAGE}&limit={LIST_LIMIT}"

    def dataset_url(self, dataset_id: str) -> str:
        return f"{self.base_url}/datasets/{dataset_id}"

    def list_knowledge_bases(self) -> list[KnowledgeBase]:
        """Fetch available knowledge bases.

        Returns:
            Knowledge bases in the order the service lists them. An unexpected
            response shape yields an empty list.

        Raises:
            ConfigurationError: No API key configured.
            KnowledgeBaseListError: Non-2xx status or transport failure.
        """
        if not self.api_key:
            raise ConfigurationError("dify-api-key", "API key is not configured")

        url = self.list_url()
        logger.info("Fetching knowledge bases from %s", url)
        try:
            response = self._get(url)
        except requests.RequestException as exc:
            logger.warning("Failed to fetch knowledge bases: %s", exc)
            raise KnowledgeBaseListError(f"Failed to fetch knowledge bases: {exc}") from exc

        if not 200 <= response.status_code < 300:
            detail = extract_json_message(response.text) or response.reason or ""
            raise KnowledgeBaseListError(
                f"Failed to fetch knowledge bases: HTTP {response.status_code} - {detail}",
                status=response.status_code,
            )

        try:
            datasets = self._parse_list(response)
        except RemoteListParseError as exc:
            logger.warning("%s; treating as empty", exc)
            return []

        result = []
        for entry in datasets:
            if isinstance(entry, dict) and entry.get("id") and entry.get("name"):
                result.append(KnowledgeBase(id=str(entry["id"]), name=str(entry["name"])))
            else:
                logger.debug("Skipping malformed knowledge base entry: %r", entry)

        if not result:
            logger.info("No knowledge bases found")
        else:
            logger.info("Found %d knowledge bases", len(result))
        return result

    @staticmethod
    def _parse_list(response: requests.Response) -> list:
        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteListParseError("Knowledge base list response is not JSON") from exc
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("data"), list):
            return data["data"]
        raise RemoteListParseError("Knowledge base list response has no data array")

    def test_connection(self, dataset_id: str) -> ConnectionResult:
        """Verify credentials against a specific knowledge base.

        Never raises; every failure is reported through the result status.
        """
        if not self.api_key:
            return ConnectionResult(status=ConnectionStatus.ERROR, message="Error: API key must not be empty")
        if not dataset_id:
            return ConnectionResult(status=ConnectionStatus.ERROR, message="Error: select a knowledge base first")

        url = self.dataset_url(dataset_id)
        logger.info("Testing connection to %s", url)
        try:
            response = self._get(url)
        except (requests.ConnectionError, requests.Timeout) as exc:
            logger.warning("Connection test network error: %s", exc)
            return ConnectionResult(
                status=ConnectionStatus.ERROR,
                message="Connection failed: network error. Check the URL and your network connection.",
            )
        except requests.RequestException as exc:
            logger.warning("Connection test failed: %s", exc)
            return ConnectionResult(status=ConnectionStatus.ERROR, message=f"Connection failed: {exc or 'unknown error'}")

        status = response.status_code
        if 200 <= status < 300:
            return self._classify_success(response, dataset_id)
        if status == 401:
            return ConnectionResult(
                status=ConnectionStatus.AUTH_ERROR,
                message="Authentication failed. Check that the API key is correct.",
            )
        if status == 404:
            return ConnectionResult(
                status=ConnectionStatus.NOT_FOUND,
                message="Knowledge base not found. Check that the knowledge base ID is correct.",
            )

        message = f"Connection failed. HTTP status: {status}."
        detail = extract_json_message(response.text)
        if detail:
            message += f" Server error: {detail}"
        elif response.text:
            message += f" Response: {truncate(response.text, 100)}"
        return ConnectionResult(status=ConnectionStatus.ERROR, message=message)

    @staticmethod
    def _classify_success(response: requests.Response, dataset_id: str) -> ConnectionResult:
        try:
            data = response.json()
        except ValueError:
            return ConnectionResult(
                status=ConnectionStatus.WARNING,
                message="Connected, but the response is not valid JSON.",
            )

        remote_id = data.get("id") if isinstance(data, dict) else None
        if remote_id and str(remote_id) == dataset_id:
            name = data.get("name") or dataset_id
            return ConnectionResult(
                status=ConnectionStatus.SUCCESS,
                message=f"Success! Connected. Knowledge base: {name}",
                knowledge_base_name=name,
            )
        if remote_id:
            return ConnectionResult(
                status=ConnectionStatus.WARNING,
                message=f"Connected, but the returned knowledge base ID ({remote_id}) does not match {dataset_id}.",
            )
        return ConnectionResult(
            status=ConnectionStatus.WARNING,
            message="Connected, but the knowledge base ID could not be verified from the response.",
        )


__all__ = ["KnowledgeBaseClient"]
