"""Settings loaded from the host preference store."""

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from zotsync.core.models import SyncContext
from zotsync.core.protocols import ConfigStore
from zotsync.utils.datetime import parse_timestamp

logger = logging.getLogger(__name__)

PREFS_PREFIX = "extensions.zotero.zotsync"
DEFAULT_BASE_URL = "http://www.orsalab.cn/api/v1"

API_KEY = "dify-api-key"
BASE_URL = "dify-base-url"
KB_ID = "dify-kb-id"
SELECTED_COLLECTIONS = "selected-collections"
INCLUDE_SUBCOLLECTIONS = "include-subcollections"
LAST_SYNC_TIME = "last-sync-time"
ATTACH_METADATA = "attach-metadata"

def pref_key(name: str) -> str:
    """Full preference key for a short preference name."""
    return f"{PREFS_PREFIX}.{name}"


class Settings(BaseModel):
    """Sync configuration."""

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    kb_id: str = ""
    selected_collections: list[str] = Field(default_factory=list)
    include_subcollections: bool = False
    attach_metadata: bool = False
    last_sync_time: str | None = None

    @field_validator("api_key", "kb_id", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> str:
        return str(v).strip() if v is not None else ""

    @field_validator("base_url", mode="before")
    @classmethod
    def _clean_base_url(cls, v: Any) -> str:
        value = str(v).strip() if v else ""
        return value.rstrip("/") or DEFAULT_BASE_URL

    @field_validator("selected_collections", mode="before")
    @classmethod
    def _parse_collections(cls, v: Any) -> list[str]:
        if v is None or v == "":
            return []
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except ValueError:
                logger.warning("Ignoring malformed %s preference: %r", SELECTED_COLLECTIONS, v)
                return []
        if not isinstance(v, (list, tuple)):
            logger.warning("Ignoring non-list %s preference: %r", SELECTED_COLLECTIONS, v)
            return []
        return [str(c) for c in v if c not in (None, "")]

    @field_validator("include_subcollections", "attach_metadata", mode="before")
    @classmethod
    def _parse_bool(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in ("1", "true", "yes", "on")
        return bool(v)

    @property
    def last_synced_at(self) -> datetime | None:
        """Time of the last collection sync, if one was recorded."""
        return parse_timestamp(self.last_sync_time)

    @classmethod
    def from_store(cls, store: ConfigStore) -> "Settings":
        """Build settings from a preference store."""
        return cls(
            api_key=store.get(pref_key(API_KEY)),
            base_url=store.get(pref_key(BASE_URL)),
            kb_id=store.get(pref_key(KB_ID)),
            selected_collections=store.get(pref_key(SELECTED_COLLECTIONS)),
            include_subcollections=store.get(pref_key(INCLUDE_SUBCOLLECTIONS)) or False,
            attach_metadata=store.get(pref_key(ATTACH_METADATA)) or False,
            last_sync_time=store.get(pref_key(LAST_SYNC_TIME)),
        )

    def to_context(self, items: list | None = None, dataset_id: str | None = None) -> SyncContext:
        """Build a per-invocation sync context."""
        return SyncContext(
            api_key=self.api_key,
            base_url=self.base_url,
            dataset_id=dataset_id if dataset_id is not None else self.kb_id,
            items=list(items or []),
        )


class DictConfigStore:
    """In-memory preference store."""

    def __init__(self, values: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(values or {})

    def get(self, key: str) -> Any | None:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value


class EnvConfigStore:
    """Preference store backed by environment variables.

    ``extensions.zotero.zotsync.dify-api-key`` maps to ``ZOTSYNC_DIFY_API_KEY``.
    Values written with ``set`` are kept in memory only.
    """

    ENV_PREFIX = "ZOTSYNC_"

    def __init__(self, env_file: str | Path | None = None):
        load_dotenv(env_file)
        self._overrides: dict[str, Any] = {}

    @classmethod
    def env_name(cls, key: str) -> str:
        name = key[len(PREFS_PREFIX) + 1 :] if key.startswith(PREFS_PREFIX + ".") else key
        return cls.ENV_PREFIX + name.upper().replace("-", "_").replace(".", "_")

    def get(self, key: str) -> Any | None:
        if key in self._overrides:
            return self._overrides[key]
        return os.environ.get(self.env_name(key))

    def set(self, key: str, value: Any) -> None:
        self._overrides[key] = value


__all__ = [
    "PREFS_PREFIX",
    "DEFAULT_BASE_URL",
    "API_KEY",
    "BASE_URL",
    "KB_ID",
    "SELECTED_COLLECTIONS",
    "INCLUDE_SUBCOLLECTIONS",
    "LAST_SYNC_TIME",
    "ATTACH_METADATA",
    "pref_key",
    "Settings",
    "DictConfigStore",
    "EnvConfigStore",
]
