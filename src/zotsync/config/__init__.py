"""Configuration."""

from .settings import (
    DEFAULT_BASE_URL,
    PREFS_PREFIX,
    DictConfigStore,
    EnvConfigStore,
    Settings,
    pref_key,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "PREFS_PREFIX",
    "DictConfigStore",
    "EnvConfigStore",
    "Settings",
    "pref_key",
]
