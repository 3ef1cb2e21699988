"""Text processing utilities for zotsync."""

import html
import json
import re

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)


def truncate(value: str | None, max_len: int = 100) -> str:
    """Cut a string to ``max_len`` characters, marking the cut with an ellipsis."""
    if not value:
        return ""
    if len(value) > max_len:
        return value[:max_len] + "..."
    return value


def mask_secret(value: str | None, visible: int = 5) -> str:
    """Show only the first few characters of a secret for logging."""
    if not value:
        return "NOT SET"
    return value[:visible] + "..."


def extract_html_title(value: str | None) -> str | None:
    """Return the text of an embedded ``<title>`` element, if any."""
    if not value:
        return None
    match = _TITLE_RE.search(value)
    if not match:
        return None
    title = re.sub(r"\s+", " ", html.unescape(match.group(1))).strip()
    return title or None


def extract_json_message(value: str | None) -> str | None:
    """Return the ``message`` or ``error`` field of a JSON error body, if any."""
    if not value:
        return None
    try:
        data = json.loads(value)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    message = data.get("message") or data.get("error")
    if isinstance(message, dict):
        message = message.get("message")
    return str(message) if message else None


def extract_error_message(value: str | None, max_len: int = 200) -> str:
    """Best-effort human readable message from an error response body.

    Prefers a structured JSON ``message``/``error`` field, then the title of
    an HTML error page, then the raw text.
    """
    if not value:
        return ""
    return extract_json_message(value) or extract_html_title(value) or truncate(value.strip(), max_len)


__all__ = [
    "truncate",
    "mask_secret",
    "extract_html_title",
    "extract_json_message",
    "extract_error_message",
]
