"""Shared utilities."""

from .logging import setup_logging
from .datetime import parse_timestamp, to_timestamp, utc_now
from .text import extract_error_message, extract_html_title, extract_json_message, mask_secret, truncate

__all__ = [
    "setup_logging",
    "utc_now",
    "to_timestamp",
    "parse_timestamp",
    "extract_error_message",
    "extract_html_title",
    "extract_json_message",
    "mask_secret",
    "truncate",
]
