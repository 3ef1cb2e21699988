"""Sync pipeline."""

from .attachments import AttachmentResolver
from .collections import collect_items, iter_collection_ids
from .metadata import extract_metadata
from .sync import CancellationToken, SyncOrchestrator, describe_error

__all__ = [
    "AttachmentResolver",
    "collect_items",
    "iter_collection_ids",
    "extract_metadata",
    "CancellationToken",
    "SyncOrchestrator",
    "describe_error",
]
