"""Sync Zotero items and their attachments to a remote knowledge base."""

from .hooks import KnowledgeBaseSync

__version__ = "0.1.0"

__all__ = ["KnowledgeBaseSync", "__version__"]
