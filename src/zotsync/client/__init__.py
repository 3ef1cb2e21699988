"""Clients for the knowledge base service."""

from .http_client import BaseKnowledgeBaseHTTPClient
from .knowledge_base import KnowledgeBaseClient
from .uploader import DocumentUploader, build_process_payload

__all__ = [
    "BaseKnowledgeBaseHTTPClient",
    "KnowledgeBaseClient",
    "DocumentUploader",
    "build_process_payload",
]
