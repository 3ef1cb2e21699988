"""Shared fixtures."""

import json
from unittest.mock import Mock

import pytest

from zotsync.core.models import Attachment, Creator, LibraryItem


class FakeFileAccess:
    """AttachmentFileAccess over an in-memory mapping of path -> bytes."""

    def __init__(self, files: dict[str, bytes] | None = None, sizes: dict[str, int] | None = None):
        self.files = dict(files or {})
        self.sizes = dict(sizes or {})

    def get_file_path(self, attachment: Attachment) -> str | None:
        if attachment.path and attachment.path in self.files:
            return attachment.path
        return None

    def get_file_size(self, path: str) -> int:
        if path not in self.files:
            raise FileNotFoundError(2, "No such file or directory", path)
        return self.sizes.get(path, len(self.files[path]))

    def read_bytes(self, path: str, limit: int | None = None) -> bytes:
        if path not in self.files:
            raise FileNotFoundError(2, "No such file or directory", path)
        data = self.files[path]
        return data if limit is None else data[:limit]


@pytest.fixture
def file_access():
    return FakeFileAccess()


@pytest.fixture
def pdf_attachment():
    def factory(key: str, path: str | None = None, filename: str | None = None) -> Attachment:
        return Attachment(
            key=key,
            content_type="application/pdf",
            filename=filename or f"{key}.pdf",
            path=path or f"/files/{key}.pdf",
        )

    return factory


@pytest.fixture
def txt_attachment():
    def factory(
        key: str,
        path: str | None = None,
        filename: str | None = None,
        content_type: str = "text/plain",
    ) -> Attachment:
        return Attachment(
            key=key,
            content_type=content_type,
            filename=filename or f"{key}.txt",
            path=path or f"/files/{key}.txt",
        )

    return factory


@pytest.fixture
def make_item():
    def factory(key: str, title: str = "", attachments=(), **fields) -> LibraryItem:
        fields.setdefault("item_type", "journalArticle")
        return LibraryItem(key=key, title=title, attachments=list(attachments), **fields)

    return factory


@pytest.fixture
def sample_item():
    return LibraryItem(
        key="ABCD1234",
        library_id=1,
        item_type="journalArticle",
        title="Deep Learning for SAR",
        year="2023",
        publication_title="Remote Sensing",
        publisher="MDPI",
        abstract="We study things.",
        doi="10.3390/rs0000",
        url="https://example.org/paper",
        creators=[
            Creator(first_name="Ada", last_name="Lovelace"),
            Creator(last_name="Turing"),
            Creator(name="ESA Consortium"),
        ],
        tags=["sar", "deep learning"],
    )


@pytest.fixture
def make_response():
    def factory(status: int = 200, json_data=None, text: str | None = None, reason: str = "") -> Mock:
        response = Mock()
        response.status_code = status
        response.ok = status < 400  # same rule as requests.Response.ok
        response.reason = reason
        if text is None:
            text = json.dumps(json_data) if json_data is not None else ""
        response.text = text
        if json_data is not None:
            response.json.return_value = json_data
        else:
            response.json.side_effect = ValueError("No JSON object could be decoded")
        return response

    return factory


@pytest.fixture
def make_file_access():
    def factory(files=None, sizes: dict[str, int] | None = None) -> FakeFileAccess:
        if files is not None and not isinstance(files, dict):
            files = {path: b"data" for path in files}
        return FakeFileAccess(files, sizes)

    return factory
