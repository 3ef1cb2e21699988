"""Tests for the local library and file access adapters."""

import pytest

from zotsync.core.models import Attachment, LibraryItem
from zotsync.core.protocols import AttachmentFileAccess, LibraryStore
from zotsync.infrastructure.files import LocalFileAccess
from zotsync.infrastructure.library import InMemoryLibrary

API_ITEMS = [
    {
        "key": "PARENT01",
        "library": {"type": "user", "id": 42},
        "data": {
            "key": "PARENT01",
            "itemType": "journalArticle",
            "title": "A Study",
            "date": "2021-06-15",
            "publicationTitle": "Journal",
            "DOI": "10.1000/xyz",
            "creators": [
                {"creatorType": "author", "firstName": "Jane", "lastName": "Doe"},
                {"creatorType": "editor", "name": "Org"},
            ],
            "tags": [{"tag": "alpha"}, {"tag": ""}],
            "collections": ["COLL1"],
        },
    },
    {
        "key": "ATTACH01",
        "data": {
            "key": "ATTACH01",
            "itemType": "attachment",
            "parentItem": "PARENT01",
            "contentType": "application/pdf",
            "filename": "study.pdf",
            "path": "storage:study.pdf",
            "linkMode": "imported_file",
        },
    },
    {
        "key": "NOTE0001",
        "data": {"key": "NOTE0001", "itemType": "note", "parentItem": "PARENT01"},
    },
    {
        "key": "LOOSE001",
        "data": {
            "key": "LOOSE001",
            "itemType": "attachment",
            "parentItem": "MISSING1",
            "contentType": "text/plain",
            "filename": "notes.txt",
            "collections": ["COLL2"],
        },
    },
]

API_COLLECTIONS = [
    {"key": "COLL1", "data": {"key": "COLL1", "parentCollection": False}},
    {"key": "COLL2", "data": {"key": "COLL2", "parentCollection": "COLL1"}},
]


class TestLibraryItemFromApi:
    """Test LibraryItem.from_zotero_api."""

    def test_parses_fields(self):
        item = LibraryItem.from_zotero_api(API_ITEMS[0])

        assert item.key == "PARENT01"
        assert item.library_id == 42
        assert item.year == "2021"
        assert item.doi == "10.1000/xyz"
        assert [c.display_name() for c in item.creators] == ["Doe, Jane", "Org"]
        assert item.tags == ["alpha"]
        assert item.is_regular

    @pytest.mark.parametrize("date, year", [("June 2019", "2019"), ("2020/01/02", "2020"), ("n.d.", ""), ("", "")])
    def test_year_extraction(self, date, year):
        item = LibraryItem.from_zotero_api({"data": {"key": "K", "date": date}})

        assert item.year == year


class TestInMemoryLibrary:
    """Test InMemoryLibrary.from_zotero_api."""

    def test_groups_children(self):
        library = InMemoryLibrary.from_zotero_api(API_ITEMS, API_COLLECTIONS)

        assert len(library) == 2
        parent = library.get_item("PARENT01")
        assert [a.key for a in parent.attachments] == ["ATTACH01"]
        assert parent.attachments[0].parent_key == "PARENT01"
        assert library.get_item("NOTE0001") is None

        loose = library.get_item("LOOSE001")
        assert loose.is_attachment
        assert loose.as_attachment().is_text

    def test_collection_tree(self):
        library = InMemoryLibrary.from_zotero_api(API_ITEMS, API_COLLECTIONS)

        assert library.get_child_collections("COLL1") == ["COLL2"]
        assert library.get_child_collections("COLL2") == []
        assert [i.key for i in library.get_collection_items("COLL2")] == ["LOOSE001"]


class TestLocalFileAccess:
    """Test LocalFileAccess path resolution and reads."""

    @pytest.fixture
    def storage(self, tmp_path):
        (tmp_path / "storage" / "ATTACH01").mkdir(parents=True)
        (tmp_path / "storage" / "ATTACH01" / "study.pdf").write_bytes(b"%PDF-1.4 body")
        (tmp_path / "linked").mkdir()
        (tmp_path / "linked" / "notes.txt").write_text("hello", encoding="utf-8")
        return tmp_path

    def test_storage_prefix(self, storage):
        access = LocalFileAccess(storage / "storage")
        attachment = Attachment(key="ATTACH01", content_type="application/pdf", filename="study.pdf", path="storage:study.pdf")

        path = access.get_file_path(attachment)

        assert path == str(storage / "storage" / "ATTACH01" / "study.pdf")
        assert access.get_file_size(path) == len(b"%PDF-1.4 body")
        assert access.read_bytes(path, limit=4) == b"%PDF"
        assert access.read_bytes(path) == b"%PDF-1.4 body"

    def test_filename_without_path(self, storage):
        access = LocalFileAccess(storage / "storage")
        attachment = Attachment(key="ATTACH01", content_type="application/pdf", filename="study.pdf")

        assert access.get_file_path(attachment) is not None

    def test_linked_base_dir(self, storage):
        attachment = Attachment(key="L1", content_type="text/plain", filename="notes.txt", path="attachments:notes.txt")

        assert LocalFileAccess(storage / "storage").get_file_path(attachment) is None
        assert LocalFileAccess(storage / "storage", storage / "linked").get_file_path(attachment) == str(
            storage / "linked" / "notes.txt"
        )

    def test_absolute_path(self, storage):
        absolute = str(storage / "linked" / "notes.txt")
        attachment = Attachment(key="L2", content_type="text/plain", filename="notes.txt", path=absolute)

        assert LocalFileAccess(storage / "storage").get_file_path(attachment) == absolute

    def test_missing_file(self, storage):
        access = LocalFileAccess(storage / "storage")
        attachment = Attachment(key="GONE", content_type="application/pdf", filename="gone.pdf")

        assert access.get_file_path(attachment) is None
        with pytest.raises(OSError):
            access.get_file_size(str(storage / "gone.pdf"))


def test_adapters_satisfy_protocols(tmp_path):
    assert isinstance(InMemoryLibrary(), LibraryStore)
    assert isinstance(LocalFileAccess(tmp_path), AttachmentFileAccess)
