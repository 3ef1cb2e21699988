"""Tests for metadata extraction."""

from datetime import datetime, timezone

from zotsync.core.models import Creator, LibraryItem
from zotsync.pipeline.metadata import extract_metadata

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestExtractMetadata:
    """Test extract_metadata."""

    def test_full_item(self, sample_item):
        payload = extract_metadata(sample_item, now=FIXED_NOW).to_payload()

        assert payload == {
            "title": "Deep Learning for SAR",
            "authors": ["Lovelace, Ada", "Turing", "ESA Consortium"],
            "year": "2023",
            "item_type": "journalArticle",
            "publication_title": "Remote Sensing",
            "publisher": "MDPI",
            "doi": "10.3390/rs0000",
            "url": "https://example.org/paper",
            "tags": ["sar", "deep learning"],
            "abstract": "We study things.",
            "source_key": "ABCD1234",
            "source_library_id": 1,
            "imported_from": "Zotero",
            "imported_at": "2024-05-01T12:00:00+00:00",
        }

    def test_empty_fields_are_omitted(self):
        item = LibraryItem(key="K1", item_type="book", title="Only a title")

        payload = extract_metadata(item, now=FIXED_NOW).to_payload()

        assert "abstract" not in payload
        assert "tags" not in payload
        assert "authors" not in payload
        assert "doi" not in payload
        assert "source_library_id" not in payload
        assert all(value != "" and value != [] for value in payload.values())

    def test_serialized_record_has_no_empty_values(self):
        metadata = extract_metadata(LibraryItem(key="K1", title="Only a title"), now=FIXED_NOW)

        dumped = metadata.model_dump()

        assert dumped == metadata.to_payload()
        assert set(dumped) == {"title", "item_type", "source_key", "imported_from", "imported_at"}
        assert '""' not in metadata.model_dump_json()
        assert "[]" not in metadata.model_dump_json()

    def test_first_name_only_creator_is_dropped(self):
        item = LibraryItem(
            key="K2",
            creators=[Creator(first_name="Solo"), Creator(first_name="Grace", last_name="Hopper")],
        )

        metadata = extract_metadata(item, now=FIXED_NOW)

        assert metadata.authors == ["Hopper, Grace"]

    def test_authors_dropped_when_all_creators_empty(self):
        item = LibraryItem(key="K3", creators=[Creator(first_name="Solo")])

        payload = extract_metadata(item, now=FIXED_NOW).to_payload()

        assert "authors" not in payload

    def test_imported_at_uses_invocation_time(self, sample_item):
        before = datetime.now(timezone.utc)

        metadata = extract_metadata(sample_item)

        assert datetime.fromisoformat(metadata.imported_at) >= before.replace(microsecond=0)

    def test_does_not_mutate_item(self, sample_item):
        snapshot = sample_item.model_dump()

        extract_metadata(sample_item, now=FIXED_NOW)

        assert sample_item.model_dump() == snapshot
