"""Tests for the host-facing facade."""

import json
from unittest.mock import Mock

import pytest
import requests

from zotsync import KnowledgeBaseSync
from zotsync.config.settings import DictConfigStore, pref_key
from zotsync.core.exceptions import ConfigurationError
from zotsync.core.models import ConnectionStatus, SyncResult
from zotsync.infrastructure.library import InMemoryLibrary
from zotsync.utils.datetime import parse_timestamp


@pytest.fixture
def session(make_response):
    session = Mock(spec=requests.Session)
    session.post.return_value = make_response(200, {"document": {"id": "doc"}})
    return session


@pytest.fixture
def config():
    return DictConfigStore(
        {
            pref_key("dify-api-key"): "sk-test",
            pref_key("dify-base-url"): "http://kb.example/api/v1",
            pref_key("dify-kb-id"): "ds-1",
            pref_key("selected-collections"): json.dumps(["C1"]),
        }
    )


@pytest.fixture
def library(make_item, pdf_attachment):
    return InMemoryLibrary(
        [
            make_item("A", "Paper A", [pdf_attachment("A")], collections=["C1"]),
            make_item("B", "Paper B", collections=["C1"]),
            make_item("Z", "Elsewhere", [pdf_attachment("Z")], collections=["C2"]),
        ]
    )


@pytest.fixture
def sync(library, make_file_access, config, session):
    return KnowledgeBaseSync(
        library,
        make_file_access(["/files/A.pdf", "/files/Z.pdf"]),
        config,
        pacing_delay=0,
        session=session,
    )


class TestKnowledgeBaseSync:
    """Test KnowledgeBaseSync entry points."""

    def test_sync_now(self, sync, session, config):
        result = sync.sync_now()

        assert result.success_count == 1
        assert result.failed_count == 1
        assert result.failures[0].title == "Paper B"
        session.post.assert_called_once()
        assert session.post.call_args.args[0] == "http://kb.example/api/v1/datasets/ds-1/document/create_by_file"
        assert parse_timestamp(config.get(pref_key("last-sync-time"))) is not None

    def test_sync_now_requires_configuration(self, sync, session, config):
        config.set(pref_key("dify-kb-id"), "")

        with pytest.raises(ConfigurationError):
            sync.sync_now()

        session.post.assert_not_called()
        assert config.get(pref_key("last-sync-time")) is None

    def test_sync_items_uses_explicit_dataset(self, sync, session, library):
        result = sync.sync_items([library.get_item("Z")], "ds-other")

        assert result.success_count == 1
        assert session.post.call_args.args[0] == "http://kb.example/api/v1/datasets/ds-other/document/create_by_file"

    def test_sync_items_empty_selection(self, sync, session):
        assert sync.sync_items([], "ds-1") == SyncResult()
        session.post.assert_not_called()

    def test_metadata_preference(self, sync, session, config, library):
        config.set(pref_key("attach-metadata"), "true")

        sync.sync_items([library.get_item("A")], "ds-1")

        data = json.loads(session.post.call_args.kwargs["files"]["data"][1])
        assert data["doc_metadata"]["source_key"] == "A"

    def test_progress_listener(self, library, make_file_access, config, session):
        events = []
        sync = KnowledgeBaseSync(
            library,
            make_file_access(["/files/A.pdf"]),
            config,
            on_progress=events.append,
            pacing_delay=0,
            session=session,
        )

        sync.sync_now()

        assert events[-1].stage.value == "done"

    def test_run_connection_test(self, sync, session, make_response):
        session.get.return_value = make_response(200, {"id": "ds-1", "name": "Papers"})

        result = sync.run_connection_test()

        assert result.status == ConnectionStatus.SUCCESS
        assert session.get.call_args.args[0] == "http://kb.example/api/v1/datasets/ds-1"

    def test_run_connection_test_other_dataset(self, sync, session, make_response):
        session.get.return_value = make_response(404, {"message": "not found"})

        assert sync.run_connection_test("ds-9").status == ConnectionStatus.NOT_FOUND
        assert session.get.call_args.args[0].endswith("/datasets/ds-9")

    def test_list_knowledge_bases(self, sync, session, make_response):
        session.get.return_value = make_response(200, {"data": [{"id": "ds-1", "name": "Papers"}]})

        assert [kb.name for kb in sync.list_knowledge_bases()] == ["Papers"]
