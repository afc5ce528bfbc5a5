"""
FirestoreRepository tests against a mocked Firestore client.
"""
from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Make the linkhub package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from google.api_core import exceptions as gexc  # noqa: E402

from linkhub.core import config as core_config  # noqa: E402
from linkhub.core.errors import ConfigurationError, QueryError, StorageUnavailable  # noqa: E402
from linkhub.domain.entities import Category, CategoryDraft, LinkDraft, LinkItem  # noqa: E402
from linkhub.repositories.firestore_repository import FirestoreRepository  # noqa: E402


def _snapshot(doc_id: str, data: dict | None) -> MagicMock:
    snap = MagicMock()
    snap.id = doc_id
    snap.exists = data is not None
    snap.to_dict.return_value = data
    return snap


@pytest.fixture()
def settings(monkeypatch):
    monkeypatch.delenv("FIRESTORE_PROJECT_ID", raising=False)
    monkeypatch.delenv("FIRESTORE_CREDENTIALS_FILE", raising=False)
    core_config.get_settings.cache_clear()
    yield replace(core_config.get_settings(), firestore_project_id="linkhub-test")
    core_config.get_settings.cache_clear()


@pytest.fixture()
def client():
    client = MagicMock()
    collections = {"categories": MagicMock(), "links": MagicMock()}
    client.collection.side_effect = lambda name: collections[name]
    client.collections_by_name = collections
    return client


@pytest.fixture()
def repo(settings, client):
    return FirestoreRepository(settings, client=client)


def test_missing_project_fails_at_construction(settings):
    with pytest.raises(ConfigurationError):
        FirestoreRepository(replace(settings, firestore_project_id=""))


def test_unreadable_credentials_file_is_a_configuration_error(settings, tmp_path):
    broken = replace(settings, firestore_credentials_file=str(tmp_path / "missing.json"))
    with pytest.raises(ConfigurationError):
        FirestoreRepository(broken)


def test_add_category_uses_document_id(repo, client):
    ref = MagicMock()
    ref.id = "abc123"
    client.collections_by_name["categories"].add.return_value = (object(), ref)

    created = repo.add_category(CategoryDraft(name="Work", icon="Briefcase"))

    assert created == Category(id="abc123", name="Work", icon="Briefcase")
    client.collections_by_name["categories"].add.assert_called_once_with(
        {"name": "Work", "description": None, "icon": "Briefcase"}
    )


def test_get_category(repo, client):
    categories = client.collections_by_name["categories"]
    categories.document.return_value.get.return_value = _snapshot("c1", {"name": "General", "icon": "Globe"})
    assert repo.get_category("c1") == Category(id="c1", name="General", icon="Globe")

    categories.document.return_value.get.return_value = _snapshot("c2", None)
    assert repo.get_category("c2") is None
    assert repo.get_category("bad/id") is None


def test_update_unknown_returns_none_without_writing(repo, client):
    doc = client.collections_by_name["links"].document.return_value
    doc.get.return_value = _snapshot("l1", None)

    assert repo.update_link(LinkItem(id="l1", title="X", url="https://x.com", category_id="1")) is None
    doc.set.assert_not_called()


def test_delete_category_batches_links_and_category(repo, client):
    category_ref = client.collections_by_name["categories"].document.return_value
    category_ref.get.return_value = _snapshot("X", {"name": "X"})
    linked = [_snapshot(f"l{i}", {"title": f"l{i}", "categoryId": "X"}) for i in range(3)]
    client.collections_by_name["links"].where.return_value.stream.return_value = linked
    batch = client.batch.return_value

    assert repo.delete_category("X") is True

    deleted = [call.args[0] for call in batch.delete.call_args_list]
    assert deleted == [snap.reference for snap in linked] + [category_ref]
    batch.commit.assert_called_once()


def test_delete_unknown_category_writes_nothing(repo, client):
    client.collections_by_name["categories"].document.return_value.get.return_value = _snapshot("X", None)
    assert repo.delete_category("X") is False
    client.batch.assert_not_called()


def test_links_by_category_maps_documents(repo, client):
    client.collections_by_name["links"].where.return_value.stream.return_value = [
        _snapshot("l1", {"title": "Google", "url": "https://google.com", "categoryId": "c1"}),
    ]
    links = repo.list_links_by_category("c1")
    assert [(link.id, link.title, link.category_id) for link in links] == [("l1", "Google", "c1")]


def test_add_link_then_get(repo, client):
    links = client.collections_by_name["links"]
    ref = MagicMock()
    ref.id = "new-link"
    links.add.return_value = (object(), ref)
    created = repo.add_link(LinkDraft(title="X", url="https://x.com", category_id="1"))
    links.document.return_value.get.return_value = _snapshot("new-link", links.add.call_args.args[0])

    fetched = repo.get_link(created.id)
    assert fetched == created
    assert fetched.title == "X"
    assert fetched.url == "https://x.com"


def test_error_translation(repo, client):
    categories = client.collections_by_name["categories"]
    categories.limit.return_value.stream.side_effect = gexc.ServiceUnavailable("down")
    with pytest.raises(StorageUnavailable):
        repo.health_check()

    categories.stream.side_effect = gexc.PermissionDenied("nope")
    with pytest.raises(QueryError):
        repo.list_categories()
