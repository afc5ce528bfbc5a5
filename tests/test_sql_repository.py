"""
Smoke tests for the SQLRepository against a temporary SQLite database.
"""
from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pytest

# Make the linkhub package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.engine import URL  # noqa: E402

from linkhub.core import config as core_config  # noqa: E402
from linkhub.core.errors import ConfigurationError, StorageUnavailable  # noqa: E402
from linkhub.db.session import resolve_database_url  # noqa: E402
from linkhub.domain.entities import Category, CategoryDraft, LinkDraft, LinkItem  # noqa: E402
from linkhub.repositories.sql_repository import NO_ICON_SOURCE, SQLRepository  # noqa: E402

_PG_VARS = (
    "POSTGRES_CONNECTION_STRING",
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_DB",
)


@pytest.fixture()
def no_pg_env(monkeypatch):
    for name in _PG_VARS:
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture()
def repo(tmp_path, monkeypatch, no_pg_env):
    """Temporary SQLite file; the engine is disposed so the file is not left locked on Windows."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("POSTGRES_CONNECTION_STRING", f"sqlite:///{db_file}")
    core_config.get_settings.cache_clear()
    repository = SQLRepository()
    repository.ensure_schema()
    yield repository
    repository.close()


def test_missing_configuration_fails_at_construction(no_pg_env):
    with pytest.raises(ConfigurationError):
        SQLRepository()


def test_partial_discrete_configuration_is_rejected(no_pg_env, monkeypatch):
    monkeypatch.setenv("POSTGRES_HOST", "db.internal")
    monkeypatch.setenv("POSTGRES_USER", "linkhub")
    core_config.get_settings.cache_clear()
    with pytest.raises(ConfigurationError):
        SQLRepository()


def test_discrete_configuration_builds_psycopg_url(no_pg_env):
    settings = replace(
        core_config.get_settings(),
        postgres_host="db.internal",
        postgres_port=5432,
        postgres_user="linkhub",
        postgres_password="s3cret",
        postgres_db="links",
    )
    url = resolve_database_url(settings)
    assert isinstance(url, URL)
    assert url.drivername == "postgresql+psycopg"
    assert url.host == "db.internal"
    assert url.port == 5432
    assert url.database == "links"


def test_postgres_scheme_is_mapped_to_psycopg(no_pg_env):
    settings = replace(core_config.get_settings(), postgres_connection_string="postgres://u:p@h:5432/db")
    assert resolve_database_url(settings) == "postgresql+psycopg://u:p@h:5432/db"


def test_category_round_trip(repo):
    created = repo.add_category(CategoryDraft(name="Work", description="Tools", icon="Briefcase"))
    assert len(created.id) == 36
    assert repo.get_category(created.id) == created
    assert repo.list_categories() == [created]


def test_update_overwrites_all_fields(repo):
    created = repo.add_category(CategoryDraft(name="Work", description="Tools", icon="Briefcase"))
    updated = repo.update_category(Category(id=created.id, name="Job"))
    assert updated == Category(id=created.id, name="Job", description=None, icon=None)
    assert repo.get_category(created.id) == updated


def test_unknown_ids_return_sentinels(repo):
    assert repo.get_category("nope") is None
    assert repo.update_category(Category(id="nope", name="x")) is None
    assert repo.delete_category("nope") is False
    assert repo.get_link("nope") is None
    assert repo.delete_link("nope") is False


def test_link_defaults_icon_source(repo):
    link = repo.add_link(LinkDraft(title="X", url="https://x.com", category_id="1"))
    fetched = repo.get_link(link.id)
    assert fetched == link
    assert fetched.title == "X"
    assert fetched.url == "https://x.com"
    assert fetched.icon_source == NO_ICON_SOURCE


def test_delete_category_cascades_in_one_transaction(repo):
    x = repo.add_category(CategoryDraft(name="X"))
    other = repo.add_category(CategoryDraft(name="Other"))
    for i in range(3):
        repo.add_link(LinkDraft(title=f"x{i}", url=f"https://x{i}.test", category_id=x.id))
    kept = {repo.add_link(LinkDraft(title=f"o{i}", url=f"https://o{i}.test", category_id=other.id)).id for i in range(2)}

    assert repo.delete_category(x.id) is True

    assert repo.get_category(x.id) is None
    assert repo.list_links_by_category(x.id) == []
    assert {link.id for link in repo.list_links()} == kept


def test_links_by_category_is_the_matching_subset(repo):
    for i, category_id in enumerate(["a", "b", "a", "c", "a"]):
        repo.add_link(LinkDraft(title=f"l{i}", url=f"https://l{i}.test", category_id=category_id))
    everything = repo.list_links()
    for category_id in ("a", "b", "c", "z"):
        expected = sorted(link.id for link in everything if link.category_id == category_id)
        assert sorted(link.id for link in repo.list_links_by_category(category_id)) == expected


def test_update_and_delete_link(repo):
    link = repo.add_link(LinkDraft(title="X", url="https://x.com", category_id="1", icon="Zap", icon_source="lucide"))
    moved = repo.update_link(LinkItem(id=link.id, title="Y", url="https://y.com", category_id="2"))
    assert moved is not None
    assert repo.get_link(link.id).category_id == "2"
    assert repo.get_link(link.id).icon is None
    assert repo.delete_link(link.id) is True
    assert repo.get_link(link.id) is None


def test_health_check(repo):
    repo.health_check()


def test_unreachable_database_raises_storage_unavailable(tmp_path):
    missing = tmp_path / "missing-dir" / "db.sqlite"
    repository = SQLRepository(url=f"sqlite:///{missing}")
    try:
        with pytest.raises(StorageUnavailable):
            repository.health_check()
        with pytest.raises(StorageUnavailable):
            repository.list_categories()
    finally:
        repository.close()


def test_malformed_connection_string_is_a_configuration_error(no_pg_env, monkeypatch):
    monkeypatch.setenv("POSTGRES_CONNECTION_STRING", "garbage")
    core_config.get_settings.cache_clear()
    with pytest.raises(ConfigurationError):
        SQLRepository()


def test_blank_optional_fields_round_trip(repo):
    created = repo.add_category(CategoryDraft(name="Blank", description="", icon=" "))
    assert created.description is None and created.icon is None
    assert repo.get_category(created.id) == created
