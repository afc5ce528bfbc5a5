from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pytest

# Make the linkhub package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from linkhub.client import build_client_service  # noqa: E402
from linkhub.core import config as core_config  # noqa: E402
from linkhub.core.errors import PolicyViolation  # noqa: E402
from linkhub.repositories.local_storage import LocalRepository  # noqa: E402


@pytest.fixture()
def settings(tmp_path, monkeypatch):
    monkeypatch.delenv("DATA_SOURCE_TYPE", raising=False)
    monkeypatch.setenv("LOCAL_STORE_PATH", str(tmp_path / "client.json"))
    core_config.get_settings.cache_clear()
    yield core_config.get_settings()
    core_config.get_settings.cache_clear()


def test_client_service_is_local(settings):
    service = build_client_service(settings)
    assert isinstance(service, LocalRepository)
    assert len(service.list_categories()) == 4


@pytest.mark.parametrize("kind", ["postgres", "mongodb", "firebase"])
def test_networked_backends_are_rejected_for_client_builds(settings, kind):
    with pytest.raises(PolicyViolation):
        build_client_service(replace(settings, data_source_type=kind))
