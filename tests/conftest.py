from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from app.api.models import ModRecord

FIXTURE_DATASET = Path(__file__).resolve().parent / "data" / "modmeta.3.2.json"


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs (PyCharm/CLI).

    In CI, we *don't* auto-load `.env` by default so a developer's local
    REDIS_URL / MODLIST_* overrides never leak into hermetic runs.
    """

    # Opt-in in CI with: MODLIST_LOAD_DOTENV_FOR_TESTS=1
    if os.environ.get("CI") and os.environ.get("MODLIST_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


@pytest.fixture(scope="session", autouse=True)
def _init_dataset_from_test_fixtures() -> None:
    """Initialize the dataset from `tests/data` so app startup never hits the network."""

    from app.dataset.fetch import parse_modmeta
    from app.dataset.singleton import init_dataset, reset_dataset_for_tests

    reset_dataset_for_tests()
    init_dataset(parse_modmeta(FIXTURE_DATASET.read_bytes()))


@pytest.fixture()
def dataset() -> tuple[ModRecord, ...]:
    from app.dataset.singleton import get_dataset

    return get_dataset()


@pytest.fixture()
def make_record() -> Callable[..., ModRecord]:
    """Factory for records with only the fields a test cares about."""

    counter = {"n": 0}

    def _make(**overrides: Any) -> ModRecord:
        counter["n"] += 1
        n = counter["n"]
        fields: dict[str, Any] = {
            "repo": f"owner{n}/mod{n}",
            "name": f"Mod {n}",
            "name_markup": f"Mod {n}",
            "link": f"https://github.com/owner{n}/mod{n}",
            "date": "2020-01-01T00:00:00Z",
            "date_tt": 1577836800.0,
        }
        fields.update(overrides)
        return ModRecord.model_validate(fields)

    return _make


@pytest.fixture()
def client_and_redis():
    """FastAPI TestClient wired to fakeredis and fixed settings."""

    import fakeredis
    from fastapi.testclient import TestClient

    from app.api.deps import get_redis, get_settings
    from app.config import Settings
    from app.main import app

    r = fakeredis.FakeRedis(decode_responses=True)
    settings = Settings(dataset_base_url="http://modmeta.test/")

    def _override() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    app.dependency_overrides[get_redis] = _override
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as c:
        yield c, r
    app.dependency_overrides.clear()
