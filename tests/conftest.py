import pytest
from fastapi.testclient import TestClient

from urlshortener.config import Settings
from urlshortener.main import create_app
from urlshortener.storage import AliasStore


@pytest.fixture
def storage_path(tmp_path) -> str:
    return str(tmp_path / "storage" / "storage.db")


@pytest.fixture
def store(storage_path):
    """Fresh SQLite-backed store per test."""
    _store = AliasStore.open(storage_path)
    yield _store
    _store.close()


@pytest.fixture
def settings(storage_path) -> Settings:
    return Settings(storage_path=storage_path, environment="local")


@pytest.fixture
def client(settings, store) -> TestClient:
    return TestClient(create_app(settings, store=store))
