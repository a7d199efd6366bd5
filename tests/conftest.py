import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.db.engine import get_engine
from app.main import app


def _reset_caches():
    get_settings.cache_clear()
    get_engine.cache_clear()


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    """Point the app at a throwaway SQLite file for the duration of a test."""
    url = f"sqlite:///{tmp_path / 'products.db'}"
    monkeypatch.setenv("CONNECTION_STRING", url)
    _reset_caches()
    yield url
    get_engine().dispose()
    _reset_caches()


@pytest.fixture
def engine(database_url):
    return get_engine()


@pytest.fixture
def client(database_url):
    # Entering the TestClient runs the lifespan, which applies migrations.
    with TestClient(app) as c:
        yield c
