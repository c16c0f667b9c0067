import pytest

from config import get_settings
from store import InMemoryBasketStore


@pytest.fixture(autouse=True)
def clear_basket_env(monkeypatch):
    for key in [
        "BASKET_STORE",
        "FIREBASE_CRED_JSON",
        "FIREBASE_DB_URL",
        "CORS_ORIGINS",
        "CURRENCY_MINOR_UNITS",
        "LOG_LEVEL",
    ]:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store():
    return InMemoryBasketStore()


@pytest.fixture
def client(store):
    from fastapi.testclient import TestClient

    from main import app, get_store

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
