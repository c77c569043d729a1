"""
Root conftest.py for product-store tests.

Provides:
1. Marker registration
2. Store fixtures backed by pytest's ``tmp_path``
3. API fixtures (sync ``TestClient`` and async ``httpx.AsyncClient``)

Stores built here use a sequential id factory so generated ids are
predictable and sort in creation order.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient

from product_store.api.fastapi import create_app
from product_store.app.settings import StoreSettings, _cached_settings
from product_store.products import CursorPaginator, FileProductStore, Product


def pytest_configure(config):
    for name, desc in [
        ("storage", "file-backed store tests"),
        ("api", "HTTP route tests"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


class SequentialIds:
    """Id factory returning "100", "101", ... on successive calls."""

    def __init__(self, start: int = 100):
        self._next = start

    def __call__(self) -> str:
        value = str(self._next)
        self._next += 1
        return value


def make_product(name: str = "Shirt", *, id: str = "", skus=("SKU-1",), urls=()) -> Product:
    return Product.model_validate(
        {
            "name": name,
            "id": id,
            "options": [{"sku": s} for s in skus],
            "images": [{"url": u} for u in urls],
        }
    )


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep ambient PRODUCT_STORE_* variables and cached settings out of tests."""
    for var in ("PRODUCT_STORE_DATA_DIR", "PRODUCT_STORE_PORT", "PRODUCT_STORE_ID_MATCH"):
        monkeypatch.delenv(var, raising=False)
    _cached_settings.cache_clear()
    yield
    _cached_settings.cache_clear()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "products"


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def store(data_dir: Path, ids: SequentialIds) -> FileProductStore:
    return FileProductStore(data_dir, id_factory=ids)


@pytest.fixture
def exact_store(data_dir: Path, ids: SequentialIds) -> FileProductStore:
    return FileProductStore(data_dir, id_factory=ids, id_match="exact")


@pytest.fixture
def paginator(store: FileProductStore) -> CursorPaginator:
    return CursorPaginator(store)


@pytest.fixture
def settings(data_dir: Path) -> StoreSettings:
    return StoreSettings(data_dir=data_dir)


@pytest.fixture
def app(settings: StoreSettings, store: FileProductStore) -> FastAPI:
    return create_app(settings, store=store)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest_asyncio.fixture
async def async_client(app: FastAPI):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
