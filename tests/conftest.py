# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from todolist_api.core.config import Settings
from todolist_api.database import create_engine
from todolist_api.main import create_app
from todolist_api.stores.memory_store import MemoryStore
from todolist_api.stores.sql_store import SQLStore


def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'todolists.sqlite3'}"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch) -> None:
    """Keep the shell's database settings out of Settings()."""
    for name in (
        "STORAGE_BACKEND",
        "DATABASE_URL",
        "DB_SERVER",
        "DB_NAME",
        "DB_INTEGRATED_SECURITY",
        "DB_USER",
        "DB_PASSWORD",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
async def sql_store(tmp_path: Path):
    """Relational store on a throwaway SQLite file, schema already created."""
    store = SQLStore(create_engine(sqlite_url(tmp_path)))
    await store.startup()
    yield store
    await store.shutdown()


@pytest.fixture(params=["memory", "sql"])
async def store(request, tmp_path: Path):
    """Each contract test runs once per backend."""
    if request.param == "memory":
        store = MemoryStore()
    else:
        store = SQLStore(create_engine(sqlite_url(tmp_path)))
    await store.startup()
    yield store
    await store.shutdown()


def make_settings(backend: str, tmp_path: Path) -> Settings:
    # _env_file=None keeps a developer's .env out of the tests
    return Settings(
        _env_file=None,
        storage_backend=backend,
        database_url=sqlite_url(tmp_path) if backend == "sql" else None,
    )


@pytest.fixture(params=["memory", "sql"])
def client(request, tmp_path: Path):
    app = create_app(make_settings(request.param, tmp_path))
    with TestClient(app) as test_client:
        yield test_client
