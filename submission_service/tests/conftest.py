"""Shared fixtures for the Submission service tests."""

from pathlib import Path
from typing import Any, Dict

import pytest
import pytest_asyncio

from submission_service.config.settings import Settings
from submission_service.core.submission_store import SQLAlchemySubmissionStore, StoreConfig


def sqlite_url(db_path: Path) -> str:
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture
def valid_payload() -> Dict[str, Any]:
    """A payload that passes every validation rule."""
    return {
        "title": "Buenas prácticas",
        "description": "Una descripción válida",
        "author": "Juan Pérez",
    }


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "submissions.db"


@pytest.fixture
def store_config(db_path: Path) -> StoreConfig:
    """StoreConfig pointing at a throwaway SQLite file (SQLite has no schemas)."""
    return StoreConfig(database_url=sqlite_url(db_path), table_name="submissions", schema=None)


@pytest_asyncio.fixture
async def sqlite_store(store_config: StoreConfig):
    """A real store backed by SQLite, disposed after the test."""
    store = SQLAlchemySubmissionStore(store_config)
    yield store
    await store.close()


@pytest.fixture
def test_settings(db_path: Path) -> Settings:
    """Application settings for API tests: SQLite database, TestClient host allowed."""
    return Settings(
        DATABASE_URL=sqlite_url(db_path),
        DB_SCHEMA="",
        SUBMISSIONS_TABLE_NAME="submissions",
        ALLOWED_HOSTS="testserver,localhost",
        DEBUG=False,
    )
