"""
Pytest configuration and fixtures.

Every test that touches the database gets its own SQLite file under
``tmp_path``; ``settings.database_url`` is pointed at it for the
duration of the test.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from book_library_api.app.core.config import settings
from book_library_api.app.core.db import init_db
from book_library_api.app.main import app as fastapi_app
from book_library_api.app.models.book import Book
from book_library_api.app.services.book_service import BookService
from book_library_api.app.services.book_store import SQLiteBookStore


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "books.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    init_db()
    return path


@pytest.fixture
def store(db_path: Path) -> SQLiteBookStore:
    return SQLiteBookStore()


@pytest.fixture
def service(store: SQLiteBookStore) -> BookService:
    return BookService(store)


@pytest.fixture
def client(db_path: Path):
    """Test client with startup hooks run against the temporary database."""
    with TestClient(fastapi_app) as test_client:
        yield test_client


@pytest.fixture
def sample_book() -> Book:
    return Book(title="Test Title", author="Test Author", isbn="1234567890", genre="Fiction", available=True)
