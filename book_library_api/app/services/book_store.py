"""
SQLite persistence for book records.

``SQLiteBookStore`` is the only component that talks to the ``books``
table.  Every call opens its own connection through
``core.db.get_connection`` and closes it before returning.  All
queries use parameterized statements.

Title, author and genre lookups match case-insensitive substrings, so
``/author/tolk`` finds "J. R. R. Tolkien" and ``émile`` finds "Émile".
Both sides go through the ``casefold`` SQL function registered by
``get_connection`` and are compared with ``instr``, so ``%`` and ``_`` in
a search value match literally.  ISBN lookup is exact.

ISBN uniqueness is enforced by the ``UNIQUE`` constraint on the
column; a violation surfaces as ``DuplicateIsbnError``.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import replace
from datetime import date
from typing import List, Optional, Protocol

from book_library_api.app.core.db import get_connection
from book_library_api.app.models.book import Book

logger = logging.getLogger(__name__)

_COLUMNS = "id, title, author, isbn, publication_date, genre, description, available"


class DuplicateIsbnError(ValueError):
    """Raised when a save would give two books the same ISBN."""

    def __init__(self, isbn: Optional[str]) -> None:
        super().__init__(f"Book with ISBN {isbn} already exists")
        self.isbn = isbn


class BookStore(Protocol):
    """Persistence contract consumed by ``BookService``."""

    def find_all(self) -> List[Book]: ...

    def find_by_id(self, book_id: int) -> Optional[Book]: ...

    def find_by_isbn(self, isbn: str) -> Optional[Book]: ...

    def find_by_author(self, author: str) -> List[Book]: ...

    def find_by_title(self, title: str) -> List[Book]: ...

    def find_by_genre(self, genre: str) -> List[Book]: ...

    def find_by_available(self, available: bool) -> List[Book]: ...

    def save(self, book: Book) -> Book: ...

    def delete(self, book: Book) -> None: ...


class SQLiteBookStore:
    """Book store backed by the application's SQLite database."""

    def find_all(self) -> List[Book]:
        return self._select(f"SELECT {_COLUMNS} FROM books ORDER BY id")

    def find_by_id(self, book_id: int) -> Optional[Book]:
        rows = self._select(f"SELECT {_COLUMNS} FROM books WHERE id = ?", (book_id,))
        return rows[0] if rows else None

    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        rows = self._select(f"SELECT {_COLUMNS} FROM books WHERE isbn = ?", (isbn,))
        return rows[0] if rows else None

    def find_by_author(self, author: str) -> List[Book]:
        return self._select_containing("author", author)

    def find_by_title(self, title: str) -> List[Book]:
        return self._select_containing("title", title)

    def find_by_genre(self, genre: str) -> List[Book]:
        return self._select_containing("genre", genre)

    def find_by_available(self, available: bool) -> List[Book]:
        return self._select(
            f"SELECT {_COLUMNS} FROM books WHERE available = ? ORDER BY id",
            (1 if available else 0,),
        )

    def save(self, book: Book) -> Book:
        """Insert ``book`` if it has no id, otherwise update the stored row.

        Returns a copy carrying the assigned id.  Raises
        ``DuplicateIsbnError`` when the ISBN belongs to another book.
        """
        params = (
            book.title,
            book.author,
            book.isbn,
            book.publication_date.isoformat() if book.publication_date else None,
            book.genre,
            book.description,
            1 if book.available else 0,
        )
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if book.id is None:
                cursor.execute(
                    """
                    INSERT INTO books (title, author, isbn, publication_date, genre, description, available)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    params,
                )
                saved = replace(book, id=cursor.lastrowid)
            else:
                cursor.execute(
                    """
                    UPDATE books
                    SET title = ?, author = ?, isbn = ?, publication_date = ?, genre = ?,
                        description = ?, available = ?, updated_at = CURRENT_TIMESTAMP
                    WHERE id = ?
                    """,
                    params + (book.id,),
                )
                saved = replace(book)
            conn.commit()
            logger.debug("Saved book %s", saved.id)
            return saved
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if "books.isbn" in str(exc):
                raise DuplicateIsbnError(book.isbn) from exc
            raise
        finally:
            conn.close()

    def delete(self, book: Book) -> None:
        conn = get_connection()
        try:
            conn.execute("DELETE FROM books WHERE id = ?", (book.id,))
            conn.commit()
        finally:
            conn.close()

    def _select_containing(self, column: str, value: str) -> List[Book]:
        return self._select(
            f"SELECT {_COLUMNS} FROM books WHERE instr(casefold({column}), casefold(?)) > 0 ORDER BY id",
            (value,),
        )

    def _select(self, query: str, params: tuple = ()) -> List[Book]:
        conn = get_connection()
        try:
            rows = conn.execute(query, params).fetchall()
            return [self._row_to_book(row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def _row_to_book(row: sqlite3.Row) -> Book:
        """Convert a database row to a ``Book``."""
        published = row["publication_date"]
        return Book(
            id=row["id"],
            title=row["title"],
            author=row["author"],
            isbn=row["isbn"],
            publication_date=date.fromisoformat(published) if published else None,
            genre=row["genre"],
            description=row["description"],
            available=bool(row["available"]),
        )
