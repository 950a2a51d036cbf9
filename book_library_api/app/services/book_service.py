"""
Business logic for the book catalog.

``BookService`` implements the catalog operations on top of a
``BookStore``.  Instead of raising for expected failures every
operation returns a ``BookOutcome`` tagged with an ``OutcomeStatus``
(``OK``, ``NOT_FOUND``, ``CONFLICT`` or ``INVALID``); the API layer
maps the tag to an HTTP status code.

Updates are partial merges: a field left ``None`` in the candidate
keeps its stored value, and the id always comes from the lookup, never
from the candidate.  The merged record is validated again before it is
saved, so an update can not blank a required field.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional

from book_library_api.app.models.book import Book
from book_library_api.app.services.book_store import BookStore, DuplicateIsbnError, SQLiteBookStore
from book_library_api.app.services.book_validation import Violation, validate_book

logger = logging.getLogger(__name__)

# Fields copied from an update candidate when they are not None.
MERGE_FIELDS = (
    "title",
    "author",
    "isbn",
    "publication_date",
    "genre",
    "description",
    "available",
)


class OutcomeStatus(str, enum.Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID = "invalid"


@dataclass
class BookOutcome:
    """Result of a service operation.

    ``book`` is set for single-record operations that succeed,
    ``violations`` for ``INVALID`` and ``message`` for ``NOT_FOUND`` and
    ``CONFLICT``.
    """

    status: OutcomeStatus
    book: Optional[Book] = None
    violations: List[Violation] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK

    @classmethod
    def success(cls, book: Optional[Book] = None) -> "BookOutcome":
        return cls(OutcomeStatus.OK, book=book)

    @classmethod
    def not_found(cls, book_id: Any) -> "BookOutcome":
        return cls(OutcomeStatus.NOT_FOUND, message=f"Book {book_id} not found")

    @classmethod
    def conflict(cls, message: str) -> "BookOutcome":
        return cls(OutcomeStatus.CONFLICT, message=message)

    @classmethod
    def invalid(cls, violations: List[Violation]) -> "BookOutcome":
        return cls(OutcomeStatus.INVALID, violations=list(violations), message="Validation failed")


def merge_book(existing: Book, candidate: Any) -> Book:
    """Return ``existing`` with every non-null field of ``candidate`` copied over.

    ``candidate`` may be a ``Book`` or any object exposing the same
    attributes.  The id of ``existing`` is always kept.
    """
    changes = {}
    for name in MERGE_FIELDS:
        value = getattr(candidate, name, None)
        if value is not None:
            changes[name] = value
    return replace(existing, **changes, id=existing.id)


class BookService:
    """Catalog operations over a ``BookStore``."""

    def __init__(self, store: Optional[BookStore] = None) -> None:
        self.store = store if store is not None else SQLiteBookStore()

    async def list_books(self) -> List[Book]:
        return self.store.find_all()

    async def get_book(self, book_id: int) -> BookOutcome:
        book = self.store.find_by_id(book_id)
        if book is None:
            return BookOutcome.not_found(book_id)
        return BookOutcome.success(book)

    async def get_book_by_isbn(self, isbn: str) -> BookOutcome:
        book = self.store.find_by_isbn(isbn)
        if book is None:
            return BookOutcome(OutcomeStatus.NOT_FOUND, message=f"Book with ISBN {isbn} not found")
        return BookOutcome.success(book)

    async def list_books_by_author(self, author: str) -> List[Book]:
        return self.store.find_by_author(author)

    async def list_books_by_title(self, title: str) -> List[Book]:
        return self.store.find_by_title(title)

    async def list_books_by_genre(self, genre: str) -> List[Book]:
        return self.store.find_by_genre(genre)

    async def list_available_books(self) -> List[Book]:
        return self.store.find_by_available(True)

    async def create_book(self, candidate: Any) -> BookOutcome:
        """Validate and persist a new book.

        ``available`` defaults to ``True`` when the candidate leaves it
        unset.  Any id on the candidate is ignored.
        """
        book = merge_book(Book(available=True), candidate)
        violations = validate_book(book)
        if violations:
            logger.warning("Rejected new book: %s", "; ".join(v.message for v in violations))
            return BookOutcome.invalid(violations)
        try:
            saved = self.store.save(book)
        except DuplicateIsbnError as exc:
            logger.warning("Rejected new book: %s", exc)
            return BookOutcome.conflict(str(exc))
        logger.info("Created book %s '%s'", saved.id, saved.title)
        return BookOutcome.success(saved)

    async def update_book(self, book_id: int, candidate: Any) -> BookOutcome:
        """Merge ``candidate`` into the stored book ``book_id``.

        Returns ``NOT_FOUND`` if the book does not exist, ``INVALID`` if
        the merged record breaks a field rule and ``CONFLICT`` if the new
        ISBN belongs to another book.  The stored record is left
        untouched in every failure case.
        """
        existing = self.store.find_by_id(book_id)
        if existing is None:
            return BookOutcome.not_found(book_id)
        merged = merge_book(existing, candidate)
        violations = validate_book(merged)
        if violations:
            logger.warning("Rejected update of book %s: %s", book_id, "; ".join(v.message for v in violations))
            return BookOutcome.invalid(violations)
        try:
            saved = self.store.save(merged)
        except DuplicateIsbnError as exc:
            logger.warning("Rejected update of book %s: %s", book_id, exc)
            return BookOutcome.conflict(str(exc))
        logger.info("Updated book %s", book_id)
        return BookOutcome.success(saved)

    async def delete_book(self, book_id: int) -> BookOutcome:
        existing = self.store.find_by_id(book_id)
        if existing is None:
            return BookOutcome.not_found(book_id)
        self.store.delete(existing)
        logger.info("Deleted book %s", book_id)
        return BookOutcome.success()

    async def toggle_availability(self, book_id: int) -> BookOutcome:
        """Flip the ``available`` flag of a book and return the updated record."""
        existing = self.store.find_by_id(book_id)
        if existing is None:
            return BookOutcome.not_found(book_id)
        saved = self.store.save(replace(existing, available=not existing.available))
        logger.info("Book %s is now %s", book_id, "available" if saved.available else "unavailable")
        return BookOutcome.success(saved)

    async def count_books(self) -> int:
        return len(self.store.find_all())
