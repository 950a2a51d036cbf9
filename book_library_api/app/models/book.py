"""Book record model."""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Book:
    """A single book entry in the catalog.

    ``id`` is ``None`` until the store persists the record for the first
    time; after that it never changes.  Every field defaults to ``None``
    so a partially filled ``Book`` can serve as an update candidate;
    ``BookService.create_book`` supplies ``available=True`` for new books.
    """

    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    publication_date: Optional[date] = None
    genre: Optional[str] = None
    description: Optional[str] = None
    available: Optional[bool] = None
    id: Optional[int] = None
