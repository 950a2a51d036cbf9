"""Plain data structures for persisted records."""

from .book import Book  # noqa: F401
