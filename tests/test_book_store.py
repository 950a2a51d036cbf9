"""Tests for the SQLite book store."""

from dataclasses import replace
from datetime import date

import pytest

from book_library_api.app.models.book import Book
from book_library_api.app.services.book_store import DuplicateIsbnError, SQLiteBookStore


def add(store: SQLiteBookStore, **fields) -> Book:
    fields.setdefault("available", True)
    return store.save(Book(**fields))


class TestSave:
    def test_insert_assigns_id(self, store: SQLiteBookStore, sample_book: Book) -> None:
        saved = store.save(sample_book)
        assert saved.id is not None
        assert sample_book.id is None
        assert store.find_by_id(saved.id) == saved

    def test_insert_round_trips_all_fields(self, store: SQLiteBookStore) -> None:
        saved = add(
            store,
            title="Dune",
            author="Frank Herbert",
            isbn="0441013597",
            publication_date=date(1965, 8, 1),
            genre="Science Fiction",
            description="Spice.",
            available=False,
        )
        loaded = store.find_by_id(saved.id)
        assert loaded.publication_date == date(1965, 8, 1)
        assert loaded.description == "Spice."
        assert loaded.available is False

    def test_update_existing_row(self, store: SQLiteBookStore, sample_book: Book) -> None:
        saved = store.save(sample_book)
        store.save(replace(saved, title="New Title"))
        assert store.find_by_id(saved.id).title == "New Title"
        assert len(store.find_all()) == 1

    def test_duplicate_isbn_on_insert(self, store: SQLiteBookStore, sample_book: Book) -> None:
        first = store.save(sample_book)
        with pytest.raises(DuplicateIsbnError) as exc_info:
            store.save(replace(sample_book, title="Other"))
        assert exc_info.value.isbn == "1234567890"
        assert store.find_all() == [first]

    def test_duplicate_isbn_on_update(self, store: SQLiteBookStore) -> None:
        first = add(store, title="A", author="X", isbn="1111111111")
        second = add(store, title="B", author="Y", isbn="2222222222")
        with pytest.raises(DuplicateIsbnError):
            store.save(replace(second, isbn=first.isbn))
        assert store.find_by_id(second.id).isbn == "2222222222"


class TestFind:
    @pytest.fixture
    def populated(self, store: SQLiteBookStore) -> SQLiteBookStore:
        add(store, title="The Hobbit", author="J. R. R. Tolkien", isbn="0261102214", genre="Fantasy")
        add(store, title="The Silmarillion", author="J. R. R. Tolkien", isbn="0261102737", genre="Fantasy",
            available=False)
        add(store, title="Dune", author="Frank Herbert", isbn="0441013597", genre="Science Fiction")
        add(store, title="100% Pure", author="Some_One", isbn="9780000000001")
        return store

    def test_find_all_ordered_by_id(self, populated: SQLiteBookStore) -> None:
        books = populated.find_all()
        assert [b.id for b in books] == sorted(b.id for b in books)
        assert len(books) == 4

    def test_find_by_id_missing(self, store: SQLiteBookStore) -> None:
        assert store.find_by_id(999) is None

    def test_find_by_isbn_is_exact(self, populated: SQLiteBookStore) -> None:
        assert populated.find_by_isbn("0441013597").title == "Dune"
        assert populated.find_by_isbn("044101359") is None

    def test_find_by_author_substring_ignores_case(self, populated: SQLiteBookStore) -> None:
        titles = [b.title for b in populated.find_by_author("tolkien")]
        assert titles == ["The Hobbit", "The Silmarillion"]

    def test_find_by_title_substring(self, populated: SQLiteBookStore) -> None:
        assert [b.title for b in populated.find_by_title("THE ")] == ["The Hobbit", "The Silmarillion"]

    def test_find_by_genre(self, populated: SQLiteBookStore) -> None:
        assert [b.title for b in populated.find_by_genre("fiction")] == ["Dune"]
        assert populated.find_by_genre("Poetry") == []

    def test_like_wildcards_are_literal(self, populated: SQLiteBookStore) -> None:
        assert [b.title for b in populated.find_by_title("%")] == ["100% Pure"]
        assert [b.author for b in populated.find_by_author("_")] == ["Some_One"]

    def test_search_folds_non_ascii_case(self, store: SQLiteBookStore) -> None:
        add(store, title="Germinal", author="Émile Zola", isbn="0140447423")
        add(store, title="Öl und Wasser", author="Jürgen Straße", isbn="0140447431")
        assert [b.title for b in store.find_by_author("émile")] == ["Germinal"]
        assert [b.title for b in store.find_by_author("ÉMILE")] == ["Germinal"]
        assert [b.title for b in store.find_by_title("öl")] == ["Öl und Wasser"]
        assert [b.title for b in store.find_by_author("STRASSE")] == ["Öl und Wasser"]

    def test_find_by_available(self, populated: SQLiteBookStore) -> None:
        assert len(populated.find_by_available(True)) == 3
        assert [b.title for b in populated.find_by_available(False)] == ["The Silmarillion"]


class TestDelete:
    def test_delete_removes_row(self, store: SQLiteBookStore, sample_book: Book) -> None:
        saved = store.save(sample_book)
        store.delete(saved)
        assert store.find_by_id(saved.id) is None
        assert store.find_all() == []
