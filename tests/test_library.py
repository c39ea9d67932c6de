import sqlite3

import pytest
from unittest.mock import MagicMock

from book import Book
from database import BookRepository, get_db_connection, initialize_database
from library import Library


def test_add_and_fetch(lib):
    assert lib.fetch_books() == []

    book = Book("Ulysses", "James Joyce", 12.5)
    assert lib.add_book(book) is True
    assert book.id is not None

    books = lib.fetch_books()
    assert len(books) == 1
    assert books[0].title == "Ulysses"
    assert books[0].id == book.id


def test_add_book_returns_false_on_storage_error():
    repo = MagicMock()
    repo.save.side_effect = sqlite3.IntegrityError("NOT NULL constraint failed")
    lib = Library(repository=repo)

    assert lib.add_book(Book("T", "A", 1.0)) is False
    repo.save.assert_called_once()


def test_non_storage_errors_propagate():
    repo = MagicMock()
    repo.save.side_effect = RuntimeError("bug")
    lib = Library(repository=repo)

    with pytest.raises(RuntimeError):
        lib.add_book(Book("T", "A", 1.0))


def test_fetch_delegates_to_repository():
    repo = MagicMock()
    repo.find_all.return_value = [Book("T", "A", 1.0, id=1)]
    lib = Library(repository=repo)

    assert [b.id for b in lib.fetch_books()] == [1]
    repo.find_all.assert_called_once_with()


def test_persistence(db_file):
    lib = Library(db_file=db_file)
    lib.add_book(Book("Sapiens", "Yuval Noah Harari", 15.0))

    # New instance should read persisted data from SQLite
    lib2 = Library(db_file=db_file)
    assert len(lib2.fetch_books()) == 1
    assert lib2.fetch_books()[0].title == "Sapiens"
    assert lib2.count_books() == 1


def test_repository_assigns_increasing_ids(db_file):
    initialize_database(db_file)
    repo = BookRepository(db_file)
    first = repo.save(Book("One", "A", 1.0))
    second = repo.save(Book("One", "A", 1.0))
    assert second.id > first.id
    assert repo.count() == 2


def test_repository_save_without_table_raises(db_file):
    repo = BookRepository(db_file)
    with pytest.raises(sqlite3.OperationalError):
        repo.save(Book("T", "A", 1.0))


def test_initialize_database_is_idempotent(db_file):
    initialize_database(db_file)
    initialize_database(db_file)
    conn = get_db_connection(db_file)
    try:
        columns = [row[1] for row in conn.execute("PRAGMA table_info(books)")]
    finally:
        conn.close()
    assert columns == ["id", "title", "author", "price"]


def test_book_strips_and_round_trips():
    book = Book("  Emma ", " Jane Austen ", 4.5, id=3)
    assert book.title == "Emma"
    assert book.author == "Jane Austen"
    assert Book.from_dict(book.to_dict()).to_dict() == book.to_dict()
