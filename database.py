import logging
import sqlite3
from typing import List, Optional

from book import Book
from config import settings

logger = logging.getLogger(__name__)


def _resolve(db_file: Optional[str]) -> str:
    return db_file or settings.database_file


def get_db_connection(db_file: Optional[str] = None) -> sqlite3.Connection:
    """Open a connection to the SQLite database with rows addressable by column name."""
    conn = sqlite3.connect(_resolve(db_file))
    conn.row_factory = sqlite3.Row
    return conn


def create_tables(db_file: Optional[str] = None) -> None:
    """Create the books table if it does not exist yet."""
    conn = get_db_connection(db_file)
    try:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS books (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                author TEXT NOT NULL,
                price REAL NOT NULL
            )
        """)
        conn.commit()
    finally:
        conn.close()


def initialize_database(db_file: Optional[str] = None) -> None:
    """Initialize the database; safe to call on every startup."""
    create_tables(db_file)
    logger.debug(f"Database ready at {_resolve(db_file)}")


class BookRepository:
    """Create/read access to the books table.

    Every call opens its own connection, so an instance can be shared
    between requests. Driver errors are not caught here.
    """

    def __init__(self, db_file: Optional[str] = None) -> None:
        self.db_file = _resolve(db_file)

    def save(self, book: Book) -> Book:
        conn = get_db_connection(self.db_file)
        try:
            cursor = conn.execute(
                "INSERT INTO books (title, author, price) VALUES (?, ?, ?)",
                (book.title, book.author, book.price)
            )
            conn.commit()
            book.id = cursor.lastrowid
            return book
        finally:
            conn.close()

    def find_all(self) -> List[Book]:
        conn = get_db_connection(self.db_file)
        try:
            rows = conn.execute("SELECT id, title, author, price FROM books").fetchall()
            return [Book.from_dict(dict(row)) for row in rows]
        finally:
            conn.close()

    def count(self) -> int:
        conn = get_db_connection(self.db_file)
        try:
            return conn.execute("SELECT COUNT(*) FROM books").fetchone()[0]
        finally:
            conn.close()
