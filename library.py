import logging
import sqlite3
from typing import List, Optional

from book import Book
from database import BookRepository, initialize_database

logger = logging.getLogger(__name__)


class Library:
    """Domain service between the HTTP layer and the book repository."""

    def __init__(self, repository: Optional[BookRepository] = None, db_file: Optional[str] = None) -> None:
        if repository is None:
            repository = BookRepository(db_file)
            initialize_database(repository.db_file)
        self.repository = repository

    # ------------------------- Core operations ------------------------- #
    def add_book(self, book: Book) -> bool:
        """Persist a book. Returns False if storage raised an error."""
        try:
            self.repository.save(book)
        except sqlite3.Error:
            logger.exception(f"Failed to store book '{book.title}'")
            return False
        logger.info(f"Stored book id={book.id} title='{book.title}'")
        return True

    def fetch_books(self) -> List[Book]:
        return self.repository.find_all()

    def count_books(self) -> int:
        return self.repository.count()
