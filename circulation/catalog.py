import logging
from typing import Dict, List, Optional

from circulation.book import Book
from circulation.errors import (
    BookCheckedOutError,
    DuplicateIdentifierError,
    InvalidArgumentError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class Catalog:
    """Owns the library's books, keyed by normalized ISBN in insertion order."""

    def __init__(self) -> None:
        self._books: Dict[str, Book] = {}

    # ------------------------- Core operations ------------------------- #
    def add_book(self, title: str, author: str, isbn: str) -> Book:
        """Create and add a Book. Prevent duplicates by ISBN."""
        norm = self._normalize_isbn(isbn)
        if not norm:
            raise InvalidArgumentError("ISBN cannot be empty.")
        if not title or not title.strip():
            raise InvalidArgumentError("Title cannot be empty.")
        if norm in self._books:
            raise DuplicateIdentifierError(f"Book with ISBN {norm} already exists.")

        book = Book(title=title, author=author or "", isbn=norm)
        self._books[norm] = book
        logger.info(f"Book added to catalog: {book.isbn} '{book.title}'")
        return book

    def remove_book(self, isbn: str) -> Book:
        book = self.get(isbn)
        if not book.available:
            raise BookCheckedOutError(f"Book with ISBN {book.isbn} is checked out and cannot be removed.")
        del self._books[book.isbn]
        logger.info(f"Book removed from catalog: {book.isbn}")
        return book

    def find_by_isbn(self, isbn: str) -> Optional[Book]:
        return self._books.get(self._normalize_isbn(isbn))

    def get(self, isbn: str) -> Book:
        book = self.find_by_isbn(isbn)
        if book is None:
            raise NotFoundError(f"Book with ISBN {isbn} not found.")
        return book

    def list_all(self) -> List[Book]:
        return list(self._books.values())

    def __len__(self) -> int:
        return len(self._books)

    def __contains__(self, isbn: object) -> bool:
        return isinstance(isbn, str) and self._normalize_isbn(isbn) in self._books

    # ------------------------- Utilities ------------------------- #
    @staticmethod
    def _normalize_isbn(raw: str) -> str:
        if raw is None:
            return ""
        cleaned = "".join(ch for ch in raw if ch.isalnum())
        return cleaned.upper()
