import logging
from datetime import datetime
from typing import List, Optional

from circulation.catalog import Catalog
from circulation.errors import LibraryError
from circulation.ledger import Ledger
from circulation.user import User
from circulation.views import BookView, UserView

logger = logging.getLogger(__name__)


class Librarian:
    """Handles administrative tasks: catalog changes and read-only reports."""

    def __init__(self, name: str, employee_id: str, catalog: Catalog, ledger: Ledger) -> None:
        self.name = name
        self.employee_id = employee_id
        self.catalog = catalog
        self.ledger = ledger

    def add_book(self, title: str, author: str, isbn: str) -> BookView:
        book = self.catalog.add_book(title, author, isbn)
        logger.info(f"[{self.employee_id}] added book {book.isbn} to inventory")
        return BookView.from_book(book)

    def remove_book(self, isbn: str) -> BookView:
        try:
            book = self.catalog.remove_book(isbn)
        except LibraryError:
            logger.warning(f"[{self.employee_id}] could not remove book {isbn}")
            raise
        logger.info(f"[{self.employee_id}] removed book {book.isbn} from inventory")
        return BookView.from_book(book)

    # ------------------------- Reports ------------------------- #
    def list_inventory(self, now: Optional[datetime] = None) -> List[BookView]:
        return [BookView.from_book(book, now) for book in self.catalog.list_all()]

    def get_user_summary(self, user_id: str, now: Optional[datetime] = None) -> UserView:
        return self._summarize(self.ledger.get(user_id), now)

    def list_users(self, now: Optional[datetime] = None) -> List[UserView]:
        return [self._summarize(user, now) for user in self.ledger.list_users()]

    def _summarize(self, user: User, now: Optional[datetime]) -> UserView:
        books = []
        for isbn in user.borrowed:
            book = self.catalog.find_by_isbn(isbn)
            if book is not None:
                books.append(BookView.from_book(book, now))
        return UserView.from_user(user, books)
