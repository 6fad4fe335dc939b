from decimal import Decimal
from typing import List, Optional

from circulation.admin import Librarian
from circulation.catalog import Catalog
from circulation.clock import Clock, SystemClock
from circulation.config import LendingPolicy, Settings, settings as default_settings
from circulation.ledger import Ledger
from circulation.lending import LendingEngine
from circulation.results import Result, returns_result
from circulation.views import BookView, BorrowReceipt, PaymentReceipt, ReturnReceipt, UserView


class Library:
    """Public entry point: books, users, loans and fines for one process.

    Every mutating or lookup operation returns a ``Result``; domain failures
    never propagate as exceptions past this class.
    """

    def __init__(self, policy: Optional[LendingPolicy] = None, clock: Optional[Clock] = None,
                 settings: Optional[Settings] = None) -> None:
        self.settings = settings or default_settings
        self.policy = policy or LendingPolicy.from_settings(self.settings)
        self.clock = clock or SystemClock()

        self.catalog = Catalog()
        self.ledger = Ledger()
        self.librarian = Librarian(self.settings.librarian_name, self.settings.librarian_id,
                                   self.catalog, self.ledger)
        self.engine = LendingEngine(self.catalog, self.ledger, self.policy, self.clock)

    # ------------------------- Administration ------------------------- #
    @returns_result
    def add_book(self, title: str, author: str, isbn: str) -> BookView:
        return self.librarian.add_book(title, author, isbn)

    @returns_result
    def remove_book(self, isbn: str) -> BookView:
        return self.librarian.remove_book(isbn)

    @returns_result
    def register_user(self, name: str, user_id: str) -> UserView:
        user = self.ledger.register_user(name, user_id)
        return UserView.from_user(user, [])

    # ------------------------- Circulation ------------------------- #
    @returns_result
    def borrow(self, user_id: str, isbn: str) -> BorrowReceipt:
        return self.engine.borrow(user_id, isbn)

    @returns_result
    def return_book(self, user_id: str, isbn: str) -> ReturnReceipt:
        return self.engine.return_book(user_id, isbn)

    @returns_result
    def pay_fine(self, user_id: str, amount: Decimal) -> PaymentReceipt:
        return self.engine.pay_fine(user_id, amount)

    # ------------------------- Reports ------------------------- #
    def list_inventory(self) -> List[BookView]:
        return self.librarian.list_inventory(self.clock.now())

    @returns_result
    def get_user_summary(self, user_id: str) -> UserView:
        return self.librarian.get_user_summary(user_id, self.clock.now())

    def list_users(self) -> List[UserView]:
        return self.librarian.list_users(self.clock.now())

    def find_book(self, isbn: str) -> Optional[BookView]:
        book = self.catalog.find_by_isbn(isbn)
        return BookView.from_book(book, self.clock.now()) if book else None
