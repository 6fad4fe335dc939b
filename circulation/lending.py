"""Borrowing lifecycle and overdue fines.

A book is either Available or Checked Out. Borrowing moves it to Checked Out
and stamps a due date; returning moves it back and, if the due date has
passed, charges the borrower a fine proportional to the overdue time. Fines
are computed once, at return time, from a single reading of the clock.
"""
import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Tuple

from circulation.catalog import Catalog
from circulation.clock import Clock
from circulation.config import LendingPolicy
from circulation.errors import BookUnavailableError, NotBorrowedByUserError, OverpaymentRejectedError
from circulation.ledger import Ledger
from circulation.views import BorrowReceipt, PaymentReceipt, ReturnReceipt

logger = logging.getLogger(__name__)

_MICROSECOND = timedelta(microseconds=1)


def compute_fine(due_at: datetime, returned_at: datetime, policy: LendingPolicy) -> Tuple[timedelta, Decimal]:
    """Return (overdue duration, fine) for a book returned at ``returned_at``.

    The fine is linear in the overdue time, exact to the microsecond, with no
    rounding and no cap. Returning on or before the due date costs nothing.
    """
    overdue = max(timedelta(0), returned_at - due_at)
    if overdue == timedelta(0):
        return overdue, Decimal("0")
    units = Decimal(overdue // _MICROSECOND) / Decimal(policy.fine_unit // _MICROSECOND)
    return overdue, units * policy.fine_rate


class LendingEngine:
    def __init__(self, catalog: Catalog, ledger: Ledger, policy: LendingPolicy, clock: Clock) -> None:
        self.catalog = catalog
        self.ledger = ledger
        self.policy = policy
        self.clock = clock

    def borrow(self, user_id: str, isbn: str) -> BorrowReceipt:
        user = self.ledger.get(user_id)
        book = self.catalog.get(isbn)
        if not book.available:
            logger.warning(f"Borrow rejected: book {book.isbn} is not available")
            raise BookUnavailableError(f"Book '{book.title}' ({book.isbn}) is not available.")
        if user.holds(book.isbn):
            raise BookUnavailableError(f"User {user.user_id} already holds book {book.isbn}.")

        now = self.clock.now()
        due_at = now + self.policy.loan_duration
        book.check_out(due_at)
        user.record_borrow(book.isbn)
        logger.info(f"Borrowed {book.isbn} to {user.user_id} until {due_at.isoformat()}")
        return BorrowReceipt(user_id=user.user_id, isbn=book.isbn, title=book.title, due_at=due_at)

    def return_book(self, user_id: str, isbn: str) -> ReturnReceipt:
        user = self.ledger.get(user_id)
        book = self.catalog.find_by_isbn(isbn)
        if book is None or not user.holds(book.isbn):
            logger.warning(f"Return rejected: user {user.user_id} did not borrow {isbn}")
            raise NotBorrowedByUserError(f"User {user.user_id} did not borrow book {isbn}.")

        now = self.clock.now()
        overdue, fine = compute_fine(book.due_at, now, self.policy)
        user.record_return(book.isbn)
        book.check_in()
        fine_applied = overdue > timedelta(0)
        if fine_applied:
            user.add_fine(fine)
            logger.info(f"Book {book.isbn} returned late by {user.user_id}; fine added: {fine}")
        else:
            logger.info(f"Book {book.isbn} returned by {user.user_id}")
        return ReturnReceipt(
            user_id=user.user_id,
            isbn=book.isbn,
            title=book.title,
            returned_at=now,
            overdue=overdue,
            fine_applied=fine_applied,
            fine=fine,
            new_balance=user.fines,
        )

    def pay_fine(self, user_id: str, amount: Decimal) -> PaymentReceipt:
        user = self.ledger.get(user_id)
        try:
            remaining = user.pay_fine(amount)
        except OverpaymentRejectedError:
            logger.warning(f"Payment of {amount} rejected for {user.user_id}: balance is {user.fines}")
            raise
        logger.info(f"User {user.user_id} paid {amount}; remaining balance {remaining}")
        return PaymentReceipt(user_id=user.user_id, amount_paid=Decimal(amount), remaining_balance=remaining)
