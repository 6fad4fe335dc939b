from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import List

from circulation.errors import (
    BookUnavailableError,
    InvalidArgumentError,
    NotBorrowedByUserError,
    OverpaymentRejectedError,
)


class User:
    """A registered borrower and their ledger: held books and fine balance."""

    def __init__(self, name: str, user_id: str) -> None:
        self.name = name.strip()
        self._user_id = user_id.strip()
        # Insertion-ordered, no duplicates.
        self._borrowed: List[str] = []
        self._fines = Decimal("0")

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def borrowed(self) -> List[str]:
        return list(self._borrowed)

    @property
    def fines(self) -> Decimal:
        return self._fines

    def holds(self, isbn: str) -> bool:
        return isbn in self._borrowed

    # ------------------------- Borrowed books ------------------------- #
    def record_borrow(self, isbn: str) -> None:
        if isbn in self._borrowed:
            raise BookUnavailableError(f"User {self.user_id} already holds book {isbn}.")
        self._borrowed.append(isbn)

    def record_return(self, isbn: str) -> None:
        if isbn not in self._borrowed:
            raise NotBorrowedByUserError(f"User {self.user_id} did not borrow book {isbn}.")
        self._borrowed.remove(isbn)

    # ------------------------- Fines ------------------------- #
    @staticmethod
    def _as_amount(amount, what: str) -> Decimal:
        try:
            value = Decimal(amount)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidArgumentError(f"{what} amount is not a number: {amount!r}.") from None
        if not value.is_finite():
            raise InvalidArgumentError(f"{what} amount must be finite: {amount!r}.")
        if value < 0:
            raise InvalidArgumentError(f"{what} amount cannot be negative: {value}.")
        return value

    def add_fine(self, amount: Decimal) -> None:
        amount = self._as_amount(amount, "Fine")
        self._fines += amount

    def pay_fine(self, amount: Decimal) -> Decimal:
        """Pay towards the balance and return what remains.

        A payment larger than the balance is rejected outright; nothing is
        applied, not even partially.
        """
        amount = self._as_amount(amount, "Payment")
        if amount > self._fines:
            raise OverpaymentRejectedError(
                f"Payment {amount} exceeds owed fines {self._fines} for user {self.user_id}."
            )
        self._fines -= amount
        return self._fines

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.name} (ID: {self.user_id})"
