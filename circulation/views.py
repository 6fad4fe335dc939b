from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from circulation.book import Book
from circulation.user import User


class BookView(BaseModel):
    isbn: str
    title: str
    author: str
    available: bool
    status: str
    due_at: Optional[datetime] = None
    overdue: bool = False

    @classmethod
    def from_book(cls, book: Book, now: Optional[datetime] = None) -> "BookView":
        return cls(
            isbn=book.isbn,
            title=book.title,
            author=book.author,
            available=book.available,
            status=book.status,
            due_at=book.due_at,
            overdue=book.is_overdue(now) if now is not None else False,
        )


class UserView(BaseModel):
    """A user's summary: identity, fine balance and the books they hold."""
    user_id: str
    name: str
    fines: Decimal
    borrowed_count: int
    borrowed_books: List[BookView] = Field(default_factory=list)

    @classmethod
    def from_user(cls, user: User, books: List[BookView]) -> "UserView":
        return cls(
            user_id=user.user_id,
            name=user.name,
            fines=user.fines,
            borrowed_count=len(user.borrowed),
            borrowed_books=books,
        )


class BorrowReceipt(BaseModel):
    user_id: str
    isbn: str
    title: str
    due_at: datetime


class ReturnReceipt(BaseModel):
    user_id: str
    isbn: str
    title: str
    returned_at: datetime
    overdue: timedelta = timedelta(0)
    fine_applied: bool = False
    fine: Decimal = Decimal("0")
    new_balance: Decimal


class PaymentReceipt(BaseModel):
    user_id: str
    amount_paid: Decimal
    remaining_balance: Decimal
