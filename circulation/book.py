from __future__ import annotations

from datetime import datetime


class Book:
    """A single book in the catalog."""

    def __init__(self, title: str, author: str, isbn: str) -> None:
        self.title = title.strip()
        self.author = author.strip()
        self._isbn = isbn.strip()
        self._available = True
        self._due_at: datetime | None = None

    # The ISBN is the catalog key and never changes.
    @property
    def isbn(self) -> str:
        return self._isbn

    @property
    def available(self) -> bool:
        return self._available

    @property
    def due_at(self) -> datetime | None:
        return self._due_at

    @property
    def status(self) -> str:
        return "Available" if self._available else "Checked Out"

    def check_out(self, due_at: datetime) -> None:
        """Available -> Checked Out. Callers check availability first."""
        if not self._available:
            raise RuntimeError(f"Book {self._isbn} is already checked out.")
        self._available = False
        self._due_at = due_at

    def check_in(self) -> None:
        """Checked Out -> Available; clears the due date."""
        self._available = True
        self._due_at = None

    def is_overdue(self, now: datetime) -> bool:
        return self._due_at is not None and now > self._due_at

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} (ISBN: {self.isbn})"

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "available": self.available,
            "status": self.status,
            "due_at": self.due_at.isoformat() if self.due_at else None,
        }
