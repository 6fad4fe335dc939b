"""Library Circulation - Core Application Package

This package contains the core application modules including:
- Public service with result-returning operations (library.py)
- Borrowing lifecycle and overdue fines (lending.py)
- Catalog, user ledger and librarian reports (catalog.py, ledger.py, admin.py)
- Data models and views (book.py, user.py, views.py)
- CLI interface (main.py)
"""
from circulation.errors import ErrorKind, LibraryError
from circulation.library import Library
from circulation.results import Result

__all__ = ["ErrorKind", "Library", "LibraryError", "Result"]
