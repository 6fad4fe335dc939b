from enum import Enum


class ErrorKind(str, Enum):
    """Failure kinds reported by the circulation core."""

    NOT_FOUND = "not_found"
    DUPLICATE_IDENTIFIER = "duplicate_identifier"
    BOOK_UNAVAILABLE = "book_unavailable"
    NOT_BORROWED_BY_USER = "not_borrowed_by_user"
    OVERPAYMENT_REJECTED = "overpayment_rejected"
    BOOK_CHECKED_OUT = "book_checked_out"
    INVALID_ARGUMENT = "invalid_argument"


class LibraryError(Exception):
    """Base class for every domain failure raised below the Library boundary."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(LibraryError):
    kind = ErrorKind.NOT_FOUND


class DuplicateIdentifierError(LibraryError):
    kind = ErrorKind.DUPLICATE_IDENTIFIER


class BookUnavailableError(LibraryError):
    kind = ErrorKind.BOOK_UNAVAILABLE


class NotBorrowedByUserError(LibraryError):
    kind = ErrorKind.NOT_BORROWED_BY_USER


class OverpaymentRejectedError(LibraryError):
    kind = ErrorKind.OVERPAYMENT_REJECTED


class BookCheckedOutError(LibraryError):
    kind = ErrorKind.BOOK_CHECKED_OUT


class InvalidArgumentError(LibraryError):
    kind = ErrorKind.INVALID_ARGUMENT


_ERRORS_BY_KIND = {cls.kind: cls for cls in LibraryError.__subclasses__()}


def error_for(kind: ErrorKind, message: str) -> LibraryError:
    """Build the exception matching an error kind."""
    return _ERRORS_BY_KIND[kind](message)
