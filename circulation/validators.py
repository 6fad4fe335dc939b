import re
from decimal import Decimal, InvalidOperation
from typing import Optional

class ISBNValidator:
    """ISBN-10 / ISBN-13 checksum validation for input typed at the CLI.

    The catalog itself accepts any non-empty identifier; this is advisory.
    """

    @staticmethod
    def normalize_isbn(raw: str) -> str:
        if raw is None:
            return ""
        s = re.sub(r"[^0-9Xx]", "", raw)
        return s.upper()

    @staticmethod
    def is_valid_isbn(isbn: str) -> bool:
        if not isbn:
            return False
        s = ISBNValidator.normalize_isbn(isbn)
        if len(s) == 10:
            # weighted 10..1 sum, 'X' only allowed as check digit
            if not s[:-1].isdigit():
                return False
            check = s[-1]
            if check == 'X':
                check_val = 10
            elif check.isdigit():
                check_val = int(check)
            else:
                return False
            total = sum((10 - i) * int(ch) for i, ch in enumerate(s[:-1])) + check_val
            return total % 11 == 0
        elif len(s) == 13 and s.isdigit():
            total = 0
            for i, ch in enumerate(s[:-1]):
                factor = 1 if i % 2 == 0 else 3
                total += factor * int(ch)
            check_val = (10 - (total % 10)) % 10
            return check_val == int(s[-1])
        return False

class TextValidator:
    """Basic checks for names and identifiers typed at the CLI."""

    @staticmethod
    def validate_title(title: Optional[str]) -> bool:
        return title is not None and bool(title.strip())

    @staticmethod
    def validate_author(author: Optional[str]) -> bool:
        # must not be digits only
        if author is None:
            return False
        t = author.strip()
        if not t:
            return False
        return not t.isdigit()

    @staticmethod
    def validate_user_id(user_id: Optional[str]) -> bool:
        if user_id is None:
            return False
        t = user_id.strip()
        return bool(t) and not any(c.isspace() for c in t)


def parse_amount(raw: str) -> Decimal:
    """Parse a currency amount such as '10', '2.50' or '$4'. Raises ValueError."""
    if raw is None:
        raise ValueError("Amount is required.")
    cleaned = raw.strip().lstrip("$").replace(",", "")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {raw!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {raw!r}")
    if amount < 0:
        raise ValueError("Amount cannot be negative.")
    return amount
