from decimal import Decimal

import pytest

from circulation.validators import ISBNValidator, TextValidator, parse_amount


@pytest.mark.parametrize("isbn", ["9780306406157", "978-0-306-40615-7", "0306406152", "080442957X"])
def test_valid_isbns(isbn):
    assert ISBNValidator.is_valid_isbn(isbn)

@pytest.mark.parametrize("isbn", ["", "123", "9780306406158", "0306406153", "X306406152"])
def test_invalid_isbns(isbn):
    assert not ISBNValidator.is_valid_isbn(isbn)

def test_text_validators():
    assert TextValidator.validate_title("Dune")
    assert not TextValidator.validate_title("   ")
    assert TextValidator.validate_author("Frank Herbert")
    assert not TextValidator.validate_author("12345")
    assert TextValidator.validate_user_id("U001")
    assert not TextValidator.validate_user_id("U 001")

@pytest.mark.parametrize("raw, expected", [("10", Decimal("10")), (" 2.50 ", Decimal("2.50")), ("$4", Decimal("4"))])
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected

@pytest.mark.parametrize("raw", ["abc", "-3", "NaN", ""])
def test_parse_amount_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        parse_amount(raw)
