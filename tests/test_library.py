import random
from decimal import Decimal

import pytest

from circulation import ErrorKind, Library
from circulation.errors import NotFoundError, OverpaymentRejectedError
from circulation.results import Result


def _assert_consistent(lib: Library):
    """available is False iff due_at is set, and every loan has exactly one holder."""
    for book in lib.catalog.list_all():
        assert (not book.available) == (book.due_at is not None)
        holders = [u for u in lib.ledger.list_users() if u.holds(book.isbn)]
        assert len(holders) == (0 if book.available else 1)


def test_add_and_list_inventory(lib):
    assert lib.list_inventory() == []

    result = lib.add_book("Ulysses", "James Joyce", "9780199535675")

    assert result.ok
    assert result.value.isbn == "9780199535675"
    inventory = lib.list_inventory()
    assert len(inventory) == 1
    assert inventory[0].status == "Available"

def test_add_duplicate_isbn(lib):
    lib.add_book("Test Book", "Test Author", "1234567890")
    result = lib.add_book("Test Book", "Test Author", "1234567890")

    assert not result.ok
    assert result.error is ErrorKind.DUPLICATE_IDENTIFIER
    assert result.message == "Book with ISBN 1234567890 already exists."
    assert len(lib.list_inventory()) == 1

def test_register_duplicate_user(lib):
    assert lib.register_user("Ada", "U1").ok
    result = lib.register_user("Bob", "U1")
    assert result.error is ErrorKind.DUPLICATE_IDENTIFIER

def test_remove_unknown_book(lib):
    result = lib.remove_book("nonexistent")
    assert result.error is ErrorKind.NOT_FOUND

def test_borrow_returns_due_timestamp(stocked_lib, clock):
    result = stocked_lib.borrow("U1", "9780441172719")
    assert result.ok
    assert (result.value.due_at - clock.now()).total_seconds() == 5

def test_borrow_unknown_ids(stocked_lib):
    assert stocked_lib.borrow("nobody", "9780441172719").error is ErrorKind.NOT_FOUND
    assert stocked_lib.borrow("U1", "000").error is ErrorKind.NOT_FOUND

def test_borrow_unavailable_book(stocked_lib):
    stocked_lib.register_user("Bob", "U2")
    stocked_lib.borrow("U1", "9780441172719")

    result = stocked_lib.borrow("U2", "9780441172719")

    assert result.error is ErrorKind.BOOK_UNAVAILABLE
    assert stocked_lib.get_user_summary("U2").value.borrowed_count == 0
    _assert_consistent(stocked_lib)

def test_return_not_borrowed(stocked_lib):
    result = stocked_lib.return_book("U1", "9780441172719")
    assert result.error is ErrorKind.NOT_BORROWED_BY_USER

@pytest.mark.parametrize("elapsed, expected_fine", [(3, Decimal("0")), (5, Decimal("0")), (7, Decimal("4"))])
def test_overdue_fine_scenario(stocked_lib, clock, elapsed, expected_fine):
    # loan 5s, rate 2 per second
    stocked_lib.borrow("U1", "9780441172719")
    clock.advance(seconds=elapsed)

    receipt = stocked_lib.return_book("U1", "9780441172719").unwrap()

    assert receipt.fine == expected_fine
    assert receipt.fine_applied is (expected_fine > 0)
    assert receipt.new_balance == expected_fine

def test_pay_fine_scenario(stocked_lib, clock):
    stocked_lib.borrow("U1", "9780441172719")
    clock.advance(seconds=10)  # 5s overdue -> 10
    stocked_lib.return_book("U1", "9780441172719")

    rejected = stocked_lib.pay_fine("U1", Decimal("15"))
    assert rejected.error is ErrorKind.OVERPAYMENT_REJECTED
    assert stocked_lib.get_user_summary("U1").value.fines == Decimal("10")

    paid = stocked_lib.pay_fine("U1", Decimal("10"))
    assert paid.ok
    assert paid.value.remaining_balance == 0

def test_pay_negative_amount(stocked_lib):
    assert stocked_lib.pay_fine("U1", Decimal("-1")).error is ErrorKind.INVALID_ARGUMENT

@pytest.mark.parametrize("amount", [Decimal("NaN"), Decimal("Infinity"), "ten", None])
def test_pay_non_numeric_amount_is_a_failure_result(stocked_lib, amount):
    result = stocked_lib.pay_fine("U1", amount)

    assert result.error is ErrorKind.INVALID_ARGUMENT
    assert stocked_lib.get_user_summary("U1").value.fines == 0

def test_remove_checked_out_book_scenario(stocked_lib):
    stocked_lib.borrow("U1", "9780441172719")

    result = stocked_lib.remove_book("9780441172719")
    assert result.error is ErrorKind.BOOK_CHECKED_OUT
    assert stocked_lib.find_book("9780441172719") is not None

    stocked_lib.return_book("U1", "9780441172719")
    assert stocked_lib.remove_book("9780441172719").ok
    assert stocked_lib.find_book("9780441172719") is None

def test_user_summary(stocked_lib, clock):
    stocked_lib.borrow("U1", "9780441172719")
    stocked_lib.borrow("U1", "9780441569595")
    clock.advance(seconds=6)

    summary = stocked_lib.get_user_summary("U1").unwrap()

    assert summary.name == "Ada Lovelace"
    assert summary.borrowed_count == 2
    assert [b.isbn for b in summary.borrowed_books] == ["9780441172719", "9780441569595"]
    assert all(b.overdue for b in summary.borrowed_books)
    assert stocked_lib.get_user_summary("nobody").error is ErrorKind.NOT_FOUND

def test_list_users(stocked_lib):
    stocked_lib.register_user("Bob", "U2")
    assert [u.user_id for u in stocked_lib.list_users()] == ["U1", "U2"]

def test_unwrap_reraises_matching_exception(lib):
    with pytest.raises(NotFoundError):
        lib.get_user_summary("nobody").unwrap()
    with pytest.raises(OverpaymentRejectedError):
        Result.failure(ErrorKind.OVERPAYMENT_REJECTED, "too much").unwrap()

def test_random_operations_keep_books_and_users_consistent(lib, clock):
    rng = random.Random(1234)
    users = [f"U{i}" for i in range(3)]
    isbns = [f"B{i}" for i in range(4)]
    for uid in users:
        lib.register_user(f"User {uid}", uid)
    for isbn in isbns:
        lib.add_book(f"Title {isbn}", "Author", isbn)

    for _ in range(300):
        clock.advance(seconds=rng.randint(0, 4))
        op = rng.choice(["borrow", "return", "pay", "remove", "add"])
        uid, isbn = rng.choice(users), rng.choice(isbns)
        if op == "borrow":
            lib.borrow(uid, isbn)
        elif op == "return":
            lib.return_book(uid, isbn)
        elif op == "pay":
            lib.pay_fine(uid, Decimal(rng.randint(0, 20)))
        elif op == "remove":
            lib.remove_book(isbn)
        else:
            lib.add_book(f"Title {isbn}", "Author", isbn)
        _assert_consistent(lib)
        assert all(u.fines >= 0 for u in lib.list_users())
