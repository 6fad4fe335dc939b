from decimal import Decimal
from datetime import timedelta

import pytest

from circulation.clock import ManualClock
from circulation.config import LendingPolicy
from circulation.library import Library


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def policy():
    # Demonstration policy: five second loans, 2 per overdue second
    return LendingPolicy(loan_duration=timedelta(seconds=5), fine_rate=Decimal("2"))


@pytest.fixture
def lib(clock, policy):
    return Library(policy=policy, clock=clock)


@pytest.fixture
def stocked_lib(lib):
    """A library with one user and two books."""
    lib.register_user("Ada Lovelace", "U1").unwrap()
    lib.add_book("Dune", "Frank Herbert", "9780441172719").unwrap()
    lib.add_book("Neuromancer", "William Gibson", "9780441569595").unwrap()
    return lib
