import os
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Lending policy
    # Demonstration values: a five second loan and 2 currency units per overdue second.
    loan_duration_seconds: float = float(os.getenv("LOAN_DURATION_SECONDS", "5"))
    fine_rate: str = os.getenv("FINE_RATE", "2")
    fine_unit_seconds: float = float(os.getenv("FINE_UNIT_SECONDS", "1"))
    currency_symbol: str = os.getenv("CURRENCY_SYMBOL", "$")

    # Default librarian
    librarian_name: str = os.getenv("LIBRARIAN_NAME", "Admin")
    librarian_id: str = os.getenv("LIBRARIAN_ID", "L001")

    # Application
    app_name: str = os.getenv("APP_NAME", "Library Management System")
    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()
    output_mode: str = os.getenv("LIB_CLI_OUTPUT", "plain").lower()


@dataclass(frozen=True)
class LendingPolicy:
    """Loan length and fine rate used by the lending engine."""

    loan_duration: timedelta
    fine_rate: Decimal
    fine_unit: timedelta = timedelta(seconds=1)

    def __post_init__(self) -> None:
        if self.loan_duration <= timedelta(0):
            raise ValueError("Loan duration must be positive.")
        if self.fine_unit <= timedelta(0):
            raise ValueError("Fine unit must be positive.")
        if self.fine_rate < 0:
            raise ValueError("Fine rate cannot be negative.")

    @classmethod
    def from_settings(cls, s: "Settings") -> "LendingPolicy":
        return cls(
            loan_duration=timedelta(seconds=s.loan_duration_seconds),
            fine_rate=Decimal(s.fine_rate),
            fine_unit=timedelta(seconds=s.fine_unit_seconds),
        )


settings = Settings()
