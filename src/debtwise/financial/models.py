"""Core loan data models.

A ``Loan`` is an immutable snapshot of one debt obligation. The calculators
only ever read loans; edits go through ``LoanBook`` which swaps in a new
instance.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import date
from enum import Enum
from typing import Any

from debtwise.core.exceptions import InvalidInputError
from debtwise.financial.validation import (
    require_non_negative,
    require_positive,
    require_positive_int,
)

DEFAULT_REMAINING_TERM = 360  # months, used when a loan has no remaining_term


class LoanType(str, Enum):
    """Known loan types. Loans may carry other type strings too."""

    MORTGAGE = "mortgage"
    CREDIT_CARD = "credit_card"
    AUTO = "auto"
    PERSONAL = "personal"


def _parse_date(name: str, value: Any) -> date | None:
    if value is None or isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as e:
            raise InvalidInputError(f"{name} must be an ISO date (YYYY-MM-DD), got {value!r}") from e
    raise InvalidInputError(f"{name} must be a date, got {value!r}")


@dataclass(frozen=True)
class Loan:
    """One debt obligation.

    Attributes:
        loan_id: Unique, stable identifier.
        name: Display label.
        loan_type: A ``LoanType`` value or any other type string.
        balance: Current principal owed.
        interest_rate: Annual nominal rate in percent (3.25 means 3.25%).
        monthly_payment: Contractual monthly payment, must be positive.
        due_date: Next payment due date.
        minimum_payment: Floor payment; ``min_payment`` falls back to monthly_payment.
        original_amount: Initial principal, used for progress.
        term: Total scheduled months.
        remaining_term: Months left, the amortization horizon for scenarios.
        credit_limit: Revolving credit limit (credit cards).
        is_active: Inactive loans are kept but produce no alerts.
        start_date: When the loan started.
    """

    loan_id: str
    name: str
    loan_type: str
    balance: float
    interest_rate: float
    monthly_payment: float
    due_date: date | None = None
    minimum_payment: float | None = None
    original_amount: float | None = None
    term: int | None = None
    remaining_term: int | None = None
    credit_limit: float | None = None
    is_active: bool = True
    start_date: date | None = None

    def __post_init__(self):
        if not self.loan_id:
            raise InvalidInputError("Loan id cannot be empty")
        if not self.name:
            raise InvalidInputError(f"Loan {self.loan_id} name cannot be empty")
        if not self.loan_type:
            raise InvalidInputError(f"Loan {self.name} type cannot be empty")

        require_non_negative(f"{self.name} balance", self.balance)
        require_non_negative(f"{self.name} interest_rate", self.interest_rate)
        require_positive(f"{self.name} monthly_payment", self.monthly_payment)

        if self.minimum_payment is not None:
            require_non_negative(f"{self.name} minimum_payment", self.minimum_payment)
        if self.original_amount is not None:
            require_non_negative(f"{self.name} original_amount", self.original_amount)
        if self.credit_limit is not None:
            require_non_negative(f"{self.name} credit_limit", self.credit_limit)
        if self.term is not None:
            require_positive_int(f"{self.name} term", self.term)
        if self.remaining_term is not None:
            require_positive_int(f"{self.name} remaining_term", self.remaining_term)

    @property
    def min_payment(self) -> float:
        """Minimum payment, defaulting to the contractual payment."""
        if self.minimum_payment is None:
            return self.monthly_payment
        return self.minimum_payment

    @property
    def is_credit_card(self) -> bool:
        return self.loan_type == LoanType.CREDIT_CARD.value

    @property
    def utilization(self) -> float | None:
        """Balance as a percentage of the credit limit.

        None unless this is a credit card with a positive limit.
        """
        if not self.is_credit_card or not self.credit_limit:
            return None
        return self.balance / self.credit_limit * 100

    @property
    def progress(self) -> float:
        """Percent of the original amount repaid (0 when unknown)."""
        if not self.original_amount:
            return 0.0
        return (self.original_amount - self.balance) / self.original_amount * 100

    def horizon(self, default: int = DEFAULT_REMAINING_TERM) -> int:
        """Months used as the amortization horizon."""
        return self.remaining_term or default

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Loan:
        """Build a loan from a plain mapping (a YAML/JSON record).

        ``id`` and ``type`` are accepted as short forms of ``loan_id`` and
        ``loan_type``. Unknown keys are rejected.
        """
        if not isinstance(data, dict):
            raise InvalidInputError(f"Loan record must be a mapping, got {type(data).__name__}")

        record = dict(data)
        if "id" in record:
            record.setdefault("loan_id", record.pop("id"))
        if "type" in record:
            record.setdefault("loan_type", record.pop("type"))

        known = {f.name for f in fields(cls)}
        unknown = set(record) - known
        if unknown:
            raise InvalidInputError(f"Unknown loan fields: {sorted(unknown)}")
        missing = {"loan_id", "name", "loan_type", "balance", "interest_rate", "monthly_payment"} - set(record)
        if missing:
            raise InvalidInputError(f"Loan record missing required fields: {sorted(missing)}")

        record["loan_id"] = str(record["loan_id"])
        for key in ("due_date", "start_date"):
            record[key] = _parse_date(key, record.get(key))
        return cls(**record)

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping with ISO dates, the inverse of ``from_dict``."""
        data = asdict(self)
        for key in ("due_date", "start_date"):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        if isinstance(self.loan_type, LoanType):
            data["loan_type"] = self.loan_type.value
        return data


@dataclass(frozen=True)
class PaymentRecord:
    """A payment applied against a loan's balance."""

    loan_id: str
    amount: float
    paid_on: date

    def __post_init__(self):
        require_positive("payment amount", self.amount)


def total_balance(loans) -> float:
    return sum(loan.balance for loan in loans)


def validate_loan_snapshot(loans) -> tuple[Loan, ...]:
    """Freeze a loan collection for one computation, rejecting non-loans."""
    snapshot = tuple(loans)
    for item in snapshot:
        if not isinstance(item, Loan):
            raise InvalidInputError(f"Expected Loan records, got {type(item).__name__}")
    return snapshot
