"""LoanBook — in-memory loan store with best-effort YAML/JSON persistence.

The calculators never touch the book directly: callers take a ``snapshot()``
and hand that tuple to an engine, so edits made later never leak into a
computation that is already running.

File layout (YAML shown, JSON is the same shape)::

    loans:
      - loan_id: "1"
        name: Primary Mortgage
        loan_type: mortgage
        balance: 285000
        interest_rate: 3.25
        monthly_payment: 1392.50
        due_date: 2024-01-15
    payments:
      - {loan_id: "1", amount: 1392.50, paid_on: 2024-01-15}
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any

from loguru import logger

from debtwise.core.exceptions import FileIOError, InvalidInputError, LoanNotFoundError, LoanStoreError
from debtwise.core.types import PathLike
from debtwise.core.utils.file_io import dump_structured, load_structured
from debtwise.financial.models import Loan, PaymentRecord


class LoanBook:
    """Ordered collection of loans plus the payments applied to them."""

    def __init__(self, loans: Iterable[Loan] = (), payments: Iterable[PaymentRecord] = ()):
        self._loans: dict[str, Loan] = {}
        self._payments: list[PaymentRecord] = list(payments)
        for loan in loans:
            self.add(loan)

    def __len__(self) -> int:
        return len(self._loans)

    def __iter__(self):
        return iter(self.snapshot())

    def __contains__(self, loan_id: object) -> bool:
        return loan_id in self._loans

    @property
    def payments(self) -> tuple[PaymentRecord, ...]:
        return tuple(self._payments)

    def snapshot(self) -> tuple[Loan, ...]:
        """Immutable view of the loans, in insertion order."""
        return tuple(self._loans.values())

    def active_loans(self) -> tuple[Loan, ...]:
        return tuple(loan for loan in self._loans.values() if loan.is_active)

    def get(self, loan_id: str) -> Loan:
        try:
            return self._loans[loan_id]
        except KeyError:
            raise LoanNotFoundError(f"No loan with id {loan_id!r}") from None

    def add(self, loan: Loan) -> Loan:
        if loan.loan_id in self._loans:
            raise LoanStoreError(f"Loan id {loan.loan_id!r} already exists")
        self._loans[loan.loan_id] = loan
        logger.debug(f"Added loan {loan.loan_id} ({loan.name})")
        return loan

    def update(self, loan_id: str, **changes: Any) -> Loan:
        """Replace fields of a loan; the new values are validated like a new loan."""
        current = self.get(loan_id)
        if "loan_id" in changes and changes["loan_id"] != loan_id:
            raise LoanStoreError("Loan id cannot be changed")
        try:
            updated = replace(current, **changes)
        except TypeError as e:
            raise InvalidInputError(f"Invalid loan update: {e}") from e
        self._loans[loan_id] = updated
        logger.debug(f"Updated loan {loan_id}: {sorted(changes)}")
        return updated

    def delete(self, loan_id: str) -> Loan:
        loan = self.get(loan_id)
        del self._loans[loan_id]
        logger.debug(f"Deleted loan {loan_id}")
        return loan

    def record_payment(self, loan_id: str, amount: float, paid_on: date | None = None) -> Loan:
        """Apply a payment to a loan's balance (never below zero)."""
        loan = self.get(loan_id)
        payment = PaymentRecord(loan_id=loan_id, amount=amount, paid_on=paid_on or date.today())
        self._payments.append(payment)
        updated = replace(loan, balance=max(0.0, loan.balance - payment.amount))
        self._loans[loan_id] = updated
        logger.info(f"Recorded ${payment.amount:,.2f} payment on {loan.name}; balance now ${updated.balance:,.2f}")
        return updated

    def to_dict(self) -> dict[str, Any]:
        return {
            "loans": [loan.to_dict() for loan in self._loans.values()],
            "payments": [
                {"loan_id": p.loan_id, "amount": p.amount, "paid_on": p.paid_on.isoformat()}
                for p in self._payments
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LoanBook:
        """Build a book from the file layout. Invalid loan records raise InvalidInputError."""
        if not isinstance(data, dict):
            raise LoanStoreError("Loan file must contain a mapping with a 'loans' list")
        records = data.get("loans") or []
        if not isinstance(records, list):
            raise LoanStoreError("'loans' must be a list")

        loans = []
        for index, record in enumerate(records):
            try:
                loans.append(Loan.from_dict(record))
            except InvalidInputError as e:
                raise InvalidInputError(f"Loan record #{index + 1}: {e}") from e

        payments = []
        for record in data.get("payments") or []:
            try:
                paid_on = record["paid_on"]
                if isinstance(paid_on, str):
                    paid_on = date.fromisoformat(paid_on)
                payments.append(PaymentRecord(loan_id=str(record["loan_id"]), amount=record["amount"], paid_on=paid_on))
            except (KeyError, TypeError, ValueError) as e:
                raise LoanStoreError(f"Invalid payment record {record!r}: {e}") from e

        return cls(loans=loans, payments=payments)

    @classmethod
    def load(cls, path: PathLike) -> LoanBook:
        """Load a book from YAML/JSON. A missing file gives an empty book."""
        path = Path(path).expanduser()
        if not path.exists():
            logger.info(f"No loan file at {path}, starting with an empty book")
            return cls()
        try:
            data = load_structured(path)
        except FileIOError as e:
            raise LoanStoreError(str(e)) from e
        book = cls.from_dict(data or {})
        logger.debug(f"Loaded {len(book)} loan(s) from {path}")
        return book

    def save(self, path: PathLike) -> None:
        try:
            dump_structured(path, self.to_dict())
        except FileIOError as e:
            raise LoanStoreError(str(e)) from e
