"""Payment-due and credit-utilization alerts derived from loan data.

``AlertGenerator`` is pure: it looks at a loan snapshot and a reference date
and returns fresh alerts. ``AlertInbox`` is the caller-owned list those alerts
are collected into, with read/unread state.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum

from loguru import logger

from debtwise.financial.models import Loan

DUE_WINDOW_DAYS = 3
UTILIZATION_THRESHOLD = 80.0  # percent


class AlertType(Enum):
    PAYMENT_DUE = "payment_due"
    HIGH_UTILIZATION = "high_utilization"
    CUSTOM = "custom"


class AlertSeverity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Alert:
    """A single alert. ``alert_id`` is assigned when added to an inbox."""

    alert_type: AlertType
    severity: AlertSeverity
    title: str
    message: str
    loan_id: str | None = None
    due_date: date | None = None
    alert_id: int | None = None
    read: bool = False


@dataclass(frozen=True)
class UpcomingPayment:
    loan_id: str
    loan_name: str
    amount: float
    due_date: date
    days_until: int


def _due_title(days: int) -> str:
    if days == 0:
        return "Payment Due Today"
    return f"Payment Due in {days} day{'s' if days > 1 else ''}"


def _due_severity(days: int) -> AlertSeverity:
    if days == 0:
        return AlertSeverity.HIGH
    if days <= 1:
        return AlertSeverity.MEDIUM
    return AlertSeverity.LOW


class AlertGenerator:
    """Derives alerts from loan state."""

    def __init__(
        self,
        due_window_days: int = DUE_WINDOW_DAYS,
        utilization_threshold: float = UTILIZATION_THRESHOLD,
    ):
        self.due_window_days = due_window_days
        self.utilization_threshold = utilization_threshold

    @classmethod
    def from_config(cls, config) -> AlertGenerator:
        """Build from a validated ``DebtwiseConfig``."""
        return cls(
            due_window_days=config.alerts.due_window_days,
            utilization_threshold=config.alerts.utilization_threshold,
        )

    def generate(self, loans: Iterable[Loan], today: date | None = None) -> list[Alert]:
        """Alerts for active loans: due within the window, or over-utilized cards."""
        today = today or date.today()
        alerts: list[Alert] = []

        for loan in loans:
            if not loan.is_active:
                continue

            if loan.due_date is not None:
                days = (loan.due_date - today).days
                if 0 <= days <= self.due_window_days:
                    alerts.append(
                        Alert(
                            alert_type=AlertType.PAYMENT_DUE,
                            severity=_due_severity(days),
                            title=_due_title(days),
                            message=f"{loan.name} payment of ${loan.monthly_payment:,.2f} is due",
                            loan_id=loan.loan_id,
                            due_date=loan.due_date,
                        )
                    )

            utilization = loan.utilization
            if utilization is not None and utilization > self.utilization_threshold:
                alerts.append(
                    Alert(
                        alert_type=AlertType.HIGH_UTILIZATION,
                        severity=AlertSeverity.HIGH,
                        title="High Credit Utilization",
                        message=f"{loan.name} is at {utilization:.1f}% utilization",
                        loan_id=loan.loan_id,
                    )
                )

        logger.debug(f"Generated {len(alerts)} alert(s) for {today.isoformat()}")
        return alerts

    def upcoming_payments(
        self,
        loans: Iterable[Loan],
        today: date | None = None,
        limit: int = 5,
    ) -> list[UpcomingPayment]:
        """Next payments of active loans, soonest first (overdue ones included)."""
        today = today or date.today()
        upcoming = [
            UpcomingPayment(
                loan_id=loan.loan_id,
                loan_name=loan.name,
                amount=loan.monthly_payment,
                due_date=loan.due_date,
                days_until=(loan.due_date - today).days,
            )
            for loan in loans
            if loan.is_active and loan.due_date is not None
        ]
        upcoming.sort(key=lambda p: p.days_until)
        return upcoming[:limit]


class AlertInbox:
    """Caller-owned alert list with read state, newest first."""

    def __init__(self):
        self._alerts: list[Alert] = []
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._alerts)

    @property
    def alerts(self) -> list[Alert]:
        return list(self._alerts)

    @property
    def unread(self) -> list[Alert]:
        return [a for a in self._alerts if not a.read]

    @property
    def read(self) -> list[Alert]:
        return [a for a in self._alerts if a.read]

    def add(self, alert: Alert) -> Alert | None:
        """Add an alert unless an unread one of the same type exists for the loan.

        Returns the stored alert, or None when it was a duplicate.
        """
        for existing in self._alerts:
            if (
                not existing.read
                and existing.alert_type == alert.alert_type
                and existing.loan_id == alert.loan_id
                and alert.loan_id is not None
            ):
                return None
        stored = replace(alert, alert_id=next(self._ids), read=False)
        self._alerts.insert(0, stored)
        return stored

    def add_all(self, alerts: Iterable[Alert]) -> int:
        """Add several alerts; returns how many were new."""
        return sum(1 for alert in alerts if self.add(alert) is not None)

    def mark_read(self, alert_id: int) -> None:
        self._alerts = [replace(a, read=True) if a.alert_id == alert_id else a for a in self._alerts]

    def remove(self, alert_id: int) -> None:
        self._alerts = [a for a in self._alerts if a.alert_id != alert_id]

    def clear(self) -> None:
        self._alerts.clear()
