"""Debt management — loan models, store, calculators and alerts."""

from .alerts import Alert, AlertGenerator, AlertInbox, AlertSeverity, AlertType
from .models import Loan, LoanType, PaymentRecord
from .portfolio import PortfolioSummary, summarize_portfolio
from .store import LoanBook

__all__ = [
    "Alert",
    "AlertGenerator",
    "AlertInbox",
    "AlertSeverity",
    "AlertType",
    "Loan",
    "LoanBook",
    "LoanType",
    "PaymentRecord",
    "PortfolioSummary",
    "summarize_portfolio",
]
