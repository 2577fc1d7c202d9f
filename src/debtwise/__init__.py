"""debtwise — loan tracking, amortization and repayment optimization."""

__version__ = "0.1.0"
