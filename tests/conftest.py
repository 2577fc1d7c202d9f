"""Shared test fixtures for debtwise."""

import os
import tempfile
from datetime import date

import pytest

from debtwise.financial.models import Loan


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "loans_file": os.path.join(tmp_dir, "data", "loans.yaml"),
        },
        "scenarios": {
            "interest_model": "flat",
        },
        "alerts": {
            "due_window_days": 5,
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def sample_loans():
    """Mortgage, credit card, auto and personal loan used across the suite."""
    return (
        Loan(
            loan_id="1",
            name="Primary Mortgage",
            loan_type="mortgage",
            balance=285_000,
            interest_rate=3.25,
            monthly_payment=1_392.50,
            due_date=date(2024, 1, 15),
            original_amount=320_000,
            term=360,
            remaining_term=312,
        ),
        Loan(
            loan_id="2",
            name="Chase Sapphire",
            loan_type="credit_card",
            balance=8_500,
            interest_rate=18.99,
            monthly_payment=255,
            due_date=date(2024, 1, 12),
            minimum_payment=255,
            credit_limit=10_000,
        ),
        Loan(
            loan_id="3",
            name="Car Loan",
            loan_type="auto",
            balance=22_500,
            interest_rate=4.5,
            monthly_payment=520,
            due_date=date(2024, 1, 20),
            original_amount=35_000,
            term=72,
            remaining_term=48,
        ),
        Loan(
            loan_id="4",
            name="Personal Loan",
            loan_type="personal",
            balance=12_000,
            interest_rate=12.5,
            monthly_payment=450,
            due_date=date(2024, 1, 25),
            original_amount=15_000,
            term=36,
            remaining_term=28,
        ),
    )


@pytest.fixture
def loans_file(tmp_dir, sample_loans):
    """Write the sample loans to a YAML loan file and return its path."""
    from debtwise.financial.store import LoanBook

    path = os.path.join(tmp_dir, "loans.yaml")
    LoanBook(sample_loans).save(path)
    return path
