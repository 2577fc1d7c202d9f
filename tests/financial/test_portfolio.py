"""Tests for debtwise.financial.portfolio."""

from dataclasses import replace

import pytest

from debtwise.financial.portfolio import summarize_portfolio


class TestSummarizePortfolio:
    def test_totals(self, sample_loans):
        summary = summarize_portfolio(sample_loans)
        assert summary.loan_count == 4
        assert summary.active_loans == 4
        assert summary.total_debt == pytest.approx(328_000)
        assert summary.total_monthly_payments == pytest.approx(2_617.50)
        assert summary.average_interest_rate == pytest.approx(9.81)

    def test_progress_uses_balance_when_original_unknown(self, sample_loans):
        summary = summarize_portfolio(sample_loans)
        # the credit card has no original amount, so it counts at its balance
        assert summary.total_original == pytest.approx(378_500)
        assert summary.principal_repaid == pytest.approx(50_500)
        assert summary.total_progress == pytest.approx(50_500 / 378_500 * 100)

    def test_by_type(self, sample_loans):
        summary = summarize_portfolio(sample_loans)
        assert set(summary.by_type) == {"mortgage", "credit_card", "auto", "personal"}
        assert summary.by_type["auto"].balance == pytest.approx(22_500)
        assert summary.by_type["mortgage"].count == 1

    def test_focus_loans(self, sample_loans):
        summary = summarize_portfolio(sample_loans)
        assert summary.highest_interest_loan == "2"
        assert summary.smallest_balance_loan == "2"

    def test_counts_inactive(self, sample_loans):
        loans = (replace(sample_loans[0], is_active=False),) + sample_loans[1:]
        assert summarize_portfolio(loans).active_loans == 3

    def test_empty(self):
        summary = summarize_portfolio([])
        assert summary.loan_count == 0
        assert summary.total_debt == 0
        assert summary.average_interest_rate == 0
        assert summary.total_progress == 0
        assert summary.highest_interest_loan is None
