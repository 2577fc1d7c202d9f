"""Tests for debtwise.core.config_schema."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from debtwise.core.config_schema import (
    AlertsConfig,
    DebtwiseConfig,
    LoggingConfig,
    PathsConfig,
    SavingsConfig,
    ScenariosConfig,
    StrategiesConfig,
)


class TestPathsConfig:
    def test_expands_user(self):
        paths = PathsConfig(data_dir="~/debts", loans_file="~/debts/loans.yaml")
        assert paths.data_dir == Path("~/debts").expanduser()
        assert paths.loans_file == Path("~/debts/loans.yaml").expanduser()
        assert paths.log_dir is None


class TestSections:
    def test_strategy_must_be_known(self):
        with pytest.raises(ValidationError):
            StrategiesConfig(default="minimum_only")

    def test_hybrid_share_bounds(self):
        with pytest.raises(ValidationError):
            StrategiesConfig(hybrid_interest_share=1.5)

    def test_interest_model(self):
        assert ScenariosConfig(interest_model="flat").interest_model == "flat"
        with pytest.raises(ValidationError):
            ScenariosConfig(interest_model="daily")

    def test_negative_extra_budget(self):
        with pytest.raises(ValidationError):
            ScenariosConfig(extra_budget=-1)

    def test_savings_csv(self):
        savings = SavingsConfig(extra_amounts="100,200", rate_reductions="0.25")
        assert savings.extra_amounts == [100.0, 200.0]
        assert savings.rate_reductions == [0.25]

    def test_savings_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            SavingsConfig(extra_amounts=[])

    def test_savings_must_be_non_negative(self):
        with pytest.raises(ValidationError):
            SavingsConfig(rate_reductions=[1.0, -0.5])

    def test_alert_window_non_negative(self):
        with pytest.raises(ValidationError):
            AlertsConfig(due_window_days=-1)

    def test_logging_level_uppercased(self):
        assert LoggingConfig(level="debug").level == "DEBUG"


class TestDebtwiseConfig:
    def test_defaults(self):
        config = DebtwiseConfig()
        assert config.calculator.max_projection_months == 1200
        assert config.strategies.default == "avalanche"
        assert config.logging.level == "WARNING"

    def test_allows_extra_sections(self):
        config = DebtwiseConfig.model_validate({"reports": {"currency": "USD"}})
        assert config.model_extra["reports"] == {"currency": "USD"}

    def test_nested_validation(self):
        with pytest.raises(ValidationError):
            DebtwiseConfig.model_validate({"calculator": {"default_remaining_term": 0}})
