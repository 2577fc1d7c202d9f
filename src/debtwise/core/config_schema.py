"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed, validated ``DebtwiseConfig``
instance.  Existing dict-based access continues to work unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PathsConfig(BaseModel):
    """File-system paths used by the application."""

    data_dir: Path
    log_dir: Path | None = None
    loans_file: Path | None = None

    @field_validator("data_dir", "log_dir", "loans_file", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v


class CalculatorConfig(BaseModel):
    """Amortization settings shared by every engine."""

    default_remaining_term: int = Field(default=360, gt=0)
    max_projection_months: int = Field(default=1200, gt=0)


class StrategiesConfig(BaseModel):
    """Repayment strategy defaults."""

    default: Literal["avalanche", "snowball", "hybrid"] = "avalanche"
    hybrid_interest_share: float = Field(default=0.6, ge=0, le=1)


class ScenariosConfig(BaseModel):
    """Scenario simulation defaults."""

    interest_model: Literal["flat", "amortized"] = "amortized"
    rate_change: float = 2.0
    extra_budget: float = Field(default=500.0, ge=0)


class SavingsConfig(BaseModel):
    """Parameter sweeps for the savings analysis."""

    extra_amounts: list[float] = [200.0, 500.0, 1000.0]
    rate_reductions: list[float] = [0.5, 1.0, 2.0]

    @field_validator("extra_amounts", "rate_reductions", mode="before")
    @classmethod
    def _split_csv(cls, v: Any) -> Any:
        # Env overrides arrive as "200,500,1000"
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @model_validator(mode="after")
    def _non_empty(self) -> SavingsConfig:
        if not self.extra_amounts or not self.rate_reductions:
            raise ValueError("savings sweeps need at least one value each")
        if any(v < 0 for v in self.extra_amounts + self.rate_reductions):
            raise ValueError("savings sweep values must be non-negative")
        return self


class AlertsConfig(BaseModel):
    """Thresholds for generated alerts."""

    due_window_days: int = Field(default=3, ge=0)
    utilization_threshold: float = Field(default=80.0, ge=0)


class LoggingConfig(BaseModel):
    """loguru sink settings."""

    level: str = "WARNING"
    file: str | None = None
    rotation: str = "10 MB"
    retention: str = "7 days"

    @field_validator("level")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()


class DebtwiseConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = PathsConfig(data_dir=Path("~/.debtwise-data"))
    calculator: CalculatorConfig = CalculatorConfig()
    strategies: StrategiesConfig = StrategiesConfig()
    scenarios: ScenariosConfig = ScenariosConfig()
    savings: SavingsConfig = SavingsConfig()
    alerts: AlertsConfig = AlertsConfig()
    logging: LoggingConfig = LoggingConfig()
