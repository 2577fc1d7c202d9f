"""Debt calculators — amortization, strategies, scenarios, savings, refinance."""

from .amortization import (
    BALANCE_EPSILON,
    AmortizationSchedule,
    ExtraPaymentComparison,
    FlatPayoff,
    ScheduleEntry,
    ScheduleStatus,
    calculate_monthly_payment,
    compare_extra_payment,
    estimate_flat_payoff,
    generate_schedule,
    payment_for_target,
)
from .refinance import RefinanceComparison, break_even_months, compare_refinance
from .savings import (
    ExtraPaymentSweepPoint,
    RefinanceSweepPoint,
    SavingsAnalysis,
    SavingsAnalyzer,
)
from .scenarios import (
    InterestModel,
    ScenarioComparison,
    ScenarioEngine,
    ScenarioKind,
    ScenarioParameters,
    ScenarioResult,
)
from .strategies import (
    PaymentPlan,
    PaymentPlanEntry,
    Strategy,
    StrategyComparison,
    StrategyEngine,
    compute_avalanche_plan,
    compute_hybrid_plan,
    compute_snowball_plan,
)

__all__ = [
    "BALANCE_EPSILON",
    "AmortizationSchedule",
    "ExtraPaymentComparison",
    "ExtraPaymentSweepPoint",
    "FlatPayoff",
    "InterestModel",
    "PaymentPlan",
    "PaymentPlanEntry",
    "RefinanceComparison",
    "RefinanceSweepPoint",
    "SavingsAnalysis",
    "SavingsAnalyzer",
    "ScenarioComparison",
    "ScenarioEngine",
    "ScenarioKind",
    "ScenarioParameters",
    "ScenarioResult",
    "ScheduleEntry",
    "ScheduleStatus",
    "Strategy",
    "StrategyComparison",
    "StrategyEngine",
    "break_even_months",
    "calculate_monthly_payment",
    "compare_extra_payment",
    "compare_refinance",
    "compute_avalanche_plan",
    "compute_hybrid_plan",
    "compute_snowball_plan",
    "estimate_flat_payoff",
    "generate_schedule",
    "payment_for_target",
]
