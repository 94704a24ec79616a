# trubalance/domain/models/budget.py
"""Result dataclasses for budget planning, reports and advice."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any

ZERO = Decimal("0")

METHODOLOGY_50_30_20 = "50/30/20 Rule (50% Needs, 30% Wants, 20% Savings)"


@dataclass
class BudgetPlan:
    budgets: dict[str, Decimal] = field(default_factory=dict)
    savings: Decimal = ZERO
    total_allocated: Decimal = ZERO
    methodology: str = METHODOLOGY_50_30_20

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class EmergencyFund:
    minimum: Decimal = ZERO       # 3 months
    recommended: Decimal = ZERO   # 6 months
    ideal: Decimal = ZERO         # 12 months
    explanation: str = "Emergency fund should cover 3-12 months of expenses"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class BudgetPerformance:
    category: str
    budget: Decimal
    actual: Decimal
    remaining: Decimal
    percent_used: int
    status: str  # "good" | "moderate" | "warning" | "exceeded"
    message: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class BudgetRecommendations:
    monthly_income: Decimal = ZERO
    optimal: dict[str, Decimal] = field(default_factory=dict)
    average_based: dict[str, Decimal] = field(default_factory=dict)
    savings: Decimal = ZERO
    methodology: str = METHODOLOGY_50_30_20
    historical_average: dict[str, Decimal] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class MonthlyReport:
    month: str
    total_income: Decimal = ZERO
    total_expenses: Decimal = ZERO
    savings: Decimal = ZERO
    savings_rate: int = 0
    expense_by_category: dict[str, Decimal] = field(default_factory=dict)
    income_by_category: dict[str, Decimal] = field(default_factory=dict)
    top_spending: list[dict[str, Any]] = field(default_factory=list)
    budget_performance: list[BudgetPerformance] = field(default_factory=list)
    insights: list[str] = field(default_factory=list)
    income_count: int = 0
    expense_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SpendingPatterns:
    weekend_total: Decimal = ZERO
    weekday_total: Decimal = ZERO
    insights: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class AdviceItem:
    type: str       # "warning" | "success" | "info" | "tip"
    title: str
    message: str
    priority: str   # "high" | "medium" | "low"


@dataclass
class FinancialAdvice:
    month: str
    total_income: Decimal = ZERO
    total_expenses: Decimal = ZERO
    savings: Decimal = ZERO
    savings_rate: int = 0
    score: int = 0
    advice: list[AdviceItem] = field(default_factory=list)
    emergency_fund: Decimal = ZERO
    emergency_fund_message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
