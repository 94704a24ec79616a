# trubalance/api/v1/schemas/insights.py
"""Request and response schemas for insight endpoints."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from trubalance.api.v1.schemas.budget import BudgetPerformanceSchema, TransactionRecordSchema


class BudgetRecommendationsRequest(BaseModel):
    incomes: list[TransactionRecordSchema] = Field(default_factory=list)
    expenses: list[TransactionRecordSchema] = Field(default_factory=list)
    as_of: dt.date | None = Field(
        default=None,
        description="Only use records from the three months up to this date",
    )


class BudgetRecommendationsResponse(BaseModel):
    monthly_income: Decimal
    optimal: dict[str, Decimal]
    average_based: dict[str, Decimal]
    savings: Decimal
    methodology: str
    historical_average: dict[str, Decimal]


class MonthlyReportRequest(BaseModel):
    month: str = Field(description="YYYY-MM")
    incomes: list[TransactionRecordSchema] = Field(default_factory=list)
    expenses: list[TransactionRecordSchema] = Field(default_factory=list)
    budgets: dict[str, Decimal] = Field(default_factory=dict)


class MonthlyReportResponse(BaseModel):
    month: str
    total_income: Decimal
    total_expenses: Decimal
    savings: Decimal
    savings_rate: int
    expense_by_category: dict[str, Decimal]
    income_by_category: dict[str, Decimal]
    top_spending: list[dict[str, Any]]
    budget_performance: list[BudgetPerformanceSchema]
    insights: list[str]
    income_count: int
    expense_count: int


class SpendingPatternsRequest(BaseModel):
    expenses: list[TransactionRecordSchema] = Field(default_factory=list)
    as_of: dt.date | None = Field(default=None, description="End of the 30-day window (default: today)")


class SpendingPatternsResponse(BaseModel):
    weekend_total: Decimal
    weekday_total: Decimal
    insights: list[dict[str, Any]]


class FinancialAdviceRequest(MonthlyReportRequest):
    pass


class AdviceItemSchema(BaseModel):
    type: str
    title: str
    message: str
    priority: str


class FinancialAdviceResponse(BaseModel):
    month: str
    total_income: Decimal
    total_expenses: Decimal
    savings: Decimal
    savings_rate: int
    score: int
    advice: list[AdviceItemSchema]
    emergency_fund: Decimal
    emergency_fund_message: str
