# trubalance/api/v1/schemas/budget.py
"""Request and response schemas for budget endpoints."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field


class TransactionRecordSchema(BaseModel):
    """An income or expense record as stored by the client."""

    amount: Decimal
    category: str | None = None
    title: str | None = Field(default=None, max_length=200)
    date: dt.date | None = None


class OptimalBudgetRequest(BaseModel):
    monthly_income: Decimal
    historical_spending: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Average monthly spend per expense category",
    )


class BudgetPlanResponse(BaseModel):
    budgets: dict[str, Decimal]
    savings: Decimal
    total_allocated: Decimal
    methodology: str


class AverageBudgetRequest(BaseModel):
    expenses: list[TransactionRecordSchema] = Field(default_factory=list)


class BudgetPerformanceRequest(BaseModel):
    budgets: dict[str, Decimal]
    actual_spending: dict[str, Decimal] = Field(default_factory=dict)


class BudgetPerformanceSchema(BaseModel):
    category: str
    budget: Decimal
    actual: Decimal
    remaining: Decimal
    percent_used: int
    status: str
    message: str


class EmergencyFundRequest(BaseModel):
    monthly_expenses: Decimal


class EmergencyFundResponse(BaseModel):
    minimum: Decimal
    recommended: Decimal
    ideal: Decimal
    explanation: str
