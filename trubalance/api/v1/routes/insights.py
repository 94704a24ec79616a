# trubalance/api/v1/routes/insights.py
"""
Insight endpoints built on the budget calculators.
"""

from __future__ import annotations

from fastapi import APIRouter

from trubalance.api.v1.envelope import ok
from trubalance.api.v1.schemas.insights import (
    BudgetRecommendationsRequest,
    BudgetRecommendationsResponse,
    FinancialAdviceRequest,
    FinancialAdviceResponse,
    MonthlyReportRequest,
    MonthlyReportResponse,
    SpendingPatternsRequest,
    SpendingPatternsResponse,
)
from trubalance.domain.services.insights import (
    build_budget_recommendations,
    build_financial_advice,
    build_monthly_report,
    build_spending_patterns,
)

router = APIRouter(prefix="/insights", tags=["Insights"])


@router.post("/budget-recommendations", response_model=dict)
async def budget_recommendations(body: BudgetRecommendationsRequest):
    """Recommended budgets from the caller's last three months of records."""
    result = build_budget_recommendations(body.incomes, body.expenses, as_of=body.as_of)
    resp = BudgetRecommendationsResponse(**result.to_dict())
    return ok(data=resp.model_dump(), message=result.methodology)


@router.post("/monthly-report", response_model=dict)
async def monthly_report(body: MonthlyReportRequest):
    report = build_monthly_report(body.month, body.incomes, body.expenses, body.budgets)
    resp = MonthlyReportResponse(**report.to_dict())
    return ok(data=resp.model_dump(), message=f"Report for {report.month}")


@router.post("/spending-patterns", response_model=dict)
async def spending_patterns(body: SpendingPatternsRequest):
    """Weekend vs weekday habits, trends against the previous 30 days, unusual expenses."""
    patterns = build_spending_patterns(body.expenses, as_of=body.as_of)
    return ok(data=SpendingPatternsResponse(**patterns.to_dict()).model_dump())


@router.post("/financial-advice", response_model=dict)
async def financial_advice(body: FinancialAdviceRequest):
    result = build_financial_advice(body.month, body.incomes, body.expenses, body.budgets)
    resp = FinancialAdviceResponse(**result.to_dict())
    return ok(data=resp.model_dump(), message=f"Financial health score {result.score}")
