# trubalance/api/v1/routes/budget.py
"""
Budget endpoints: 50/30/20 plan, 3-month average, performance, emergency fund.
"""

from __future__ import annotations

from fastapi import APIRouter

from trubalance.api.v1.envelope import ok
from trubalance.api.v1.schemas.budget import (
    AverageBudgetRequest,
    BudgetPerformanceRequest,
    BudgetPerformanceSchema,
    BudgetPlanResponse,
    EmergencyFundRequest,
    EmergencyFundResponse,
    OptimalBudgetRequest,
)
from trubalance.domain.services.budget_optimizer import (
    analyze_budget_performance,
    calculate_3_month_average,
    calculate_emergency_fund,
    calculate_optimal_budget,
)

router = APIRouter(prefix="/budget", tags=["Budget"])


@router.post("/optimal", response_model=dict)
async def optimal_budget(body: OptimalBudgetRequest):
    plan = calculate_optimal_budget(body.monthly_income, body.historical_spending)
    resp = BudgetPlanResponse(**plan.to_dict())
    return ok(data=resp.model_dump(), message=plan.methodology)


@router.post("/average", response_model=dict)
async def average_budget(body: AverageBudgetRequest):
    """Per-category budget from three months of expenses plus a 10% buffer."""
    return ok(data=calculate_3_month_average(body.expenses))


@router.post("/performance", response_model=dict)
async def budget_performance(body: BudgetPerformanceRequest):
    results = analyze_budget_performance(body.budgets, body.actual_spending)
    return ok(data=[BudgetPerformanceSchema(**r.to_dict()).model_dump() for r in results])


@router.post("/emergency-fund", response_model=dict)
async def emergency_fund(body: EmergencyFundRequest):
    fund = calculate_emergency_fund(body.monthly_expenses)
    return ok(data=EmergencyFundResponse(**fund.to_dict()).model_dump())
