# trubalance/domain/services/budget_optimizer.py
"""
50/30/20 budget planning.

- 50% of monthly income goes to needs (Food, Transport, Bills, Health),
  30% to wants (Shopping, Entertainment, Education), 20% to savings.
- Inside each group the share is split in proportion to the user's
  historical spending per category, or evenly when there is none.
- Category budgets are rounded to the nearest 10; whatever is left of
  the non-savings 80% after rounding lands in "Other".
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from trubalance.domain.errors import InvalidIncomeError, InvalidInputError
from trubalance.domain.models.budget import (
    BudgetPerformance,
    BudgetPlan,
    EmergencyFund,
)
from trubalance.domain.models.categories import (
    NEEDS_CATEGORIES,
    WANTS_CATEGORIES,
    ExpenseCategory,
)
from trubalance.domain.services.money import (
    HUNDRED,
    ZERO,
    field_of,
    format_inr,
    round2,
    round_to_10,
    round_whole,
    safe_decimal,
    to_decimal,
)

logger = logging.getLogger("budget_optimizer")

NEEDS_SHARE = Decimal("0.50")
WANTS_SHARE = Decimal("0.30")
SAVINGS_SHARE = Decimal("0.20")

AVERAGE_MONTHS = 3
AVERAGE_BUFFER = Decimal("1.10")

WARNING_PERCENT = Decimal("80")
MODERATE_PERCENT = Decimal("50")


def category_key(category: Any) -> str:
    """Plain string key for a category given as an enum member or a string."""
    if category is None or category == "":
        return ExpenseCategory.OTHER.value
    return str(getattr(category, "value", category))


def _split_group(
    group_budget: Decimal,
    categories: Iterable[ExpenseCategory],
    history: Mapping[str, Decimal],
) -> dict[str, Decimal]:
    spent = {c.value: history.get(c.value, ZERO) for c in categories}
    total = sum(spent.values(), ZERO)

    if total > ZERO:
        return {name: round_to_10(group_budget * amount / total) for name, amount in spent.items()}

    even = round_to_10(group_budget / len(spent))
    return {name: even for name in spent}


def calculate_optimal_budget(
    monthly_income: Any,
    historical_spending: Mapping[Any, Any] | None = None,
) -> BudgetPlan:
    """
    Build a 50/30/20 plan for ``monthly_income``.

    ``historical_spending`` maps category → average monthly spend; unknown
    categories are ignored, negative or unusable amounts count as zero.

    Raises :class:`InvalidIncomeError` when income is missing, not a number,
    or not positive.
    """
    income = to_decimal(monthly_income, "monthly_income", InvalidIncomeError)
    if income <= ZERO:
        raise InvalidIncomeError(f"monthly_income must be greater than 0, got {income}")

    history = {
        category_key(k): max(safe_decimal(v), ZERO)
        for k, v in (historical_spending or {}).items()
    }

    needs = income * NEEDS_SHARE
    wants = income * WANTS_SHARE
    savings = income * SAVINGS_SHARE

    budgets: dict[str, Decimal] = {}
    budgets.update(_split_group(needs, NEEDS_CATEGORIES, history))
    budgets.update(_split_group(wants, WANTS_CATEGORIES, history))

    allocated = sum(budgets.values(), ZERO)
    budgets[ExpenseCategory.OTHER.value] = round_to_10(income - allocated - savings)

    plan = BudgetPlan(
        budgets=budgets,
        savings=round_whole(savings),
        total_allocated=sum(budgets.values(), ZERO),
    )
    logger.debug(
        "Budget plan for income=%s: allocated=%s savings=%s",
        income, plan.total_allocated, plan.savings,
    )
    return plan


def calculate_3_month_average(expenses: Iterable[Any]) -> dict[str, Decimal]:
    """
    Per-category monthly average of three months of ``expenses`` with a 10%
    buffer, rounded to the nearest 10. Records need ``category`` and ``amount``.
    """
    totals: dict[str, Decimal] = {}
    for exp in expenses:
        key = category_key(field_of(exp, "category"))
        totals[key] = totals.get(key, ZERO) + safe_decimal(field_of(exp, "amount"))

    return {
        key: round_to_10(total / AVERAGE_MONTHS * AVERAGE_BUFFER)
        for key, total in totals.items()
    }


def calculate_emergency_fund(monthly_expenses: Any) -> EmergencyFund:
    expenses = to_decimal(monthly_expenses, "monthly_expenses")
    if expenses < ZERO:
        raise InvalidInputError("monthly_expenses cannot be negative")

    return EmergencyFund(
        minimum=round2(expenses * 3),
        recommended=round2(expenses * 6),
        ideal=round2(expenses * 12),
    )


def _status_for(percent: Decimal) -> str:
    if percent >= HUNDRED:
        return "exceeded"
    if percent >= WARNING_PERCENT:
        return "warning"
    if percent >= MODERATE_PERCENT:
        return "moderate"
    return "good"


def analyze_budget_performance(
    budgets: Mapping[Any, Any],
    actual_spending: Mapping[Any, Any],
) -> list[BudgetPerformance]:
    """
    Compare each budgeted category with what was actually spent.

    Status thresholds on percent used: >=100 exceeded, >=80 warning,
    >=50 moderate, otherwise good. A zero budget with any spending is
    exceeded. Sorted by percent used, highest first.
    """
    actual = {category_key(k): safe_decimal(v) for k, v in actual_spending.items()}
    results: list[BudgetPerformance] = []

    for raw_category, raw_budget in budgets.items():
        category = category_key(raw_category)
        budget = safe_decimal(raw_budget)
        spent = actual.get(category, ZERO)

        if budget > ZERO:
            percent = spent / budget * HUNDRED
        else:
            percent = HUNDRED if spent > ZERO else ZERO

        status = _status_for(percent)
        if status == "exceeded":
            message = f"{category}: Over budget by ₹{format_inr(spent - budget)}"
        elif status == "good":
            message = f"{category}: On track"
        else:
            message = f"{category}: {int(round_whole(percent))}% used"

        results.append(BudgetPerformance(
            category=category,
            budget=budget,
            actual=spent,
            remaining=max(ZERO, budget - spent),
            percent_used=int(round_whole(percent)),
            status=status,
            message=message,
        ))

    results.sort(key=lambda r: r.percent_used, reverse=True)
    return results
