# trubalance/domain/services/insights.py
"""
Roll-ups over a user's transaction records.

Records are mappings or objects with ``amount``, ``category`` and ``date``
(``date`` may be a ``date``, ``datetime`` or ISO string). Persistence of
transactions is not handled here: callers pass the records in.
"""

from __future__ import annotations

import calendar
import logging
import re
from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from decimal import Decimal
from typing import Any

from trubalance.domain.errors import InvalidInputError
from trubalance.domain.models.budget import (
    AdviceItem,
    BudgetRecommendations,
    FinancialAdvice,
    MonthlyReport,
    SpendingPatterns,
)
from trubalance.domain.services.budget_optimizer import (
    AVERAGE_MONTHS,
    analyze_budget_performance,
    calculate_3_month_average,
    calculate_optimal_budget,
    category_key,
)
from trubalance.domain.services.financial_year import as_date
from trubalance.domain.services.money import (
    HUNDRED,
    ZERO,
    field_of,
    format_inr,
    round2,
    round_whole,
    safe_decimal,
)

logger = logging.getLogger("insights")

MONTH_REGEX = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")
TOP_SPENDING_LIMIT = 5
HEALTHY_SAVINGS_RATE = Decimal("20")

PATTERN_WINDOW_DAYS = 30
WEEKEND_DAYS = Decimal("8")    # per 30-day window
WEEKDAY_DAYS = Decimal("22")
WEEKEND_DIFF_THRESHOLD = Decimal("20")
TREND_THRESHOLD = Decimal("15")
OUTLIER_MIN_POINTS = 3
OUTLIER_SIGMAS = 2
PATTERN_INSIGHT_LIMIT = 10

LOW_SAVINGS_RATE = Decimal("10")
EXCELLENT_SAVINGS_RATE = Decimal("30")
FOOD_SHARE_LIMIT = Decimal("15")
ENTERTAINMENT_SHARE_LIMIT = Decimal("8")
EMERGENCY_FUND_MONTHS = 6
ADVICE_LIMIT = 8


def _months_before(day: date, months: int) -> date:
    """Same day-of-month ``months`` earlier, clamped to the month's last day."""
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def _totals_by_category(records: Iterable[Any]) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = {}
    for rec in records:
        key = category_key(field_of(rec, "category"))
        totals[key] = totals.get(key, ZERO) + safe_decimal(field_of(rec, "amount"))
    return totals


def _sum(records: Iterable[Any]) -> Decimal:
    return sum((safe_decimal(field_of(r, "amount")) for r in records), ZERO)


# ---------------------------------------------------------------------------
# Budget recommendations (trailing 3 months)
# ---------------------------------------------------------------------------

def build_budget_recommendations(
    incomes: Iterable[Any],
    expenses: Iterable[Any],
    *,
    as_of: date | None = None,
) -> BudgetRecommendations:
    """
    Recommend next month's budgets from three months of history.

    When ``as_of`` is given, only records dated within the three months up
    to it are used; undated records are always kept. Monthly income and the
    historical averages are the three-month totals divided by three.

    Raises :class:`InvalidIncomeError` when there is no income to plan with.
    """
    incomes = list(incomes)
    expenses = list(expenses)

    if as_of is not None:
        since = _months_before(as_of, AVERAGE_MONTHS)

        def _recent(rec: Any) -> bool:
            d = as_date(field_of(rec, "date"))
            return d is None or since <= d <= as_of

        incomes = [r for r in incomes if _recent(r)]
        expenses = [r for r in expenses if _recent(r)]

    monthly_income = _sum(incomes) / AVERAGE_MONTHS
    historical = {
        key: total / AVERAGE_MONTHS
        for key, total in _totals_by_category(expenses).items()
    }

    plan = calculate_optimal_budget(monthly_income, historical)
    average_based = calculate_3_month_average(expenses)

    logger.info(
        "Budget recommendations built from %d incomes / %d expenses",
        len(incomes), len(expenses),
    )
    return BudgetRecommendations(
        monthly_income=round_whole(monthly_income),
        optimal=plan.budgets,
        average_based=average_based,
        savings=plan.savings,
        methodology=plan.methodology,
        historical_average={k: round2(v) for k, v in historical.items()},
    )


# ---------------------------------------------------------------------------
# Monthly report
# ---------------------------------------------------------------------------

def _parse_month(month: str | None) -> tuple[int, int]:
    m = MONTH_REGEX.match(month or "")
    if not m:
        raise InvalidInputError(f"month must look like YYYY-MM, got {month!r}")
    return int(m.group(1)), int(m.group(2))


def _in_month(month: str, records: Iterable[Any]) -> list[Any]:
    """Records dated in ``month``; undated records are kept."""
    year, mon = _parse_month(month)
    kept = []
    for rec in records:
        d = as_date(field_of(rec, "date"))
        if d is None or (d.year == year and d.month == mon):
            kept.append(rec)
    return kept


def _budget_map(budgets: Mapping[Any, Any] | Iterable[Any] | None, month: str) -> dict[str, Decimal]:
    """Accept ``{category: amount}`` or budget records with ``category``/``amount``/``month``."""
    if not budgets:
        return {}
    if isinstance(budgets, Mapping):
        return {category_key(k): safe_decimal(v) for k, v in budgets.items()}

    result: dict[str, Decimal] = {}
    for rec in budgets:
        rec_month = field_of(rec, "month")
        if rec_month and rec_month != month:
            continue
        result[category_key(field_of(rec, "category"))] = safe_decimal(field_of(rec, "amount"))
    return result


def build_monthly_report(
    month: str,
    incomes: Iterable[Any],
    expenses: Iterable[Any],
    budgets: Mapping[Any, Any] | Iterable[Any] | None = None,
) -> MonthlyReport:
    """Income/expense summary, budget performance and plain-language insights for ``month`` (YYYY-MM)."""
    incomes = _in_month(month, incomes)
    expenses = _in_month(month, expenses)

    total_income = _sum(incomes)
    total_expenses = _sum(expenses)
    savings = total_income - total_expenses
    savings_rate = savings / total_income * HUNDRED if total_income > ZERO else ZERO
    rate = int(round_whole(savings_rate))

    expense_by_category = _totals_by_category(expenses)
    income_by_category = _totals_by_category(incomes)

    ranked = sorted(expense_by_category.items(), key=lambda kv: kv[1], reverse=True)
    top_spending = [
        {"category": category, "amount": round2(amount)}
        for category, amount in ranked[:TOP_SPENDING_LIMIT]
    ]

    performance = analyze_budget_performance(_budget_map(budgets, month), expense_by_category)

    insights: list[str] = []
    if savings_rate >= HEALTHY_SAVINGS_RATE:
        insights.append(f"Great job! You saved {rate}% this month.")
    else:
        insights.append(f"Your savings rate is {rate}%. Try to save at least 20% of your income.")

    if total_expenses > total_income:
        insights.append(
            f"You spent ₹{format_inr(total_expenses - total_income)} more than you earned this month."
        )

    if ranked:
        category, amount = ranked[0]
        insights.append(f"Your biggest expense was {category} at ₹{format_inr(amount)}.")

    return MonthlyReport(
        month=month,
        total_income=round2(total_income),
        total_expenses=round2(total_expenses),
        savings=round2(savings),
        savings_rate=rate,
        expense_by_category={k: round2(v) for k, v in expense_by_category.items()},
        income_by_category={k: round2(v) for k, v in income_by_category.items()},
        top_spending=top_spending,
        budget_performance=performance,
        insights=insights,
        income_count=len(incomes),
        expense_count=len(expenses),
    )


# ---------------------------------------------------------------------------
# Spending patterns (last 30 days)
# ---------------------------------------------------------------------------

def _percent_change(new: Decimal, old: Decimal) -> Decimal:
    return (new - old) / old * HUNDRED


def _whole(value: Decimal) -> int:
    return int(round_whole(value))


def build_spending_patterns(expenses: Iterable[Any], *, as_of: date | None = None) -> SpendingPatterns:
    """
    Weekend/weekday habits, month-over-month trends and unusual expenses.

    The current window is the 30 days up to ``as_of`` (default: today), the
    previous window the 30 days before that. Undated expenses are ignored.
    At most ten insights are returned, in the order weekend/weekday, trend,
    outlier.
    """
    as_of = as_of or date.today()
    since = as_of - timedelta(days=PATTERN_WINDOW_DAYS)
    previous_since = since - timedelta(days=PATTERN_WINDOW_DAYS)

    current: list[tuple[date, str, Decimal]] = []
    previous: list[tuple[date, str, Decimal]] = []
    for rec in expenses:
        d = as_date(field_of(rec, "date"))
        if d is None:
            continue
        row = (d, category_key(field_of(rec, "category")), safe_decimal(field_of(rec, "amount")))
        if since <= d <= as_of:
            current.append(row)
        elif previous_since <= d < since:
            previous.append(row)

    weekend: dict[str, Decimal] = {}
    weekday: dict[str, Decimal] = {}
    for d, category, amount in current:
        bucket = weekend if d.weekday() >= 5 else weekday
        bucket[category] = bucket.get(category, ZERO) + amount

    insights: list[dict[str, Any]] = []

    for category in dict.fromkeys([*weekend, *weekday]):
        weekend_avg = weekend.get(category, ZERO) / WEEKEND_DAYS
        weekday_avg = weekday.get(category, ZERO) / WEEKDAY_DAYS
        if weekend_avg <= ZERO or weekday_avg <= ZERO:
            continue
        diff = _percent_change(weekend_avg, weekday_avg)
        if abs(diff) > WEEKEND_DIFF_THRESHOLD:
            insights.append({
                "type": "weekend_weekday",
                "category": category,
                "message": (
                    f"You spend {_whole(abs(diff))}% {'more' if diff > 0 else 'less'} "
                    f"on {category} during weekends"
                ),
                "weekend_avg": _whole(weekend_avg),
                "weekday_avg": _whole(weekday_avg),
            })

    current_totals = _totals_by_category({"category": c, "amount": a} for _, c, a in current)
    previous_totals = _totals_by_category({"category": c, "amount": a} for _, c, a in previous)
    for category, total in current_totals.items():
        before = previous_totals.get(category, ZERO)
        if before <= ZERO:
            continue
        change = _percent_change(total, before)
        if abs(change) > TREND_THRESHOLD:
            insights.append({
                "type": "trend",
                "category": category,
                "message": (
                    f"Your {category} spending {'increased' if change > 0 else 'decreased'} "
                    f"by {_whole(abs(change))}% this month"
                ),
                "current": _whole(total),
                "previous": _whole(before),
                "change": _whole(change),
            })

    amounts_by_category: dict[str, list[Decimal]] = {}
    for _, category, amount in current:
        amounts_by_category.setdefault(category, []).append(amount)
    for category, amounts in amounts_by_category.items():
        if len(amounts) < OUTLIER_MIN_POINTS:
            continue
        mean = sum(amounts, ZERO) / len(amounts)
        variance = sum(((a - mean) ** 2 for a in amounts), ZERO) / len(amounts)
        limit = mean + OUTLIER_SIGMAS * variance.sqrt()
        for amount in amounts:
            if amount > limit:
                insights.append({
                    "type": "outlier",
                    "category": category,
                    "message": f"Unusual ₹{format_inr(amount)} {category} expense detected",
                    "amount": _whole(amount),
                    "average": _whole(mean),
                })

    logger.info("Spending patterns: %d insights from %d recent expenses", len(insights), len(current))
    return SpendingPatterns(
        weekend_total=round_whole(sum(weekend.values(), ZERO)),
        weekday_total=round_whole(sum(weekday.values(), ZERO)),
        insights=insights[:PATTERN_INSIGHT_LIMIT],
    )


# ---------------------------------------------------------------------------
# Financial advice
# ---------------------------------------------------------------------------

def _share_of(amount: Decimal, income: Decimal) -> Decimal:
    return amount / income * HUNDRED if income > ZERO else ZERO


def build_financial_advice(
    month: str,
    incomes: Iterable[Any],
    expenses: Iterable[Any],
    budgets: Mapping[Any, Any] | Iterable[Any] | None = None,
) -> FinancialAdvice:
    """
    Savings-rate advice, category tips, budget warnings and a health score for ``month``.

    The score starts at 60: +20 for a savings rate of 20% or more, +10 for
    10-20%, and +10 when expenses stay below income. At most eight advice
    items are returned.
    """
    incomes = _in_month(month, incomes)
    expenses = _in_month(month, expenses)

    total_income = _sum(incomes)
    total_expenses = _sum(expenses)
    savings = total_income - total_expenses
    savings_rate = _share_of(savings, total_income)
    rate = _whole(savings_rate)

    advice: list[AdviceItem] = []
    if savings_rate < LOW_SAVINGS_RATE:
        advice.append(AdviceItem(
            type="warning",
            title="Low Savings Rate",
            message=f"Your savings rate is {rate}%. Aim for at least 20% to build financial security.",
            priority="high",
        ))
    elif savings_rate >= EXCELLENT_SAVINGS_RATE:
        advice.append(AdviceItem(
            type="success",
            title="Excellent Savings!",
            message=f"Amazing! You're saving {rate}% of your income. Keep up the great work!",
            priority="low",
        ))
    else:
        advice.append(AdviceItem(
            type="info",
            title="Good Savings Rate",
            message=(
                f"You're saving {rate}% of your income. "
                "Try to increase it to 25-30% for even better financial health."
            ),
            priority="medium",
        ))

    spending = _totals_by_category(expenses)

    food = _share_of(spending.get("Food", ZERO), total_income)
    if food > FOOD_SHARE_LIMIT:
        advice.append(AdviceItem(
            type="tip",
            title="Food Expenses High",
            message=(
                f"Food is {_whole(food)}% of your income (average is 12%). "
                "Try meal planning to save 10-15%."
            ),
            priority="medium",
        ))

    entertainment = _share_of(spending.get("Entertainment", ZERO), total_income)
    if entertainment > ENTERTAINMENT_SHARE_LIMIT:
        advice.append(AdviceItem(
            type="tip",
            title="Entertainment Costs",
            message=(
                f"Entertainment is {_whole(entertainment)}% of your income. "
                "Consider free or low-cost activities."
            ),
            priority="low",
        ))

    budget_map = _budget_map(budgets, month)
    for category, actual in spending.items():
        limit = budget_map.get(category, ZERO)
        if limit > ZERO and actual > limit:
            advice.append(AdviceItem(
                type="warning",
                title=f"{category} Budget Exceeded",
                message=f"You've exceeded your {category} budget by ₹{format_inr(actual - limit)}.",
                priority="high",
            ))

    score = 60
    if savings_rate >= HEALTHY_SAVINGS_RATE:
        score += 20
    elif savings_rate >= LOW_SAVINGS_RATE:
        score += 10
    if total_expenses < total_income:
        score += 10

    fund = total_expenses * EMERGENCY_FUND_MONTHS
    return FinancialAdvice(
        month=month,
        total_income=round_whole(total_income),
        total_expenses=round_whole(total_expenses),
        savings=round_whole(savings),
        savings_rate=rate,
        score=score,
        advice=advice[:ADVICE_LIMIT],
        emergency_fund=round_whole(fund),
        emergency_fund_message=(
            f"Build an emergency fund of ₹{format_inr(fund)} "
            f"({EMERGENCY_FUND_MONTHS} months of expenses)."
        ),
    )
