"""Tests for budget recommendations, the monthly report, spending patterns and advice."""

from datetime import date
from decimal import Decimal

import pytest

from trubalance.domain.errors import InvalidIncomeError, InvalidInputError
from trubalance.domain.services.insights import (
    build_budget_recommendations,
    build_financial_advice,
    build_monthly_report,
    build_spending_patterns,
)


class TestBudgetRecommendations:
    def test_three_month_history(self, sample_incomes, sample_expenses):
        rec = build_budget_recommendations(sample_incomes, sample_expenses)

        assert rec.monthly_income == Decimal("100000")
        assert rec.historical_average == {
            "Food": Decimal("5000.00"),
            "Transport": Decimal("1000.00"),
            "Bills": Decimal("20000.00"),
            "Shopping": Decimal("1500.00"),
        }
        # needs split 5000 : 1000 : 20000 : 0 of 50000
        assert rec.optimal["Food"] == Decimal("9620")
        assert rec.optimal["Transport"] == Decimal("1920")
        assert rec.optimal["Bills"] == Decimal("38460")
        assert rec.optimal["Health"] == Decimal("0")
        # only Shopping has wants history
        assert rec.optimal["Shopping"] == Decimal("30000")
        assert rec.savings == Decimal("20000")
        assert rec.average_based["Bills"] == Decimal("22000")
        assert rec.methodology.startswith("50/30/20")

    def test_as_of_keeps_trailing_three_months(self, sample_incomes, sample_expenses):
        rec = build_budget_recommendations(sample_incomes, sample_expenses, as_of=date(2025, 10, 15))

        # July records fall before 2025-07-15
        assert rec.monthly_income == Decimal("66667")
        assert rec.historical_average["Food"] == Decimal("3000.00")
        assert rec.historical_average["Bills"] == Decimal("13333.33")

    def test_iso_string_dates(self):
        rec = build_budget_recommendations(
            [{"amount": 90000, "date": "2025-09-01"}],
            [{"amount": 300, "category": "Food", "date": "2025-09-02T10:00:00"}],
            as_of=date(2025, 9, 30),
        )
        assert rec.monthly_income == Decimal("30000")
        assert rec.historical_average == {"Food": Decimal("100.00")}

    def test_no_income(self, sample_expenses):
        with pytest.raises(InvalidIncomeError):
            build_budget_recommendations([], sample_expenses)

    def test_bad_date(self):
        with pytest.raises(InvalidInputError):
            build_budget_recommendations([{"amount": 1, "date": "yesterday"}], [], as_of=date(2025, 1, 1))


class TestMonthlyReport:
    def test_september_report(self, sample_incomes, sample_expenses):
        report = build_monthly_report(
            "2025-09",
            sample_incomes,
            sample_expenses,
            {"Food": 5000, "Bills": 25000},
        )

        assert report.total_income == Decimal("100000")
        assert report.total_expenses == Decimal("32000")
        assert report.savings == Decimal("68000")
        assert report.savings_rate == 68
        assert report.income_count == 1
        assert report.expense_count == 4
        assert [t["category"] for t in report.top_spending] == ["Bills", "Food", "Shopping", "Transport"]
        assert [(p.category, p.status) for p in report.budget_performance] == [
            ("Food", "exceeded"),
            ("Bills", "warning"),
        ]
        assert report.insights == [
            "Great job! You saved 68% this month.",
            "Your biggest expense was Bills at ₹20,000.",
        ]

    def test_overspending(self):
        report = build_monthly_report(
            "2025-07",
            [{"amount": 10000, "date": "2025-07-01"}],
            [{"amount": 12500, "category": "Bills", "date": "2025-07-03"}],
        )
        assert report.savings == Decimal("-2500")
        assert report.savings_rate == -25
        assert report.insights == [
            "Your savings rate is -25%. Try to save at least 20% of your income.",
            "You spent ₹2,500 more than you earned this month.",
            "Your biggest expense was Bills at ₹12,500.",
        ]

    def test_no_income_has_zero_rate(self):
        report = build_monthly_report("2025-07", [], [{"amount": 10, "category": "Food"}])
        assert report.savings_rate == 0
        assert report.expense_count == 1  # undated records are kept

    def test_top_spending_limited_to_five(self):
        expenses = [
            {"amount": amount, "category": cat}
            for cat, amount in [("Food", 6), ("Bills", 5), ("Health", 4), ("Shopping", 3), ("Transport", 2), ("Other", 1)]
        ]
        report = build_monthly_report("2025-07", [{"amount": 100}], expenses)
        assert len(report.top_spending) == 5
        assert report.top_spending[-1]["category"] == "Transport"

    def test_budget_records_filtered_by_month(self, sample_incomes, sample_expenses):
        budgets = [
            {"category": "Food", "amount": 8000, "month": "2025-09"},
            {"category": "Bills", "amount": 1, "month": "2025-08"},
        ]
        report = build_monthly_report("2025-09", sample_incomes, sample_expenses, budgets)
        assert [p.category for p in report.budget_performance] == ["Food"]
        assert report.budget_performance[0].status == "moderate"  # 6000 / 8000

    @pytest.mark.parametrize("month", ["2025-13", "2025-9", "Sept", "", None])
    def test_bad_month(self, month):
        with pytest.raises(InvalidInputError):
            build_monthly_report(month, [], [])


class TestSpendingPatterns:
    # 2025-09-30 is a Tuesday; the window is 2025-08-31 .. 2025-09-30
    AS_OF = date(2025, 9, 30)

    def test_weekend_vs_weekday(self):
        expenses = [
            {"amount": 800, "category": "Food", "date": date(2025, 9, 6)},       # Saturday
            {"amount": 1100, "category": "Food", "date": date(2025, 9, 2)},
            {"amount": 500, "category": "Transport", "date": date(2025, 9, 3)},
        ]
        patterns = build_spending_patterns(expenses, as_of=self.AS_OF)

        assert patterns.weekend_total == Decimal("800")
        assert patterns.weekday_total == Decimal("1600")
        # 800 / 8 days vs 1100 / 22 days
        assert patterns.insights == [{
            "type": "weekend_weekday",
            "category": "Food",
            "message": "You spend 100% more on Food during weekends",
            "weekend_avg": 100,
            "weekday_avg": 50,
        }]

    def test_small_weekend_difference_ignored(self):
        expenses = [
            {"amount": 176, "category": "Food", "date": date(2025, 9, 7)},
            {"amount": 440, "category": "Food", "date": date(2025, 9, 8)},
        ]
        assert build_spending_patterns(expenses, as_of=self.AS_OF).insights == []

    def test_trends_against_previous_30_days(self):
        expenses = [
            {"amount": 12000, "category": "Bills", "date": date(2025, 9, 1)},
            {"amount": 10000, "category": "Bills", "date": date(2025, 8, 1)},
            {"amount": 500, "category": "Food", "date": "2025-09-02"},
            {"amount": 1000, "category": "Food", "date": "2025-08-05"},
            {"amount": 9999, "category": "Food", "date": date(2025, 7, 1)},   # too old
            {"amount": 9999, "category": "Food"},                             # undated
        ]
        insights = build_spending_patterns(expenses, as_of=self.AS_OF).insights

        assert [(i["category"], i["change"]) for i in insights] == [("Bills", 20), ("Food", -50)]
        assert insights[0]["message"] == "Your Bills spending increased by 20% this month"
        assert insights[1]["message"] == "Your Food spending decreased by 50% this month"

    def test_outlier_beyond_two_sigma(self):
        expenses = [
            {"amount": 100, "category": "Shopping", "date": date(2025, 9, day)}
            for day in (1, 2, 3, 4, 5)
        ] + [{"amount": 1000, "category": "Shopping", "date": date(2025, 9, 8)}]
        insights = build_spending_patterns(expenses, as_of=self.AS_OF).insights

        assert insights == [{
            "type": "outlier",
            "category": "Shopping",
            "message": "Unusual ₹1,000 Shopping expense detected",
            "amount": 1000,
            "average": 250,
        }]

    def test_outliers_need_three_points(self):
        expenses = [
            {"amount": 1, "category": "Health", "date": date(2025, 9, 1)},
            {"amount": 5000, "category": "Health", "date": date(2025, 9, 2)},
        ]
        assert build_spending_patterns(expenses, as_of=self.AS_OF).insights == []

    def test_at_most_ten_insights(self):
        expenses = []
        for n in range(11):
            expenses.append({"amount": 800, "category": f"Cat{n}", "date": date(2025, 9, 6)})
            expenses.append({"amount": 1100, "category": f"Cat{n}", "date": date(2025, 9, 2)})
        assert len(build_spending_patterns(expenses, as_of=self.AS_OF).insights) == 10


class TestFinancialAdvice:
    def test_full_advice(self):
        advice = build_financial_advice(
            "2025-09",
            [{"amount": 100000, "date": "2025-09-01"}],
            [
                {"amount": 20000, "category": "Food", "date": "2025-09-03"},
                {"amount": 9000, "category": "Entertainment", "date": "2025-09-05"},
                {"amount": 30000, "category": "Bills", "date": "2025-09-01"},
                {"amount": 70000, "category": "Bills", "date": "2025-08-01"},
            ],
            {"Bills": 25000},
        )

        assert advice.total_expenses == Decimal("59000")
        assert advice.savings_rate == 41
        assert advice.score == 90
        assert [a.title for a in advice.advice] == [
            "Excellent Savings!",
            "Food Expenses High",
            "Entertainment Costs",
            "Bills Budget Exceeded",
        ]
        assert advice.advice[1].message.startswith("Food is 20% of your income")
        assert advice.advice[3].message == "You've exceeded your Bills budget by ₹5,000."
        assert advice.advice[3].priority == "high"
        assert advice.emergency_fund == Decimal("354000")
        assert advice.emergency_fund_message == "Build an emergency fund of ₹3,54,000 (6 months of expenses)."

    @pytest.mark.parametrize(
        "spent,kind,score",
        [
            (94000, "warning", 70),
            (85000, "info", 80),
            (75000, "info", 90),
            (60000, "success", 90),
        ],
    )
    def test_savings_tiers_and_score(self, spent, kind, score):
        advice = build_financial_advice("2025-09", [{"amount": 100000}], [{"amount": spent, "category": "Bills"}])
        assert advice.advice[0].type == kind
        assert advice.score == score

    def test_no_income(self):
        advice = build_financial_advice("2025-09", [], [{"amount": 1000, "category": "Food"}])
        assert advice.savings_rate == 0
        assert advice.score == 60
        assert [a.title for a in advice.advice] == ["Low Savings Rate"]

    def test_budget_records_for_other_months_ignored(self):
        advice = build_financial_advice(
            "2025-09",
            [{"amount": 100000}],
            [{"amount": 5000, "category": "Shopping"}],
            [{"category": "Shopping", "amount": 1000, "month": "2025-08"}],
        )
        assert all("Budget Exceeded" not in a.title for a in advice.advice)

    def test_bad_month(self):
        with pytest.raises(InvalidInputError):
            build_financial_advice("09-2025", [], [])
