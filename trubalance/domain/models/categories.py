# trubalance/domain/models/categories.py
"""Closed category sets shared by the categorizer and the budget allocator."""

from __future__ import annotations

from enum import Enum, IntEnum


class TransactionType(str, Enum):
    EXPENSE = "expense"
    INCOME = "income"


class ExpenseCategory(str, Enum):
    FOOD = "Food"
    TRANSPORT = "Transport"
    ENTERTAINMENT = "Entertainment"
    BILLS = "Bills"
    SHOPPING = "Shopping"
    HEALTH = "Health"
    EDUCATION = "Education"
    OTHER = "Other"


class IncomeCategory(str, Enum):
    SALARY = "Salary"
    FREELANCE = "Freelance"
    INVESTMENTS = "Investments"
    BUSINESS = "Business"
    GIFTS = "Gifts"
    OTHER = "Other"


class GstRate(IntEnum):
    """GST slabs accepted on invoices (percent)."""
    NIL = 0
    FIVE = 5
    TWELVE = 12
    EIGHTEEN = 18
    TWENTY_EIGHT = 28


# 50/30/20 groups
NEEDS_CATEGORIES: tuple[ExpenseCategory, ...] = (
    ExpenseCategory.FOOD,
    ExpenseCategory.TRANSPORT,
    ExpenseCategory.BILLS,
    ExpenseCategory.HEALTH,
)
WANTS_CATEGORIES: tuple[ExpenseCategory, ...] = (
    ExpenseCategory.SHOPPING,
    ExpenseCategory.ENTERTAINMENT,
    ExpenseCategory.EDUCATION,
)
