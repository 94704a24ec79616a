# trubalance/domain/services/auto_categorization.py
"""
Keyword-based transaction categorization.

A title is matched against a fixed keyword table per transaction type:
a whole-word hit scores 100, a substring hit scores 60. The first category
to reach the best score wins, so table order matters.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from typing import Any

from trubalance.domain.errors import InvalidInputError
from trubalance.domain.models.categories import (
    ExpenseCategory,
    IncomeCategory,
    TransactionType,
)

logger = logging.getLogger("auto_categorization")

WORD_CONFIDENCE = 100
PARTIAL_CONFIDENCE = 60


EXPENSE_KEYWORDS: dict[ExpenseCategory, tuple[str, ...]] = {
    ExpenseCategory.FOOD: (
        "restaurant", "cafe", "coffee", "grocery", "food", "pizza", "burger",
        "starbucks", "mcdonald", "kfc", "subway", "domino", "market", "lunch",
        "dinner", "breakfast", "meal", "snack", "bakery", "deli", "buffet",
    ),
    ExpenseCategory.TRANSPORT: (
        "uber", "lyft", "taxi", "cab", "gas", "fuel", "metro", "bus", "train",
        "parking", "toll", "car", "vehicle", "auto", "bike", "scooter", "ola",
    ),
    ExpenseCategory.ENTERTAINMENT: (
        "netflix", "spotify", "prime", "movie", "cinema", "theater", "concert",
        "game", "ps", "xbox", "steam", "youtube", "music", "show", "ticket",
        "event", "club", "bar", "pub",
    ),
    ExpenseCategory.BILLS: (
        "electric", "electricity", "water", "internet", "wifi", "phone",
        "mobile", "rent", "insurance", "loan", "credit", "utility", "gas",
        "heating", "cable",
    ),
    ExpenseCategory.SHOPPING: (
        "amazon", "flipkart", "ebay", "mall", "store", "shop", "purchase",
        "buy", "clothing", "clothes", "fashion", "shoes", "accessories",
        "electronics",
    ),
    ExpenseCategory.HEALTH: (
        "pharmacy", "medicine", "doctor", "hospital", "clinic", "gym",
        "fitness", "medical", "health", "dental", "dentist", "therapy",
        "wellness", "yoga",
    ),
    ExpenseCategory.EDUCATION: (
        "school", "college", "university", "course", "class", "tuition",
        "book", "study", "education", "training", "workshop", "seminar",
        "udemy", "coursera",
    ),
}

INCOME_KEYWORDS: dict[IncomeCategory, tuple[str, ...]] = {
    IncomeCategory.SALARY: (
        "salary", "wage", "paycheck", "payment", "pay", "income", "employer", "work",
    ),
    IncomeCategory.FREELANCE: (
        "freelance", "upwork", "fiverr", "contract", "gig", "project", "client",
    ),
    IncomeCategory.INVESTMENTS: (
        "dividend", "interest", "stock", "mutual fund", "investment", "return",
        "profit", "capital gain",
    ),
    IncomeCategory.BUSINESS: (
        "business", "revenue", "sales", "profit", "commission", "shop", "store",
    ),
    IncomeCategory.GIFTS: (
        "gift", "bonus", "reward", "prize", "award",
    ),
}


def _compile(table: dict[Any, tuple[str, ...]]) -> list[tuple[Any, list[tuple[str, re.Pattern[str]]]]]:
    return [
        (category, [(word, re.compile(rf"\b{re.escape(word)}\b")) for word in words])
        for category, words in table.items()
    ]


_RULES = {
    TransactionType.EXPENSE: (_compile(EXPENSE_KEYWORDS), ExpenseCategory.OTHER),
    TransactionType.INCOME: (_compile(INCOME_KEYWORDS), IncomeCategory.OTHER),
}


@dataclass(frozen=True)
class CategorySuggestion:
    category: str
    confidence: int = 0  # 0..100

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _transaction_type(value: TransactionType | str | None) -> TransactionType:
    try:
        return TransactionType(str(getattr(value, "value", value) or "").strip().lower())
    except ValueError:
        raise InvalidInputError(f"type must be 'expense' or 'income', got {value!r}")


def categorize_transaction(
    title: str | None,
    type: TransactionType | str = TransactionType.EXPENSE,
) -> CategorySuggestion:
    """
    Suggest a category for a transaction title.

    Case-insensitive. Returns ``Other`` with confidence 0 when no keyword
    matches or the title is empty. Raises :class:`InvalidInputError` for a
    ``type`` other than expense/income.
    """
    rules, fallback = _RULES[_transaction_type(type)]
    best = CategorySuggestion(category=fallback.value, confidence=0)

    text = (title or "").lower().strip()
    if not text:
        return best

    for category, patterns in rules:
        for word, pattern in patterns:
            if pattern.search(text):
                confidence = WORD_CONFIDENCE
            elif word in text:
                confidence = PARTIAL_CONFIDENCE
            else:
                continue
            if confidence > best.confidence:
                best = CategorySuggestion(category=category.value, confidence=confidence)

    return best


def learn_from_correction(
    user_id: Any,
    title: str | None,
    correct_category: str,
    type: TransactionType | str = TransactionType.EXPENSE,
) -> CategorySuggestion:
    """
    Record a user's correction of a suggested category.

    Nothing is stored yet; the correction is logged next to what the
    categorizer currently suggests, and that suggestion is returned.
    """
    suggestion = categorize_transaction(title, type)
    logger.info(
        "Category correction: user=%s type=%s title=%r suggested=%s correct=%s",
        user_id, _transaction_type(type).value, title, suggestion.category, correct_category,
    )
    return suggestion
