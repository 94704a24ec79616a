"""Shared test fixtures for the TruBalance test suite."""

import asyncio
from datetime import date
from decimal import Decimal

import pytest

from trubalance.domain.models.invoice import LineItem


@pytest.fixture(scope="session")
def event_loop():
    """Use a single event loop for the entire test session."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture
def sample_line_items() -> list[LineItem]:
    """Two lines: 2 x 500 @ 18%, and 1 x 1000 less 100 discount @ 5%."""
    return [
        LineItem(item_name="Laptop stand", quantity=2, rate=Decimal("500"), discount=Decimal("0"), gst_percentage=18),
        LineItem(item_name="Setup service", quantity=1, rate=Decimal("1000"), discount=Decimal("100"), gst_percentage=5),
    ]


@pytest.fixture
def sample_expenses() -> list[dict]:
    """Three months of expenses (Jul-Sep 2025)."""
    return [
        {"title": "Grocery run", "category": "Food", "amount": 6000, "date": date(2025, 7, 5)},
        {"title": "Dinner out", "category": "Food", "amount": 3000, "date": date(2025, 8, 12)},
        {"title": "Swiggy", "category": "Food", "amount": 6000, "date": date(2025, 9, 20)},
        {"title": "Metro card", "category": "Transport", "amount": 1500, "date": date(2025, 7, 2)},
        {"title": "Uber", "category": "Transport", "amount": 1500, "date": date(2025, 9, 3)},
        {"title": "Rent", "category": "Bills", "amount": 20000, "date": date(2025, 7, 1)},
        {"title": "Rent", "category": "Bills", "amount": 20000, "date": date(2025, 8, 1)},
        {"title": "Rent", "category": "Bills", "amount": 20000, "date": date(2025, 9, 1)},
        {"title": "Amazon order", "category": "Shopping", "amount": 4500, "date": date(2025, 9, 15)},
    ]


@pytest.fixture
def sample_incomes() -> list[dict]:
    return [
        {"title": "Salary", "category": "Salary", "amount": 100000, "date": date(2025, 7, 1)},
        {"title": "Salary", "category": "Salary", "amount": 100000, "date": date(2025, 8, 1)},
        {"title": "Salary", "category": "Salary", "amount": 100000, "date": date(2025, 9, 1)},
    ]
