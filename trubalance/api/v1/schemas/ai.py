# trubalance/api/v1/schemas/ai.py
"""Request and response schemas for categorization endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CategorizeRequest(BaseModel):
    title: str | None = Field(default=None, max_length=200)
    type: str = Field(default="expense", description="expense or income")


class CategorySuggestionResponse(BaseModel):
    category: str
    confidence: int


class CorrectionRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    correct_category: str = Field(min_length=1, max_length=50)
    type: str = "expense"
