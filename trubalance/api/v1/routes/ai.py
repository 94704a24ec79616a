# trubalance/api/v1/routes/ai.py
"""
Transaction categorization endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from trubalance.api.v1.deps import get_current_user_id
from trubalance.api.v1.envelope import ok
from trubalance.api.v1.schemas.ai import (
    CategorizeRequest,
    CategorySuggestionResponse,
    CorrectionRequest,
)
from trubalance.domain.services.auto_categorization import (
    categorize_transaction,
    learn_from_correction,
)

router = APIRouter(prefix="/ai", tags=["AI"])


@router.post("/categorize", response_model=dict)
async def categorize(body: CategorizeRequest):
    """Suggest a category for a transaction title."""
    suggestion = categorize_transaction(body.title, body.type)
    return ok(data=CategorySuggestionResponse(**suggestion.to_dict()).model_dump())


@router.post("/corrections", response_model=dict)
async def record_correction(
    body: CorrectionRequest,
    user_id: str = Depends(get_current_user_id),
):
    """Accept a user's category correction. It is logged, not stored."""
    suggestion = learn_from_correction(user_id, body.title, body.correct_category, body.type)
    return ok(
        data={"suggested_category": suggestion.category, "correct_category": body.correct_category},
        message="Correction recorded",
    )
