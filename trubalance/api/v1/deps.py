# trubalance/api/v1/deps.py
"""
FastAPI dependencies for the v1 API layer.

Authentication happens in front of this service; the caller's identity
arrives in the ``X-User-Id`` header.
"""

from __future__ import annotations

import logging

from fastapi import Header, HTTPException, status

logger = logging.getLogger("api.v1.deps")

MAX_USER_ID_LENGTH = 64


async def get_current_user_id(x_user_id: str | None = Header(None)) -> str:
    """
    FastAPI dependency returning the caller's user id.

    Raises HTTP 401 if the header is missing or blank, 400 if it is too long
    to be stored against an invoice counter.
    """
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    if len(user_id) > MAX_USER_ID_LENGTH:
        logger.debug("Rejected user id of length %d", len(user_id))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"X-User-Id must be at most {MAX_USER_ID_LENGTH} characters",
        )
    return user_id
