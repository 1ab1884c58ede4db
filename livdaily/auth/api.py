# -*- coding: utf-8 -*-
"""Auth — API endpoints (anonymous sessions)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from ..errors import NotFound
from .models import AnonymousSessionResponse, UserPublic
from .security import create_access_token, get_current_owner
from .storage import create_anonymous_user, delete_user, get_user_by_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/auth", tags=["Auth"])


@router.post("/anonymous", response_model=AnonymousSessionResponse, summary="Create an anonymous session")
def create_anonymous_session():
    user = create_anonymous_user()
    logger.info("Anonymous user created: %s", user["id"])
    return AnonymousSessionResponse(user_id=user["id"], token=create_access_token(user_id=user["id"]))


@router.get("/me", response_model=UserPublic, summary="Get current user")
def me(owner_id: str = Depends(get_current_owner)):
    user = get_user_by_id(owner_id)
    if not user:
        raise NotFound("User not found")
    return UserPublic(id=user["id"], is_anonymous=user["is_anonymous"], created_at=user["created_at"])


@router.delete("/me", summary="Delete the current account and everything it owns")
def delete_me(owner_id: str = Depends(get_current_owner)):
    if not delete_user(owner_id):
        raise NotFound("User not found")
    logger.info("Account deleted: %s", owner_id)
    return {"status": "ok"}
