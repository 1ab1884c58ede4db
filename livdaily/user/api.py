# -*- coding: utf-8 -*-
"""User — API endpoints (settings, preferences, profile, patterns).

`/settings` and `/preferences` are two shapes over the same stored row: the
first groups accessibility options, the second is flat.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Callable, Dict, TypeVar

from fastapi import APIRouter, Depends

from ..auth.security import get_current_owner
from ..auth.storage import get_user_by_id, update_user_email
from ..errors import NotFound, PersistenceError
from .models import (
    Accessibility,
    UserPatterns,
    UserPatternsUpdate,
    UserPreferences,
    UserPreferencesUpdate,
    UserProfile,
    UserProfileUpdate,
    UserSettings,
    UserSettingsUpdate,
)
from .storage import (
    ACCESSIBILITY_COLUMNS,
    get_or_create_patterns,
    get_or_create_preferences,
    replace_patterns,
    update_preferences,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/user", tags=["User"])

T = TypeVar("T")


def _persist(action: str, owner_id: str, func: Callable[[], T]) -> T:
    try:
        return func()
    except sqlite3.Error as exc:
        logger.exception("Failed to %s for %s", action, owner_id)
        raise PersistenceError(f"Failed to {action}") from exc


def _settings_view(row: Dict[str, Any]) -> UserSettings:
    return UserSettings(
        id=row["id"],
        user_id=row["owner_id"],
        accessibility=Accessibility(**{c: row[c] for c in ACCESSIBILITY_COLUMNS}),
        notifications=row["notifications"],
        tracking=row["tracking"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _preferences_view(row: Dict[str, Any]) -> UserPreferences:
    return UserPreferences(
        id=row["id"],
        notification_preferences=row["notifications"],
        tracking_preferences=row["tracking"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        **{c: row[c] for c in ACCESSIBILITY_COLUMNS},
    )


def _profile_view(user: Dict[str, Any]) -> UserProfile:
    return UserProfile(
        id=user["id"],
        is_anonymous=user["is_anonymous"],
        email=user.get("email"),
        created_at=user["created_at"],
        updated_at=user["updated_at"],
    )


@router.get("/settings", response_model=UserSettings, summary="Get grouped user settings")
def get_settings(owner_id: str = Depends(get_current_owner)):
    logger.info("Fetching settings for %s", owner_id)
    row = _persist("load settings", owner_id, lambda: get_or_create_preferences(owner_id))
    return _settings_view(row)


@router.put("/settings", response_model=UserSettings, summary="Update grouped user settings")
def put_settings(request: UserSettingsUpdate, owner_id: str = Depends(get_current_owner)):
    accessibility = request.accessibility.model_dump() if request.accessibility else {}
    row = _persist(
        "update settings",
        owner_id,
        lambda: update_preferences(
            owner_id, accessibility=accessibility, notifications=request.notifications, tracking=request.tracking
        ),
    )
    logger.info("Settings updated for %s", owner_id)
    return _settings_view(row)


@router.get("/preferences", response_model=UserPreferences, summary="Get user preferences")
def get_preferences(owner_id: str = Depends(get_current_owner)):
    row = _persist("load preferences", owner_id, lambda: get_or_create_preferences(owner_id))
    return _preferences_view(row)


@router.put("/preferences", response_model=UserPreferences, summary="Update user preferences")
def put_preferences(request: UserPreferencesUpdate, owner_id: str = Depends(get_current_owner)):
    accessibility = {c: getattr(request, c) for c in ACCESSIBILITY_COLUMNS}
    row = _persist(
        "update preferences",
        owner_id,
        lambda: update_preferences(
            owner_id,
            accessibility=accessibility,
            notifications=request.notification_preferences,
            tracking=request.tracking_preferences,
        ),
    )
    logger.info("Preferences updated for %s", owner_id)
    return _preferences_view(row)


@router.get("/profile", response_model=UserProfile, summary="Get user profile")
def get_profile(owner_id: str = Depends(get_current_owner)):
    user = get_user_by_id(owner_id)
    if not user:
        raise NotFound("User not found")
    return _profile_view(user)


@router.put("/profile", response_model=UserProfile, summary="Update user profile")
def put_profile(request: UserProfileUpdate, owner_id: str = Depends(get_current_owner)):
    if "email" not in request.model_fields_set:
        return get_profile(owner_id)
    user = _persist("update profile", owner_id, lambda: update_user_email(owner_id, request.email))
    if not user:
        raise NotFound("User not found")
    logger.info("Profile updated for %s", owner_id)
    return _profile_view(user)


@router.get("/patterns", response_model=UserPatterns, summary="Get stored user patterns")
def get_patterns(owner_id: str = Depends(get_current_owner)):
    return _persist("load patterns", owner_id, lambda: get_or_create_patterns(owner_id))


@router.put("/patterns", response_model=UserPatterns, summary="Replace stored user patterns")
def put_patterns(request: UserPatternsUpdate, owner_id: str = Depends(get_current_owner)):
    row = _persist("save patterns", owner_id, lambda: replace_patterns(owner_id, request.patterns))
    logger.info("Patterns replaced for %s (%d keys)", owner_id, len(row["patterns"]))
    return row
