# -*- coding: utf-8 -*-
"""User — Pydantic models (settings, preferences, profile, patterns)."""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

FontSize = Literal["small", "medium", "large", "extra_large"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Accessibility(_CamelModel):
    font_size: FontSize = "medium"
    high_contrast: bool = False
    reduced_motion: bool = False
    screen_reader_enabled: bool = False
    voice_control_enabled: bool = False


class AccessibilityUpdate(_CamelModel):
    font_size: Optional[FontSize] = None
    high_contrast: Optional[bool] = None
    reduced_motion: Optional[bool] = None
    screen_reader_enabled: Optional[bool] = None
    voice_control_enabled: Optional[bool] = None


class UserSettings(_CamelModel):
    id: str
    user_id: str
    accessibility: Accessibility
    notifications: Dict[str, bool]
    tracking: Dict[str, bool]
    created_at: str
    updated_at: str


class UserSettingsUpdate(_CamelModel):
    accessibility: Optional[AccessibilityUpdate] = None
    # Replace the whole map when present.
    notifications: Optional[Dict[str, bool]] = None
    tracking: Optional[Dict[str, bool]] = None


class UserPreferences(Accessibility):
    """Flat view of the same row as `UserSettings`."""

    id: str
    notification_preferences: Dict[str, bool]
    tracking_preferences: Dict[str, bool]
    created_at: str
    updated_at: str


class UserPreferencesUpdate(AccessibilityUpdate):
    notification_preferences: Optional[Dict[str, bool]] = None
    tracking_preferences: Optional[Dict[str, bool]] = None


class UserProfile(_CamelModel):
    id: str
    is_anonymous: bool
    email: Optional[str] = None
    created_at: str
    updated_at: str


class UserProfileUpdate(_CamelModel):
    email: Optional[str] = Field(None, max_length=320)

    @field_validator("email")
    @classmethod
    def _email_shape(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        local, sep, domain = value.partition("@")
        if not sep or not local or "." not in domain:
            raise ValueError("email must look like name@example.com")
        return value


class UserPatterns(_CamelModel):
    patterns: Dict[str, Any] = Field(default_factory=dict)
    last_updated: str


class UserPatternsUpdate(_CamelModel):
    patterns: Dict[str, Any]
