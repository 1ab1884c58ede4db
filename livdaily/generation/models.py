# -*- coding: utf-8 -*-
"""Generation — Pydantic models."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..content.models import Module


class GeneratedContent(BaseModel):
    """The object the text model must return."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, description="A compelling title for the content")
    content: str = Field(..., min_length=1, description="Detailed content appropriate for the module and goal")
    category: str = Field(..., min_length=1, description="Content category")
    duration: Optional[float] = Field(None, ge=0, description="Duration in minutes")


class GenerateRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    module: Module
    goal: str = Field(..., min_length=1, max_length=2000)
    time_available: Optional[float] = Field(None, gt=0, le=24 * 60, description="Minutes")
    tone: Optional[str] = Field(None, max_length=100)
    constraints: Optional[Dict[str, Any]] = None

    @field_validator("goal")
    @classmethod
    def _goal_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("goal cannot be blank")
        return value


class GenerateResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    content: str
    category: str
    duration: Optional[float] = None
    payload: Optional[Dict[str, Any]] = None
    ai_generated: bool = True
    created_at: str


# ---- task generators (unsaved, one structured reply per screen) ----


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _TaskOutput(BaseModel):
    # Model replies use the same camelCase keys the API returns.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class JournalPromptRequest(_CamelModel):
    mood: str = Field(..., min_length=1, max_length=100)
    energy: str = Field(..., min_length=1, max_length=100)
    rhythm_phase: str = Field(..., min_length=1, max_length=100)
    user_patterns: Dict[str, Any] = Field(default_factory=dict)


class JournalPrompt(_TaskOutput):
    prompt: str = Field(..., min_length=1, description="A warm, personalized journaling prompt")
    supportive_message: str = Field(
        ..., min_length=1, description="A warm, encouraging message to support the journaling experience"
    )


class NutritionTasksRequest(_CamelModel):
    date: str = Field(..., min_length=1, max_length=40)
    user_patterns: Dict[str, Any] = Field(default_factory=dict)
    preferences: Dict[str, Any] = Field(default_factory=dict)


class NutritionTask(_TaskOutput):
    description: str = Field(..., min_length=1, description="A simple, actionable nutrition task")
    supportive_note: str = Field(..., min_length=1, description="A warm, encouraging note about the task")


class NutritionTasks(_TaskOutput):
    tasks: List[NutritionTask] = Field(..., min_length=1, description="3-5 simple daily nutrition tasks")


class MovementSuggestionsRequest(_CamelModel):
    energy: str = Field(..., min_length=1, max_length=100)
    time_available: float = Field(..., gt=0, le=24 * 60, description="Minutes")
    preferences: Dict[str, Any] = Field(default_factory=dict)


class MovementSuggestion(_TaskOutput):
    type: str = Field(..., min_length=1, description="Type of movement activity")
    duration: float = Field(..., ge=0, description="Suggested duration in minutes")
    intensity: Literal["gentle", "moderate", "active"]
    description: str = Field(..., min_length=1, description="Warm description of the activity")


class MovementSuggestions(_TaskOutput):
    suggestions: List[MovementSuggestion] = Field(..., min_length=1)


class SleepContentRequest(_CamelModel):
    current_state: str = Field(..., min_length=1, max_length=200)
    user_patterns: Dict[str, Any] = Field(default_factory=dict)


class SleepContent(_TaskOutput):
    wind_down_flow: str = Field(..., min_length=1, description="A gentle wind-down flow with specific steps")
    reflection_prompt: str = Field(..., min_length=1, description="A thoughtful reflection prompt for before sleep")
    wake_up_message: str = Field(..., min_length=1, description="A warm, supportive wake-up message")


class WeeklyMotivationRequest(_CamelModel):
    week_theme: str = Field(..., min_length=1, max_length=200)
    user_patterns: Dict[str, Any] = Field(default_factory=dict)


class WeeklyMotivationText(_TaskOutput):
    content: str = Field(..., min_length=1, description="Motivational content for the week")


class WeeklyMotivation(_CamelModel):
    content: str
    theme: str
