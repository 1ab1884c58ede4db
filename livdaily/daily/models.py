# -*- coding: utf-8 -*-
"""Daily records — Pydantic models (check-ins, habits, routines, prompts, reflections)."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CheckIn(_CamelModel):
    id: str
    mood: Optional[str] = None
    energy: Optional[int] = None
    notes: Optional[str] = None
    created_at: str


class CheckInCreateRequest(_CamelModel):
    mood: Optional[str] = Field(None, max_length=50)
    energy: Optional[int] = Field(None, ge=0, le=10)
    notes: Optional[str] = Field(None, max_length=5000)


class Habit(_CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    frequency: str
    completed_dates: List[str] = Field(default_factory=list)
    created_at: str
    updated_at: str


class HabitCreateRequest(_CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    frequency: str = Field(..., min_length=1, max_length=50, description="e.g. daily, weekly")


class Routine(_CamelModel):
    id: str
    name: str
    steps: List[Any] = Field(default_factory=list)
    time_of_day: Optional[str] = None
    created_at: str
    updated_at: str


class RoutineCreateRequest(_CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    steps: List[Any] = Field(default_factory=list)
    time_of_day: Optional[str] = Field(None, max_length=50)


class Prompt(_CamelModel):
    id: str
    text: str
    category: Optional[str] = None
    is_ai_generated: bool = False
    created_at: str


class PromptCreateRequest(_CamelModel):
    text: str = Field(..., min_length=1, max_length=2000)
    category: Optional[str] = Field(None, max_length=100)
    is_ai_generated: bool = False


class Reflection(_CamelModel):
    id: str
    prompt_id: Optional[str] = None
    content: str
    created_at: str
    updated_at: str


class ReflectionCreateRequest(_CamelModel):
    prompt_id: Optional[str] = None
    content: str = Field(..., min_length=1, max_length=20000)
