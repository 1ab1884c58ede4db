# -*- coding: utf-8 -*-
"""Content — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Module(str, Enum):
    journal = "journal"
    mindfulness = "mindfulness"
    breathwork = "breathwork"
    movement = "movement"
    nutrition = "nutrition"
    focus = "focus"
    calm = "calm"
    sleep = "sleep"
    grounding = "grounding"
    motivation = "motivation"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContentItem(_CamelModel):
    id: str
    module: Module
    title: str
    content: Optional[str] = None
    category: Optional[str] = None
    duration: Optional[float] = None
    payload: Optional[Dict[str, Any]] = None
    is_ai_generated: bool = False
    created_at: str
    updated_at: str


class ContentCreateRequest(_CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    content: Optional[str] = Field(None, max_length=20000)
    category: Optional[str] = Field(None, max_length=100)
    duration: Optional[float] = Field(None, ge=0, description="Minutes")
    payload: Optional[Dict[str, Any]] = None


class ContentUpdateRequest(_CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    content: Optional[str] = Field(None, max_length=20000)
    category: Optional[str] = Field(None, max_length=100)
    duration: Optional[float] = Field(None, ge=0, description="Minutes")
    payload: Optional[Dict[str, Any]] = None
