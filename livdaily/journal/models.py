# -*- coding: utf-8 -*-
"""Journal — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JournalEntry(_CamelModel):
    id: str
    title: Optional[str] = None
    content: str
    mood: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: str
    updated_at: str


class JournalEntryCreateRequest(_CamelModel):
    title: Optional[str] = Field(None, max_length=500)
    content: str = Field(..., min_length=1, max_length=50000)
    mood: Optional[str] = Field(None, max_length=50)
    tags: List[str] = Field(default_factory=list, max_length=50)
