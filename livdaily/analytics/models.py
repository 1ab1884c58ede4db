# -*- coding: utf-8 -*-
"""Analytics — report models."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Period = Literal["week", "month"]


class _Report(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    period: Period


class MovementReport(_Report):
    total_sessions: int = 0
    total_duration: int = 0
    total_calories: int = 0
    average_duration: float = 0.0
    average_calories: float = 0.0
    activity_breakdown: Dict[str, int] = Field(default_factory=dict)
    intensity_distribution: Dict[str, int] = Field(default_factory=dict)
    recommendation: str


class SleepReport(_Report):
    total_nights: int = 0
    total_hours: int = 0
    average_duration: float = 0.0
    average_quality: float = 0.0
    sleep_patterns: Dict[str, int] = Field(default_factory=dict)
    wake_up_reasons: Dict[str, int] = Field(default_factory=dict)
    recommendations: List[str] = Field(default_factory=list)


class NutritionReport(_Report):
    total_entries: int = 0
    total_calories: int = 0
    total_protein: int = 0
    total_carbs: int = 0
    total_fat: int = 0
    average_calories: float = 0.0
    average_protein: float = 0.0
    meal_breakdown: Dict[str, int] = Field(default_factory=dict)
    food_categories: Dict[str, int] = Field(default_factory=dict)
    recommendation: str


class TagCount(BaseModel):
    tag: str
    count: int


class JournalReport(_Report):
    total_entries: int = 0
    total_words: int = 0
    average_words_per_entry: float = 0.0
    mood_distribution: Dict[str, int] = Field(default_factory=dict)
    most_frequent_mood: Optional[str] = None
    top_tags: List[TagCount] = Field(default_factory=list)
    recommendation: str


class GroundingReport(_Report):
    total_sessions: int = 0
    total_duration: int = 0
    average_duration: float = 0.0
    technique_breakdown: Dict[str, int] = Field(default_factory=dict)
    stress_level_distribution: Dict[str, int] = Field(default_factory=dict)
    recommendation: str


class MindfulnessReport(_Report):
    total_sessions: int = 0
    total_duration: int = 0
    average_duration: float = 0.0
    average_focus_score: float = 0.0
    focus_type_breakdown: Dict[str, int] = Field(default_factory=dict)
    recommendation: str


class BreathworkReport(_Report):
    total_sessions: int = 0
    total_duration: int = 0
    average_duration: float = 0.0
    pattern_breakdown: Dict[str, int] = Field(default_factory=dict)
    technique_breakdown: Dict[str, int] = Field(default_factory=dict)
    recommendation: str


class SessionReport(_Report):
    """Focus, calm and motivation."""

    total_sessions: int = 0
    total_duration: int = 0
    average_duration: float = 0.0
    category_breakdown: Dict[str, int] = Field(default_factory=dict)
    mood_distribution: Dict[str, int] = Field(default_factory=dict)
    recommendation: str


class WellnessReport(_Report):
    total_activities: int = 0
    journal_entries: int = 0
    content_sessions: int = 0
    total_duration: int = 0
    module_breakdown: Dict[str, int] = Field(default_factory=dict)
    active_modules: int = 0
    completion_score: int = Field(0, ge=0, le=100)
    recommendation: str
