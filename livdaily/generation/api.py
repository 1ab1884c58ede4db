# -*- coding: utf-8 -*-
"""Generation — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import get_current_owner
from .llm_client import StructuredGenerator, get_generator
from .models import (
    GenerateRequest,
    GenerateResponse,
    JournalPrompt,
    JournalPromptRequest,
    MovementSuggestions,
    MovementSuggestionsRequest,
    NutritionTasks,
    NutritionTasksRequest,
    SleepContent,
    SleepContentRequest,
    WeeklyMotivation,
    WeeklyMotivationRequest,
)
from .service import generate_content
from .tasks import run_task

router = APIRouter(prefix="/v1/ai", tags=["AI"])


@router.post("/generate", response_model=GenerateResponse, status_code=201, summary="Generate module content")
def generate(
    request: GenerateRequest,
    owner_id: str = Depends(get_current_owner),
    generator: StructuredGenerator = Depends(get_generator),
):
    return generate_content(owner_id, request, generator)


# The task endpoints return the model object without saving it.


@router.post("/journal-prompt", response_model=JournalPrompt, summary="Generate a journaling prompt")
def journal_prompt(
    request: JournalPromptRequest,
    owner_id: str = Depends(get_current_owner),
    generator: StructuredGenerator = Depends(get_generator),
):
    return run_task("journal-prompt", request, generator)


@router.post("/nutrition-tasks", response_model=NutritionTasks, summary="Generate daily nutrition tasks")
def nutrition_tasks(
    request: NutritionTasksRequest,
    owner_id: str = Depends(get_current_owner),
    generator: StructuredGenerator = Depends(get_generator),
):
    return run_task("nutrition-tasks", request, generator)


@router.post("/movement-suggestions", response_model=MovementSuggestions, summary="Suggest movement activities")
def movement_suggestions(
    request: MovementSuggestionsRequest,
    owner_id: str = Depends(get_current_owner),
    generator: StructuredGenerator = Depends(get_generator),
):
    return run_task("movement-suggestions", request, generator)


@router.post("/sleep-content", response_model=SleepContent, summary="Generate wind-down and wake-up content")
def sleep_content(
    request: SleepContentRequest,
    owner_id: str = Depends(get_current_owner),
    generator: StructuredGenerator = Depends(get_generator),
):
    return run_task("sleep-content", request, generator)


@router.post("/weekly-motivation", response_model=WeeklyMotivation, summary="Generate weekly motivation")
def weekly_motivation(
    request: WeeklyMotivationRequest,
    owner_id: str = Depends(get_current_owner),
    generator: StructuredGenerator = Depends(get_generator),
):
    return run_task("weekly-motivation", request, generator)
