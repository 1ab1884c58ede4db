# -*- coding: utf-8 -*-
"""Task generators — short structured replies for a single screen.

Unlike `generate_content`, nothing here is persisted: the caller gets the model
object back as-is. Each task is one row in `TASKS` (output schema, system
instruction, user-prompt renderer), and every task makes exactly one generator
call.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Type

from pydantic import BaseModel

from .models import (
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
    WeeklyMotivationText,
)
from .prompts import render_minutes
from .service import Generator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Task:
    schema: Type[BaseModel]
    system: str
    render: Callable[[Any], str]


def _context(value: Mapping[str, Any]) -> str:
    return json.dumps(dict(value or {}), sort_keys=True, ensure_ascii=False, default=str)


def _journal_prompt(req: JournalPromptRequest) -> str:
    return "\n".join(
        [
            f"Create a warm, personalized journaling prompt for someone feeling {req.mood} "
            f"with {req.energy} energy during the {req.rhythm_phase} phase of their day.",
            f"User patterns: {_context(req.user_patterns)}",
            "Keep it supportive, non-clinical and aligned with their current state.",
        ]
    )


def _nutrition_tasks(req: NutritionTasksRequest) -> str:
    return "\n".join(
        [
            f"Generate 3-5 simple, achievable nutrition tasks for {req.date}.",
            f"User patterns: {_context(req.user_patterns)}",
            f"User preferences: {_context(req.preferences)}",
            "Keep tasks practical and sustainable, each with a warm supportive note.",
        ]
    )


def _movement_suggestions(req: MovementSuggestionsRequest) -> str:
    return "\n".join(
        [
            f"Suggest movement activities for someone with {req.energy} energy "
            f"who has {render_minutes(req.time_available)} minutes available.",
            f"User preferences: {_context(req.preferences)}",
            "No suggestion may be longer than the time available. "
            "Rate each one gentle, moderate or active.",
        ]
    )


def _sleep_content(req: SleepContentRequest) -> str:
    return "\n".join(
        [
            f"Generate sleep content for someone in a {req.current_state} state.",
            f"User patterns: {_context(req.user_patterns)}",
            "Include a gentle wind-down flow, a reflection prompt for before sleep and an uplifting wake-up message.",
        ]
    )


def _weekly_motivation(req: WeeklyMotivationRequest) -> str:
    return "\n".join(
        [
            f'Write warm, personalized motivational content for the week with the theme "{req.week_theme}".',
            f"User patterns: {_context(req.user_patterns)}",
            "Make it supportive and achievable, connected to their wellness journey.",
        ]
    )


TASKS: Dict[str, Task] = {
    "journal-prompt": Task(
        JournalPrompt,
        "You are a warm, supportive wellness coach helping users with daily journaling. "
        "Use a conversational, encouraging tone and never clinical language.",
        _journal_prompt,
    ),
    "nutrition-tasks": Task(
        NutritionTasks,
        "You are a warm, non-clinical wellness guide creating simple nutrition tasks. "
        "Focus on sustainability and self-compassion; never use restrictive language.",
        _nutrition_tasks,
    ),
    "movement-suggestions": Task(
        MovementSuggestions,
        "You are a warm movement guide who treats exercise as joyful self-care. "
        "Suggest accessible activities that match the person's current state.",
        _movement_suggestions,
    ),
    "sleep-content": Task(
        SleepContent,
        "You are a warm sleep and rest guide. Write soothing, non-judgmental content "
        "that encourages restful sleep.",
        _sleep_content,
    ),
    "weekly-motivation": Task(
        WeeklyMotivationText,
        "You are a warm, supportive wellness mentor. Be encouraging without being pushy "
        "and achievable without being overwhelming.",
        _weekly_motivation,
    ),
}


def run_task(name: str, request: BaseModel, generator: Generator) -> Any:
    """Build the prompt for task `name` and return the validated model object.

    GenerationError propagates unchanged.
    """
    task = TASKS[name]
    logger.info("Generating %s (%s)", name, task.schema.__name__)
    result = generator.generate(task.system, task.render(request), task.schema)
    if isinstance(request, WeeklyMotivationRequest):
        return WeeklyMotivation(content=result.content, theme=request.week_theme)
    return result
