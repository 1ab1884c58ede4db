# -*- coding: utf-8 -*-
"""Daily records — API endpoints."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_owner
from ..errors import NotFound, PersistenceError, degrade_to_empty
from .models import (
    CheckIn,
    CheckInCreateRequest,
    Habit,
    HabitCreateRequest,
    Prompt,
    PromptCreateRequest,
    Reflection,
    ReflectionCreateRequest,
    Routine,
    RoutineCreateRequest,
)
from .storage import CHECKINS, HABITS, PROMPTS, REFLECTIONS, ROUTINES, RecordTable, create_record, get_record, list_records

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["Daily"])


def _empty_list(**_: object) -> list:
    return []


def _create(table: RecordTable, owner_id: str, values: Dict[str, Any]) -> Dict[str, Any]:
    try:
        row = create_record(table, owner_id=owner_id, values=values)
    except sqlite3.Error as exc:
        logger.exception("Failed to create %s record for %s", table.name, owner_id)
        raise PersistenceError(f"Failed to save {table.name} record") from exc
    logger.info("%s record created: %s", table.name, row["id"])
    return row


@router.get("/checkin", response_model=List[CheckIn], summary="List check-ins")
@degrade_to_empty(_empty_list)
def list_checkins(
    limit: Optional[int] = Query(default=None, ge=1),
    owner_id: str = Depends(get_current_owner),
):
    return [CheckIn.model_validate(r) for r in list_records(CHECKINS, owner_id=owner_id, limit=limit)]


@router.post("/checkin", response_model=CheckIn, summary="Record a check-in")
def create_checkin(request: CheckInCreateRequest, owner_id: str = Depends(get_current_owner)):
    return CheckIn.model_validate(_create(CHECKINS, owner_id, request.model_dump()))


@router.get("/habits", response_model=List[Habit], summary="List habits")
@degrade_to_empty(_empty_list)
def list_habits(
    limit: Optional[int] = Query(default=None, ge=1),
    owner_id: str = Depends(get_current_owner),
):
    return [Habit.model_validate(r) for r in list_records(HABITS, owner_id=owner_id, limit=limit)]


@router.post("/habits", response_model=Habit, summary="Create a habit")
def create_habit(request: HabitCreateRequest, owner_id: str = Depends(get_current_owner)):
    values = request.model_dump()
    values["completed_dates"] = []
    return Habit.model_validate(_create(HABITS, owner_id, values))


@router.get("/routines", response_model=List[Routine], summary="List routines")
@degrade_to_empty(_empty_list)
def list_routines(
    limit: Optional[int] = Query(default=None, ge=1),
    owner_id: str = Depends(get_current_owner),
):
    return [Routine.model_validate(r) for r in list_records(ROUTINES, owner_id=owner_id, limit=limit)]


@router.post("/routines", response_model=Routine, summary="Create a routine")
def create_routine(request: RoutineCreateRequest, owner_id: str = Depends(get_current_owner)):
    return Routine.model_validate(_create(ROUTINES, owner_id, request.model_dump()))


@router.get("/prompts", response_model=List[Prompt], summary="List reflection prompts")
@degrade_to_empty(_empty_list)
def list_prompts(
    limit: Optional[int] = Query(default=None, ge=1),
    owner_id: str = Depends(get_current_owner),
):
    return [Prompt.model_validate(r) for r in list_records(PROMPTS, owner_id=owner_id, limit=limit)]


@router.post("/prompts", response_model=Prompt, summary="Create a reflection prompt")
def create_prompt(request: PromptCreateRequest, owner_id: str = Depends(get_current_owner)):
    return Prompt.model_validate(_create(PROMPTS, owner_id, request.model_dump()))


@router.get("/reflections", response_model=List[Reflection], summary="List reflections")
@degrade_to_empty(_empty_list)
def list_reflections(
    limit: Optional[int] = Query(default=None, ge=1),
    owner_id: str = Depends(get_current_owner),
):
    return [Reflection.model_validate(r) for r in list_records(REFLECTIONS, owner_id=owner_id, limit=limit)]


@router.post("/reflections", response_model=Reflection, summary="Write a reflection")
def create_reflection(request: ReflectionCreateRequest, owner_id: str = Depends(get_current_owner)):
    if request.prompt_id and not get_record(PROMPTS, owner_id=owner_id, record_id=request.prompt_id):
        raise NotFound("Prompt not found")
    return Reflection.model_validate(_create(REFLECTIONS, owner_id, request.model_dump()))
