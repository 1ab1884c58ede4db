# -*- coding: utf-8 -*-
"""Analytics — stats endpoints. Every one degrades to the zero report on failure."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Type

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ..auth.security import get_current_owner
from ..content.models import Module
from ..errors import degrade_to_empty
from .engine import WELLNESS, summarize, zero_report
from .models import (
    BreathworkReport,
    GroundingReport,
    JournalReport,
    MindfulnessReport,
    MovementReport,
    NutritionReport,
    Period,
    SessionReport,
    SleepReport,
    WellnessReport,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["Stats"])

REPORT_MODELS: Dict[str, Type[BaseModel]] = {
    Module.movement.value: MovementReport,
    Module.sleep.value: SleepReport,
    Module.nutrition.value: NutritionReport,
    Module.journal.value: JournalReport,
    Module.grounding.value: GroundingReport,
    Module.mindfulness.value: MindfulnessReport,
    Module.breathwork.value: BreathworkReport,
    Module.focus.value: SessionReport,
    Module.calm.value: SessionReport,
    Module.motivation.value: SessionReport,
    WELLNESS: WellnessReport,
}


def _build_stats_endpoint(scope: str) -> Callable:
    model = REPORT_MODELS[scope]

    def _fallback(period: str = "week", **_: object) -> BaseModel:
        return model.model_validate(zero_report(scope, period))

    @degrade_to_empty(_fallback)
    def stats_endpoint(
        period: Period = Query(default="week", description="week (7 days) or month (30 days)"),
        owner_id: str = Depends(get_current_owner),
    ):
        logger.info("Fetching %s stats for %s (period=%s)", scope, owner_id, period)
        return model.model_validate(summarize(owner_id, scope, period))

    return stats_endpoint


for _scope, _model in REPORT_MODELS.items():
    router.add_api_route(
        f"/{_scope}/stats",
        _build_stats_endpoint(_scope),
        methods=["GET"],
        response_model=_model,
        name=f"{_scope}_stats",
        summary=f"{_scope.capitalize()} stats for the last week or month",
    )

router.add_api_route(
    "/sleep/analysis",
    _build_stats_endpoint(Module.sleep.value),
    methods=["GET"],
    response_model=SleepReport,
    name="sleep_analysis",
    summary="Sleep analysis with recommendations",
)
