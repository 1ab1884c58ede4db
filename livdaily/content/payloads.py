# -*- coding: utf-8 -*-
"""Module payloads — one typed view per module over the free-form `payload` map.

The stored payload is never rewritten; these models are only used to read the
keys each module aggregates. Every field is optional and a value that cannot be
coerced to the declared type reads as absent, so it contributes nothing to stats.
"""

from __future__ import annotations

import math
from typing import Annotated, Any, Dict, List, Optional, Type

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

from .models import Module


def _coerce_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _coerce_label(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    label = str(value).strip()
    return label or None


def _coerce_tags(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return None
    tags = [_coerce_label(v) for v in value]
    return [t for t in tags if t]


Number = Annotated[Optional[float], BeforeValidator(_coerce_number)]
Label = Annotated[Optional[str], BeforeValidator(_coerce_label)]
Tags = Annotated[Optional[List[str]], BeforeValidator(_coerce_tags)]


class ModulePayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def present(self, field: str) -> Any:
        """Return the value of `field`, or None when the item did not supply it.

        Only declared fields are read: undeclared keys are kept on the model
        uncoerced, so they never feed a reducer.
        """
        if field not in type(self).model_fields:
            return None
        return getattr(self, field, None)


class MovementPayload(ModulePayload):
    duration: Number = None
    calories: Number = None
    activity_type: Label = None
    intensity: Label = None


class SleepPayload(ModulePayload):
    duration: Number = None
    quality: Number = None
    pattern: Label = None
    wake_up_reason: Label = None


class NutritionPayload(ModulePayload):
    calories: Number = None
    protein: Number = None
    carbs: Number = None
    fat: Number = None
    meal_type: Label = None
    category: Label = None


class GroundingPayload(ModulePayload):
    duration: Number = None
    technique: Label = None
    stress_level: Label = None


class MindfulnessPayload(ModulePayload):
    duration: Number = None
    focus_type: Label = None
    focus_score: Number = None


class BreathworkPayload(ModulePayload):
    duration: Number = None
    pattern: Label = None
    technique: Label = None


class JournalPayload(ModulePayload):
    mood: Label = None
    tags: Tags = None


class SessionPayload(ModulePayload):
    """Shared shape for focus, calm and motivation sessions."""

    duration: Number = None
    mood: Label = None


PAYLOAD_MODELS: Dict[Module, Type[ModulePayload]] = {
    Module.movement: MovementPayload,
    Module.sleep: SleepPayload,
    Module.nutrition: NutritionPayload,
    Module.grounding: GroundingPayload,
    Module.mindfulness: MindfulnessPayload,
    Module.breathwork: BreathworkPayload,
    Module.journal: JournalPayload,
    Module.focus: SessionPayload,
    Module.calm: SessionPayload,
    Module.motivation: SessionPayload,
}


def parse_payload(module: Module | str, raw: Any) -> ModulePayload:
    model = PAYLOAD_MODELS.get(Module(module), SessionPayload)
    if not isinstance(raw, dict):
        return model()
    return model.model_validate(raw)


def payload_number(raw: Any, key: str) -> Optional[float]:
    """Coerced numeric value of `key` in a raw payload of any module, or None."""
    if not isinstance(raw, dict):
        return None
    return _coerce_number(raw.get(key))
