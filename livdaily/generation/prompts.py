# -*- coding: utf-8 -*-
"""Prompt Builder — module-aware system/user instructions for content generation.

Both tables below are plain data: adding a module means adding a guide and a
formatting directive, nothing else.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

_DEFAULT_TONE = "Be warm, supportive, and practical."

_GENERIC_GUIDE = "Create practical wellness content the user can follow right away."
_GENERIC_DIRECTIVE = "Structure the content as short, clearly separated steps."

_CONTENT_GUIDES: Dict[str, str] = {
    "mindfulness": (
        "Write a guided meditation script: open with settling-in cues, weave in breathing cues "
        "(inhale/exhale counts), and close with a gentle return to the room."
    ),
    "breathwork": (
        "Write a guided breathing exercise with an explicit pattern (e.g. 4-7-8 or box breathing), "
        "the number of rounds, and what the user should notice between rounds."
    ),
    "movement": (
        "Write an accessible movement session: warm-up, main exercises with sets/reps or timed "
        "intervals, cool-down, and a safety cue for every exercise."
    ),
    "nutrition": (
        "Write practical nutrition guidance: a concrete meal or snack idea, ingredients with rough "
        "portions, and one habit tip the user can apply today."
    ),
    "focus": (
        "Write a focus routine: how to prepare the workspace, a timed work block with breaks, and "
        "a technique for returning attention after a distraction."
    ),
    "calm": (
        "Write soothing, anxiety-reducing content: a short body scan or visualization with slow "
        "pacing and reassuring language."
    ),
    "sleep": (
        "Write a wind-down routine for the hour before bed: screen cut-off, a relaxation exercise, "
        "and an environment checklist (light, temperature, noise)."
    ),
    "grounding": (
        "Write a grounding exercise that anchors the user in the present moment through the senses "
        "(for example 5-4-3-2-1), with one prompt per step."
    ),
    "motivation": (
        "Write an uplifting motivational piece that ends with one small, concrete action the user "
        "can take in the next ten minutes."
    ),
    "journal": (
        "Write a reflective journaling prompt set: a short framing paragraph followed by focused "
        "questions that invite honest, specific answers."
    ),
}

_FORMAT_DIRECTIVES: Dict[str, str] = {
    "mindfulness": "Format the script as numbered steps with timing markers like [0:00], [1:30].",
    "breathwork": "Format each round as a numbered step stating the inhale, hold and exhale counts.",
    "movement": "Format as numbered exercises, each with sets x reps (or seconds) and a safety note.",
    "nutrition": "Format with an 'Ingredients' list followed by numbered preparation steps.",
    "focus": "Format as numbered steps with timing markers for each work and break block.",
    "calm": "Format as short numbered steps with a suggested pause length after each one.",
    "sleep": "Format as a numbered routine with a clock-time offset before bed for each step.",
    "grounding": "Format as numbered steps, one sense per step.",
    "motivation": "Format as two or three short paragraphs followed by a single bolded action step.",
    "journal": "Format as a short intro paragraph followed by a numbered list of questions.",
}

_CATEGORY_INSTRUCTION = (
    "Make the content practical, actionable, and easy to follow. "
    "Always include an explicit category that names the kind of content (for example "
    "'stress-relief', 'sleep-hygiene', 'strength')."
)


@dataclass(frozen=True)
class PromptPair:
    system: str
    user: str


def _module_key(module: Any) -> str:
    return str(getattr(module, "value", module) or "").strip().lower()


def _render_constraints(constraints: Mapping[str, Any]) -> str:
    return json.dumps(constraints, sort_keys=True, ensure_ascii=False, default=str)


def render_minutes(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def build_prompt(
    module: Any,
    goal: str,
    time_available: Optional[float] = None,
    tone: Optional[str] = None,
    constraints: Optional[Mapping[str, Any]] = None,
) -> PromptPair:
    """Build the system and user instructions for one generation request.

    Deterministic for identical inputs. An unknown module gets the generic
    wellness guide and directive instead of an error.
    """
    key = _module_key(module)
    label = key or "wellness"
    guide = _CONTENT_GUIDES.get(key, _GENERIC_GUIDE)
    directive = _FORMAT_DIRECTIVES.get(key, _GENERIC_DIRECTIVE)
    tone_clause = f"Use a {tone.strip()} tone." if tone and tone.strip() else _DEFAULT_TONE

    system = " ".join(
        [f"You are an expert wellness coach creating high-quality {label} content.", guide, tone_clause]
    )

    lines = [f"Create {label} content to help with: {goal.strip()}"]
    if time_available is not None:
        lines.append(f"Time available: {render_minutes(time_available)} minutes.")
    if constraints:
        lines.append(f"Constraints: {_render_constraints(constraints)}")
    lines.append(directive)
    lines.append(_CATEGORY_INSTRUCTION)
    return PromptPair(system=system, user="\n".join(lines))
