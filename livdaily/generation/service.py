# -*- coding: utf-8 -*-
"""Generation Orchestrator — prompt, generate once, persist as AI-authored content."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, Protocol, Type

from pydantic import BaseModel

from ..content.storage import create_item
from ..errors import PersistenceError
from .models import GeneratedContent, GenerateRequest, GenerateResponse
from .prompts import build_prompt

logger = logging.getLogger(__name__)


class Generator(Protocol):
    def generate(self, system: str, user: str, schema: Type[BaseModel] = ...) -> Any: ...


def generate_content(owner_id: str, request: GenerateRequest, generator: Generator) -> GenerateResponse:
    """Run one generation request end to end.

    GenerationError from the generator propagates unchanged. The stored payload
    is the request's constraints verbatim, never anything the model returned.
    """
    module = request.module.value
    logger.info(
        "Generating %s content for %s (goal=%r, timeAvailable=%s)",
        module,
        owner_id,
        request.goal,
        request.time_available,
    )
    prompt = build_prompt(
        request.module,
        request.goal,
        time_available=request.time_available,
        tone=request.tone,
        constraints=request.constraints,
    )
    generated: GeneratedContent = generator.generate(prompt.system, prompt.user, GeneratedContent)

    try:
        row: Dict[str, Any] = create_item(
            owner_id=owner_id,
            module=module,
            title=generated.title,
            content=generated.content,
            category=generated.category,
            duration=generated.duration,
            payload=request.constraints,
            is_ai_generated=True,
        )
    except sqlite3.Error as exc:
        logger.exception("Failed to save generated %s content for %s (title=%r)", module, owner_id, generated.title)
        raise PersistenceError("Failed to save generated content") from exc

    logger.info("AI content generated and saved: %s (%s)", row["id"], generated.title)
    return GenerateResponse(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        category=row["category"],
        duration=row["duration"],
        payload=row["payload"],
        ai_generated=row["is_ai_generated"],
        created_at=row["created_at"],
    )
