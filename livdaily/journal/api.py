# -*- coding: utf-8 -*-
"""Journal — API endpoints."""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_owner
from ..errors import PersistenceError, degrade_to_empty
from .models import JournalEntry, JournalEntryCreateRequest
from .storage import create_entry, list_entries

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/journal", tags=["Journal"])


def _empty_list(**_: object) -> list:
    return []


@router.get("", response_model=List[JournalEntry], summary="List journal entries")
@degrade_to_empty(_empty_list)
def list_journal_entries(
    limit: Optional[int] = Query(default=None, ge=1),
    owner_id: str = Depends(get_current_owner),
):
    rows = list_entries(owner_id=owner_id, limit=limit)
    return [JournalEntry.model_validate(r) for r in rows]


@router.post("", response_model=JournalEntry, summary="Create a journal entry")
def create_journal_entry(request: JournalEntryCreateRequest, owner_id: str = Depends(get_current_owner)):
    try:
        row = create_entry(
            owner_id=owner_id,
            content=request.content,
            title=request.title,
            mood=request.mood,
            tags=request.tags,
        )
    except sqlite3.Error as exc:
        logger.exception("Failed to create journal entry for %s", owner_id)
        raise PersistenceError("Failed to save journal entry") from exc
    logger.info("Journal entry created: %s", row["id"])
    return JournalEntry.model_validate(row)
