# -*- coding: utf-8 -*-
"""Journal — DB storage helpers."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..content.storage import utc_now


def _row_to_entry(row: Any) -> Dict[str, Any]:
    data = dict(row)
    try:
        tags = json.loads(data.get("tags_json") or "[]")
    except ValueError:
        tags = []
    return {
        "id": data["id"],
        "owner_id": data["owner_id"],
        "title": data.get("title"),
        "content": data["content"],
        "mood": data.get("mood"),
        "tags": [str(t) for t in tags] if isinstance(tags, list) else [],
        "created_at": data["created_at"],
        "updated_at": data["updated_at"],
    }


def create_entry(
    *,
    owner_id: str,
    content: str,
    title: Optional[str] = None,
    mood: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> Dict[str, Any]:
    entry_id = str(uuid4())
    now = utc_now()
    tags = list(tags or [])
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO journal_entries (id, owner_id, title, content, mood, tags_json, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (entry_id, owner_id, title, content, mood, json.dumps(tags, ensure_ascii=False), now, now),
        )
    return {
        "id": entry_id,
        "owner_id": owner_id,
        "title": title,
        "content": content,
        "mood": mood,
        "tags": tags,
        "created_at": now,
        "updated_at": now,
    }


def list_entries(
    *, owner_id: str, limit: Optional[int] = None, since: Optional[str] = None
) -> List[Dict[str, Any]]:
    sql = "SELECT * FROM journal_entries WHERE owner_id = ?"
    params: list[Any] = [owner_id]
    if since:
        sql += " AND created_at >= ?"
        params.append(since)
    sql += " ORDER BY created_at DESC, rowid DESC"
    if limit is not None:
        sql += " LIMIT ?"
        params.append(int(limit))
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, tuple(params)).fetchall()
        return [_row_to_entry(r) for r in rows]
