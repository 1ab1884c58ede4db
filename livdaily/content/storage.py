# -*- coding: utf-8 -*-
"""Content store (SQLite) — the single generic table behind every module."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..errors import NotFound

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("title", "content", "category", "duration", "payload")


def utc_now() -> str:
    return format_timestamp(datetime.now(timezone.utc))


def format_timestamp(value: datetime) -> str:
    # Fixed-width ISO-8601 so string comparison orders timestamps correctly.
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _dump_payload(payload: Optional[Dict[str, Any]]) -> Optional[str]:
    if payload is None:
        return None
    return json.dumps(payload, ensure_ascii=False)


def _load_payload(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    if not raw:
        return None
    try:
        payload = json.loads(raw)
    except ValueError:
        logger.warning("Dropping unreadable payload_json")
        return None
    return payload if isinstance(payload, dict) else None


def _row_to_item(row: Any) -> Dict[str, Any]:
    data = dict(row)
    return {
        "id": data["id"],
        "owner_id": data["owner_id"],
        "module": data["module"],
        "title": data["title"],
        "content": data.get("content"),
        "category": data.get("category"),
        "duration": data.get("duration"),
        "payload": _load_payload(data.get("payload_json")),
        "is_ai_generated": bool(data.get("is_ai_generated")),
        "created_at": data["created_at"],
        "updated_at": data["updated_at"],
    }


def create_item(
    *,
    owner_id: str,
    module: str,
    title: str,
    content: Optional[str] = None,
    category: Optional[str] = None,
    duration: Optional[float] = None,
    payload: Optional[Dict[str, Any]] = None,
    is_ai_generated: bool = False,
) -> Dict[str, Any]:
    item_id = str(uuid4())
    now = utc_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO content_items (
                id, owner_id, module, title, content, category, duration,
                payload_json, is_ai_generated, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                item_id,
                owner_id,
                module,
                title,
                content,
                category,
                duration,
                _dump_payload(payload),
                1 if is_ai_generated else 0,
                now,
                now,
            ),
        )
    return {
        "id": item_id,
        "owner_id": owner_id,
        "module": module,
        "title": title,
        "content": content,
        "category": category,
        "duration": duration,
        "payload": payload,
        "is_ai_generated": is_ai_generated,
        "created_at": now,
        "updated_at": now,
    }


def list_items(
    *,
    owner_id: str,
    module: Optional[str] = None,
    category: Optional[str] = None,
    limit: Optional[int] = None,
    since: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Owner-scoped items, newest first. `since` is an inclusive created_at bound."""
    sql = "SELECT * FROM content_items WHERE owner_id = ?"
    params: list[Any] = [owner_id]
    if module:
        sql += " AND module = ?"
        params.append(module)
    if category:
        sql += " AND category = ?"
        params.append(category)
    if since:
        sql += " AND created_at >= ?"
        params.append(since)
    sql += " ORDER BY created_at DESC, rowid DESC"
    if limit is not None:
        sql += " LIMIT ?"
        params.append(int(limit))
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, tuple(params)).fetchall()
        return [_row_to_item(r) for r in rows]


def get_item(*, owner_id: str, item_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT * FROM content_items WHERE id = ? AND owner_id = ?",
            (item_id, owner_id),
        ).fetchone()
        return _row_to_item(row) if row else None


def update_item(
    *,
    owner_id: str,
    item_id: str,
    module: Optional[str] = None,
    changes: Dict[str, Any],
) -> Dict[str, Any]:
    """Apply `changes` to an item the caller owns; refreshes updated_at."""
    current = get_item(owner_id=owner_id, item_id=item_id)
    if not current or (module and current["module"] != module):
        raise NotFound("Content item not found")

    assignments: list[str] = []
    params: list[Any] = []
    for field in _UPDATABLE_FIELDS:
        if field not in changes:
            continue
        value = changes[field]
        if field == "payload":
            assignments.append("payload_json = ?")
            params.append(_dump_payload(value))
        else:
            assignments.append(f"{field} = ?")
            params.append(value)
        current[field] = value

    now = utc_now()
    assignments.append("updated_at = ?")
    params.append(now)
    params.extend([item_id, owner_id])
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            f"UPDATE content_items SET {', '.join(assignments)} WHERE id = ? AND owner_id = ?",
            tuple(params),
        )
    current["updated_at"] = now
    return current
