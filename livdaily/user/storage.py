# -*- coding: utf-8 -*-
"""User — DB storage helpers.

Preferences and patterns are one row per owner, created with defaults the
first time they are read.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..content.storage import utc_now

DEFAULT_NOTIFICATIONS: Dict[str, bool] = {
    "morningArrival": True,
    "middayGrounding": True,
    "afternoonMovement": True,
    "eveningUnwind": True,
    "nightRest": True,
}

DEFAULT_TRACKING: Dict[str, bool] = {
    "movementTracking": True,
    "nutritionTracking": True,
    "sleepTracking": True,
    "journalTracking": True,
    "groundingTracking": True,
}

ACCESSIBILITY_COLUMNS = (
    "font_size",
    "high_contrast",
    "reduced_motion",
    "screen_reader_enabled",
    "voice_control_enabled",
)
_BOOL_COLUMNS = ACCESSIBILITY_COLUMNS[1:]


def _load_map(raw: Optional[str], default: Dict[str, bool]) -> Dict[str, Any]:
    try:
        value = json.loads(raw) if raw else None
    except ValueError:
        value = None
    return value if isinstance(value, dict) else dict(default)


def _row_to_preferences(row: Any) -> Dict[str, Any]:
    data = dict(row)
    for column in _BOOL_COLUMNS:
        data[column] = bool(data.get(column))
    data["notifications"] = _load_map(data.pop("notifications_json", None), DEFAULT_NOTIFICATIONS)
    data["tracking"] = _load_map(data.pop("tracking_json", None), DEFAULT_TRACKING)
    return data


def get_or_create_preferences(owner_id: str) -> Dict[str, Any]:
    now = utc_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT OR IGNORE INTO user_preferences
                (id, owner_id, notifications_json, tracking_json, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (str(uuid4()), owner_id, json.dumps(DEFAULT_NOTIFICATIONS), json.dumps(DEFAULT_TRACKING), now, now),
        )
        row = conn.execute("SELECT * FROM user_preferences WHERE owner_id = ?", (owner_id,)).fetchone()
        return _row_to_preferences(row)


def update_preferences(
    owner_id: str,
    *,
    accessibility: Dict[str, Any],
    notifications: Optional[Dict[str, Any]] = None,
    tracking: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Apply the given changes; omitted values keep their stored value."""
    get_or_create_preferences(owner_id)
    sets = []
    params = []
    for column in ACCESSIBILITY_COLUMNS:
        if accessibility.get(column) is None:
            continue
        value = accessibility[column]
        sets.append(f"{column} = ?")
        params.append(int(value) if column in _BOOL_COLUMNS else value)
    if notifications is not None:
        sets.append("notifications_json = ?")
        params.append(json.dumps(notifications, ensure_ascii=False))
    if tracking is not None:
        sets.append("tracking_json = ?")
        params.append(json.dumps(tracking, ensure_ascii=False))
    sets.append("updated_at = ?")
    params.append(utc_now())
    params.append(owner_id)

    with db_conn(settings.app_db_path) as conn:
        conn.execute(f"UPDATE user_preferences SET {', '.join(sets)} WHERE owner_id = ?", tuple(params))
        row = conn.execute("SELECT * FROM user_preferences WHERE owner_id = ?", (owner_id,)).fetchone()
        return _row_to_preferences(row)


def _row_to_patterns(row: Any) -> Dict[str, Any]:
    try:
        patterns = json.loads(row["pattern_json"] or "{}")
    except ValueError:
        patterns = {}
    return {"patterns": patterns if isinstance(patterns, dict) else {}, "last_updated": row["last_updated"]}


def get_or_create_patterns(owner_id: str) -> Dict[str, Any]:
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT OR IGNORE INTO user_patterns (id, owner_id, pattern_json, last_updated) VALUES (?, ?, '{}', ?)",
            (str(uuid4()), owner_id, utc_now()),
        )
        row = conn.execute("SELECT * FROM user_patterns WHERE owner_id = ?", (owner_id,)).fetchone()
        return _row_to_patterns(row)


def replace_patterns(owner_id: str, patterns: Dict[str, Any]) -> Dict[str, Any]:
    get_or_create_patterns(owner_id)
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "UPDATE user_patterns SET pattern_json = ?, last_updated = ? WHERE owner_id = ?",
            (json.dumps(patterns, ensure_ascii=False, default=str), utc_now(), owner_id),
        )
        row = conn.execute("SELECT * FROM user_patterns WHERE owner_id = ?", (owner_id,)).fetchone()
        return _row_to_patterns(row)
