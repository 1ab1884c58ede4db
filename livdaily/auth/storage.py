# -*- coding: utf-8 -*-
"""Auth — DB storage helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _row_to_user(row: Any) -> Dict[str, Any]:
    user = dict(row)
    user["is_anonymous"] = bool(user.get("is_anonymous"))
    return user


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return _row_to_user(row) if row else None


def create_anonymous_user() -> Dict[str, Any]:
    user_id = str(uuid4())
    now = _utc_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT INTO users (id, is_anonymous, email, created_at, updated_at) VALUES (?, 1, NULL, ?, ?)",
            (user_id, now, now),
        )
    return {"id": user_id, "is_anonymous": True, "email": None, "created_at": now, "updated_at": now}


def update_user_email(user_id: str, email: Optional[str]) -> Optional[Dict[str, Any]]:
    now = _utc_now()
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("UPDATE users SET email = ?, updated_at = ? WHERE id = ?", (email, now, user_id))
        if cur.rowcount == 0:
            return None
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return _row_to_user(row)


def delete_user(user_id: str) -> bool:
    """Delete an account; owned rows go with it through ON DELETE CASCADE."""
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        return cur.rowcount > 0
