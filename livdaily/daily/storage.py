# -*- coding: utf-8 -*-
"""Daily records — DB storage helpers.

Each record kind lives in its own owner-scoped table. A `RecordTable` names the
columns a kind writes and which of them hold JSON text; the helpers below work
off that description.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..content.storage import utc_now


@dataclass(frozen=True)
class RecordTable:
    name: str
    columns: Tuple[str, ...]
    # field name -> JSON text column
    json_columns: Tuple[Tuple[str, str], ...] = ()
    bool_columns: Tuple[str, ...] = ()
    has_updated_at: bool = True


CHECKINS = RecordTable("checkins", ("mood", "energy", "notes"), has_updated_at=False)
HABITS = RecordTable(
    "habits",
    ("name", "description", "frequency"),
    json_columns=(("completed_dates", "completed_dates_json"),),
)
ROUTINES = RecordTable("routines", ("name", "time_of_day"), json_columns=(("steps", "steps_json"),))
PROMPTS = RecordTable(
    "prompts", ("text", "category", "is_ai_generated"), bool_columns=("is_ai_generated",), has_updated_at=False
)
REFLECTIONS = RecordTable("reflections", ("prompt_id", "content"))


def _row_to_record(table: RecordTable, row: Any) -> Dict[str, Any]:
    data = dict(row)
    for field, column in table.json_columns:
        try:
            value = json.loads(data.pop(column, None) or "[]")
        except ValueError:
            value = []
        data[field] = value if isinstance(value, list) else []
    for column in table.bool_columns:
        data[column] = bool(data.get(column))
    return data


def create_record(table: RecordTable, *, owner_id: str, values: Dict[str, Any]) -> Dict[str, Any]:
    record_id = str(uuid4())
    now = utc_now()
    columns: List[str] = ["id", "owner_id"]
    params: List[Any] = [record_id, owner_id]
    for column in table.columns:
        value = values.get(column)
        if column in table.bool_columns:
            value = 1 if value else 0
        columns.append(column)
        params.append(value)
    for field, column in table.json_columns:
        columns.append(column)
        params.append(json.dumps(list(values.get(field) or []), ensure_ascii=False))
    columns.append("created_at")
    params.append(now)
    if table.has_updated_at:
        columns.append("updated_at")
        params.append(now)

    placeholders = ", ".join("?" for _ in columns)
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            f"INSERT INTO {table.name} ({', '.join(columns)}) VALUES ({placeholders})",
            tuple(params),
        )
        row = conn.execute(f"SELECT * FROM {table.name} WHERE id = ?", (record_id,)).fetchone()
        return _row_to_record(table, row)


def list_records(table: RecordTable, *, owner_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    sql = f"SELECT * FROM {table.name} WHERE owner_id = ? ORDER BY created_at DESC, rowid DESC"
    params: List[Any] = [owner_id]
    if limit is not None:
        sql += " LIMIT ?"
        params.append(int(limit))
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, tuple(params)).fetchall()
        return [_row_to_record(table, r) for r in rows]


def get_record(table: RecordTable, *, owner_id: str, record_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            f"SELECT * FROM {table.name} WHERE id = ? AND owner_id = ?",
            (record_id, owner_id),
        ).fetchone()
        return _row_to_record(table, row) if row else None
