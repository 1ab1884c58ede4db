# -*- coding: utf-8 -*-
"""Module Query Service — per-module list/create/update endpoints over the content store."""

from __future__ import annotations

import logging
import sqlite3
from typing import Callable, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_owner
from ..errors import PersistenceError, ValidationError, degrade_to_empty
from .models import ContentCreateRequest, ContentItem, ContentUpdateRequest, Module
from .storage import create_item, list_items, update_item

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["Modules"])

# Journal's bare path belongs to journal entries (see livdaily.journal).
_MODULE_PATHS: Dict[Module, Tuple[str, ...]] = {
    Module.journal: ("/journal/content",),
    Module.mindfulness: ("/mindfulness", "/mindfulness/content"),
    Module.breathwork: ("/breathwork", "/breathwork/content"),
    Module.movement: ("/movement", "/movement/content"),
    Module.nutrition: ("/nutrition", "/nutrition/content", "/nutrition/tasks"),
    Module.focus: ("/focus", "/focus/content"),
    Module.calm: ("/calm", "/calm/content"),
    Module.sleep: ("/sleep", "/sleep/content"),
    Module.grounding: ("/grounding", "/grounding/content"),
    Module.motivation: ("/motivation", "/motivation/content", "/motivation/current"),
}


def list_module_items(
    owner_id: str, module: Module, *, category: Optional[str] = None, limit: Optional[int] = None
) -> List[ContentItem]:
    logger.info("Fetching %s content for %s (category=%s, limit=%s)", module.value, owner_id, category, limit)
    rows = list_items(owner_id=owner_id, module=module.value, category=category, limit=limit)
    return [ContentItem.model_validate(r) for r in rows]


def _empty_list(**_: object) -> list:
    return []


def _build_endpoints(module: Module) -> Tuple[Callable, Callable, Callable]:
    @degrade_to_empty(_empty_list)
    def list_endpoint(
        category: Optional[str] = Query(default=None, description="Exact category match"),
        limit: Optional[int] = Query(default=None, ge=1),
        owner_id: str = Depends(get_current_owner),
    ):
        return list_module_items(owner_id, module, category=category, limit=limit)

    def create_endpoint(request: ContentCreateRequest, owner_id: str = Depends(get_current_owner)):
        try:
            row = create_item(
                owner_id=owner_id,
                module=module.value,
                title=request.title,
                content=request.content,
                category=request.category,
                duration=request.duration,
                payload=request.payload,
                is_ai_generated=False,
            )
        except sqlite3.Error as exc:
            logger.exception("Failed to create %s content for %s", module.value, owner_id)
            raise PersistenceError(f"Failed to save {module.value} content") from exc
        logger.info("%s content created: %s", module.value, row["id"])
        return ContentItem.model_validate(row)

    def update_endpoint(item_id: str, request: ContentUpdateRequest, owner_id: str = Depends(get_current_owner)):
        changes = request.model_dump(exclude_unset=True)
        if "title" in changes and not changes["title"]:
            raise ValidationError("title cannot be empty")
        try:
            row = update_item(owner_id=owner_id, item_id=item_id, module=module.value, changes=changes)
        except sqlite3.Error as exc:
            logger.exception("Failed to update %s item %s for %s", module.value, item_id, owner_id)
            raise PersistenceError(f"Failed to update {module.value} content") from exc
        return ContentItem.model_validate(row)

    return list_endpoint, create_endpoint, update_endpoint


for _module, _paths in _MODULE_PATHS.items():
    _list, _create, _update = _build_endpoints(_module)
    for _path in _paths:
        _suffix = _path.strip("/").replace("/", "_")
        router.add_api_route(
            _path,
            _list,
            methods=["GET"],
            response_model=List[ContentItem],
            name=f"list_{_suffix}",
            summary=f"List {_module.value} items",
        )
        router.add_api_route(
            _path,
            _create,
            methods=["POST"],
            response_model=ContentItem,
            name=f"create_{_suffix}",
            summary=f"Create a {_module.value} item",
        )
    router.add_api_route(
        f"{_paths[0]}/{{item_id}}",
        _update,
        methods=["PATCH"],
        response_model=ContentItem,
        name=f"update_{_module.value}",
        summary=f"Update an owned {_module.value} item",
    )
