# -*- coding: utf-8 -*-
"""Structured Generator — schema-constrained calls to an OpenAI-compatible chat endpoint.

The backend is asked for a `json_schema` response and the reply is validated
again locally. One outbound request per call; callers decide whether to retry.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..config import settings
from ..errors import GenerationError
from .models import GeneratedContent

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

SCHEMA_VALIDATION_FAILED = "SCHEMA_VALIDATION_FAILED"
UPSTREAM_ERROR = "UPSTREAM_ERROR"
NOT_CONFIGURED = "NOT_CONFIGURED"


def _strip_code_fences(text: str) -> str:
    fenced = re.match(r"^\s*```[a-zA-Z0-9_-]*\s*([\s\S]*?)\s*```\s*$", text)
    if fenced:
        return fenced.group(1).strip()
    return text.strip()


def _extract_balanced_object(text: str) -> Optional[str]:
    """First balanced top-level JSON object in `text`, if any."""
    start = text.find("{")
    if start == -1:
        return None
    depth = 0
    in_string = False
    escape = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def _json_candidates(raw_text: str) -> List[str]:
    text = (raw_text or "").strip()
    if not text:
        return []
    candidates = [text, _strip_code_fences(text)]
    balanced = _extract_balanced_object(text)
    if balanced:
        candidates.append(balanced)
    unique: List[str] = []
    for c in candidates:
        if c and c not in unique:
            unique.append(c)
    return unique


def parse_structured(raw_text: str, schema: Type[T]) -> T:
    """Parse model output into `schema`; raises GenerationError(SCHEMA_VALIDATION_FAILED)."""
    last_error: Optional[Exception] = None
    for candidate in _json_candidates(raw_text):
        try:
            data = json.loads(candidate)
        except ValueError as exc:
            last_error = exc
            continue
        if not isinstance(data, dict):
            last_error = ValueError("model output is not a JSON object")
            continue
        try:
            return schema.model_validate(data)
        except ValidationError as exc:
            last_error = exc
    logger.warning("Structured output did not match %s: %s", schema.__name__, last_error)
    raise GenerationError(
        "Model output did not match the expected schema",
        code=SCHEMA_VALIDATION_FAILED,
        details={"schema": schema.__name__, "reason": str(last_error) if last_error else "empty output"},
    )


def _response_format(schema: Type[BaseModel]) -> Dict[str, Any]:
    return {
        "type": "json_schema",
        "json_schema": {
            "name": schema.__name__,
            "schema": schema.model_json_schema(),
        },
    }


def _message_text(data: Any) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    if isinstance(content, list):
        # Some providers return content parts.
        return "".join(str(p.get("text") or "") for p in content if isinstance(p, dict))
    return str(content or "")


class StructuredGenerator:
    """Provider-agnostic client for structured generation over the OpenAI chat API shape."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.llm_api_key
        self.base_url = (base_url or settings.llm_base_url).rstrip("/")
        self.model = model or settings.llm_model
        self.timeout = timeout if timeout is not None else settings.llm_timeout
        self.temperature = temperature if temperature is not None else settings.llm_temperature
        self.max_tokens = max_tokens if max_tokens is not None else settings.llm_max_tokens
        self._transport = transport

    def generate(self, system: str, user: str, schema: Type[T] = GeneratedContent) -> T:  # type: ignore[assignment]
        if not self.api_key:
            raise GenerationError("Text generation is not configured", code=NOT_CONFIGURED)

        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "response_format": _response_format(schema),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.info("Issuing structured request to model %s (schema=%s)", self.model, schema.__name__)
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                resp = client.post(f"{self.base_url}/chat/completions", headers=headers, json=payload)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as exc:
            snippet = (exc.response.text or "").replace("\n", " ").strip()[:200]
            logger.error("Generation backend returned %s: %s", exc.response.status_code, snippet)
            raise GenerationError(
                "Generation backend returned an error",
                code=UPSTREAM_ERROR,
                details={"upstreamStatus": exc.response.status_code},
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Generation backend unreachable: %s", exc)
            raise GenerationError("Generation backend unreachable", code=UPSTREAM_ERROR) from exc
        except ValueError as exc:
            logger.error("Generation backend returned non-JSON body")
            raise GenerationError("Generation backend returned a malformed response", code=UPSTREAM_ERROR) from exc

        return parse_structured(_message_text(data), schema)


def get_generator() -> StructuredGenerator:
    """FastAPI dependency; tests override it with a fake generator."""
    return StructuredGenerator()
