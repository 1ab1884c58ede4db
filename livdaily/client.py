# -*- coding: utf-8 -*-
"""LivDaily API client — anonymous sessions with a single retry on 401.

`api_call` never raises for HTTP or transport failures: it returns the decoded
JSON body on success and None otherwise, so callers can always render an empty
state. On the first 401 the cached session is dropped, a new anonymous session
is created and the request is sent once more; a second failure returns None.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import settings

logger = logging.getLogger(__name__)


class LivDailyClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.backend_url).rstrip("/")
        self.token = token
        self.user_id: Optional[str] = None
        self._http = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "LivDailyClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ---- session ----

    def clear_session(self) -> None:
        logger.info("Clearing anonymous session")
        self.token = None
        self.user_id = None

    def get_or_create_token(self) -> Optional[str]:
        if self.token:
            return self.token
        try:
            resp = self._http.post("/v1/auth/anonymous")
        except httpx.HTTPError as exc:
            logger.error("Error creating anonymous session: %s", exc)
            return None
        if resp.status_code >= 400:
            logger.error("Failed to create anonymous session: %s %s", resp.status_code, resp.text[:200])
            return None
        try:
            data = resp.json()
        except ValueError:
            logger.error("Anonymous session response was not JSON")
            return None
        self.token = data.get("token")
        self.user_id = data.get("userId")
        return self.token

    # ---- requests ----

    def _send(self, method: str, endpoint: str, token: str, **kwargs: Any) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"}
        return self._http.request(method, endpoint, headers=headers, **kwargs)

    @staticmethod
    def _decode(resp: httpx.Response) -> Optional[Any]:
        try:
            return resp.json()
        except ValueError:
            logger.error("API returned a non-JSON body for %s", resp.request.url)
            return None

    def api_call(
        self,
        method: str,
        endpoint: str,
        *,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[Any]:
        kwargs: Dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None}

        token = self.get_or_create_token()
        if not token:
            logger.error("No anonymous token available for %s %s", method, endpoint)
            return None

        try:
            resp = self._send(method, endpoint, token, **kwargs)
            if resp.status_code == 401:
                logger.warning("401 on %s %s; refreshing session and retrying once", method, endpoint)
                self.clear_session()
                new_token = self.get_or_create_token()
                if not new_token:
                    return None
                resp = self._send(method, endpoint, new_token, **kwargs)
                if resp.status_code == 401:
                    logger.error("Failed to authenticate after retry: %s %s", method, endpoint)
                    return None
        except httpx.HTTPError as exc:
            logger.error("API call failed: %s %s: %s", method, endpoint, exc)
            return None

        if resp.status_code >= 400:
            logger.error("API error %s on %s %s: %s", resp.status_code, method, endpoint, resp.text[:200])
            return None
        return self._decode(resp)

    # ---- helpers ----

    def list_module(self, module: str, *, category: Optional[str] = None, limit: Optional[int] = None) -> List[Any]:
        data = self.api_call("GET", f"/v1/{module}", params={"category": category, "limit": limit})
        return data if isinstance(data, list) else []

    def create(self, module: str, **fields: Any) -> Optional[Dict[str, Any]]:
        return self.api_call("POST", f"/v1/{module}", json=fields)

    def generate(
        self,
        module: str,
        goal: str,
        *,
        time_available: Optional[float] = None,
        tone: Optional[str] = None,
        constraints: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        body: Dict[str, Any] = {"module": module, "goal": goal}
        if time_available is not None:
            body["timeAvailable"] = time_available
        if tone:
            body["tone"] = tone
        if constraints is not None:
            body["constraints"] = constraints
        return self.api_call("POST", "/v1/ai/generate", json=body)

    def stats(self, module: str, period: str = "week") -> Optional[Dict[str, Any]]:
        return self.api_call("GET", f"/v1/{module}/stats", params={"period": period})
