# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest
from typing import Any, Dict, List, Set

import httpx

from livdaily.client import LivDailyClient


class FakeBackend:
    """In-memory stand-in for the HTTP API, driven through httpx.MockTransport."""

    def __init__(self, *, valid_tokens: Set[str] | None = None, always_unauthorized: bool = False) -> None:
        self.sessions = 0
        self.valid_tokens = set(valid_tokens or ())
        self.always_unauthorized = always_unauthorized
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/v1/auth/anonymous":
            self.sessions += 1
            token = f"token-{self.sessions}"
            if not self.always_unauthorized:
                self.valid_tokens.add(token)
            return httpx.Response(200, json={"userId": f"user-{self.sessions}", "token": token})

        token = (request.headers.get("authorization") or "").removeprefix("Bearer ")
        if token not in self.valid_tokens:
            return httpx.Response(401, json={"status": 401, "code": "UNAUTHORIZED", "message": "Invalid or expired token"})
        if request.url.path == "/v1/boom":
            return httpx.Response(500, json={"status": 500, "code": "INTERNAL_ERROR", "message": "x"})
        if request.method == "POST":
            return httpx.Response(201, json={"echo": json.loads(request.content)})
        return httpx.Response(200, json=[{"id": "1", "path": request.url.path, "query": str(request.url.query, "ascii")}])

    def calls_to(self, path: str) -> int:
        return sum(1 for r in self.requests if r.url.path == path)


class TestLivDailyClient(unittest.TestCase):
    def _client(self, backend: FakeBackend, token: str | None = None) -> LivDailyClient:
        return LivDailyClient("http://testserver", token=token, transport=httpx.MockTransport(backend))

    def test_creates_anonymous_session_once(self) -> None:
        backend = FakeBackend()
        with self._client(backend) as client:
            self.assertEqual(len(client.list_module("movement")), 1)
            self.assertEqual(len(client.list_module("sleep")), 1)
            self.assertEqual(client.user_id, "user-1")
        self.assertEqual(backend.sessions, 1)

    def test_retries_exactly_once_after_401(self) -> None:
        backend = FakeBackend()
        with self._client(backend, token="expired") as client:
            items = client.list_module("journal")
            self.assertEqual(items[0]["path"], "/v1/journal")
            self.assertEqual(client.token, "token-1")
        self.assertEqual(backend.calls_to("/v1/journal"), 2)
        self.assertEqual(backend.sessions, 1)

    def test_second_401_returns_empty_without_another_retry(self) -> None:
        backend = FakeBackend(always_unauthorized=True)
        with self._client(backend) as client:
            self.assertIsNone(client.api_call("GET", "/v1/journal"))
            self.assertEqual(client.list_module("journal"), [])
        # One initial call and one retry per api_call.
        self.assertEqual(backend.calls_to("/v1/journal"), 4)

    def test_server_error_is_not_retried(self) -> None:
        backend = FakeBackend()
        with self._client(backend) as client:
            self.assertIsNone(client.api_call("GET", "/v1/boom"))
        self.assertEqual(backend.calls_to("/v1/boom"), 1)

    def test_transport_error_returns_none(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with LivDailyClient("http://testserver", token="t", transport=httpx.MockTransport(handler)) as client:
            self.assertIsNone(client.api_call("GET", "/v1/movement"))
            self.assertEqual(client.list_module("movement"), [])

    def test_query_params_skip_none(self) -> None:
        backend = FakeBackend()
        with self._client(backend) as client:
            items = client.list_module("focus", category="deep", limit=None)
        self.assertEqual(items[0]["query"], "category=deep")

    def test_generate_sends_camel_case_body(self) -> None:
        backend = FakeBackend()
        constraints: Dict[str, Any] = {"level": "beginner"}
        with self._client(backend) as client:
            result = client.generate("mindfulness", "stress relief", time_available=10, constraints=constraints)
        self.assertEqual(
            result,
            {"echo": {"module": "mindfulness", "goal": "stress relief", "timeAvailable": 10, "constraints": constraints}},
        )

    def test_stats(self) -> None:
        backend = FakeBackend()
        with self._client(backend) as client:
            client.stats("sleep", "month")
        last = backend.requests[-1]
        self.assertEqual(last.url.path, "/v1/sleep/stats")
        self.assertEqual(last.url.params["period"], "month")


if __name__ == "__main__":
    unittest.main()
