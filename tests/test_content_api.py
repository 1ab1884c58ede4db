# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sqlite3
import sys
import tempfile
import unittest
from pathlib import Path
from typing import Dict
from unittest import mock

from fastapi.testclient import TestClient


class TestContentApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="livdaily-test-"))
        data_root = cls._tmp / "data"
        os.environ["LIVDAILY_DATA_ROOT"] = str(data_root)
        os.environ["LIVDAILY_DB_PATH"] = str(data_root / "livdaily.db")
        os.environ["LIVDAILY_TOKEN_SECRET"] = "test-secret"

        # Ensure settings/app reflect the env vars above.
        for name in list(sys.modules.keys()):
            if name.startswith("livdaily."):
                sys.modules.pop(name, None)

        from livdaily.api import app  # noqa: WPS433 (import inside test for env control)
        from livdaily.content import api as content_api  # noqa: WPS433

        cls.app = app
        cls.content_api = content_api
        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls) -> None:
        try:
            cls.client.close()
        except Exception:
            pass
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def _session(self) -> Dict[str, str]:
        resp = self.client.post("/v1/auth/anonymous")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["userId"])
        return {"Authorization": f"Bearer {body['token']}"}

    def test_missing_token_is_structured_401(self) -> None:
        resp = self.client.get("/v1/journal")
        self.assertEqual(resp.status_code, 401)
        body = resp.json()
        self.assertEqual(body["status"], 401)
        self.assertEqual(body["code"], "UNAUTHORIZED")
        self.assertTrue(body["message"])

    def test_bad_token_is_401(self) -> None:
        resp = self.client.get("/v1/movement", headers={"Authorization": "Bearer not-a-token"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "UNAUTHORIZED")

    def test_unknown_route_uses_structured_body(self) -> None:
        headers = self._session()
        resp = self.client.get("/v1/no-such-module", headers=headers)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["code"], "NOT_FOUND")
        resp = self.client.delete("/v1/movement", headers=headers)
        self.assertEqual(resp.status_code, 405)
        self.assertEqual(resp.json()["code"], "METHOD_NOT_ALLOWED")

    def test_health_is_public(self) -> None:
        resp = self.client.get("/v1/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")

    def test_create_then_list_round_trip(self) -> None:
        headers = self._session()
        submission = {
            "title": "Morning run",
            "content": "Easy pace along the river",
            "duration": 30,
            "payload": {"duration": 30, "calories": 240, "activityType": "run", "notes": {"shoes": "new"}},
        }
        resp = self.client.post("/v1/movement", json=submission, headers=headers)
        self.assertEqual(resp.status_code, 200)
        created = resp.json()
        self.assertFalse(created["isAiGenerated"])

        resp = self.client.get("/v1/movement", headers=headers)
        self.assertEqual(resp.status_code, 200)
        items = resp.json()
        self.assertEqual(len(items), 1)
        item = items[0]
        for key in ("title", "content", "duration", "payload"):
            self.assertEqual(item[key], submission[key], key)
        self.assertEqual(item["id"], created["id"])
        self.assertEqual(item["module"], "movement")
        self.assertTrue(item["createdAt"].endswith("Z"))
        self.assertEqual(item["createdAt"], item["updatedAt"])

    def test_owner_isolation(self) -> None:
        owner = self._session()
        other = self._session()
        for module in ("mindfulness", "sleep", "calm"):
            resp = self.client.post(f"/v1/{module}", json={"title": f"{module} item"}, headers=owner)
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(self.client.get(f"/v1/{module}", headers=other).json(), [])
            self.assertEqual(len(self.client.get(f"/v1/{module}", headers=owner).json()), 1)

    def test_category_and_limit_are_idempotent_and_newest_first(self) -> None:
        headers = self._session()
        for title, category in (("a1", "a"), ("b1", "b"), ("a2", "a"), ("a3", "a")):
            self.client.post("/v1/focus", json={"title": title, "category": category}, headers=headers)

        url = "/v1/focus/content?category=a&limit=2"
        first = self.client.get(url, headers=headers).json()
        second = self.client.get(url, headers=headers).json()
        self.assertEqual(first, second)
        self.assertEqual([i["title"] for i in first], ["a3", "a2"])
        self.assertTrue(all(i["category"] == "a" for i in first))

    def test_invalid_limit(self) -> None:
        headers = self._session()
        resp = self.client.get("/v1/focus?limit=0", headers=headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "VALIDATION_ERROR")

    def test_large_limit_truncates_instead_of_rejecting(self) -> None:
        headers = self._session()
        for title in ("one", "two"):
            self.client.post("/v1/calm", json={"title": title}, headers=headers)
        resp = self.client.get("/v1/calm?limit=1000", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([i["title"] for i in resp.json()], ["two", "one"])
        self.assertEqual(self.client.get("/v1/journal?limit=1000", headers=headers).status_code, 200)
        self.assertEqual(self.client.get("/v1/habits?limit=1000", headers=headers).status_code, 200)

    def test_missing_title_is_400(self) -> None:
        headers = self._session()
        resp = self.client.post("/v1/calm", json={"content": "no title"}, headers=headers)
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["code"], "VALIDATION_ERROR")
        self.assertTrue(body["details"]["errors"])

    def test_aliases_share_the_module(self) -> None:
        headers = self._session()
        resp = self.client.post("/v1/nutrition/tasks", json={"title": "Drink water"}, headers=headers)
        self.assertEqual(resp.status_code, 200)
        titles = [i["title"] for i in self.client.get("/v1/nutrition", headers=headers).json()]
        self.assertEqual(titles, ["Drink water"])

        self.client.post("/v1/motivation", json={"title": "Keep going"}, headers=headers)
        current = self.client.get("/v1/motivation/current?limit=1", headers=headers).json()
        self.assertEqual(current[0]["title"], "Keep going")

    def test_journal_content_is_separate_from_entries(self) -> None:
        headers = self._session()
        self.client.post("/v1/journal/content", json={"title": "Prompt pack"}, headers=headers)
        self.assertEqual(len(self.client.get("/v1/journal/content", headers=headers).json()), 1)
        self.assertEqual(self.client.get("/v1/journal", headers=headers).json(), [])

    def test_update_refreshes_updated_at(self) -> None:
        headers = self._session()
        created = self.client.post(
            "/v1/sleep", json={"title": "Night", "payload": {"quality": 5}}, headers=headers
        ).json()

        resp = self.client.patch(
            f"/v1/sleep/{created['id']}", json={"title": "Better night", "payload": {"quality": 8}}, headers=headers
        )
        self.assertEqual(resp.status_code, 200)
        updated = resp.json()
        self.assertEqual(updated["title"], "Better night")
        self.assertEqual(updated["payload"], {"quality": 8})
        self.assertEqual(updated["createdAt"], created["createdAt"])
        self.assertGreater(updated["updatedAt"], created["updatedAt"])

        listed = self.client.get("/v1/sleep", headers=headers).json()[0]
        self.assertEqual(listed["title"], "Better night")

    def test_update_of_foreign_or_missing_item_is_404(self) -> None:
        owner = self._session()
        other = self._session()
        created = self.client.post("/v1/grounding", json={"title": "5-4-3-2-1"}, headers=owner).json()

        resp = self.client.patch(f"/v1/grounding/{created['id']}", json={"title": "mine now"}, headers=other)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["code"], "NOT_FOUND")

        resp = self.client.patch("/v1/grounding/does-not-exist", json={"title": "x"}, headers=owner)
        self.assertEqual(resp.status_code, 404)

        # Wrong module for an existing item.
        resp = self.client.patch(f"/v1/calm/{created['id']}", json={"title": "x"}, headers=owner)
        self.assertEqual(resp.status_code, 404)

    def test_read_failure_degrades_to_empty_list(self) -> None:
        headers = self._session()
        self.client.post("/v1/breathwork", json={"title": "Box breathing"}, headers=headers)
        with mock.patch.object(self.content_api, "list_items", side_effect=sqlite3.OperationalError("disk I/O error")):
            resp = self.client.get("/v1/breathwork", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_user_lookup_failure_still_degrades_reads(self) -> None:
        from livdaily.auth import security  # noqa: WPS433

        headers = self._session()
        with mock.patch.object(security, "get_user_by_id", side_effect=sqlite3.OperationalError("unable to open")):
            with mock.patch.object(
                self.content_api, "list_items", side_effect=sqlite3.OperationalError("unable to open")
            ):
                resp = self.client.get("/v1/grounding", headers=headers)
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.json(), [])

            resp = self.client.get("/v1/grounding", headers={"Authorization": "Bearer not.a.token"})
            self.assertEqual(resp.status_code, 401)

    def test_write_failure_is_not_swallowed(self) -> None:
        headers = self._session()
        with mock.patch.object(self.content_api, "create_item", side_effect=sqlite3.OperationalError("locked")):
            resp = self.client.post("/v1/breathwork", json={"title": "Box breathing"}, headers=headers)
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["code"], "PERSISTENCE_FAILED")

    def test_account_deletion_cascades(self) -> None:
        headers = self._session()
        me = self.client.get("/v1/auth/me", headers=headers).json()
        self.assertTrue(me["isAnonymous"])
        self.client.post("/v1/movement", json={"title": "Walk"}, headers=headers)

        resp = self.client.delete("/v1/auth/me", headers=headers)
        self.assertEqual(resp.status_code, 200)

        from livdaily.content.storage import list_items  # noqa: WPS433

        self.assertEqual(list_items(owner_id=me["id"]), [])
        self.assertEqual(self.client.get("/v1/movement", headers=headers).status_code, 401)


if __name__ == "__main__":
    unittest.main()
