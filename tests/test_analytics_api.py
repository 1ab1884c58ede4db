# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sqlite3
import sys
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict
from unittest import mock

from fastapi.testclient import TestClient


class TestAnalyticsApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="livdaily-test-"))
        data_root = cls._tmp / "data"
        os.environ["LIVDAILY_DATA_ROOT"] = str(data_root)
        os.environ["LIVDAILY_DB_PATH"] = str(data_root / "livdaily.db")
        os.environ["LIVDAILY_TOKEN_SECRET"] = "test-secret"

        for name in list(sys.modules.keys()):
            if name.startswith("livdaily."):
                sys.modules.pop(name, None)

        from livdaily.api import app  # noqa: WPS433 (import inside test for env control)
        from livdaily.analytics import api as analytics_api  # noqa: WPS433
        from livdaily.analytics import engine  # noqa: WPS433

        cls.analytics_api = analytics_api
        cls.engine = engine
        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls) -> None:
        try:
            cls.client.close()
        except Exception:
            pass
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def _session(self) -> Dict[str, str]:
        body = self.client.post("/v1/auth/anonymous").json()
        self.user_id = body["userId"]
        return {"Authorization": f"Bearer {body['token']}"}

    def test_empty_window(self) -> None:
        headers = self._session()
        resp = self.client.get("/v1/sleep/stats", headers=headers)
        self.assertEqual(resp.status_code, 200)
        report = resp.json()
        self.assertEqual(report["period"], "week")
        self.assertEqual(report["totalNights"], 0)
        self.assertEqual(report["averageQuality"], 0)
        self.assertEqual(report["averageDuration"], 0)
        self.assertEqual(report["recommendations"], [self.engine.MODULE_STATS[self.engine.Module.sleep].no_activity])

    def test_mean_over_supplying_items(self) -> None:
        headers = self._session()
        self.client.post("/v1/sleep", json={"title": "Mon", "payload": {"quality": 8, "duration": 7}}, headers=headers)
        self.client.post("/v1/sleep", json={"title": "Tue", "payload": {"duration": 5}}, headers=headers)

        for path in ("/v1/sleep/stats?period=week", "/v1/sleep/analysis?period=month"):
            with self.subTest(path=path):
                report = self.client.get(path, headers=headers).json()
                self.assertEqual(report["averageQuality"], 8.0)
                self.assertEqual(report["averageDuration"], 6.0)
                self.assertEqual(report["totalNights"], 2)
                self.assertEqual(report["totalHours"], 12)

    def test_every_module_has_stats(self) -> None:
        headers = self._session()
        for module in ("journal", "mindfulness", "breathwork", "movement", "nutrition",
                       "focus", "calm", "sleep", "grounding", "motivation", "wellness"):
            with self.subTest(module=module):
                resp = self.client.get(f"/v1/{module}/stats?period=month", headers=headers)
                self.assertEqual(resp.status_code, 200)
                self.assertEqual(resp.json()["period"], "month")

    def test_movement_report(self) -> None:
        headers = self._session()
        for payload in ({"duration": 30, "calories": 300, "activityType": "run", "intensity": "high"},
                        {"duration": 45, "activityType": "cycle", "intensity": "moderate"}):
            self.client.post("/v1/movement", json={"title": "Workout", "payload": payload}, headers=headers)
        report = self.client.get("/v1/movement/stats", headers=headers).json()
        self.assertEqual(report["totalSessions"], 2)
        self.assertEqual(report["totalDuration"], 75)
        self.assertEqual(report["averageDuration"], 37.5)
        self.assertEqual(report["averageCalories"], 300.0)
        self.assertEqual(report["activityBreakdown"], {"run": 1, "cycle": 1})
        self.assertTrue(report["recommendation"])

    def test_journal_stats_include_entries(self) -> None:
        headers = self._session()
        self.client.post(
            "/v1/journal", json={"content": "Felt calm after a walk", "mood": "calm", "tags": ["walk"]}, headers=headers
        )
        self.client.post(
            "/v1/journal/content", json={"title": "Note", "content": "Tired", "payload": {"mood": "tired"}}, headers=headers
        )
        report = self.client.get("/v1/journal/stats", headers=headers).json()
        self.assertEqual(report["totalEntries"], 2)
        self.assertEqual(report["totalWords"], 6)
        self.assertEqual(report["moodDistribution"], {"calm": 1, "tired": 1})
        self.assertEqual(report["topTags"], [{"tag": "walk", "count": 1}])

    def test_wellness_rollup(self) -> None:
        headers = self._session()
        self.client.post("/v1/calm", json={"title": "A", "payload": {"duration": 10}}, headers=headers)
        self.client.post("/v1/focus", json={"title": "B", "payload": {"duration": 25}}, headers=headers)
        self.client.post("/v1/journal", json={"content": "hello"}, headers=headers)
        report = self.client.get("/v1/wellness/stats", headers=headers).json()
        self.assertEqual(report["totalActivities"], 3)
        self.assertEqual(report["contentSessions"], 2)
        self.assertEqual(report["journalEntries"], 1)
        self.assertEqual(report["activeModules"], 2)
        self.assertEqual(report["totalDuration"], 35)
        self.assertEqual(report["completionScore"], 2 * 15 + 2 * 2)

    def test_wellness_keeps_totals_when_one_item_is_malformed(self) -> None:
        headers = self._session()
        self.client.post("/v1/movement", json={"title": "Walk", "payload": {"duration": 30}}, headers=headers)
        self.client.post("/v1/calm", json={"title": "Rest", "payload": {"duration": 10}}, headers=headers)
        self.client.post(
            "/v1/journal/content", json={"title": "Odd", "payload": {"duration": "ten minutes"}}, headers=headers
        )
        resp = self.client.get("/v1/wellness/stats", headers=headers)
        self.assertEqual(resp.status_code, 200)
        report = resp.json()
        self.assertEqual(report["contentSessions"], 3)
        self.assertEqual(report["activeModules"], 3)
        self.assertEqual(report["totalDuration"], 40)
        self.assertEqual(report["completionScore"], 3 * 15 + 3 * 2)

    def test_items_outside_the_window_are_ignored(self) -> None:
        headers = self._session()
        self.client.post("/v1/grounding", json={"title": "A", "payload": {"duration": 5}}, headers=headers)
        later = datetime.now(timezone.utc) + timedelta(days=8)
        self.assertEqual(self.engine.summarize(self.user_id, "grounding", "week", now=later)["totalSessions"], 0)
        self.assertEqual(self.engine.summarize(self.user_id, "grounding", "month", now=later)["totalSessions"], 1)

    def test_invalid_period(self) -> None:
        headers = self._session()
        resp = self.client.get("/v1/movement/stats?period=year", headers=headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["code"], "VALIDATION_ERROR")

    def test_failure_degrades_to_zero_report(self) -> None:
        headers = self._session()
        with mock.patch.object(self.analytics_api, "summarize", side_effect=sqlite3.OperationalError("boom")):
            resp = self.client.get("/v1/nutrition/stats?period=month", headers=headers)
        self.assertEqual(resp.status_code, 200)
        report = resp.json()
        self.assertEqual(report["period"], "month")
        self.assertEqual(report["totalEntries"], 0)
        self.assertEqual(report["averageCalories"], 0)

    def test_requires_authentication(self) -> None:
        resp = self.client.get("/v1/wellness/stats")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["code"], "UNAUTHORIZED")


if __name__ == "__main__":
    unittest.main()
