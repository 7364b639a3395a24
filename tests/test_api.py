# -*- coding: utf-8 -*-

from __future__ import annotations

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient

from fitaura.api import create_app
from fitaura.coach.models import FitnessPlan, MealEstimate, RecoveryAnalysis
from fitaura.errors import CollaboratorError


class TestLedgerApi(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="fitaura-test-"))
        self.data_root = self._tmp / "data"
        self.app = create_app(self.data_root)
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        self.client.close()
        shutil.rmtree(self._tmp, ignore_errors=True)

    def test_health(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"ok": True})

    def test_add_meal_logs_activity_and_totals(self) -> None:
        resp = self.client.post(
            "/api/nutrition/meals",
            json={"name": "Oats", "calories": 300, "protein": 12, "timestamp": "2024-05-01T08:00:00"},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["totals"]["calories"], 300)

        resp = self.client.post(
            "/api/nutrition/meals",
            json={"name": "Salad", "calories": 250, "timestamp": "2024-05-01T13:00:00"},
        )
        self.assertEqual(resp.json()["totals"]["calories"], 550)

        resp = self.client.get("/api/activity/records")
        self.assertEqual(resp.json()["records"], [{"day": "2024-05-01", "actions": ["meal"]}])

        resp = self.client.get("/api/nutrition/summary", params={"day": "2024-05-01"})
        body = resp.json()
        self.assertEqual(body["meal_count"], 2)
        self.assertEqual(body["calories_remaining"], 2500 - 550)

    def test_invalid_meal_is_rejected(self) -> None:
        resp = self.client.post("/api/nutrition/meals", json={"name": "  ", "calories": 100})
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post("/api/nutrition/meals", json={"name": "Toast", "calories": -5})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get("/api/nutrition/meals").json()["count"], 0)
        self.assertEqual(self.client.get("/api/activity/records").json()["count"], 0)

    def test_fractional_macros_are_rounded(self) -> None:
        resp = self.client.post(
            "/api/nutrition/meals",
            json={"name": "Apple", "calories": 94.6, "protein": 0.5, "carbs": 25.1, "fiber": 4.4,
                  "timestamp": "2024-05-01T10:00:00"},
        )
        self.assertEqual(resp.status_code, 200)
        meal = resp.json()["meal"]
        self.assertEqual(meal["calories"], 95)
        self.assertEqual(meal["carbs"], 25)
        self.assertEqual(meal["fiber"], 4)
        self.assertEqual(resp.json()["totals"]["calories"], 95)

    def test_delete_meal(self) -> None:
        meal_id = self.client.post(
            "/api/nutrition/meals", json={"name": "Toast", "calories": 150, "timestamp": "2024-05-01T08:00:00"}
        ).json()["meal"]["id"]
        resp = self.client.delete(f"/api/nutrition/meals/{meal_id}")
        self.assertEqual(resp.json(), {"meal_id": meal_id, "removed": True})
        resp = self.client.delete(f"/api/nutrition/meals/{meal_id}")
        self.assertEqual(resp.json()["removed"], False)

    def test_goals_round_trip_and_resync(self) -> None:
        resp = self.client.put("/api/nutrition/goals", json={"calories": 2100, "protein": 130, "carbs": 240, "fiber": 28})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.get("/api/nutrition/goals").json()["calories"], 2100)

        resp = self.client.post(
            "/api/nutrition/goals/resync",
            json={"dailyCalories": 2700, "protein": "170g", "carbs": "320g", "fiber": "n/a"},
        )
        self.assertEqual(resp.json(), {"calories": 2700, "protein": 170, "carbs": 320, "fiber": 0})

        resp = self.client.post(
            "/api/nutrition/goals/resync",
            json={"dailyCalories": 2200, "protein": ["x"], "carbs": "250g", "fiber": "30g"},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"calories": 2200, "protein": 0, "carbs": 250, "fiber": 30})

    def test_streak_and_calendar(self) -> None:
        for day in ("2024-05-08", "2024-05-09"):
            self.client.post("/api/activity/log", json={"kind": "planner", "day": day})
        resp = self.client.post("/api/activity/log", json={"kind": "planner", "day": "2024-05-09"})
        self.assertFalse(resp.json()["changed"])

        stats = self.client.get("/api/activity/stats", params={"today": "2024-05-10"}).json()
        self.assertEqual(stats["current_streak"], 2)
        self.assertEqual(stats["total_plans"], 2)

        cal = self.client.get(
            "/api/activity/calendar", params={"year": 2024, "month": 5, "today": "2024-05-10"}
        ).json()
        self.assertEqual(len(cal["days"]), 31)
        self.assertEqual([d["day_of_month"] for d in cal["days"] if d["has_record"]], [8, 9])
        self.assertEqual([d["day_of_month"] for d in cal["days"] if d["is_today"]], [10])

    def test_bad_day_is_400(self) -> None:
        resp = self.client.post("/api/activity/log", json={"kind": "meal", "day": "05/10/2024"})
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/api/activity/stats", params={"today": "soon"})
        self.assertEqual(resp.status_code, 400)

    def test_record_sleep_log_replaces_same_day(self) -> None:
        payload = {"day": "2024-05-01", "hours": 6, "quality": "Fair", "soreness": "High", "readiness_score": 55}
        self.client.post("/api/recovery/logs", json=payload)
        payload.update(hours=8, quality="Good", readiness_score=85)
        resp = self.client.post("/api/recovery/logs", json=payload)
        self.assertEqual(resp.json()["band"], "high")

        history = self.client.get("/api/recovery/logs").json()
        self.assertEqual(history["count"], 1)
        self.assertEqual(history["logs"][0]["hours"], 8)

        resp = self.client.get("/api/recovery/logs/2024-05-01")
        self.assertEqual(resp.json()["log"]["readiness_score"], 85)
        self.assertEqual(self.client.get("/api/recovery/logs/2024-05-02").status_code, 404)

        records = self.client.get("/api/activity/records").json()["records"]
        self.assertEqual(records, [{"day": "2024-05-01", "actions": ["sleep"]}])

    def test_analyze_records_result(self) -> None:
        analysis = RecoveryAnalysis(
            readiness_score=64, summary="Mixed", recommendation="Maintain", workout_adjustment="Drop one set"
        )
        with mock.patch("fitaura.recovery.api.analyze_recovery", return_value=analysis):
            resp = self.client.post(
                "/api/recovery/analyze", json={"day": "2024-05-03", "hours": 6.5, "quality": "Good", "soreness": "Medium"}
            )
        self.assertEqual(resp.status_code, 200)
        log = resp.json()["log"]
        self.assertEqual(log["readiness_score"], 64)
        self.assertEqual(log["feedback"], "Drop one set")
        self.assertEqual(self.client.get("/api/activity/records").json()["count"], 1)

    def test_collaborator_failure_leaves_ledger_untouched(self) -> None:
        with mock.patch("fitaura.recovery.api.analyze_recovery", side_effect=CollaboratorError("boom")):
            resp = self.client.post("/api/recovery/analyze", json={"hours": 7, "quality": "Good", "soreness": "Low"})
        self.assertEqual(resp.status_code, 502)

        with mock.patch("fitaura.coach.api.generate_plan", side_effect=CollaboratorError("boom")):
            resp = self.client.post("/api/coach/plan", json={"sync_goals": True})
        self.assertEqual(resp.status_code, 502)

        self.assertEqual(self.client.get("/api/recovery/logs").json()["count"], 0)
        self.assertEqual(self.client.get("/api/activity/records").json()["count"], 0)
        self.assertEqual(self.client.get("/api/nutrition/goals").json()["calories"], 2500)
        self.assertFalse((self.data_root / "sleep.json").exists())

    def test_plan_logs_planner_and_syncs_goals(self) -> None:
        plan = FitnessPlan.model_validate(
            {"summary": "Go", "nutrition": {"dailyCalories": 2400, "protein": "150g", "carbs": "260g", "fiber": "32g"}}
        )
        with mock.patch("fitaura.coach.api.generate_plan", return_value=plan):
            resp = self.client.post("/api/coach/plan", json={"sync_goals": True})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["goals"], {"calories": 2400, "protein": 150, "carbs": 260, "fiber": 32})
        records = self.client.get("/api/activity/records").json()["records"]
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0]["actions"], ["planner"])

    def test_food_estimate_does_not_store(self) -> None:
        estimate = MealEstimate(name="Banana", calories=105, protein=1, carbs=27, fats=0, fiber=3)
        with mock.patch("fitaura.nutrition.api.analyze_food", return_value=estimate):
            resp = self.client.post("/api/nutrition/estimate", json={"description": "a banana"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Banana")
        self.assertEqual(self.client.get("/api/nutrition/meals").json()["count"], 0)

    def test_state_survives_restart(self) -> None:
        self.client.post("/api/nutrition/meals", json={"name": "Oats", "calories": 300, "timestamp": "2024-05-01T08:00:00"})
        restarted = TestClient(create_app(self.data_root))
        try:
            self.assertEqual(restarted.get("/api/nutrition/meals").json()["count"], 1)
            self.assertEqual(restarted.get("/api/activity/records").json()["count"], 1)
        finally:
            restarted.close()


if __name__ == "__main__":
    unittest.main()
