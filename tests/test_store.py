"""Tests for the persistence layer."""

import os
import sqlite3
import tempfile
import unittest

from fitness_coach import store
from fitness_coach.db import init_db
from fitness_coach.models import AdaptiveModel, DailyLog, GoalSettings, UserProfile


class StoreTestCase(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")
        init_db(self.db_path)

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)


class TestSingletons(StoreTestCase):
    def test_missing_profile_and_goals(self):
        self.assertIsNone(store.get_user_profile(self.db_path))
        self.assertIsNone(store.get_goal_settings(self.db_path))

    def test_profile_saved(self):
        profile = UserProfile(sex="female", age_years=34, height_cm=165,
                              starting_weight_lb=150.5, timezone="Europe/London",
                              created_at=1, updated_at=2)
        store.set_user_profile(profile, self.db_path)
        self.assertEqual(store.get_user_profile(self.db_path), profile)

    def test_goals_are_replaced_not_merged(self):
        store.set_goal_settings(GoalSettings(
            mode="fat-loss", goal_rate=1.0, activity_style="standard",
            target_weight_lb=170, target_weight_customized=True,
        ), self.db_path)
        store.set_goal_settings(GoalSettings(
            mode="maintenance", goal_rate=0, activity_style="low-cardio", target_phase_weeks=8,
        ), self.db_path)

        goals = store.get_goal_settings(self.db_path)
        self.assertEqual(goals.mode, "maintenance")
        self.assertIsNone(goals.target_weight_lb)
        self.assertFalse(goals.target_weight_customized)
        self.assertEqual(goals.target_phase_weeks, 8)

    def test_adaptive_model_default_created(self):
        model = store.get_adaptive_model(self.db_path)
        self.assertEqual(model.tdee_bias, 0)
        self.assertIsNone(model.last_calibration_date)
        self.assertEqual(model.id, "default")

    def test_adaptive_model_saved(self):
        store.set_adaptive_model(
            AdaptiveModel(tdee_bias=-150, last_calibration_date="2026-10-01T07:00:00+00:00"),
            self.db_path,
        )
        model = store.get_adaptive_model(self.db_path)
        self.assertEqual(model.tdee_bias, -150)
        self.assertEqual(model.last_calibration_date, "2026-10-01T07:00:00+00:00")


class TestDailyLogs(StoreTestCase):
    def test_update_creates_log(self):
        log = store.update_daily_log("2026-10-19", self.db_path, calories=1800)
        self.assertEqual(log.calories, 1800)
        self.assertIsNotNone(log.created_at)
        self.assertEqual(store.get_daily_log("2026-10-19", self.db_path), log)

    def test_update_merges_fields(self):
        store.update_daily_log("2026-10-19", self.db_path, weight_lb=181.4, steps=4000)
        store.update_daily_log("2026-10-19", self.db_path, steps=9500, workout_done=True)

        log = store.get_daily_log("2026-10-19", self.db_path)
        self.assertEqual(log.weight_lb, 181.4)
        self.assertEqual(log.steps, 9500)
        self.assertTrue(log.workout_done)
        self.assertEqual(log.calories, 0)

    def test_update_keeps_created_at(self):
        first = store.update_daily_log("2026-10-19", self.db_path, steps=100)
        second = store.update_daily_log("2026-10-19", self.db_path, steps=200)
        self.assertEqual(second.created_at, first.created_at)
        self.assertGreaterEqual(second.updated_at, first.updated_at)

    def test_one_record_per_date(self):
        store.upsert_daily_log(DailyLog(date_iso="2026-10-19", calories=1000), self.db_path)
        store.upsert_daily_log(DailyLog(date_iso="2026-10-19", calories=2000), self.db_path)
        logs = store.get_daily_logs(db_path=self.db_path)
        self.assertEqual(len(logs), 1)
        self.assertEqual(logs[0].calories, 2000)

    def test_logs_newest_first_with_limit(self):
        for day in ("2026-10-17", "2026-10-19", "2026-10-18"):
            store.upsert_daily_log(DailyLog(date_iso=day, steps=1), self.db_path)
        logs = store.get_daily_logs(2, self.db_path)
        self.assertEqual([log.date_iso for log in logs], ["2026-10-19", "2026-10-18"])

    def test_delete(self):
        store.update_daily_log("2026-10-19", self.db_path, azm=20)
        self.assertTrue(store.delete_daily_log("2026-10-19", self.db_path))
        self.assertFalse(store.delete_daily_log("2026-10-19", self.db_path))
        self.assertIsNone(store.get_daily_log("2026-10-19", self.db_path))


class TestReset(StoreTestCase):
    def test_reset_clears_everything(self):
        store.set_user_profile(UserProfile(sex="male", age_years=30, height_cm=180,
                                           starting_weight_lb=200), self.db_path)
        store.set_goal_settings(GoalSettings(mode="fat-loss", goal_rate=1.0,
                                             activity_style="standard"), self.db_path)
        store.set_adaptive_model(AdaptiveModel(tdee_bias=225), self.db_path)
        store.update_daily_log("2026-10-19", self.db_path, calories=1800)

        store.reset_all_data(self.db_path)

        self.assertIsNone(store.get_user_profile(self.db_path))
        self.assertIsNone(store.get_goal_settings(self.db_path))
        self.assertEqual(store.get_daily_logs(db_path=self.db_path), [])
        self.assertEqual(store.get_adaptive_model(self.db_path).tdee_bias, 0)

    def test_replace_all_data(self):
        store.update_daily_log("2026-10-18", self.db_path, calories=2400)
        store.replace_all_data(
            UserProfile(sex="female", age_years=28, height_cm=168, starting_weight_lb=140),
            GoalSettings(mode="muscle-gain", goal_rate=0.25, activity_style="low-cardio"),
            None,
            [DailyLog(date_iso="2026-10-19", steps=5000)],
            self.db_path,
        )
        self.assertEqual(store.get_user_profile(self.db_path).sex, "female")
        self.assertEqual([log.date_iso for log in store.get_daily_logs(db_path=self.db_path)],
                         ["2026-10-19"])
        self.assertEqual(store.get_adaptive_model(self.db_path).tdee_bias, 0)

    def test_replace_all_data_is_atomic(self):
        store.update_daily_log("2026-10-18", self.db_path, calories=2400)
        with self.assertRaises(sqlite3.IntegrityError):
            store.replace_all_data(
                UserProfile(sex="female", age_years=28, height_cm=168, starting_weight_lb=140),
                GoalSettings(mode="cut", goal_rate=0.25, activity_style="low-cardio"),
                None,
                [],
                self.db_path,
            )
        self.assertIsNone(store.get_user_profile(self.db_path))
        self.assertEqual(store.get_daily_log("2026-10-18", self.db_path).calories, 2400)


if __name__ == "__main__":
    unittest.main()
