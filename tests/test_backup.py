"""Tests for JSON export and import."""

import json
import os
import tempfile
import unittest

from fitness_coach import backup, store
from fitness_coach.db import init_db
from fitness_coach.models import AdaptiveModel, DailyLog, GoalSettings, UserProfile


class TestBackup(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")
        init_db(self.db_path)

        store.set_user_profile(UserProfile(
            sex="male", age_years=41, height_cm=178, starting_weight_lb=212,
            created_at=1700000000000, updated_at=1700000000000,
        ), self.db_path)
        store.set_goal_settings(GoalSettings(
            mode="fat-loss", goal_rate=0.75, activity_style="high-activity",
            target_weight_lb=190, target_weight_customized=True, start_date="2026-09-01",
        ), self.db_path)
        store.set_adaptive_model(
            AdaptiveModel(tdee_bias=-75, last_calibration_date="2026-10-10T07:00:00+00:00"),
            self.db_path,
        )
        store.upsert_daily_log(DailyLog(date_iso="2026-10-18", weight_lb=208.4,
                                        calories=2100, steps=11000, azm=45), self.db_path)
        store.upsert_daily_log(DailyLog(date_iso="2026-10-19", calories=1900,
                                        workout_done=True), self.db_path)

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def test_export_shape(self):
        data = backup.export_data(self.db_path)
        self.assertEqual(data["profile"]["startingWeightLb"], 212)
        self.assertEqual(data["goals"]["activityStyle"], "high-activity")
        self.assertEqual(data["adaptive"]["tdeeBias"], -75)
        self.assertEqual([log["dateISO"] for log in data["logs"]], ["2026-10-19", "2026-10-18"])

    def test_unset_weight_is_omitted(self):
        logs = backup.export_data(self.db_path)["logs"]
        self.assertNotIn("weightLb", logs[0])
        self.assertEqual(logs[1]["weightLb"], 208.4)

    def test_import_replaces_existing_data(self):
        data = backup.export_data(self.db_path)
        store.update_daily_log("2026-10-17", self.db_path, calories=3000)
        store.set_adaptive_model(AdaptiveModel(tdee_bias=300), self.db_path)

        count = backup.import_data(data, self.db_path)

        self.assertEqual(count, 2)
        self.assertIsNone(store.get_daily_log("2026-10-17", self.db_path))
        self.assertEqual(store.get_adaptive_model(self.db_path).tdee_bias, -75)
        restored = store.get_daily_log("2026-10-19", self.db_path)
        self.assertTrue(restored.workout_done)
        self.assertIsNone(restored.weight_lb)
        self.assertEqual(store.get_goal_settings(self.db_path).target_weight_lb, 190)

    def test_import_without_adaptive_resets_bias(self):
        data = backup.export_data(self.db_path)
        del data["adaptive"]
        backup.import_data(data, self.db_path)
        self.assertEqual(store.get_adaptive_model(self.db_path).tdee_bias, 0)

    def test_invalid_import_keeps_data(self):
        with self.assertRaises(ValueError):
            backup.import_data({"logs": []}, self.db_path)
        with self.assertRaises(ValueError):
            backup.import_data({"profile": {"sex": "male"}, "goals": {"mode": "fat-loss"}},
                               self.db_path)
        self.assertIsNotNone(store.get_user_profile(self.db_path))
        self.assertEqual(len(store.get_daily_logs(db_path=self.db_path)), 2)

    def _assert_original_data(self):
        self.assertEqual(store.get_user_profile(self.db_path).age_years, 41)
        self.assertEqual(store.get_goal_settings(self.db_path).mode, "fat-loss")
        self.assertEqual(store.get_adaptive_model(self.db_path).tdee_bias, -75)
        self.assertEqual(len(store.get_daily_logs(db_path=self.db_path)), 2)

    def test_unknown_goal_mode_keeps_data(self):
        data = backup.export_data(self.db_path)
        data["profile"]["ageYears"] = 29
        data["goals"]["mode"] = "cut"
        data["logs"] = []

        with self.assertRaises(ValueError):
            backup.import_data(data, self.db_path)
        self._assert_original_data()

    def test_unknown_enum_values_rejected(self):
        for section, key, value in (
            ("profile", "sex", "other"),
            ("profile", "timezone", "Mars/Base"),
            ("goals", "activityStyle", "couch"),
        ):
            data = backup.export_data(self.db_path)
            data[section][key] = value
            with self.assertRaises(ValueError):
                backup.import_data(data, self.db_path)
        self._assert_original_data()

    def test_failed_write_rolls_back_wipe(self):
        data = backup.export_data(self.db_path)
        data["profile"]["heightCm"] = None
        data["logs"] = []

        with self.assertRaises(ValueError):
            backup.import_data(data, self.db_path)
        self._assert_original_data()

    def test_imported_bias_is_clamped(self):
        data = backup.export_data(self.db_path)
        data["adaptive"]["tdeeBias"] = -900
        backup.import_data(data, self.db_path)
        self.assertEqual(store.get_adaptive_model(self.db_path).tdee_bias, -500)

    def test_file_round_trip(self):
        fd, path = tempfile.mkstemp(suffix=".json")
        os.close(fd)
        try:
            self.assertEqual(backup.write_export(path, self.db_path), 2)
            store.reset_all_data(self.db_path)
            self.assertEqual(backup.read_import(path, self.db_path), 2)
            self.assertEqual(store.get_user_profile(self.db_path).age_years, 41)
        finally:
            os.unlink(path)

    def test_read_import_bad_json(self):
        fd, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(fd, "w") as f:
            f.write("{not json")
        try:
            with self.assertRaises(ValueError):
                backup.read_import(path, self.db_path)
        finally:
            os.unlink(path)

    def test_export_is_json_serializable(self):
        json.dumps(backup.export_data(self.db_path))


if __name__ == "__main__":
    unittest.main()
