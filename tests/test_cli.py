"""Tests for command-line argument parsing."""

import unittest

from fitness_coach.cli import build_parser, cmd_bias_set, cmd_log_add, cmd_today


class TestParser(unittest.TestCase):
    def setUp(self):
        self.parser = build_parser()

    def test_log_add(self):
        args = self.parser.parse_args(
            ["log", "add", "--date", "2026-10-19", "--calories", "1850", "--steps", "9200"]
        )
        self.assertIs(args.func, cmd_log_add)
        self.assertEqual(args.calories, 1850)
        self.assertEqual(args.steps, 9200)
        self.assertIsNone(args.weight)
        self.assertIsNone(args.workout)

    def test_workout_flag(self):
        self.assertTrue(self.parser.parse_args(["log", "add", "--workout"]).workout)
        self.assertFalse(self.parser.parse_args(["log", "add", "--no-workout"]).workout)

    def test_negative_bias(self):
        args = self.parser.parse_args(["bias", "set", "-100"])
        self.assertIs(args.func, cmd_bias_set)
        self.assertEqual(args.value, -100)

    def test_today_defaults_to_current_date(self):
        args = self.parser.parse_args(["today"])
        self.assertIs(args.func, cmd_today)
        self.assertIsNone(args.date)

    def test_goal_mode_is_validated(self):
        with self.assertRaises(SystemExit):
            self.parser.parse_args(["goals", "set", "--mode", "bulk"])


if __name__ == "__main__":
    unittest.main()
