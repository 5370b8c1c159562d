"""Tests for plan adherence and status labels."""

import unittest

from fitness_coach.adherence import get_plan_achieved_delta, get_plan_status_label


def fat_loss_day(calories=2000, steps=10000, azm=30):
    return get_plan_achieved_delta(
        mode="fat-loss",
        planned_daily_delta=-500,
        calories_eaten=calories,
        calorie_target=2000,
        steps=steps,
        steps_target=10000,
        azm=azm,
        azm_target=30,
    )


class TestAchievedDelta(unittest.TestCase):
    def test_perfect_day_matches_plan(self):
        self.assertAlmostEqual(fat_loss_day(), -500)

    def test_under_eating_deepens_deficit(self):
        self.assertAlmostEqual(fat_loss_day(calories=1500), -1000)

    def test_over_eating_erodes_deficit(self):
        self.assertAlmostEqual(fat_loss_day(calories=2500), 0)

    def test_no_movement_cancels_deficit(self):
        self.assertAlmostEqual(fat_loss_day(steps=0, azm=0), 0)

    def test_half_movement(self):
        # movement fraction 0.5 -> penalty 250
        self.assertAlmostEqual(fat_loss_day(steps=5000, azm=15), -250)

    def test_movement_above_target_is_capped(self):
        self.assertAlmostEqual(fat_loss_day(steps=20000, azm=90), -500)

    def test_no_calories_is_undefined(self):
        self.assertIsNone(fat_loss_day(calories=0))

    def test_zero_targets_do_not_divide_by_zero(self):
        result = get_plan_achieved_delta("fat-loss", -500, 2000, 2000, 0, 0, 0, 0)
        self.assertAlmostEqual(result, 0)

    def test_maintenance_has_no_movement_penalty(self):
        result = get_plan_achieved_delta("maintenance", 0, 2600, 2500, 0, 9000, 0, 30)
        self.assertAlmostEqual(result, 100)

    def test_repeat_calls_are_identical(self):
        self.assertEqual(fat_loss_day(1800, 7000, 12), fat_loss_day(1800, 7000, 12))


class TestStatusLabel(unittest.TestCase):
    def test_undefined_uses_placeholder(self):
        self.assertEqual(get_plan_status_label("muscle-gain", None), "Deficit")

    def test_maintenance(self):
        self.assertEqual(get_plan_status_label("maintenance", -200), "Plan Balance")
        self.assertEqual(get_plan_status_label("maintenance", 200), "Plan Balance")

    def test_fat_loss(self):
        self.assertEqual(get_plan_status_label("fat-loss", -1), "Deficit")
        self.assertEqual(get_plan_status_label("fat-loss", 0), "Surplus")

    def test_muscle_gain(self):
        self.assertEqual(get_plan_status_label("muscle-gain", 1), "Surplus")
        self.assertEqual(get_plan_status_label("muscle-gain", 0), "Deficit")


if __name__ == "__main__":
    unittest.main()
