"""Tests for coach message selection."""

import unittest

from fitness_coach.coach import (
    MSG_AZM_DONE_LOG_STEPS,
    MSG_AZM_DONE_WORK_STEPS,
    MSG_CALORIE_WARNING,
    MSG_CLOSE,
    MSG_EVENING_WEIGHT,
    MSG_LOG_AZM,
    MSG_LOG_CALORIES,
    MSG_LOG_STEPS,
    MSG_LOG_WEIGHT,
    MSG_MORNING_WEIGHT,
    MSG_MOVEMENT_OVER,
    MSG_MOVEMENT_UNDER,
    MSG_NAILED_IT,
    MSG_STEPS_DONE_LOG_AZM,
    MSG_STEPS_DONE_WORK_AZM,
    build_coach_state,
    day_fraction,
    matching_rule,
    message_tone,
    pacing_label,
    select_coach_message,
)
from fitness_coach.models import CoachState, CoachTargets, DailyLog


def make_state(hour=12, weight=False, calories=0, steps=0, azm=0):
    """State against targets of 2000 kcal, 9000 steps and 30 AZM."""
    return CoachState(
        current_hour=hour,
        weight_logged=weight,
        calories_entered=calories > 0,
        steps_entered=steps > 0,
        azm_entered=azm > 0,
        calories_eaten=calories,
        steps=steps,
        azm=azm,
        targets=CoachTargets(calories=2000, steps=9000, azm=30),
    )


class TestOnboardingMessages(unittest.TestCase):
    def test_nothing_logged(self):
        self.assertEqual(select_coach_message(make_state()), "Please Begin by logging your weight.")

    def test_nothing_logged_beats_morning_reminder(self):
        self.assertEqual(select_coach_message(make_state(hour=8)), "Please Begin by logging your weight.")

    def test_only_weight_logged(self):
        self.assertEqual(
            select_coach_message(make_state(weight=True)),
            "Begin logging your day to start!",
        )


class TestWeightReminders(unittest.TestCase):
    def test_morning_reminder_beats_calorie_rules(self):
        state = make_state(hour=8, calories=1600)
        self.assertEqual(select_coach_message(state), MSG_MORNING_WEIGHT)

    def test_morning_window_ends_at_ten(self):
        state = make_state(hour=10, calories=1600)
        self.assertEqual(select_coach_message(state), MSG_CALORIE_WARNING)

    def test_evening_completion_pending_weight(self):
        state = make_state(hour=19, calories=1800, steps=9000, azm=30)
        self.assertEqual(select_coach_message(state), MSG_EVENING_WEIGHT)


class TestCompletion(unittest.TestCase):
    def test_full_completion(self):
        state = make_state(weight=True, calories=1800, steps=9500, azm=30)
        self.assertEqual(select_coach_message(state), MSG_NAILED_IT)
        self.assertEqual(MSG_NAILED_IT, "You nailed today! Great job.")

    def test_full_completion_in_the_morning(self):
        state = make_state(hour=7, weight=True, calories=2000, steps=9000, azm=30)
        self.assertEqual(select_coach_message(state), MSG_NAILED_IT)

    def test_movement_complete_over_calories(self):
        state = make_state(weight=True, calories=2500, steps=9000, azm=30)
        self.assertEqual(select_coach_message(state), MSG_MOVEMENT_OVER)

    def test_movement_complete_under_calories(self):
        state = make_state(calories=1800, steps=9000, azm=30)
        self.assertEqual(select_coach_message(state), MSG_MOVEMENT_UNDER)


class TestWarnings(unittest.TestCase):
    def test_calorie_warning_at_exactly_75_percent(self):
        state = make_state(calories=1500)
        self.assertEqual(select_coach_message(state), MSG_CALORIE_WARNING)

    def test_calorie_warning_not_at_target(self):
        state = make_state(calories=2000)
        self.assertNotEqual(select_coach_message(state), MSG_CALORIE_WARNING)
        self.assertEqual(select_coach_message(state), MSG_LOG_STEPS)

    def test_calorie_warning_not_over_target(self):
        state = make_state(calories=2300)
        self.assertNotEqual(select_coach_message(state), MSG_CALORIE_WARNING)

    def test_steps_close(self):
        state = make_state(calories=1000, steps=7000)
        self.assertEqual(select_coach_message(state), MSG_CLOSE)
        self.assertEqual(matching_rule(state).name, "steps_close")

    def test_azm_close(self):
        state = make_state(calories=1000, steps=1000, azm=25)
        self.assertEqual(select_coach_message(state), MSG_CLOSE)
        self.assertEqual(matching_rule(state).name, "azm_close")


class TestPartialMovement(unittest.TestCase):
    def test_steps_done_azm_short(self):
        state = make_state(calories=1000, steps=9000, azm=10)
        self.assertEqual(select_coach_message(state), MSG_STEPS_DONE_WORK_AZM)

    def test_steps_done_azm_not_logged(self):
        state = make_state(calories=1000, steps=9500)
        self.assertEqual(select_coach_message(state), MSG_STEPS_DONE_LOG_AZM)

    def test_azm_done_steps_short(self):
        state = make_state(calories=1000, steps=1000, azm=30)
        self.assertEqual(select_coach_message(state), MSG_AZM_DONE_WORK_STEPS)

    def test_azm_done_steps_not_logged(self):
        state = make_state(calories=1000, azm=35)
        self.assertEqual(select_coach_message(state), MSG_AZM_DONE_LOG_STEPS)


class TestNextAction(unittest.TestCase):
    def test_log_calories_first(self):
        state = make_state(steps=1000, azm=5)
        self.assertEqual(select_coach_message(state), MSG_LOG_CALORIES)

    def test_log_azm(self):
        state = make_state(weight=True, calories=1000, steps=1000)
        self.assertEqual(select_coach_message(state), MSG_LOG_AZM)

    def test_log_weight_last(self):
        state = make_state(calories=1000, steps=1000, azm=5)
        self.assertEqual(select_coach_message(state), MSG_LOG_WEIGHT)


class TestPacing(unittest.TestCase):
    def test_day_fraction_is_clamped(self):
        self.assertEqual(day_fraction(4), 0)
        self.assertEqual(day_fraction(14), 0.5)
        self.assertEqual(day_fraction(23), 1)

    def test_pacing_label(self):
        self.assertEqual(pacing_label(1000, 2000, 0.2), "ahead")
        self.assertEqual(pacing_label(1000, 2000, 0.8), "behind")
        self.assertEqual(pacing_label(1000, 2000, 0.6), "on")

    def test_pacing_label_zero_target(self):
        self.assertEqual(pacing_label(0, 0, 0.5), "behind")

    def test_pacing_summary(self):
        state = make_state(hour=14, weight=True, calories=1000, steps=1000, azm=5)
        self.assertEqual(select_coach_message(state), "Cals on, steps behind, AZM behind pace.")

    def test_pacing_summary_early(self):
        state = make_state(hour=6, weight=True, calories=1000, steps=1000, azm=5)
        self.assertEqual(select_coach_message(state), "Cals ahead, steps on, AZM ahead pace.")

    def test_same_state_same_message(self):
        state = make_state(hour=15, weight=True, calories=1200, steps=4000, azm=10)
        self.assertEqual(select_coach_message(state), select_coach_message(state))


class TestHelpers(unittest.TestCase):
    def test_build_coach_state(self):
        log = DailyLog(date_iso="2026-10-19", weight_lb=180.2, calories=1500, steps=0, azm=12)
        state = build_coach_state(log, 2000, 9000, 30, 9)
        self.assertTrue(state.weight_logged)
        self.assertTrue(state.calories_entered)
        self.assertFalse(state.steps_entered)
        self.assertEqual(state.targets.azm, 30)
        self.assertEqual(state.current_hour, 9)

    def test_message_tone(self):
        self.assertEqual(message_tone(MSG_NAILED_IT), "praise")
        self.assertEqual(message_tone(MSG_CALORIE_WARNING), "warning")
        self.assertEqual(message_tone(MSG_STEPS_DONE_LOG_AZM), "success")
        self.assertEqual(message_tone(MSG_LOG_CALORIES), "info")


if __name__ == "__main__":
    unittest.main()
