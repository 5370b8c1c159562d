"""Coach bar message selection.

A prioritized decision table: rules are evaluated top to bottom and the
first one whose predicate holds produces the message. The order of
COACH_RULES is the contract; several predicates overlap and rely on
earlier rules having already claimed a state.
"""

from collections import namedtuple

from fitness_coach.config import (
    EVENING_HOUR,
    MORNING_REMINDER_HOURS,
    PACING_BAND,
    PACING_END_HOUR,
    PACING_START_HOUR,
    WARNING_FRACTION,
)
from fitness_coach.models import CoachState, CoachTargets, DailyLog

CoachRule = namedtuple("CoachRule", ["name", "applies", "render"])

MSG_BEGIN_WITH_WEIGHT = "Please Begin by logging your weight."
MSG_BEGIN_DAY = "Begin logging your day to start!"
MSG_MORNING_WEIGHT = "Don’t forget to log your weight."
MSG_EVENING_WEIGHT = "Everything’s done — log your weight if you want a complete day."
MSG_NAILED_IT = "You nailed today! Great job."
MSG_MOVEMENT_OVER = "Movement complete. Now keep calories under target tomorrow."
MSG_MOVEMENT_UNDER = "Movement complete. Nice work keeping calories under target."
MSG_CALORIE_WARNING = "Careful—you're at 75% of your calorie target."
MSG_CLOSE = "You’re close—keep it up!"
MSG_STEPS_DONE_WORK_AZM = "Yay! Steps complete. Now just work on AZM."
MSG_STEPS_DONE_LOG_AZM = "Yay! Steps complete. Now just log AZM."
MSG_AZM_DONE_WORK_STEPS = "Yay! AZM complete. Now just work on steps."
MSG_AZM_DONE_LOG_STEPS = "Yay! AZM complete. Now just log steps."
MSG_LOG_CALORIES = "Log your calories."
MSG_LOG_STEPS = "Log your steps."
MSG_LOG_AZM = "Log your AZM."
MSG_LOG_WEIGHT = "Log your weight."


def _nothing_logged(s: CoachState) -> bool:
    return not (s.weight_logged or s.calories_entered or s.steps_entered or s.azm_entered)


def _only_weight_logged(s: CoachState) -> bool:
    return s.weight_logged and not (s.calories_entered or s.steps_entered or s.azm_entered)


def _in_warning_band(entered: bool, value: float, target: float) -> bool:
    return entered and WARNING_FRACTION * target <= value < target


def day_fraction(hour: float) -> float:
    """Fraction of the pacing window elapsed at `hour`, clamped to [0, 1]."""
    frac = (hour - PACING_START_HOUR) / (PACING_END_HOUR - PACING_START_HOUR)
    return min(max(frac, 0), 1)


def pacing_label(value: float, target: float, day_frac: float) -> str:
    """"ahead", "behind" or "on" relative to the elapsed share of the day."""
    frac = value / (target or 1)
    if frac > day_frac + PACING_BAND:
        return "ahead"
    if frac < day_frac - PACING_BAND:
        return "behind"
    return "on"


def _pacing_summary(s: CoachState) -> str:
    frac = day_fraction(s.current_hour)
    cals = pacing_label(s.calories_eaten, s.targets.calories, frac)
    steps = pacing_label(s.steps, s.targets.steps, frac)
    azm = pacing_label(s.azm, s.targets.azm, frac)
    return f"Cals {cals}, steps {steps}, AZM {azm} pace."


def _fixed(message: str):
    return lambda s: message


COACH_RULES = (
    CoachRule("nothing_logged", _nothing_logged, _fixed(MSG_BEGIN_WITH_WEIGHT)),
    CoachRule("only_weight_logged", _only_weight_logged, _fixed(MSG_BEGIN_DAY)),
    CoachRule(
        "morning_weight_reminder",
        lambda s: MORNING_REMINDER_HOURS[0] <= s.current_hour < MORNING_REMINDER_HOURS[1]
        and not s.weight_logged,
        _fixed(MSG_MORNING_WEIGHT),
    ),
    CoachRule(
        "evening_weight_reminder",
        lambda s: s.current_hour >= EVENING_HOUR and s.calories_hit and s.steps_hit
        and s.azm_hit and not s.weight_logged,
        _fixed(MSG_EVENING_WEIGHT),
    ),
    CoachRule(
        "full_completion",
        lambda s: s.weight_logged and s.calories_hit and s.steps_hit and s.azm_hit,
        _fixed(MSG_NAILED_IT),
    ),
    CoachRule(
        "movement_complete_over_calories",
        lambda s: s.steps_hit and s.azm_hit and s.calories_entered
        and s.calories_eaten > s.targets.calories,
        _fixed(MSG_MOVEMENT_OVER),
    ),
    CoachRule(
        "movement_complete_under_calories",
        lambda s: s.steps_hit and s.azm_hit and s.calories_entered,
        _fixed(MSG_MOVEMENT_UNDER),
    ),
    CoachRule(
        "calorie_warning",
        lambda s: _in_warning_band(s.calories_entered, s.calories_eaten, s.targets.calories),
        _fixed(MSG_CALORIE_WARNING),
    ),
    CoachRule(
        "steps_close",
        lambda s: _in_warning_band(s.steps_entered, s.steps, s.targets.steps),
        _fixed(MSG_CLOSE),
    ),
    CoachRule(
        "azm_close",
        lambda s: _in_warning_band(s.azm_entered, s.azm, s.targets.azm),
        _fixed(MSG_CLOSE),
    ),
    CoachRule(
        "steps_done_azm_short",
        lambda s: s.steps_hit and s.azm_entered and s.azm < s.targets.azm,
        _fixed(MSG_STEPS_DONE_WORK_AZM),
    ),
    CoachRule(
        "steps_done_azm_unlogged",
        lambda s: s.steps_hit and not s.azm_entered,
        _fixed(MSG_STEPS_DONE_LOG_AZM),
    ),
    CoachRule(
        "azm_done_steps_short",
        lambda s: s.azm_hit and s.steps_entered and s.steps < s.targets.steps,
        _fixed(MSG_AZM_DONE_WORK_STEPS),
    ),
    CoachRule(
        "azm_done_steps_unlogged",
        lambda s: s.azm_hit and not s.steps_entered,
        _fixed(MSG_AZM_DONE_LOG_STEPS),
    ),
    CoachRule("log_calories", lambda s: not s.calories_entered, _fixed(MSG_LOG_CALORIES)),
    CoachRule("log_steps", lambda s: not s.steps_entered, _fixed(MSG_LOG_STEPS)),
    CoachRule("log_azm", lambda s: not s.azm_entered, _fixed(MSG_LOG_AZM)),
    CoachRule("log_weight", lambda s: not s.weight_logged, _fixed(MSG_LOG_WEIGHT)),
    CoachRule("pacing_summary", lambda s: True, _pacing_summary),
)


def matching_rule(state: CoachState) -> CoachRule:
    """Return the first rule whose predicate holds for `state`."""
    # pacing_summary matches every state, so a rule is always found
    return next(rule for rule in COACH_RULES if rule.applies(state))


def select_coach_message(state: CoachState) -> str:
    """Pick exactly one coach message for the day."""
    rule = matching_rule(state)
    return rule.render(state)


def build_coach_state(log: DailyLog, calories: float, steps: float, azm: float,
                      current_hour: int) -> CoachState:
    """Derive a CoachState from a day's log and its targets."""
    return CoachState(
        current_hour=current_hour,
        weight_logged=log.weight_logged,
        calories_entered=log.calories_entered,
        steps_entered=log.steps_entered,
        azm_entered=log.azm_entered,
        calories_eaten=log.calories,
        steps=log.steps,
        azm=log.azm,
        targets=CoachTargets(calories=calories, steps=steps, azm=azm),
    )


def message_tone(message: str) -> str:
    """Classify a message for display: praise, warning, success or info."""
    if "nailed" in message or "Great job" in message:
        return "praise"
    if "Careful" in message or "behind" in message:
        return "warning"
    if "complete" in message or "Yay" in message:
        return "success"
    return "info"
