"""Plan adherence: the deficit or surplus a user actually ran on a day.

The result uses the same sign convention as the planned daily delta
(negative = deficit, positive = surplus) so the two compare directly.
A perfect day lands exactly on the plan, under-eating deepens the deficit,
over-eating erodes it, and missed movement claws back part of the plan.
"""

from typing import Optional


def _capped_fraction(value: float, target: float) -> float:
    return min(value / (target or 1), 1)


def get_plan_achieved_delta(
    mode: str,
    planned_daily_delta: float,
    calories_eaten: float,
    calorie_target: float,
    steps: float,
    steps_target: float,
    azm: float,
    azm_target: float,
) -> Optional[float]:
    """Return the achieved daily delta, or None when no calories are logged.

    `mode` does not change the arithmetic; it is accepted so callers can
    pass the same arguments they pass to `get_plan_status_label`.
    """
    if calories_eaten == 0:
        return None

    # Target = TDEE + planned delta, so this recovers the TDEE behind the plan
    theoretical_total_burn = calorie_target - planned_daily_delta

    movement_frac = (_capped_fraction(steps, steps_target) + _capped_fraction(azm, azm_target)) / 2
    movement_penalty = abs(planned_daily_delta) * (1 - movement_frac)

    achieved = (theoretical_total_burn - movement_penalty) - calories_eaten
    return -achieved


def get_plan_status_label(mode: str, achieved_delta: Optional[float]) -> str:
    """Display label for an achieved delta.

    "Deficit" doubles as the placeholder when there is no result yet.
    """
    if achieved_delta is None:
        return "Deficit"
    if mode == "maintenance":
        return "Plan Balance"
    if mode == "fat-loss":
        return "Deficit" if achieved_delta < 0 else "Surplus"
    if mode == "muscle-gain":
        return "Surplus" if achieved_delta > 0 else "Deficit"
    return "Delta"
