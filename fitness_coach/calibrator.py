"""Adaptive TDEE bias calibration.

A weekly feedback loop. The average weight of the trailing seven log
entries is compared with the seven before them, and the observed weekly
change is compared with the change the current plan implies:

    actual_week_change  = current_avg - previous_avg          (lb/week)
    planned_week_change = planned_daily_delta * 7 / 3500      (lb/week)
    gap                 = actual_week_change - planned_week_change

A gap beyond +/-0.15 lb/week moves the bias 75 kcal/day in the correcting
direction: gaining faster (or losing slower) than planned lowers targets,
losing faster (or gaining slower) raises them. The bias stays within
[-500, 500] kcal/day.

Calibration is skipped, silently, whenever the data cannot support it.
Only a real adjustment stamps `last_calibration_date`; an in-tolerance
check leaves the model untouched so the next pass checks again.
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from fitness_coach.calculators import get_planned_daily_delta
from fitness_coach.config import (
    CALIBRATION_HISTORY_LIMIT,
    CALIBRATION_INTERVAL_DAYS,
    CALIBRATION_MIN_CALORIE_ENTRIES,
    CALIBRATION_MIN_HISTORY_DAYS,
    CALIBRATION_MIN_WEIGHT_ENTRIES,
    CALIBRATION_STEP_KCAL,
    CALIBRATION_TOLERANCE_LB,
    CALIBRATION_WINDOW_DAYS,
    DAYS_PER_WEEK,
    DB_PATH,
    KCAL_PER_LB,
    TDEE_BIAS_MAX,
    TDEE_BIAS_MIN,
)
from fitness_coach.models import AdaptiveModel, CalibrationResult, GoalSettings
from fitness_coach import store

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def clamp_bias(value: float) -> float:
    return min(max(value, TDEE_BIAS_MIN), TDEE_BIAS_MAX)


def parse_timestamp(value: Optional[str]) -> datetime:
    """Parse a stored ISO timestamp; missing values map to the Unix epoch."""
    if not value:
        return EPOCH
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def window_average_weight(window: list) -> Optional[float]:
    """Mean logged weight in a window, or None with fewer than four weigh-ins."""
    weights = [log.weight_lb for log in window if log.weight_logged]
    if len(weights) < CALIBRATION_MIN_WEIGHT_ENTRIES:
        return None
    return sum(weights) / len(weights)


def is_calibration_due(model: AdaptiveModel, now: datetime) -> bool:
    last = parse_timestamp(model.last_calibration_date)
    return now - last > timedelta(days=CALIBRATION_INTERVAL_DAYS)


def decide_adjustment(gap: float) -> int:
    """Bias change in kcal/day for a weekly gap in lb."""
    if gap > CALIBRATION_TOLERANCE_LB:
        return -CALIBRATION_STEP_KCAL
    if gap < -CALIBRATION_TOLERANCE_LB:
        return CALIBRATION_STEP_KCAL
    return 0


def evaluate_calibration(
    logs: list,
    model: AdaptiveModel,
    goals: GoalSettings,
    now: datetime,
) -> Optional[CalibrationResult]:
    """Decide whether to adjust the bias. Pure; does not persist anything.

    Args:
        logs: DailyLog records in any order; only the newest fourteen are used.
        model: The current adaptive model.
        goals: Active goal settings, for the planned weekly change.
        now: Timezone-aware current time.

    Returns:
        A CalibrationResult when an adjustment fires, otherwise None.
    """
    ordered = sorted(logs, key=lambda log: log.date_iso)
    if len(ordered) < CALIBRATION_MIN_HISTORY_DAYS:
        logger.debug("Calibration skipped: %d days of history", len(ordered))
        return None

    window = CALIBRATION_WINDOW_DAYS
    current_week = ordered[-window:]
    previous_week = ordered[-2 * window:-window]

    current_avg = window_average_weight(current_week)
    previous_avg = window_average_weight(previous_week)
    if current_avg is None or previous_avg is None:
        logger.debug("Calibration skipped: not enough weigh-ins")
        return None

    calorie_days = sum(1 for log in current_week if log.calories_entered)
    if calorie_days < CALIBRATION_MIN_CALORIE_ENTRIES:
        logger.debug("Calibration skipped: %d days with calories logged", calorie_days)
        return None

    if not is_calibration_due(model, now):
        logger.debug("Calibration skipped: last run %s", model.last_calibration_date)
        return None

    actual_week_change = current_avg - previous_avg
    planned_daily_delta = get_planned_daily_delta(goals.mode, goals.goal_rate)
    planned_week_change = planned_daily_delta * DAYS_PER_WEEK / KCAL_PER_LB
    gap = actual_week_change - planned_week_change

    adjustment = decide_adjustment(gap)
    if adjustment == 0:
        logger.debug("Calibration within tolerance: gap %.3f lb/week", gap)
        return None

    return CalibrationResult(
        adjustment=adjustment,
        previous_bias=model.tdee_bias,
        new_bias=clamp_bias(model.tdee_bias + adjustment),
        actual_week_change=actual_week_change,
        planned_week_change=planned_week_change,
        gap=gap,
        calibrated_at=now.isoformat(),
    )


def apply_calibration(model: AdaptiveModel, result: CalibrationResult) -> AdaptiveModel:
    return replace(model, tdee_bias=result.new_bias, last_calibration_date=result.calibrated_at)


def run_calibration(
    now: Optional[datetime] = None,
    db_path: str = DB_PATH,
) -> Optional[CalibrationResult]:
    """Check the stored history and persist a bias adjustment if one is due.

    Returns the applied CalibrationResult, or None when nothing changed.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    goals = store.get_goal_settings(db_path)
    if goals is None:
        logger.debug("Calibration skipped: no goal settings")
        return None

    model = store.get_adaptive_model(db_path)
    logs = store.get_daily_logs(CALIBRATION_HISTORY_LIMIT, db_path)

    result = evaluate_calibration(logs, model, goals, now)
    if result is None:
        return None

    store.set_adaptive_model(apply_calibration(model, result), db_path)
    logger.info(result.message)
    return result


def set_manual_bias(value: float, db_path: str = DB_PATH) -> AdaptiveModel:
    """Manual override of the bias. Leaves the calibration schedule alone."""
    model = store.get_adaptive_model(db_path)
    updated = replace(model, tdee_bias=clamp_bias(value))
    store.set_adaptive_model(updated, db_path)
    logger.info("TDEE bias manually set to %+.0f kcal", updated.tdee_bias)
    return updated
