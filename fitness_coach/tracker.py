"""Daily tracking: targets, adherence and coaching for a given day.

The daily pass always calibrates before it computes targets so a fresh
bias adjustment is reflected in the same pass.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

import pandas as pd

from fitness_coach.adherence import get_plan_achieved_delta, get_plan_status_label
from fitness_coach.calculators import (
    activity_targets,
    calculate_bmr,
    calculate_calorie_target,
    calculate_stride_meters,
    calculate_tdee_base,
    estimate_burn,
    get_burn_range,
    get_planned_daily_delta,
    is_valid_timezone,
)
from fitness_coach.calibrator import run_calibration
from fitness_coach.coach import build_coach_state, select_coach_message
from fitness_coach.config import (
    CALIBRATION_HISTORY_LIMIT,
    DB_PATH,
    EDITABLE_HISTORY_DAYS,
    REFERENCE_WEIGHT_ENTRIES,
)
from fitness_coach.models import (
    AdaptiveModel,
    DailyLog,
    DailyTargets,
    DayReport,
    GoalSettings,
    UserProfile,
)
from fitness_coach import store

logger = logging.getLogger(__name__)


def local_now(profile: Optional[UserProfile] = None) -> datetime:
    """Current time in the profile's timezone.

    UTC without a profile, or when the stored zone cannot be loaded.
    """
    if profile is None:
        return datetime.now(timezone.utc)
    if not is_valid_timezone(profile.timezone):
        logger.warning("Unknown timezone %r, falling back to UTC", profile.timezone)
        return datetime.now(timezone.utc)
    return datetime.now(ZoneInfo(profile.timezone))


def reference_weight(logs: list, profile: UserProfile, day: date) -> float:
    """Mean of the latest seven weigh-ins before `day`, else the starting weight."""
    earlier = sorted(
        (log for log in logs if log.date_iso < day.isoformat() and log.weight_logged),
        key=lambda log: log.date_iso,
        reverse=True,
    )[:REFERENCE_WEIGHT_ENTRIES]
    if not earlier:
        return profile.starting_weight_lb
    return sum(log.weight_lb for log in earlier) / len(earlier)


def compute_targets(
    profile: UserProfile,
    goals: GoalSettings,
    model: AdaptiveModel,
    weight_lb: float,
) -> DailyTargets:
    """Targets for a given body weight."""
    bmr = calculate_bmr(profile, weight_lb)
    tdee_base = calculate_tdee_base(bmr, goals.activity_style)
    movement = activity_targets(goals.activity_style)
    return DailyTargets(
        bmr=bmr,
        tdee_base=tdee_base,
        tdee_bias=model.tdee_bias,
        planned_daily_delta=get_planned_daily_delta(goals.mode, goals.goal_rate),
        calories=calculate_calorie_target(tdee_base, model.tdee_bias, goals.mode, goals.goal_rate),
        steps=movement["steps"],
        azm=movement["azm"],
        workouts_per_week=movement["workouts"],
        reference_weight_lb=weight_lb,
    )


def compute_daily_targets(
    profile: UserProfile,
    goals: GoalSettings,
    model: AdaptiveModel,
    logs: list,
    day: date,
) -> DailyTargets:
    return compute_targets(profile, goals, model, reference_weight(logs, profile, day))


def week_start(day: date) -> date:
    """Sunday that starts the week containing `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def count_workouts_this_week(logs: list, day: date) -> int:
    start = week_start(day).isoformat()
    end = day.isoformat()
    return sum(1 for log in logs if start <= log.date_iso <= end and log.workout_done)


def rolling_average_weight(logs: list) -> Optional[float]:
    """Mean weight over the trailing seven log entries, if any were weighed."""
    recent = sorted(logs, key=lambda log: log.date_iso)[-7:]
    weights = [log.weight_lb for log in recent if log.weight_logged]
    if not weights:
        return None
    return sum(weights) / len(weights)


def is_goal_reached(goals: GoalSettings, avg_weight: Optional[float]) -> bool:
    if not avg_weight or avg_weight <= 0 or not goals.target_weight_lb:
        return False
    if goals.mode == "fat-loss":
        return avg_weight <= goals.target_weight_lb
    if goals.mode == "muscle-gain":
        return avg_weight >= goals.target_weight_lb
    return False


def is_editable_date(day: date, today: date) -> bool:
    """Logs can be edited for today and up to a week back, never the future."""
    return today - timedelta(days=EDITABLE_HISTORY_DAYS) <= day <= today


def build_day_report(
    profile: UserProfile,
    goals: GoalSettings,
    model: AdaptiveModel,
    logs: list,
    day: date,
    current_hour: int,
) -> DayReport:
    """Assemble targets, adherence and the coach message for one day."""
    log = next((item for item in logs if item.date_iso == day.isoformat()), None)
    if log is None:
        log = DailyLog(date_iso=day.isoformat())

    targets = compute_daily_targets(profile, goals, model, logs, day)
    achieved = get_plan_achieved_delta(
        mode=goals.mode,
        planned_daily_delta=targets.planned_daily_delta,
        calories_eaten=log.calories,
        calorie_target=targets.calories,
        steps=log.steps,
        steps_target=targets.steps,
        azm=log.azm,
        azm_target=targets.azm,
    )
    state = build_coach_state(log, targets.calories, targets.steps, targets.azm, current_hour)

    weight = log.weight_lb if log.weight_logged else targets.reference_weight_lb
    burn = estimate_burn(
        weight,
        targets.bmr,
        log.steps,
        calculate_stride_meters(profile.height_cm, profile.sex),
        log.azm,
    )

    return DayReport(
        day=day,
        targets=targets,
        log=log,
        achieved_delta=achieved,
        status_label=get_plan_status_label(goals.mode, achieved),
        coach_message=select_coach_message(state),
        estimated_burn=burn,
        burn_range=get_burn_range(burn),
        workouts_this_week=count_workouts_this_week(logs, day),
        goal_reached=is_goal_reached(goals, targets.reference_weight_lb),
    )


def run_daily_pass(
    day: Optional[date] = None,
    now: Optional[datetime] = None,
    db_path: str = DB_PATH,
):
    """Calibrate, then build the report for `day` from the updated state.

    Returns (DayReport, CalibrationResult or None). The report is None when
    onboarding has not been completed.
    """
    profile = store.get_user_profile(db_path)
    goals = store.get_goal_settings(db_path)
    if profile is None or goals is None:
        logger.debug("Daily pass skipped: profile or goals missing")
        return None, None

    if now is None:
        now = local_now(profile)
    if day is None:
        day = now.date()

    calibration = run_calibration(now, db_path)
    model = store.get_adaptive_model(db_path)
    logs = store.get_daily_logs(CALIBRATION_HISTORY_LIMIT, db_path)

    report = build_day_report(profile, goals, model, logs, day, now.hour)
    return report, calibration


def progress_frame(
    profile: UserProfile,
    goals: GoalSettings,
    model: AdaptiveModel,
    logs: list,
) -> pd.DataFrame:
    """One row per log with its calorie target and achieved delta, oldest first."""
    rows = []
    for log in sorted(logs, key=lambda item: item.date_iso):
        weight = log.weight_lb if log.weight_logged else profile.starting_weight_lb
        targets = compute_targets(profile, goals, model, weight)
        achieved = get_plan_achieved_delta(
            mode=goals.mode,
            planned_daily_delta=targets.planned_daily_delta,
            calories_eaten=log.calories,
            calorie_target=targets.calories,
            steps=log.steps,
            steps_target=targets.steps,
            azm=log.azm,
            azm_target=targets.azm,
        )
        rows.append({
            "Date": pd.Timestamp(log.date_iso),
            "Weight": log.weight_lb if log.weight_logged else None,
            "Calories": log.calories,
            "Steps": log.steps,
            "AZM": log.azm,
            "Target": targets.calories,
            "Delta": achieved if achieved is not None else 0,
        })

    columns = ["Date", "Weight", "Calories", "Steps", "AZM", "Target", "Delta"]
    return pd.DataFrame(rows, columns=columns)


def weekly_weight_averages(frame: pd.DataFrame) -> pd.DataFrame:
    """Average logged weight per week (weeks starting Sunday)."""
    weighed = frame.dropna(subset=["Weight"])
    if weighed.empty:
        return pd.DataFrame(columns=["Week", "Weight", "Weigh-ins"])
    grouped = weighed.groupby(pd.Grouper(key="Date", freq="W-SAT"))["Weight"]
    summary = pd.DataFrame({"Weight": grouped.mean(), "Weigh-ins": grouped.count()})
    summary = summary[summary["Weigh-ins"] > 0].reset_index()
    summary["Week"] = summary["Date"] - pd.Timedelta(days=6)
    return summary[["Week", "Weight", "Weigh-ins"]]


def format_day_report(report: DayReport) -> str:
    """Format a day report for display."""
    log = report.log
    targets = report.targets
    weight = f"{log.weight_lb:.1f} lb" if log.weight_logged else "not logged"
    achieved = f"{report.achieved_delta:+.0f} kcal" if report.achieved_delta is not None else "N/A"

    lines = [
        f"Day: {report.day.isoformat()}",
        "=" * 45,
        f"Coach: {report.coach_message}",
        "",
        f"Weight:    {weight}",
        f"Calories:  {log.calories:.0f} / {targets.calories} kcal",
        f"Steps:     {log.steps} / {targets.steps}",
        f"AZM:       {log.azm} / {targets.azm} min",
        f"Workouts:  {report.workouts_this_week} / {targets.workouts_per_week} this week",
        "",
        f"{report.status_label}: {achieved} (plan {targets.planned_daily_delta:+.0f} kcal)",
        f"Estimated burn: {report.estimated_burn} kcal "
        f"({report.burn_range[0]}-{report.burn_range[1]})",
    ]
    if report.goal_reached:
        lines.append("\nTarget weight reached!")
    return "\n".join(lines)
