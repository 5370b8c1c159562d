"""JSON backup and restore.

Exports use camelCase record field names so a
backup taken in one install restores cleanly in another.
"""

import json
import logging
import sqlite3

from fitness_coach.calculators import is_valid_timezone
from fitness_coach.calibrator import clamp_bias
from fitness_coach.config import ACTIVITY_STYLES, DB_PATH, DEFAULT_TIMEZONE, GOAL_MODES, SEXES
from fitness_coach.models import AdaptiveModel, DailyLog, GoalSettings, UserProfile
from fitness_coach import store

logger = logging.getLogger(__name__)

EXPORT_LOG_LIMIT = 1000


def profile_to_dict(profile: UserProfile) -> dict:
    return {
        "id": profile.id,
        "sex": profile.sex,
        "ageYears": profile.age_years,
        "heightCm": profile.height_cm,
        "startingWeightLb": profile.starting_weight_lb,
        "timezone": profile.timezone,
        "createdAt": profile.created_at,
        "updatedAt": profile.updated_at,
    }


def profile_from_dict(data: dict) -> UserProfile:
    return UserProfile(
        sex=data["sex"],
        age_years=data["ageYears"],
        height_cm=data["heightCm"],
        starting_weight_lb=data["startingWeightLb"],
        timezone=data.get("timezone") or DEFAULT_TIMEZONE,
        created_at=data.get("createdAt"),
        updated_at=data.get("updatedAt"),
    )


def goals_to_dict(goals: GoalSettings) -> dict:
    return {
        "id": goals.id,
        "mode": goals.mode,
        "goalRate": goals.goal_rate,
        "activityStyle": goals.activity_style,
        "targetWeightLb": goals.target_weight_lb,
        "targetWeightCustomized": goals.target_weight_customized,
        "targetPhaseWeeks": goals.target_phase_weeks,
        "startDateISO": goals.start_date,
        "updatedAt": goals.updated_at,
    }


def goals_from_dict(data: dict) -> GoalSettings:
    return GoalSettings(
        mode=data["mode"],
        goal_rate=data.get("goalRate", 0),
        activity_style=data["activityStyle"],
        target_weight_lb=data.get("targetWeightLb"),
        target_weight_customized=bool(data.get("targetWeightCustomized", False)),
        target_phase_weeks=data.get("targetPhaseWeeks"),
        start_date=data.get("startDateISO"),
        updated_at=data.get("updatedAt"),
    )


def adaptive_to_dict(model: AdaptiveModel) -> dict:
    data = {"id": model.id, "tdeeBias": model.tdee_bias}
    if model.last_calibration_date:
        data["lastCalibrationDate"] = model.last_calibration_date
    return data


def adaptive_from_dict(data: dict) -> AdaptiveModel:
    return AdaptiveModel(
        tdee_bias=data.get("tdeeBias", 0),
        last_calibration_date=data.get("lastCalibrationDate"),
    )


def log_to_dict(log: DailyLog) -> dict:
    data = {
        "dateISO": log.date_iso,
        "calories": log.calories,
        "steps": log.steps,
        "azm": log.azm,
        "workoutDone": log.workout_done,
        "createdAt": log.created_at,
        "updatedAt": log.updated_at,
    }
    if log.weight_lb is not None:
        data["weightLb"] = log.weight_lb
    return data


def log_from_dict(data: dict) -> DailyLog:
    return DailyLog(
        date_iso=data["dateISO"],
        weight_lb=data.get("weightLb"),
        calories=data.get("calories", 0),
        steps=data.get("steps", 0),
        azm=data.get("azm", 0),
        workout_done=bool(data.get("workoutDone", False)),
        created_at=data.get("createdAt"),
        updated_at=data.get("updatedAt"),
    )


def export_data(db_path: str = DB_PATH) -> dict:
    """Snapshot every record as a JSON-serializable dict."""
    profile = store.get_user_profile(db_path)
    goals = store.get_goal_settings(db_path)
    return {
        "profile": profile_to_dict(profile) if profile else None,
        "goals": goals_to_dict(goals) if goals else None,
        "adaptive": adaptive_to_dict(store.get_adaptive_model(db_path)),
        "logs": [log_to_dict(log) for log in store.get_daily_logs(EXPORT_LOG_LIMIT, db_path)],
    }


def write_export(path: str, db_path: str = DB_PATH) -> int:
    """Write a JSON backup to `path`. Returns the number of logs written."""
    data = export_data(db_path)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    logger.info("Exported %d daily logs to %s", len(data["logs"]), path)
    return len(data["logs"])


def validate_records(profile: UserProfile, goals: GoalSettings) -> None:
    """Check values the schema would reject, before anything is touched.

    Raises:
        ValueError: naming the first bad field.
    """
    if profile.sex not in SEXES:
        raise ValueError(f"Invalid backup format: unknown sex {profile.sex!r}")
    if not is_valid_timezone(profile.timezone):
        raise ValueError(f"Invalid backup format: unknown timezone {profile.timezone!r}")
    if goals.mode not in GOAL_MODES:
        raise ValueError(f"Invalid backup format: unknown mode {goals.mode!r}")
    if goals.activity_style not in ACTIVITY_STYLES:
        raise ValueError(f"Invalid backup format: unknown activity style {goals.activity_style!r}")


def import_data(data: dict, db_path: str = DB_PATH) -> int:
    """Replace all stored data with a backup. Returns the number of logs restored.

    The wipe and the restore share one transaction, so a rejected backup
    leaves the existing data as it was.

    Raises:
        ValueError: if the payload lacks a profile or goals, or holds
            values that cannot be stored.
    """
    if not isinstance(data, dict) or not data.get("profile") or not data.get("goals"):
        raise ValueError("Invalid backup format: profile and goals are required")

    try:
        profile = profile_from_dict(data["profile"])
        goals = goals_from_dict(data["goals"])
        adaptive = (
            adaptive_from_dict(data["adaptive"]) if data.get("adaptive") else None
        )
        logs = [log_from_dict(item) for item in data.get("logs") or []]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Invalid backup format: {e}") from e

    validate_records(profile, goals)
    if adaptive:
        adaptive.tdee_bias = clamp_bias(adaptive.tdee_bias)

    try:
        store.replace_all_data(profile, goals, adaptive, logs, db_path)
    except sqlite3.IntegrityError as e:
        raise ValueError(f"Invalid backup format: {e}") from e

    logger.info("Imported backup with %d daily logs", len(logs))
    return len(logs)


def read_import(path: str, db_path: str = DB_PATH) -> int:
    """Restore from a JSON backup file."""
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid backup file: {e}") from e
    return import_data(data, db_path)
