"""Persistence layer for profiles, goals, the adaptive model and daily logs.

Every record is written whole: profile, goals and the adaptive model are
singletons keyed by a fixed id, daily logs are keyed by their ISO date.
Callers that change a single field read, merge and write the full record.
"""

import logging
import time
from dataclasses import replace
from typing import Optional

from fitness_coach.config import ADAPTIVE_MODEL_ID, DB_PATH, GOALS_ID, PROFILE_ID
from fitness_coach.db import get_connection
from fitness_coach.models import AdaptiveModel, DailyLog, GoalSettings, UserProfile

logger = logging.getLogger(__name__)


def now_millis() -> int:
    return int(time.time() * 1000)


# --- User profile ---

def get_user_profile(db_path: str = DB_PATH) -> Optional[UserProfile]:
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM user_profile WHERE id = ?", (PROFILE_ID,)
        ).fetchone()
        if not row:
            return None
        return UserProfile(
            id=row["id"],
            sex=row["sex"],
            age_years=row["age_years"],
            height_cm=row["height_cm"],
            starting_weight_lb=row["starting_weight_lb"],
            timezone=row["timezone"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


def _write_user_profile(conn, profile: UserProfile) -> None:
    conn.execute(
        """INSERT OR REPLACE INTO user_profile
           (id, sex, age_years, height_cm, starting_weight_lb, timezone,
            created_at, updated_at)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
        (PROFILE_ID, profile.sex, profile.age_years, profile.height_cm,
         profile.starting_weight_lb, profile.timezone,
         profile.created_at, profile.updated_at),
    )


def set_user_profile(profile: UserProfile, db_path: str = DB_PATH) -> None:
    with get_connection(db_path) as conn:
        _write_user_profile(conn, profile)


# --- Goal settings ---

def get_goal_settings(db_path: str = DB_PATH) -> Optional[GoalSettings]:
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM goal_settings WHERE id = ?", (GOALS_ID,)
        ).fetchone()
        if not row:
            return None
        return GoalSettings(
            id=row["id"],
            mode=row["mode"],
            goal_rate=row["goal_rate"],
            activity_style=row["activity_style"],
            target_weight_lb=row["target_weight_lb"],
            target_weight_customized=bool(row["target_weight_customized"]),
            target_phase_weeks=row["target_phase_weeks"],
            start_date=row["start_date"],
            updated_at=row["updated_at"],
        )


def _write_goal_settings(conn, settings: GoalSettings) -> None:
    conn.execute(
        """INSERT OR REPLACE INTO goal_settings
           (id, mode, goal_rate, activity_style, target_weight_lb,
            target_weight_customized, target_phase_weeks, start_date, updated_at)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (GOALS_ID, settings.mode, settings.goal_rate, settings.activity_style,
         settings.target_weight_lb, int(settings.target_weight_customized),
         settings.target_phase_weeks, settings.start_date, settings.updated_at),
    )


def set_goal_settings(settings: GoalSettings, db_path: str = DB_PATH) -> None:
    """Replace the active goal settings. Not a merge."""
    with get_connection(db_path) as conn:
        _write_goal_settings(conn, settings)


# --- Adaptive model ---

def get_adaptive_model(db_path: str = DB_PATH) -> AdaptiveModel:
    """Return the adaptive model, creating the zero-bias default on first access."""
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM adaptive_model WHERE id = ?", (ADAPTIVE_MODEL_ID,)
        ).fetchone()
        if row:
            return AdaptiveModel(
                id=row["id"],
                tdee_bias=row["tdee_bias"],
                last_calibration_date=row["last_calibration_date"],
            )

        model = AdaptiveModel()
        conn.execute(
            "INSERT INTO adaptive_model (id, tdee_bias, last_calibration_date) VALUES (?, ?, ?)",
            (ADAPTIVE_MODEL_ID, model.tdee_bias, model.last_calibration_date),
        )
        logger.debug("Created default adaptive model")
        return model


def _write_adaptive_model(conn, model: AdaptiveModel) -> None:
    conn.execute(
        """INSERT OR REPLACE INTO adaptive_model (id, tdee_bias, last_calibration_date)
           VALUES (?, ?, ?)""",
        (ADAPTIVE_MODEL_ID, model.tdee_bias, model.last_calibration_date),
    )


def set_adaptive_model(model: AdaptiveModel, db_path: str = DB_PATH) -> None:
    with get_connection(db_path) as conn:
        _write_adaptive_model(conn, model)


# --- Daily logs ---

def _row_to_log(row) -> DailyLog:
    return DailyLog(
        date_iso=row["date_iso"],
        weight_lb=row["weight_lb"],
        calories=row["calories"],
        steps=row["steps"],
        azm=row["azm"],
        workout_done=bool(row["workout_done"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def get_daily_log(date_iso: str, db_path: str = DB_PATH) -> Optional[DailyLog]:
    with get_connection(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM daily_logs WHERE date_iso = ?", (date_iso,)
        ).fetchone()
        return _row_to_log(row) if row else None


def get_daily_logs(limit: int = 365, db_path: str = DB_PATH) -> list:
    """Most recent daily logs first, up to `limit` rows."""
    with get_connection(db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM daily_logs ORDER BY date_iso DESC LIMIT ?", (limit,)
        ).fetchall()
        return [_row_to_log(row) for row in rows]


def _write_daily_log(conn, log: DailyLog) -> None:
    conn.execute(
        """INSERT OR REPLACE INTO daily_logs
           (date_iso, weight_lb, calories, steps, azm, workout_done,
            created_at, updated_at)
           VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
        (log.date_iso, log.weight_lb, log.calories, log.steps, log.azm,
         int(log.workout_done), log.created_at, log.updated_at),
    )


def upsert_daily_log(log: DailyLog, db_path: str = DB_PATH) -> None:
    """Write the whole record for `log.date_iso`, replacing any existing row."""
    with get_connection(db_path) as conn:
        _write_daily_log(conn, log)


def update_daily_log(date_iso: str, db_path: str = DB_PATH, **fields) -> DailyLog:
    """Read-merge-write a single day's log. Unset fields keep their stored value."""
    existing = get_daily_log(date_iso, db_path)
    stamp = now_millis()
    if existing is None:
        existing = DailyLog(date_iso=date_iso, created_at=stamp)
    updated = replace(existing, updated_at=stamp, **fields)
    upsert_daily_log(updated, db_path)
    return updated


def delete_daily_log(date_iso: str, db_path: str = DB_PATH) -> bool:
    """Delete one day's log. Returns True if a row was removed."""
    with get_connection(db_path) as conn:
        cursor = conn.execute("DELETE FROM daily_logs WHERE date_iso = ?", (date_iso,))
        return cursor.rowcount > 0


TABLES = ("user_profile", "goal_settings", "adaptive_model", "daily_logs")


def reset_all_data(db_path: str = DB_PATH) -> None:
    """Full data wipe. Besides a restore, the only path that resets the adaptive model."""
    with get_connection(db_path) as conn:
        for table in TABLES:
            conn.execute(f"DELETE FROM {table}")
    logger.info("All data reset")


def replace_all_data(
    profile: UserProfile,
    goals: GoalSettings,
    adaptive: Optional[AdaptiveModel],
    logs: list,
    db_path: str = DB_PATH,
) -> None:
    """Wipe and restore every record in one transaction.

    Any failing write rolls back the wipe as well.
    """
    with get_connection(db_path) as conn:
        for table in TABLES:
            conn.execute(f"DELETE FROM {table}")
        _write_user_profile(conn, profile)
        _write_goal_settings(conn, goals)
        if adaptive:
            _write_adaptive_model(conn, adaptive)
        for log in logs:
            _write_daily_log(conn, log)
