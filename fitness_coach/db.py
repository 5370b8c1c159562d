"""Database setup and connection handling using SQLite."""

import os
import sqlite3
from contextlib import contextmanager

from fitness_coach.config import DB_PATH

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS user_profile (
    id TEXT PRIMARY KEY,
    sex TEXT NOT NULL CHECK(sex IN ('male', 'female')),
    age_years INTEGER NOT NULL,
    height_cm REAL NOT NULL,
    starting_weight_lb REAL NOT NULL,
    timezone TEXT NOT NULL,
    created_at INTEGER,
    updated_at INTEGER
);

CREATE TABLE IF NOT EXISTS goal_settings (
    id TEXT PRIMARY KEY,
    mode TEXT NOT NULL CHECK(mode IN ('fat-loss', 'maintenance', 'muscle-gain')),
    goal_rate REAL NOT NULL DEFAULT 0,
    activity_style TEXT NOT NULL,
    target_weight_lb REAL,
    target_weight_customized INTEGER NOT NULL DEFAULT 0,
    target_phase_weeks INTEGER,
    start_date TEXT,
    updated_at INTEGER
);

CREATE TABLE IF NOT EXISTS adaptive_model (
    id TEXT PRIMARY KEY,
    tdee_bias REAL NOT NULL DEFAULT 0,
    last_calibration_date TEXT
);

CREATE TABLE IF NOT EXISTS daily_logs (
    date_iso TEXT PRIMARY KEY,
    weight_lb REAL,
    calories REAL NOT NULL DEFAULT 0,
    steps INTEGER NOT NULL DEFAULT 0,
    azm INTEGER NOT NULL DEFAULT 0,
    workout_done INTEGER NOT NULL DEFAULT 0,
    created_at INTEGER,
    updated_at INTEGER
);
"""


def init_db(db_path: str = DB_PATH) -> None:
    """Initialize the database, creating tables if they don't exist."""
    directory = os.path.dirname(db_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with get_connection(db_path) as conn:
        conn.executescript(SCHEMA_SQL)


@contextmanager
def get_connection(db_path: str = DB_PATH):
    """Context manager for database connections."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
