"""Application configuration and constants."""

import logging
import os

# Database
DB_DIR = os.path.join(os.path.expanduser("~"), ".fitness_coach")
DB_PATH = os.environ.get("FITNESS_COACH_DB", os.path.join(DB_DIR, "fitness_coach.db"))

# Logging
LOG_LEVEL = os.environ.get("FITNESS_COACH_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Profile defaults and validation bounds
DEFAULT_TIMEZONE = "America/New_York"
PROFILE_ID = "me"
GOALS_ID = "me"
ADAPTIVE_MODEL_ID = "default"
MIN_AGE_YEARS = 16
MIN_WEIGHT_LB = 100
MAX_WEIGHT_LB = 600

SEXES = ("male", "female")
GOAL_MODES = ("fat-loss", "maintenance", "muscle-gain")
ACTIVITY_STYLES = ("low-cardio", "standard", "high-activity")

# Activity style multipliers for TDEE calculation
ACTIVITY_MULTIPLIERS = {
    "low-cardio": 1.35,
    "standard": 1.45,
    "high-activity": 1.55,
}

# Daily movement targets per activity style
ACTIVITY_TARGETS = {
    "low-cardio": {"steps": 8000, "azm": 20},
    "standard": {"steps": 9000, "azm": 30},
    "high-activity": {"steps": 10000, "azm": 40},
}

WORKOUTS_PER_WEEK = {
    "low-cardio": 1,
    "standard": 2,
    "high-activity": 3,
}

# Energy balance
KCAL_PER_LB = 3500
DAYS_PER_WEEK = 7
CALORIE_ROUNDING_STEP = 50
SUGGESTED_TARGET_WEIGHT_OFFSET_LB = 15

# Adaptive bias calibration
CALIBRATION_MIN_HISTORY_DAYS = 14
CALIBRATION_WINDOW_DAYS = 7
CALIBRATION_MIN_WEIGHT_ENTRIES = 4
CALIBRATION_MIN_CALORIE_ENTRIES = 5
CALIBRATION_INTERVAL_DAYS = 7
CALIBRATION_TOLERANCE_LB = 0.15
CALIBRATION_STEP_KCAL = 75
TDEE_BIAS_MIN = -500
TDEE_BIAS_MAX = 500
CALIBRATION_HISTORY_LIMIT = 90

# Reference weight for BMR: mean of this many recent weigh-ins
REFERENCE_WEIGHT_ENTRIES = 7

# Coach thresholds
WARNING_FRACTION = 0.75
PACING_START_HOUR = 6
PACING_END_HOUR = 22
PACING_BAND = 0.15
MORNING_REMINDER_HOURS = (6, 10)
EVENING_HOUR = 18

# History editing window
EDITABLE_HISTORY_DAYS = 7


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging once for the CLI and Streamlit entry points."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
