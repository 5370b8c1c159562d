"""Unit conversions and metabolic calculations.

Uses:
- Mifflin-St Jeor equation for Basal Metabolic Rate (BMR)
- Activity-style multipliers for the TDEE base
- 3500 kcal per pound of body mass to turn a weekly rate into a daily delta

References:
- Mifflin MD, St Jeor ST, et al. (1990). "A new predictive equation for
  resting energy expenditure in healthy individuals." Am J Clin Nutr.
"""

import math
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fitness_coach.config import (
    ACTIVITY_MULTIPLIERS,
    ACTIVITY_TARGETS,
    CALORIE_ROUNDING_STEP,
    DEFAULT_TIMEZONE,
    DAYS_PER_WEEK,
    KCAL_PER_LB,
    MAX_WEIGHT_LB,
    MIN_AGE_YEARS,
    MIN_WEIGHT_LB,
    SUGGESTED_TARGET_WEIGHT_OFFSET_LB,
    WORKOUTS_PER_WEEK,
)
from fitness_coach.models import DailyTargets, UserProfile

LBS_PER_KG = 2.20462
CM_PER_INCH = 2.54
CM_PER_FOOT = 30.48
INCHES_PER_FOOT = 12
METERS_PER_MILE = 1609.34


# --- Unit conversions ---

def kg_to_lb(kg: float) -> float:
    return kg * LBS_PER_KG


def lb_to_kg(lb: float) -> float:
    return lb / LBS_PER_KG


def cm_to_in(cm: float) -> float:
    return cm / CM_PER_INCH


def in_to_cm(inches: float) -> float:
    return inches * CM_PER_INCH


def feet_inches_to_cm(feet: int, inches: int) -> int:
    """Convert a height in feet and inches to whole centimeters."""
    return round_half_up(feet * CM_PER_FOOT + inches * CM_PER_INCH)


def cm_to_feet_inches(cm: float) -> tuple:
    """Convert centimeters to (feet, inches).

    Inches that round up to 12 are reported as 0 without carrying into feet.
    """
    total_inches = cm / CM_PER_INCH
    feet = int(total_inches // INCHES_PER_FOOT)
    inches = round_half_up(total_inches % INCHES_PER_FOOT)
    return feet, 0 if inches == INCHES_PER_FOOT else inches


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up."""
    return int(math.floor(value + 0.5))


# --- Movement ---

def calculate_stride_meters(height_cm: float, sex: str) -> float:
    height_m = height_cm / 100
    return height_m * 0.415 if sex == "male" else height_m * 0.413


def calculate_distance_meters(steps: float, stride_meters: float) -> float:
    return steps * stride_meters


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE


# --- Metabolic ---

def calculate_bmr(profile: UserProfile, current_weight_lb: float) -> float:
    """Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

    Male:   BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) + 5
    Female: BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) − 161
    """
    kg = lb_to_kg(current_weight_lb)
    bmr = 10 * kg + 6.25 * profile.height_cm - 5 * profile.age_years
    if profile.sex == "male":
        bmr += 5
    else:
        bmr -= 161
    return bmr


def calculate_tdee_base(bmr: float, activity_style: str) -> float:
    """TDEE base = BMR × activity-style multiplier."""
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_style, ACTIVITY_MULTIPLIERS["standard"])
    return bmr * multiplier


def get_planned_daily_delta(mode: str, rate: float) -> float:
    """Daily calorie delta implied by the goal: negative for a deficit.

    One lb/week of rate is 3500 kcal spread over 7 days, i.e. 500 kcal/day.
    """
    per_lb = KCAL_PER_LB / DAYS_PER_WEEK
    if mode == "fat-loss":
        return -(rate * per_lb)
    if mode == "muscle-gain":
        return rate * per_lb
    return 0


def calculate_calorie_target(tdee_base: float, tdee_bias: float, mode: str, rate: float) -> int:
    """Daily calorie target rounded to the nearest 50 kcal."""
    raw_target = tdee_base + tdee_bias + get_planned_daily_delta(mode, rate)
    return round_half_up(raw_target / CALORIE_ROUNDING_STEP) * CALORIE_ROUNDING_STEP


def estimate_burn(
    weight_lb: float,
    bmr: float,
    steps: float,
    stride_meters: float,
    azm: float,
) -> int:
    """Estimate total calories burned for a day from BMR, steps and AZM.

    Walking costs ~0.53 kcal per lb per mile. A fifth of AZM minutes are
    counted as cardio-zone minutes (worth double), the rest as fat-burn.
    """
    weight_kg = lb_to_kg(weight_lb)
    miles = meters_to_miles(calculate_distance_meters(steps, stride_meters))

    kcal_steps = 0.53 * weight_lb * miles
    cardio_mins = (0.2 * azm) / 2
    fatburn_mins = azm - 2 * cardio_mins
    kcal_upgrade = 0.0175 * weight_kg * (fatburn_mins + 4 * cardio_mins)

    return round_half_up(bmr + kcal_steps + kcal_upgrade)


def get_burn_range(burn: float) -> tuple:
    return round_half_up(burn * 0.8), round_half_up(burn * 1.2)


# --- Goals ---

def activity_targets(activity_style: str) -> dict:
    """Steps, AZM and weekly workout targets for an activity style."""
    style = activity_style if activity_style in ACTIVITY_TARGETS else "standard"
    return {
        "steps": ACTIVITY_TARGETS[style]["steps"],
        "azm": ACTIVITY_TARGETS[style]["azm"],
        "workouts": WORKOUTS_PER_WEEK[style],
    }


def suggest_target_weight(mode: str, weight_lb: float) -> Optional[float]:
    """Default target weight offered before the user customizes it."""
    if mode == "fat-loss":
        return weight_lb - SUGGESTED_TARGET_WEIGHT_OFFSET_LB
    if mode == "muscle-gain":
        return weight_lb + SUGGESTED_TARGET_WEIGHT_OFFSET_LB
    return None


def is_valid_timezone(name: str) -> bool:
    """True if `name` is an IANA zone that zoneinfo can load."""
    if not name or not isinstance(name, str):
        return False
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


def validate_profile_inputs(age_years: int, weight_lb: float, timezone: Optional[str] = None) -> dict:
    """Return a field -> message dict; empty when inputs are acceptable.

    The timezone is only checked when given.
    """
    errors = {}
    if age_years < MIN_AGE_YEARS:
        errors["age"] = f"This app is for ages {MIN_AGE_YEARS}+."
    if weight_lb < MIN_WEIGHT_LB or weight_lb > MAX_WEIGHT_LB:
        errors["weight"] = f"Please enter a weight between {MIN_WEIGHT_LB} and {MAX_WEIGHT_LB} lb."
    if timezone is not None and not is_valid_timezone(timezone):
        errors["timezone"] = f"Unknown timezone {timezone!r}. Use an IANA name like {DEFAULT_TIMEZONE}."
    return errors


def format_targets(targets: DailyTargets) -> str:
    """Format daily targets for display."""
    bias = f"{targets.tdee_bias:+.0f}" if targets.tdee_bias else "0"
    lines = [
        f"BMR:       {targets.bmr:.0f} kcal (at {targets.reference_weight_lb:.1f} lb)",
        f"TDEE base: {targets.tdee_base:.0f} kcal",
        f"Bias:      {bias} kcal",
        f"Plan:      {targets.planned_daily_delta:+.0f} kcal/day",
        f"Target:    {targets.calories} kcal/day",
        f"Steps:     {targets.steps}",
        f"AZM:       {targets.azm} min",
        f"Workouts:  {targets.workouts_per_week}/week",
    ]
    return "\n".join(lines)
