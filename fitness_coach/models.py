"""Data models for the fitness coaching application."""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from fitness_coach.config import (
    ADAPTIVE_MODEL_ID,
    DEFAULT_TIMEZONE,
    GOALS_ID,
    PROFILE_ID,
)


@dataclass
class UserProfile:
    """User profile with physical attributes captured at onboarding."""
    sex: str  # "male" or "female"
    age_years: int
    height_cm: float
    starting_weight_lb: float
    timezone: str = DEFAULT_TIMEZONE
    id: str = PROFILE_ID
    created_at: Optional[int] = None  # epoch millis
    updated_at: Optional[int] = None


@dataclass
class GoalSettings:
    """The single active goal. Replacing it is a full overwrite."""
    mode: str  # fat-loss, maintenance, muscle-gain
    goal_rate: float  # lb/week, magnitude only
    activity_style: str  # low-cardio, standard, high-activity
    target_weight_lb: Optional[float] = None
    target_weight_customized: bool = False
    target_phase_weeks: Optional[int] = None  # maintenance only
    start_date: Optional[str] = None  # ISO date
    id: str = GOALS_ID
    updated_at: Optional[int] = None


@dataclass
class AdaptiveModel:
    """Learned correction to the estimated TDEE."""
    tdee_bias: float = 0.0
    last_calibration_date: Optional[str] = None  # ISO timestamp
    id: str = ADAPTIVE_MODEL_ID


@dataclass
class DailyLog:
    """One record per calendar date.

    Calories, steps and AZM use 0 for "not logged"; a genuine zero is
    indistinguishable from a missing entry.
    """
    date_iso: str
    weight_lb: Optional[float] = None
    calories: float = 0
    steps: int = 0
    azm: int = 0
    workout_done: bool = False
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    @property
    def day(self) -> date:
        return date.fromisoformat(self.date_iso)

    @property
    def weight_logged(self) -> bool:
        return bool(self.weight_lb and self.weight_lb > 0)

    @property
    def calories_entered(self) -> bool:
        return self.calories > 0

    @property
    def steps_entered(self) -> bool:
        return self.steps > 0

    @property
    def azm_entered(self) -> bool:
        return self.azm > 0


@dataclass
class DailyTargets:
    """Targets in effect for one day."""
    bmr: float
    tdee_base: float
    tdee_bias: float
    planned_daily_delta: float
    calories: int
    steps: int
    azm: int
    workouts_per_week: int
    reference_weight_lb: float


@dataclass
class CoachTargets:
    calories: float
    steps: float
    azm: float


@dataclass
class CoachState:
    """Snapshot of the day used to pick a coach message. Never persisted."""
    current_hour: int
    weight_logged: bool
    calories_entered: bool
    steps_entered: bool
    azm_entered: bool
    calories_eaten: float
    steps: float
    azm: float
    targets: CoachTargets

    @property
    def calories_hit(self) -> bool:
        # Lower is better for calories
        return self.calories_entered and self.calories_eaten <= self.targets.calories

    @property
    def steps_hit(self) -> bool:
        return self.steps_entered and self.steps >= self.targets.steps

    @property
    def azm_hit(self) -> bool:
        return self.azm_entered and self.azm >= self.targets.azm


@dataclass
class CalibrationResult:
    """An adjustment applied by the bias calibrator."""
    adjustment: int
    previous_bias: float
    new_bias: float
    actual_week_change: float
    planned_week_change: float
    gap: float
    calibrated_at: str

    @property
    def message(self) -> str:
        sign = "+" if self.adjustment > 0 else ""
        return (
            f"Coach Update: Calorie targets adjusted by {sign}{self.adjustment}kcal "
            f"based on your {self.actual_week_change:.2f}lb actual change vs "
            f"{self.planned_week_change:.2f}lb goal."
        )


@dataclass
class DayReport:
    """Everything the presentation layer shows for one day."""
    day: date
    targets: DailyTargets
    log: DailyLog
    achieved_delta: Optional[float]
    status_label: str
    coach_message: str
    estimated_burn: int
    burn_range: Tuple[int, int]
    workouts_this_week: int = 0
    goal_reached: bool = False
