"""Domain models for dashboard reporting."""

from dataclasses import dataclass
from datetime import date, datetime

from macro_tracker.domain.foods import CustomFood
from macro_tracker.domain.meals import MealRecord
from macro_tracker.domain.models import MacroTarget
from macro_tracker.domain.nutrition import MacroTotals
from macro_tracker.domain.weights import WeightLog


@dataclass(frozen=True)
class WeekDay:
    """One day of the Monday-start week grid."""

    day: date
    compliance: int
    has_entries: bool
    is_selected: bool


@dataclass(frozen=True)
class WeightPoint:
    """Raw, smoothed and goal weight for one reading."""

    recorded_for: datetime
    weight: float
    trend: float
    goal: float | None


@dataclass(frozen=True)
class MealSummary:
    """A day's meal with display totals."""

    meal: MealRecord
    calories: int


@dataclass(frozen=True)
class DashboardSummary:
    """Everything the dashboard renders for a selected day."""

    selected_date: date
    week_number: int
    macro_target: MacroTarget
    consumed: MacroTotals
    calories: int
    compliance: int
    streak_days: int
    meals: list[MealSummary]
    week: list[WeekDay]
    weight_series: list[WeightPoint]
    latest_weight: WeightLog | None
    weekly_change: float | None
    custom_foods: list[CustomFood]
