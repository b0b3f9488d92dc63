"""Macro aggregation and weight-trend calculations for the dashboard.

Everything here is a pure reduction over records that were already loaded
for the selected window. Inputs are assumed finite; range checks happen in
the request schemas.
"""

import math
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta, tzinfo

from macro_tracker.domain.meals import MealFoodSnapshot, MealRecord
from macro_tracker.domain.models import MacroTarget
from macro_tracker.domain.nutrition import ZERO_MACROS, MacroTotals
from macro_tracker.domain.reporting import WeekDay, WeightPoint
from macro_tracker.domain.weights import WeightLog

COMPLIANCE_RATIO_CAP = 1.2
STREAK_LOOKBACK_DAYS = 30
TREND_WINDOW = 7
WEEKLY_CHANGE_DAYS = 7

_PROTEIN_KCAL_PER_G = 4
_CARBS_KCAL_PER_G = 4
_FATS_KCAL_PER_G = 9


def round_half_up(value: float, precision: int = 1) -> float:
    """Round halves away from negative infinity, like a JS ``Math.round``."""
    factor = 10**precision
    return math.floor(value * factor + 0.5) / factor


def estimate_calories(protein: float, carbs: float, fats: float) -> float:
    """Standard macro-to-energy conversion."""
    return (
        protein * _PROTEIN_KCAL_PER_G
        + carbs * _CARBS_KCAL_PER_G
        + fats * _FATS_KCAL_PER_G
    )


def line_calories(snapshot: MealFoodSnapshot) -> float:
    """Return stored calories, estimating from macros when absent."""
    if snapshot.calories is not None:
        return snapshot.calories
    return estimate_calories(snapshot.protein, snapshot.carbs, snapshot.fats)


def meal_calories(meal: MealRecord) -> int:
    """Whole-number calories for a meal across its line items."""
    total = sum(line_calories(food.snapshot) for food in meal.foods)
    return int(round_half_up(total, 0))


def sum_macros(meals: Iterable[MealRecord]) -> MacroTotals:
    """Sum stored meal totals, rounded to one decimal."""
    total = ZERO_MACROS
    for meal in meals:
        total = total + meal.totals
    return MacroTotals(
        protein=round_half_up(total.protein),
        carbs=round_half_up(total.carbs),
        fats=round_half_up(total.fats),
    )


def compliance_score(consumed: MacroTotals, target: MacroTarget) -> int:
    """Percentage of target met, each macro capped at 120% before averaging."""
    ratios = [
        min(eaten / goal, COMPLIANCE_RATIO_CAP)
        for eaten, goal in (
            (consumed.protein, target.protein),
            (consumed.carbs, target.carbs),
            (consumed.fats, target.fats),
        )
        if goal > 0
    ]
    if not ratios:
        return 0
    average = sum(ratios) / len(ratios)
    return int(min(100, max(0, round_half_up(average * 100, 0))))


def start_of_day(day: date, tz: tzinfo) -> datetime:
    """Local midnight for a calendar day."""
    return datetime(day.year, day.month, day.day, tzinfo=tz)


def day_range(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return ``[start, end)`` for a local calendar day."""
    start = start_of_day(day, tz)
    return start, start_of_day(day + timedelta(days=1), tz)


def start_of_week(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def week_range(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return ``[monday, next monday)`` for the week containing ``day``."""
    monday = start_of_week(day)
    return start_of_day(monday, tz), start_of_day(monday + timedelta(days=7), tz)


def local_day(moment: datetime, tz: tzinfo) -> date:
    """Calendar day of a timestamp in the given timezone."""
    return moment.astimezone(tz).date()


def totals_by_day(meals: Iterable[MealRecord], tz: tzinfo) -> dict[date, MacroTotals]:
    """Group meal totals by local calendar day."""
    grouped: dict[date, MacroTotals] = {}
    for meal in meals:
        key = local_day(meal.logged_at, tz)
        grouped[key] = grouped.get(key, ZERO_MACROS) + meal.totals
    return grouped


def build_week_days(
    selected: date,
    daily_totals: dict[date, MacroTotals],
    target: MacroTarget,
) -> list[WeekDay]:
    """Seven Monday-start days, each scored on its own totals."""
    monday = start_of_week(selected)
    days = []
    for offset in range(7):
        day = monday + timedelta(days=offset)
        totals = daily_totals.get(day, ZERO_MACROS)
        days.append(
            WeekDay(
                day=day,
                compliance=compliance_score(totals, target),
                has_entries=not totals.is_empty,
                is_selected=day == selected,
            )
        )
    return days


def streak_days(
    logged_days: set[date],
    selected: date,
    lookback: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """Count consecutive logged days ending at ``selected``."""
    streak = 0
    for offset in range(lookback):
        if selected - timedelta(days=offset) not in logged_days:
            break
        streak += 1
    return streak


def exponential_moving_average(
    values: Sequence[float], window: int = TREND_WINDOW
) -> list[float]:
    """EMA with ``alpha = 2 / (window + 1)``, seeded with the first value."""
    alpha = 2 / (window + 1)
    trend: list[float] = []
    for index, value in enumerate(values):
        if index == 0:
            trend.append(value)
        else:
            trend.append(value * alpha + trend[-1] * (1 - alpha))
    return trend


def build_weight_series(
    logs: Sequence[WeightLog], goal_slope: float | None
) -> list[WeightPoint]:
    """Weight, trend and goal per reading; ``logs`` must be ascending.

    The goal line drops ``goal_slope`` pounds per reading from the first
    weigh-in. It is omitted when no slope is configured.
    """
    weights = [log.weight_lbs for log in logs]
    trend = exponential_moving_average(weights)
    points = []
    for index, log in enumerate(logs):
        goal = None
        if goal_slope is not None:
            goal = round_half_up(weights[0] - index * goal_slope)
        points.append(
            WeightPoint(
                recorded_for=log.recorded_for,
                weight=round_half_up(log.weight_lbs),
                trend=round_half_up(trend[index]),
                goal=goal,
            )
        )
    return points


def weekly_weight_change(logs: Sequence[WeightLog]) -> float | None:
    """Latest weight minus the last reading a week or more before it."""
    if len(logs) < 2:
        return None
    latest = logs[-1]
    cutoff = latest.recorded_for - timedelta(days=WEEKLY_CHANGE_DAYS)
    reference = None
    for log in logs:
        if log.recorded_for <= cutoff:
            reference = log
    if reference is None:
        return None
    return round_half_up(latest.weight_lbs - reference.weight_lbs)


def iso_week_number(day: date) -> int:
    """ISO-8601 week number."""
    return day.isocalendar()[1]
