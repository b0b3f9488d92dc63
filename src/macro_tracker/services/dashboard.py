"""Builds the dashboard summary for a selected day."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo

from macro_tracker.domain.models import MacroTarget, OwnerScope
from macro_tracker.domain.reporting import DashboardSummary, MealSummary
from macro_tracker.services.custom_foods import CustomFoodRepository
from macro_tracker.services.meals import MealRepository
from macro_tracker.services.reporting import (
    STREAK_LOOKBACK_DAYS,
    build_week_days,
    build_weight_series,
    compliance_score,
    day_range,
    iso_week_number,
    local_day,
    meal_calories,
    streak_days,
    sum_macros,
    totals_by_day,
    week_range,
    weekly_weight_change,
)
from macro_tracker.services.weights import WeightLogRepository


@dataclass
class DashboardService:
    """Loads a user's records for a day and reduces them for display."""

    meal_repository: MealRepository
    weight_repository: WeightLogRepository
    custom_food_repository: CustomFoodRepository
    timezone: tzinfo
    goal_slope: float | None = None

    def today(self) -> date:
        """Current calendar day in the dashboard timezone."""
        return datetime.now(tz=self.timezone).date()

    def build(
        self, scope: OwnerScope, target: MacroTarget, selected: date | None = None
    ) -> DashboardSummary:
        """Return totals, compliance, streak and weight trend for a day."""
        day = selected or self.today()
        day_start, day_end = day_range(day, self.timezone)
        week_start, week_end = week_range(day, self.timezone)
        streak_start, _ = day_range(
            day - timedelta(days=STREAK_LOOKBACK_DAYS), self.timezone
        )

        day_meals = self.meal_repository.list_meals(scope, day_start, day_end)
        week_meals = self.meal_repository.list_meals(scope, week_start, week_end)
        recent_meals = self.meal_repository.list_meals(scope, streak_start, day_end)
        weight_logs = self.weight_repository.list_weight_logs(
            scope, None, descending=False
        )
        custom_foods = self.custom_food_repository.list_custom_foods(scope)

        consumed = sum_macros(day_meals)
        meals = [
            MealSummary(meal=meal, calories=meal_calories(meal)) for meal in day_meals
        ]
        logged_days = {local_day(meal.logged_at, self.timezone) for meal in recent_meals}

        return DashboardSummary(
            selected_date=day,
            week_number=iso_week_number(day),
            macro_target=target,
            consumed=consumed,
            calories=sum(meal.calories for meal in meals),
            compliance=compliance_score(consumed, target),
            streak_days=streak_days(logged_days, day),
            meals=meals,
            week=build_week_days(
                day, totals_by_day(week_meals, self.timezone), target
            ),
            weight_series=build_weight_series(weight_logs, self.goal_slope),
            latest_weight=weight_logs[-1] if weight_logs else None,
            weekly_change=weekly_weight_change(weight_logs),
            custom_foods=custom_foods,
        )
