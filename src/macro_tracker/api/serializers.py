"""Convert domain records into JSON-ready dicts with camelCase keys."""

from macro_tracker.domain.foods import CatalogFood, CustomFood, FoodSearchResult
from macro_tracker.domain.meals import (
    CatalogFoodRef,
    CustomFoodRef,
    MealFoodRecord,
    MealRecord,
)
from macro_tracker.domain.models import MacroTarget, Session
from macro_tracker.domain.nutrition import MacroTotals
from macro_tracker.domain.reporting import DashboardSummary, WeekDay, WeightPoint
from macro_tracker.domain.weights import WeightLog
from macro_tracker.services.reporting import (
    line_calories,
    meal_calories,
    round_half_up,
)


def serialize_macro_target(target: MacroTarget) -> dict[str, object]:
    return {
        "calories": target.calories,
        "protein": target.protein,
        "carbs": target.carbs,
        "fats": target.fats,
    }


def serialize_session(session: Session) -> dict[str, object]:
    return {
        "user": {
            "id": session.user.id,
            "email": session.user.email,
            "displayName": session.user.display_name,
        },
        "macroTarget": serialize_macro_target(session.macro_target),
        "experienceId": session.experience_id,
    }


def serialize_catalog_food(food: CatalogFood) -> dict[str, object]:
    return {
        "id": str(food.id),
        "externalId": food.external_id,
        "source": food.source,
        "name": food.name,
        "brand": food.brand,
        "servingSize": food.serving_size,
        "servingUnit": food.serving_unit,
        "proteinPerUnit": food.protein_per_unit,
        "carbsPerUnit": food.carbs_per_unit,
        "fatsPerUnit": food.fats_per_unit,
        "caloriesPerUnit": food.calories_per_unit,
    }


def serialize_custom_food(food: CustomFood) -> dict[str, object]:
    return {
        "id": str(food.id),
        "experienceId": food.experience_id,
        "name": food.name,
        "brand": food.brand,
        "servingSize": food.serving_size,
        "servingUnit": food.serving_unit,
        "proteinPerUnit": food.protein_per_unit,
        "carbsPerUnit": food.carbs_per_unit,
        "fatsPerUnit": food.fats_per_unit,
        "caloriesPerUnit": food.calories_per_unit,
        "updatedAt": food.updated_at.isoformat() if food.updated_at else None,
    }


def serialize_search_result(result: FoodSearchResult) -> dict[str, object]:
    return {
        "catalog": [serialize_catalog_food(food) for food in result.catalog],
        "custom": [serialize_custom_food(food) for food in result.custom],
    }


def serialize_meal_food(food: MealFoodRecord) -> dict[str, object]:
    snapshot = food.snapshot
    reference = snapshot.reference
    return {
        "id": str(food.id),
        "source": reference.source.value,
        "foodId": (
            str(reference.food_id) if isinstance(reference, CatalogFoodRef) else None
        ),
        "customFoodId": (
            str(reference.custom_food_id)
            if isinstance(reference, CustomFoodRef)
            else None
        ),
        "name": snapshot.name,
        "brand": snapshot.brand,
        "servingUnit": snapshot.serving_unit,
        "quantity": snapshot.quantity,
        "protein": snapshot.protein,
        "carbs": snapshot.carbs,
        "fats": snapshot.fats,
        "calories": snapshot.calories,
        "displayCalories": int(round_half_up(line_calories(snapshot), 0)),
    }


def serialize_meal(meal: MealRecord) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "experienceId": meal.experience_id,
        "name": meal.name,
        "loggedAt": meal.logged_at.isoformat(),
        "notes": meal.notes,
        "protein": meal.protein,
        "carbs": meal.carbs,
        "fats": meal.fats,
        "calories": meal_calories(meal),
        "foods": [serialize_meal_food(food) for food in meal.foods],
    }


def serialize_weight_log(log: WeightLog) -> dict[str, object]:
    return {
        "id": str(log.id),
        "experienceId": log.experience_id,
        "weightLbs": log.weight_lbs,
        "recordedFor": log.recorded_for.isoformat(),
        "note": log.note,
    }


def _serialize_totals(totals: MacroTotals) -> dict[str, float]:
    return {"protein": totals.protein, "carbs": totals.carbs, "fats": totals.fats}


def _serialize_week_day(day: WeekDay) -> dict[str, object]:
    return {
        "date": day.day.isoformat(),
        "compliance": day.compliance,
        "hasEntries": day.has_entries,
        "isSelected": day.is_selected,
    }


def _serialize_weight_point(point: WeightPoint) -> dict[str, object]:
    return {
        "recordedFor": point.recorded_for.isoformat(),
        "weight": point.weight,
        "trend": point.trend,
        "goal": point.goal,
    }


def serialize_dashboard(summary: DashboardSummary) -> dict[str, object]:
    return {
        "selectedDate": summary.selected_date.isoformat(),
        "weekNumber": summary.week_number,
        "macroTarget": serialize_macro_target(summary.macro_target),
        "consumed": _serialize_totals(summary.consumed),
        "calories": summary.calories,
        "compliance": summary.compliance,
        "streakDays": summary.streak_days,
        "meals": [serialize_meal(item.meal) for item in summary.meals],
        "week": [_serialize_week_day(day) for day in summary.week],
        "weightSeries": [
            _serialize_weight_point(point) for point in summary.weight_series
        ],
        "latestWeight": (
            serialize_weight_log(summary.latest_weight)
            if summary.latest_weight
            else None
        ),
        "weeklyChange": summary.weekly_change,
        "customFoods": [serialize_custom_food(food) for food in summary.custom_foods],
    }
