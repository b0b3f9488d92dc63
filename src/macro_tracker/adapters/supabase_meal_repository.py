"""Supabase repository for meals and meal line items."""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from macro_tracker.adapters.supabase_filters import (
    apply_scope,
    optional_float,
    parse_timestamp,
)
from macro_tracker.domain.meals import (
    CatalogFoodRef,
    CustomFoodRef,
    FoodReference,
    FoodSource,
    MealFields,
    MealFoodRecord,
    MealFoodSnapshot,
    MealRecord,
    QuickAddRef,
)
from macro_tracker.domain.models import OwnerScope
from macro_tracker.domain.nutrition import MacroTotals
from macro_tracker.services.meals import MealRepository

_MEAL_WITH_FOODS = "*, meal_foods(*)"

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def list_meals(
        self, scope: OwnerScope, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals in the time range with their line items."""
        query = self.client.table("meals").select(_MEAL_WITH_FOODS)
        response = (
            apply_scope(query, scope)
            .gte("logged_at", start.isoformat())
            .lt("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal with its line items."""
        response = (
            self.client.table("meals")
            .select(_MEAL_WITH_FOODS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def create_meal(
        self,
        scope: OwnerScope,
        fields: MealFields,
        totals: MacroTotals,
        foods: list[MealFoodSnapshot],
    ) -> UUID:
        """Create a meal row followed by its line item rows."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": scope.user_id,
                    "experience_id": scope.experience_id,
                    **_meal_row(fields, totals),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        meal_id = UUID(str(response.data[0]["id"]))
        try:
            self._insert_foods(meal_id, foods)
        except Exception:
            _logger.warning(
                "Line item insert failed, removing meal",
                extra={"meal_id": str(meal_id)},
            )
            self.client.table("meals").delete().eq("id", str(meal_id)).execute()
            raise
        return meal_id

    def update_meal(self, meal_id: UUID, fields: MealFields, totals: MacroTotals) -> None:
        """Update meal fields and totals."""
        self.client.table("meals").update(_meal_row(fields, totals)).eq(
            "id", str(meal_id)
        ).execute()

    def replace_meal_foods(self, meal_id: UUID, foods: list[MealFoodSnapshot]) -> None:
        """Delete existing line items and insert the new snapshots."""
        self.client.table("meal_foods").delete().eq("meal_id", str(meal_id)).execute()
        self._insert_foods(meal_id, foods)

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete line items, then the meal."""
        self.client.table("meal_foods").delete().eq("meal_id", str(meal_id)).execute()
        self.client.table("meals").delete().eq("id", str(meal_id)).execute()

    def _insert_foods(self, meal_id: UUID, foods: list[MealFoodSnapshot]) -> None:
        payload = [_food_row(meal_id, food) for food in foods]
        if payload:
            self.client.table("meal_foods").insert(payload).execute()


def _meal_row(fields: MealFields, totals: MacroTotals) -> dict[str, object]:
    return {
        "name": fields.name,
        "logged_at": fields.logged_at.isoformat(),
        "notes": fields.notes,
        "protein": totals.protein,
        "carbs": totals.carbs,
        "fats": totals.fats,
    }


def _food_row(meal_id: UUID, food: MealFoodSnapshot) -> dict[str, object]:
    reference = food.reference
    return {
        "meal_id": str(meal_id),
        "source": reference.source.value,
        "food_id": (
            str(reference.food_id) if isinstance(reference, CatalogFoodRef) else None
        ),
        "custom_food_id": (
            str(reference.custom_food_id)
            if isinstance(reference, CustomFoodRef)
            else None
        ),
        "name": food.name,
        "brand": food.brand,
        "serving_unit": food.serving_unit,
        "quantity": food.quantity,
        "protein": food.protein,
        "carbs": food.carbs,
        "fats": food.fats,
        "calories": food.calories,
    }


def _parse_reference(row: dict[str, object]) -> FoodReference:
    """Rebuild the line item variant from its source column."""
    source = row.get("source")
    if source == FoodSource.USDA.value and row.get("food_id"):
        return CatalogFoodRef(food_id=UUID(str(row["food_id"])))
    if source == FoodSource.CUSTOM.value and row.get("custom_food_id"):
        return CustomFoodRef(custom_food_id=UUID(str(row["custom_food_id"])))
    return QuickAddRef()


def _parse_food(row: dict[str, object]) -> MealFoodRecord:
    return MealFoodRecord(
        id=UUID(str(row["id"])),
        meal_id=UUID(str(row["meal_id"])),
        snapshot=MealFoodSnapshot(
            reference=_parse_reference(row),
            name=str(row.get("name", "")),
            brand=row.get("brand"),
            serving_unit=row.get("serving_unit"),
            quantity=float(row.get("quantity", 1.0)),
            protein=float(row.get("protein", 0.0)),
            carbs=float(row.get("carbs", 0.0)),
            fats=float(row.get("fats", 0.0)),
            calories=optional_float(row.get("calories")),
        ),
    )


def _parse_meal(row: dict[str, object]) -> MealRecord:
    foods = row.get("meal_foods") or []
    return MealRecord(
        id=UUID(str(row["id"])),
        user_id=str(row["user_id"]),
        experience_id=row.get("experience_id"),
        name=str(row.get("name", "")),
        logged_at=parse_timestamp(row.get("logged_at")) or datetime.min,
        notes=row.get("notes"),
        protein=float(row.get("protein", 0.0)),
        carbs=float(row.get("carbs", 0.0)),
        fats=float(row.get("fats", 0.0)),
        foods=[_parse_food(food) for food in foods],
    )
