"""Supabase implementation for user custom foods."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from macro_tracker.adapters.supabase_filters import (
    apply_scope,
    name_or_brand_filter,
    optional_float,
    parse_timestamp,
    to_row,
)
from macro_tracker.domain.foods import CustomFood
from macro_tracker.domain.models import OwnerScope
from macro_tracker.services.custom_foods import CustomFoodRepository


@dataclass
class SupabaseCustomFoodRepository(CustomFoodRepository):
    """Supabase-backed repository for custom foods."""

    client: Client

    def list_custom_foods(self, scope: OwnerScope) -> list[CustomFood]:
        """Return custom foods, most recently updated first."""
        query = self.client.table("custom_foods").select("*")
        response = (
            apply_scope(query, scope).order("updated_at", desc=True).execute()
        )
        return [_parse_custom_food(row) for row in response.data or []]

    def search_custom_foods(
        self, scope: OwnerScope, query: str | None, limit: int
    ) -> list[CustomFood]:
        """Search custom foods by name or brand."""
        request = apply_scope(self.client.table("custom_foods").select("*"), scope)
        if query:
            request = request.or_(name_or_brand_filter(query))
        response = request.order("name", desc=False).limit(limit).execute()
        return [_parse_custom_food(row) for row in response.data or []]

    def get_custom_food(self, food_id: UUID) -> CustomFood | None:
        """Return a custom food by id, if present."""
        response = (
            self.client.table("custom_foods")
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_custom_food(response.data[0])

    def create_custom_food(
        self, scope: OwnerScope, payload: dict[str, object]
    ) -> CustomFood:
        """Create a custom food and return it."""
        response = (
            self.client.table("custom_foods")
            .insert(
                {
                    "user_id": scope.user_id,
                    "experience_id": scope.experience_id,
                    **to_row(payload),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create custom food")
        return _parse_custom_food(response.data[0])

    def update_custom_food(
        self, food_id: UUID, payload: dict[str, object]
    ) -> CustomFood:
        """Update a custom food and return it."""
        response = (
            self.client.table("custom_foods")
            .update({**to_row(payload), "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(food_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update custom food")
        return _parse_custom_food(response.data[0])

    def delete_custom_food(self, food_id: UUID) -> None:
        """Delete a custom food."""
        self.client.table("custom_foods").delete().eq("id", str(food_id)).execute()


def _parse_custom_food(row: dict[str, object]) -> CustomFood:
    """Parse a custom food row into a domain model."""
    return CustomFood(
        id=UUID(str(row["id"])),
        user_id=str(row["user_id"]),
        experience_id=row.get("experience_id"),
        name=str(row.get("name", "")),
        brand=row.get("brand"),
        serving_size=float(row.get("serving_size", 1.0)),
        serving_unit=str(row.get("serving_unit", "")),
        protein_per_unit=float(row.get("protein_per_unit", 0.0)),
        carbs_per_unit=float(row.get("carbs_per_unit", 0.0)),
        fats_per_unit=float(row.get("fats_per_unit", 0.0)),
        calories_per_unit=optional_float(row.get("calories_per_unit")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
