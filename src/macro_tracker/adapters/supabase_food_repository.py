"""Supabase implementation for the shared food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from macro_tracker.adapters.supabase_filters import name_or_brand_filter, optional_float
from macro_tracker.domain.foods import CatalogFood
from macro_tracker.services.foods import FoodCatalogRepository


@dataclass
class SupabaseFoodCatalogRepository(FoodCatalogRepository):
    """Read-only queries against the ``foods`` table."""

    client: Client

    def get_food(self, food_id: UUID) -> CatalogFood | None:
        """Return a catalog food by id, if present."""
        response = (
            self.client.table("foods")
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def search_foods(self, query: str | None, limit: int) -> list[CatalogFood]:
        """Search foods by name or brand, ordered by name."""
        request = self.client.table("foods").select("*")
        if query:
            request = request.or_(name_or_brand_filter(query))
        response = request.order("name", desc=False).limit(limit).execute()
        return [_parse_food(row) for row in response.data or []]


def _parse_food(row: dict[str, object]) -> CatalogFood:
    """Parse a catalog row into a domain model."""
    return CatalogFood(
        id=UUID(str(row["id"])),
        external_id=str(row.get("external_id", "")),
        source=str(row.get("source", "USDA")),
        name=str(row.get("name", "")),
        brand=row.get("brand"),
        serving_size=float(row.get("serving_size", 100.0)),
        serving_unit=str(row.get("serving_unit", "g")),
        protein_per_unit=float(row.get("protein_per_unit", 0.0)),
        carbs_per_unit=float(row.get("carbs_per_unit", 0.0)),
        fats_per_unit=float(row.get("fats_per_unit", 0.0)),
        calories_per_unit=optional_float(row.get("calories_per_unit")),
    )
