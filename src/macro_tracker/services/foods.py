"""Food catalog search."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from macro_tracker.domain.foods import CatalogFood, FoodSearchResult
from macro_tracker.domain.models import OwnerScope
from macro_tracker.services.custom_foods import CustomFoodRepository

DEFAULT_SEARCH_LIMIT = 15
MAX_SEARCH_LIMIT = 50


class FoodCatalogRepository(Protocol):
    """Read-only access to the shared food catalog."""

    def get_food(self, food_id: UUID) -> CatalogFood | None:
        """Return a catalog food by id, if present."""

    def search_foods(self, query: str | None, limit: int) -> list[CatalogFood]:
        """Return foods whose name or brand contains the query, by name."""


@dataclass
class FoodSearchService:
    """Searches the catalog and the caller's custom foods together."""

    catalog_repository: FoodCatalogRepository
    custom_food_repository: CustomFoodRepository

    def search(
        self, scope: OwnerScope, query: str | None, limit: int | None = None
    ) -> FoodSearchResult:
        """Search catalog and custom foods with the same query and limit."""
        resolved_limit = _clamp_limit(limit)
        cleaned = query.strip() if query else None
        return FoodSearchResult(
            catalog=self.catalog_repository.search_foods(cleaned or None, resolved_limit),
            custom=self.custom_food_repository.search_custom_foods(
                scope, cleaned or None, resolved_limit
            ),
        )


def _clamp_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_SEARCH_LIMIT
    return max(1, min(limit, MAX_SEARCH_LIMIT))
