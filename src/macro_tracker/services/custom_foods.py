"""Services for user-defined foods."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from macro_tracker.domain.foods import CustomFood
from macro_tracker.domain.models import OwnerScope
from macro_tracker.errors import NotFoundError


class CustomFoodRepository(Protocol):
    """Persistence interface for custom foods."""

    def list_custom_foods(self, scope: OwnerScope) -> list[CustomFood]:
        """Return the scope's custom foods, most recently updated first."""

    def search_custom_foods(
        self, scope: OwnerScope, query: str | None, limit: int
    ) -> list[CustomFood]:
        """Return the scope's custom foods matching name or brand, by name."""

    def get_custom_food(self, food_id: UUID) -> CustomFood | None:
        """Return a custom food by id, if present."""

    def create_custom_food(
        self, scope: OwnerScope, payload: dict[str, object]
    ) -> CustomFood:
        """Create a custom food and return it."""

    def update_custom_food(
        self, food_id: UUID, payload: dict[str, object]
    ) -> CustomFood:
        """Update a custom food and return it."""

    def delete_custom_food(self, food_id: UUID) -> None:
        """Delete a custom food."""


@dataclass
class CustomFoodService:
    """Application service for custom food CRUD."""

    repository: CustomFoodRepository

    def list_foods(self, scope: OwnerScope) -> list[CustomFood]:
        """Return the caller's custom foods."""
        return self.repository.list_custom_foods(scope)

    def get_food(self, scope: OwnerScope, food_id: UUID) -> CustomFood:
        """Return an owned custom food or raise ``NotFoundError``."""
        food = self.repository.get_custom_food(food_id)
        if food is None or not scope.owns(food.user_id, food.experience_id):
            raise NotFoundError("Food not found.")
        return food

    def create_food(self, scope: OwnerScope, payload: dict[str, object]) -> CustomFood:
        """Create a custom food in the caller's scope."""
        return self.repository.create_custom_food(scope, payload)

    def update_food(
        self, scope: OwnerScope, food_id: UUID, payload: dict[str, object]
    ) -> CustomFood:
        """Apply a partial update to an owned custom food."""
        food = self.get_food(scope, food_id)
        if not payload:
            return food
        return self.repository.update_custom_food(food.id, payload)

    def delete_food(self, scope: OwnerScope, food_id: UUID) -> None:
        """Delete an owned custom food."""
        food = self.get_food(scope, food_id)
        self.repository.delete_custom_food(food.id)
