"""Meal logging service."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Protocol
from uuid import UUID

from macro_tracker.domain.meals import (
    MealFields,
    MealFoodInput,
    MealFoodSnapshot,
    MealRecord,
)
from macro_tracker.domain.models import OwnerScope
from macro_tracker.domain.nutrition import MacroTotals
from macro_tracker.errors import NotFoundError
from macro_tracker.services.hydration import MealFoodHydrator
from macro_tracker.services.reporting import day_range

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals and meal line items."""

    def list_meals(
        self, scope: OwnerScope, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals logged in ``[start, end)`` with items, oldest first."""

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal with its items, if present."""

    def create_meal(
        self,
        scope: OwnerScope,
        fields: MealFields,
        totals: MacroTotals,
        foods: list[MealFoodSnapshot],
    ) -> UUID:
        """Create a meal and its line items, returning the meal id."""

    def update_meal(self, meal_id: UUID, fields: MealFields, totals: MacroTotals) -> None:
        """Update a meal's fields and stored totals."""

    def replace_meal_foods(self, meal_id: UUID, foods: list[MealFoodSnapshot]) -> None:
        """Replace all line items of a meal."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal and its line items."""


@dataclass
class MealService:
    """Service that snapshots line items and persists meals."""

    repository: MealRepository
    hydrator: MealFoodHydrator
    timezone: tzinfo

    def list_meals_for_day(self, scope: OwnerScope, day: date) -> list[MealRecord]:
        """Return the scope's meals for a local calendar day."""
        start, end = day_range(day, self.timezone)
        return self.repository.list_meals(scope, start, end)

    def get_meal(self, scope: OwnerScope, meal_id: UUID) -> MealRecord:
        """Return an owned meal or raise ``NotFoundError``."""
        meal = self.repository.get_meal(meal_id)
        if meal is None or not scope.owns(meal.user_id, meal.experience_id):
            raise NotFoundError("Meal not found.")
        return meal

    def create_meal(
        self, scope: OwnerScope, fields: MealFields, lines: list[MealFoodInput]
    ) -> MealRecord:
        """Hydrate line items and store a new meal with their totals."""
        hydrated = self.hydrator.hydrate(lines, scope)
        meal_id = self.repository.create_meal(
            scope, fields, hydrated.totals, hydrated.items
        )
        _logger.info(
            "Meal created",
            extra={"meal_id": str(meal_id), "items": len(hydrated.items)},
        )
        return self.get_meal(scope, meal_id)

    def update_meal(  # noqa: PLR0913
        self,
        scope: OwnerScope,
        meal_id: UUID,
        *,
        name: str | None = None,
        logged_at: datetime | None = None,
        notes: str | None = None,
        lines: list[MealFoodInput] | None = None,
    ) -> MealRecord:
        """Update meal fields; replace line items and totals when given."""
        existing = self.get_meal(scope, meal_id)
        fields = MealFields(
            name=name if name is not None else existing.name,
            logged_at=logged_at if logged_at is not None else existing.logged_at,
            notes=notes if notes is not None else existing.notes,
        )
        if not lines:
            self.repository.update_meal(existing.id, fields, existing.totals)
            return self.get_meal(scope, existing.id)

        hydrated = self.hydrator.hydrate(lines, scope)
        try:
            self.repository.replace_meal_foods(existing.id, hydrated.items)
            self.repository.update_meal(existing.id, fields, hydrated.totals)
        except Exception:
            # the meal row still holds the totals of the previous items
            _logger.warning(
                "Meal update failed, restoring line items",
                extra={"meal_id": str(existing.id)},
            )
            self.repository.replace_meal_foods(
                existing.id, [food.snapshot for food in existing.foods]
            )
            raise
        return self.get_meal(scope, existing.id)

    def delete_meal(self, scope: OwnerScope, meal_id: UUID) -> None:
        """Delete an owned meal and its line items."""
        existing = self.get_meal(scope, meal_id)
        self.repository.delete_meal(existing.id)
