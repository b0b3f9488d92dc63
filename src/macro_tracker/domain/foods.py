"""Domain models for catalog and custom foods."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from macro_tracker.domain.nutrition import MacroValues


@dataclass(frozen=True)
class CatalogFood:
    """Shared nutrition facts row written by the offline seeder."""

    id: UUID
    external_id: str
    source: str
    name: str
    brand: str | None
    serving_size: float
    serving_unit: str
    protein_per_unit: float
    carbs_per_unit: float
    fats_per_unit: float
    calories_per_unit: float | None

    @property
    def macros_per_unit(self) -> MacroValues:
        return MacroValues(
            protein=self.protein_per_unit,
            carbs=self.carbs_per_unit,
            fats=self.fats_per_unit,
            calories=self.calories_per_unit,
        )


@dataclass(frozen=True)
class CustomFood:
    """A food defined by a user, optionally inside an experience."""

    id: UUID
    user_id: str
    experience_id: str | None
    name: str
    brand: str | None
    serving_size: float
    serving_unit: str
    protein_per_unit: float
    carbs_per_unit: float
    fats_per_unit: float
    calories_per_unit: float | None
    updated_at: datetime | None = None

    @property
    def macros_per_unit(self) -> MacroValues:
        return MacroValues(
            protein=self.protein_per_unit,
            carbs=self.carbs_per_unit,
            fats=self.fats_per_unit,
            calories=self.calories_per_unit,
        )


@dataclass(frozen=True)
class FoodSearchResult:
    """Catalog and custom matches for a search query."""

    catalog: list[CatalogFood]
    custom: list[CustomFood]
