"""Domain models for meals and their line items."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID

from macro_tracker.domain.nutrition import MacroTotals, MacroValues


class FoodSource(str, Enum):
    """Where a meal line item's macros came from."""

    USDA = "USDA"
    CUSTOM = "CUSTOM"
    QUICK_ADD = "QUICK_ADD"


@dataclass(frozen=True)
class CatalogFoodRef:
    """Line item backed by a catalog food."""

    food_id: UUID
    source: FoodSource = field(default=FoodSource.USDA, init=False)


@dataclass(frozen=True)
class CustomFoodRef:
    """Line item backed by a user's custom food."""

    custom_food_id: UUID
    source: FoodSource = field(default=FoodSource.CUSTOM, init=False)


@dataclass(frozen=True)
class QuickAddRef:
    """Line item with manually entered macros."""

    source: FoodSource = field(default=FoodSource.QUICK_ADD, init=False)


FoodReference = CatalogFoodRef | CustomFoodRef | QuickAddRef


@dataclass(frozen=True)
class MealFoodSnapshot:
    """Scaled macros for one line item, frozen at meal-save time."""

    reference: FoodReference
    name: str
    brand: str | None
    serving_unit: str | None
    quantity: float
    protein: float
    carbs: float
    fats: float
    calories: float | None

    @property
    def macros(self) -> MacroTotals:
        return MacroTotals(protein=self.protein, carbs=self.carbs, fats=self.fats)


@dataclass(frozen=True)
class MealFoodRecord:
    """Stored meal line item."""

    id: UUID
    meal_id: UUID
    snapshot: MealFoodSnapshot


@dataclass(frozen=True)
class MealRecord:
    """Stored meal with denormalized totals and its line items."""

    id: UUID
    user_id: str
    experience_id: str | None
    name: str
    logged_at: datetime
    notes: str | None
    protein: float
    carbs: float
    fats: float
    foods: list[MealFoodRecord]

    @property
    def totals(self) -> MacroTotals:
        return MacroTotals(protein=self.protein, carbs=self.carbs, fats=self.fats)


@dataclass(frozen=True)
class MealFields:
    """Top-level meal values written alongside its totals."""

    name: str
    logged_at: datetime
    notes: str | None


@dataclass(frozen=True)
class CatalogLineInput:
    """Requested line item referencing a catalog food."""

    food_id: UUID
    quantity: float


@dataclass(frozen=True)
class CustomLineInput:
    """Requested line item referencing a custom food."""

    custom_food_id: UUID
    quantity: float


@dataclass(frozen=True)
class QuickAddLineInput:
    """Requested line item with inline macros per unit."""

    name: str
    quantity: float
    macros: MacroValues | None
    brand: str | None = None
    serving_unit: str | None = None


MealFoodInput = CatalogLineInput | CustomLineInput | QuickAddLineInput
