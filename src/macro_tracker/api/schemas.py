"""Pydantic request models for the JSON API."""

from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from macro_tracker.domain.meals import (
    CatalogLineInput,
    CustomLineInput,
    MealFoodInput,
    QuickAddLineInput,
)
from macro_tracker.domain.models import MacroTarget
from macro_tracker.domain.nutrition import MacroValues


class ApiModel(BaseModel):
    """Base request model.

    Accepts camelCase keys (snake_case too); NaN and infinity are rejected.
    """

    model_config = ConfigDict(
        allow_inf_nan=False,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    _nullable: frozenset[str] = frozenset()

    def changes(self) -> dict[str, object]:
        """Fields the client sent, minus nulls on non-nullable columns."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None or key in self._nullable
        }


class MacrosPerUnitIn(ApiModel):
    """Macros for one unit of a quick-add food."""

    protein: float = Field(default=0, ge=0, le=200)
    carbs: float = Field(default=0, ge=0, le=300)
    fats: float = Field(default=0, ge=0, le=150)
    calories: float | None = Field(default=None, ge=0, le=2000)

    def to_domain(self) -> MacroValues:
        return MacroValues(
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
            calories=self.calories,
        )


class CatalogLineIn(ApiModel):
    """Line item referencing a catalog food."""

    source: Literal["USDA"]
    food_id: UUID
    quantity: float = Field(ge=0.1, le=20)

    def to_domain(self) -> MealFoodInput:
        return CatalogLineInput(food_id=self.food_id, quantity=self.quantity)


class CustomLineIn(ApiModel):
    """Line item referencing one of the caller's custom foods."""

    source: Literal["CUSTOM"]
    custom_food_id: UUID
    quantity: float = Field(ge=0.1, le=20)

    def to_domain(self) -> MealFoodInput:
        return CustomLineInput(custom_food_id=self.custom_food_id, quantity=self.quantity)


class QuickAddLineIn(ApiModel):
    """Line item with manually entered macros."""

    source: Literal["QUICK_ADD"]
    name: str = Field(min_length=1, max_length=120)
    brand: str | None = Field(default=None, max_length=120)
    serving_unit: str | None = Field(default=None, max_length=40)
    quantity: float = Field(ge=0.1, le=20)
    quick_add_macros: MacrosPerUnitIn | None = None
    macros_per_unit: MacrosPerUnitIn | None = None

    def to_domain(self) -> MealFoodInput:
        macros = self.quick_add_macros or self.macros_per_unit
        return QuickAddLineInput(
            name=self.name,
            quantity=self.quantity,
            macros=macros.to_domain() if macros else None,
            brand=self.brand,
            serving_unit=self.serving_unit,
        )


MealFoodIn = Annotated[
    CatalogLineIn | CustomLineIn | QuickAddLineIn, Field(discriminator="source")
]


class MealCreate(ApiModel):
    """Payload for logging a meal."""

    name: str = Field(min_length=1, max_length=120)
    logged_at: datetime
    notes: str | None = Field(default=None, max_length=240)
    foods: list[MealFoodIn] = Field(min_length=1)

    def lines(self) -> list[MealFoodInput]:
        return [food.to_domain() for food in self.foods]


class MealUpdate(ApiModel):
    """Partial meal update; ``foods`` replaces every line item."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    logged_at: datetime | None = None
    notes: str | None = Field(default=None, max_length=240)
    foods: list[MealFoodIn] | None = None

    def lines(self) -> list[MealFoodInput] | None:
        if not self.foods:
            return None
        return [food.to_domain() for food in self.foods]


class CustomFoodCreate(ApiModel):
    """Payload for a new custom food."""

    name: str = Field(min_length=1, max_length=120)
    brand: str | None = Field(default=None, max_length=120)
    serving_size: float = Field(ge=0.1, le=2000)
    serving_unit: str = Field(min_length=1, max_length=40)
    protein_per_unit: float = Field(ge=0, le=200)
    carbs_per_unit: float = Field(ge=0, le=300)
    fats_per_unit: float = Field(ge=0, le=200)
    calories_per_unit: float | None = Field(default=None, ge=0, le=2000)


class CustomFoodUpdate(ApiModel):
    """Partial custom food update."""

    _nullable = frozenset({"brand", "calories_per_unit"})

    name: str | None = Field(default=None, min_length=1, max_length=120)
    brand: str | None = Field(default=None, max_length=120)
    serving_size: float | None = Field(default=None, ge=0.1, le=2000)
    serving_unit: str | None = Field(default=None, min_length=1, max_length=40)
    protein_per_unit: float | None = Field(default=None, ge=0, le=200)
    carbs_per_unit: float | None = Field(default=None, ge=0, le=300)
    fats_per_unit: float | None = Field(default=None, ge=0, le=200)
    calories_per_unit: float | None = Field(default=None, ge=0, le=2000)


class WeightCreate(ApiModel):
    """Payload for a weigh-in."""

    weight_lbs: float = Field(ge=50, le=800)
    recorded_for: datetime
    note: str | None = Field(default=None, max_length=140)


class WeightUpdate(ApiModel):
    """Partial weigh-in update; ``note: null`` clears the note."""

    _nullable = frozenset({"note"})

    weight_lbs: float | None = Field(default=None, ge=50, le=800)
    recorded_for: datetime | None = None
    note: str | None = Field(default=None, max_length=140)


class MacroTargetUpdate(ApiModel):
    """Replacement daily targets."""

    calories: float = Field(ge=0, le=10000)
    protein: float = Field(ge=0, le=1000)
    carbs: float = Field(ge=0, le=1500)
    fats: float = Field(ge=0, le=500)

    def to_domain(self) -> MacroTarget:
        return MacroTarget(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
        )
