"""Resolve submitted meal line items into stored snapshots."""

from dataclasses import dataclass

from macro_tracker.domain.meals import (
    CatalogFoodRef,
    CatalogLineInput,
    CustomFoodRef,
    CustomLineInput,
    MealFoodInput,
    MealFoodSnapshot,
    QuickAddLineInput,
    QuickAddRef,
)
from macro_tracker.domain.models import OwnerScope
from macro_tracker.domain.nutrition import ZERO_MACROS, MacroTotals, MacroValues
from macro_tracker.errors import NotFoundError, ValidationError
from macro_tracker.services.custom_foods import CustomFoodRepository
from macro_tracker.services.foods import FoodCatalogRepository
from macro_tracker.services.reporting import round_half_up


@dataclass(frozen=True)
class HydratedMeal:
    """Line snapshots and the totals derived from them."""

    items: list[MealFoodSnapshot]
    totals: MacroTotals


@dataclass
class MealFoodHydrator:
    """Looks up each line's source once and snapshots its scaled macros."""

    catalog_repository: FoodCatalogRepository
    custom_food_repository: CustomFoodRepository

    def hydrate(self, lines: list[MealFoodInput], scope: OwnerScope) -> HydratedMeal:
        """Resolve every line, failing on the first missing source."""
        items = [self._hydrate_line(line, scope) for line in lines]
        total = ZERO_MACROS
        for item in items:
            total = total + item.macros
        return HydratedMeal(
            items=items,
            totals=MacroTotals(
                protein=round_half_up(total.protein),
                carbs=round_half_up(total.carbs),
                fats=round_half_up(total.fats),
            ),
        )

    def _hydrate_line(self, line: MealFoodInput, scope: OwnerScope) -> MealFoodSnapshot:
        if isinstance(line, CatalogLineInput):
            food = self.catalog_repository.get_food(line.food_id)
            if food is None:
                raise NotFoundError("Food item not found.")
            return _scaled(
                CatalogFoodRef(food_id=food.id),
                name=food.name,
                brand=food.brand,
                serving_unit=food.serving_unit,
                quantity=line.quantity,
                per_unit=food.macros_per_unit,
            )

        if isinstance(line, CustomLineInput):
            custom = self.custom_food_repository.get_custom_food(line.custom_food_id)
            if custom is None or not scope.owns(custom.user_id, custom.experience_id):
                raise NotFoundError("Custom food not found.")
            return _scaled(
                CustomFoodRef(custom_food_id=custom.id),
                name=custom.name,
                brand=custom.brand,
                serving_unit=custom.serving_unit,
                quantity=line.quantity,
                per_unit=custom.macros_per_unit,
            )

        if isinstance(line, QuickAddLineInput):
            if line.macros is None:
                raise ValidationError(
                    "Missing macro information for quick add food.",
                    field="quickAddMacros",
                )
            return _scaled(
                QuickAddRef(),
                name=line.name,
                brand=line.brand,
                serving_unit=line.serving_unit,
                quantity=line.quantity,
                per_unit=line.macros,
            )

        raise ValidationError(f"Unsupported meal food line: {type(line).__name__}")


def _scaled(  # noqa: PLR0913
    reference: CatalogFoodRef | CustomFoodRef | QuickAddRef,
    *,
    name: str,
    brand: str | None,
    serving_unit: str | None,
    quantity: float,
    per_unit: MacroValues,
) -> MealFoodSnapshot:
    calories = None
    if per_unit.calories is not None:
        calories = round_half_up(per_unit.calories * quantity)
    return MealFoodSnapshot(
        reference=reference,
        name=name,
        brand=brand,
        serving_unit=serving_unit,
        quantity=quantity,
        protein=round_half_up(per_unit.protein * quantity),
        carbs=round_half_up(per_unit.carbs * quantity),
        fats=round_half_up(per_unit.fats * quantity),
        calories=calories,
    )
