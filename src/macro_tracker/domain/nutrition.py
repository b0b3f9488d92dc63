"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroTotals:
    """Protein, carbs and fats in grams."""

    protein: float
    carbs: float
    fats: float

    def __add__(self, other: "MacroTotals") -> "MacroTotals":
        return MacroTotals(
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fats=self.fats + other.fats,
        )

    @property
    def is_empty(self) -> bool:
        return self.protein + self.carbs + self.fats <= 0


ZERO_MACROS = MacroTotals(protein=0.0, carbs=0.0, fats=0.0)


@dataclass(frozen=True)
class MacroValues:
    """Macros for one unit of a food, with optional calories."""

    protein: float
    carbs: float
    fats: float
    calories: float | None = None
