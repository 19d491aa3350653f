"""Nutrition value model shared by targets, meals and logs."""

import math
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9


class Nutrition(BaseModel):
    """Daily targets or a meal's macro record, in kcal and grams."""

    model_config = ConfigDict(frozen=True)

    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0
    fiber: int = 0

    @property
    def macro_calories(self) -> float:
        """Calories implied by protein, carbs and fat."""
        return macro_calories(self.protein, self.carbs, self.fat)


def macro_calories(protein: float, carbs: float, fat: float) -> float:
    """Return kcal for the given macro grams."""
    return (
        protein * PROTEIN_KCAL_PER_G
        + carbs * CARBS_KCAL_PER_G
        + fat * FAT_KCAL_PER_G
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def add_nutrition(left: Nutrition, right: Nutrition) -> Nutrition:
    return Nutrition(
        calories=left.calories + right.calories,
        protein=left.protein + right.protein,
        carbs=left.carbs + right.carbs,
        fat=left.fat + right.fat,
        fiber=left.fiber + right.fiber,
    )


def subtract_nutrition(left: Nutrition, right: Nutrition) -> Nutrition:
    return Nutrition(
        calories=left.calories - right.calories,
        protein=left.protein - right.protein,
        carbs=left.carbs - right.carbs,
        fat=left.fat - right.fat,
        fiber=left.fiber - right.fiber,
    )


def sum_nutrition(values: Iterable[Nutrition]) -> Nutrition:
    """Element-wise sum; an empty input yields all zeros."""
    total = Nutrition()
    for value in values:
        total = add_nutrition(total, value)
    return total
