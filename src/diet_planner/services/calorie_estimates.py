"""Calorie and macro estimates for meals described in free text."""

import math
from dataclasses import dataclass

from diet_planner.domain.generation import (
    CalorieBreakdown,
    CalorieItem,
    MacroTotals,
    MealBreakdown,
)
from diet_planner.domain.meals import MealType
from diet_planner.domain.nutrition import round_half_up
from diet_planner.services.generation import GenerationService, user_message

ESTIMATE_FAILURE_MESSAGE = "Could not estimate calories. Please try again."


class EmptyMealDescriptionError(ValueError):
    """Raised when no meal text was provided."""


@dataclass
class CalorieEstimateService:
    """Parses what the user ate into per-meal calorie and macro totals."""

    generation: GenerationService

    async def estimate(self, meal_texts: dict[MealType, str]) -> CalorieBreakdown:
        """Estimate nutrition for the described meals.

        Every number in the result is a non-negative integer.
        """
        described = {
            meal_type: text.strip()
            for meal_type, text in meal_texts.items()
            if text and text.strip()
        }
        if not described:
            raise EmptyMealDescriptionError("Describe at least one meal")
        lines = "\n".join(
            f"- {meal_type.value}: {text}" for meal_type, text in described.items()
        )
        prompt = (
            "Estimate calories, protein, carbs and fat (grams) for each food "
            "item below, with quantity and unit. Give per-meal totals and a "
            "day total. Only include the meals listed.\n\n"
            f"{lines}\n"
        )
        parsed = await self.generation.generate(
            CalorieBreakdown,
            schema_name="calorie_breakdown",
            messages=[user_message(prompt)],
            failure_message=ESTIMATE_FAILURE_MESSAGE,
        )
        return _clean_breakdown(parsed)


def safe_amount(value: float | None) -> int:
    """Coerce a model-provided number to a non-negative integer."""
    if value is None or not math.isfinite(value):
        return 0
    return max(0, round_half_up(value))


def _clean_totals(totals: MacroTotals) -> MacroTotals:
    return MacroTotals(
        calories=safe_amount(totals.calories),
        protein=safe_amount(totals.protein),
        carbs=safe_amount(totals.carbs),
        fat=safe_amount(totals.fat),
    )


def _clean_meal(meal: MealBreakdown | None) -> MealBreakdown | None:
    if meal is None:
        return None
    items = [
        CalorieItem(
            name=item.name,
            quantity=item.quantity if math.isfinite(item.quantity) else 0,
            unit=item.unit,
            calories=safe_amount(item.calories),
            protein=safe_amount(item.protein),
            carbs=safe_amount(item.carbs),
            fat=safe_amount(item.fat),
        )
        for item in meal.items
    ]
    return MealBreakdown(items=items, totals=_clean_totals(meal.totals))


def _clean_breakdown(parsed: CalorieBreakdown) -> CalorieBreakdown:
    return CalorieBreakdown(
        breakfast=_clean_meal(parsed.breakfast),
        lunch=_clean_meal(parsed.lunch),
        dinner=_clean_meal(parsed.dinner),
        snack=_clean_meal(parsed.snack),
        total=_clean_totals(parsed.total),
        notes=parsed.notes,
    )
