"""Normalization of generated meal plans against nutrition targets."""

import logging
from collections.abc import Mapping
from datetime import date

from diet_planner.domain.generation import GeneratedMeal, GeneratedMealPlan
from diet_planner.domain.meals import MEAL_TYPE_ORDER, DailyMealPlan, Meal
from diet_planner.domain.nutrition import (
    Nutrition,
    add_nutrition,
    round_half_up,
    subtract_nutrition,
    sum_nutrition,
)
from diet_planner.services.macros import MACRO_TOLERANCE_KCAL

DEFAULT_SERVINGS = 1
DEFAULT_PREP_TIME_MINUTES = 15

CALORIE_DELTA_THRESHOLD = 5
PROTEIN_DELTA_THRESHOLD = 2
CARBS_DELTA_THRESHOLD = 2
FAT_DELTA_THRESHOLD = 1

_logger = logging.getLogger(__name__)


def normalize_plan(
    raw_plan: Mapping[str, object] | GeneratedMealPlan | DailyMealPlan,
    targets: Nutrition,
    plan_date: date | None = None,
) -> DailyMealPlan:
    """Turn an untrusted generated plan into a reconciled daily plan.

    Meals are put in breakfast/lunch/dinner/snack order and each meal's
    calories are re-derived from its macros when they disagree. Any residual
    difference to ``targets`` is then added in full to the last meal, leaving
    earlier meals exactly as validated. Mappings are validated first and fail
    with ``pydantic.ValidationError`` on a malformed shape.
    """
    if isinstance(raw_plan, DailyMealPlan):
        plan_id = raw_plan.id
        resolved_date = plan_date or raw_plan.date
        meals = [_correct_calories(meal) for meal in raw_plan.meals]
    else:
        generated = (
            raw_plan
            if isinstance(raw_plan, GeneratedMealPlan)
            else GeneratedMealPlan.model_validate(raw_plan)
        )
        plan_id = generated.id
        resolved_date = plan_date or _parse_date(generated.date) or date.today()
        meals = [normalize_meal(meal) for meal in generated.meals]

    ordered = sort_meals(meals)
    reconciled = _reconcile(ordered, targets)
    return DailyMealPlan(
        id=plan_id,
        date=resolved_date,
        meals=reconciled,
        total_nutrition=sum_nutrition(meal.nutrition for meal in reconciled),
    )


def normalize_meal(raw_meal: GeneratedMeal) -> Meal:
    """Round a generated meal's nutrition, fix its calories and fill defaults."""
    nutrition = raw_meal.nutrition
    meal = Meal(
        id=raw_meal.id,
        name=raw_meal.name,
        type=raw_meal.type,
        ingredients=raw_meal.ingredients,
        instructions=raw_meal.instructions,
        nutrition=Nutrition(
            calories=round_half_up(nutrition.calories),
            protein=round_half_up(nutrition.protein),
            carbs=round_half_up(nutrition.carbs),
            fat=round_half_up(nutrition.fat),
            fiber=round_half_up(nutrition.fiber),
        ),
        prep_time=(
            raw_meal.prep_time
            if raw_meal.prep_time is not None
            else DEFAULT_PREP_TIME_MINUTES
        ),
        servings=raw_meal.servings if raw_meal.servings is not None else DEFAULT_SERVINGS,
    )
    return _correct_calories(meal)


def sort_meals(meals: list[Meal]) -> list[Meal]:
    """Stable sort into canonical meal order, unknown types last."""
    unknown = len(MEAL_TYPE_ORDER)
    return sorted(meals, key=lambda meal: MEAL_TYPE_ORDER.get(meal.type, unknown))


def _correct_calories(meal: Meal) -> Meal:
    nutrition = meal.nutrition
    calculated = nutrition.macro_calories
    if abs(calculated - nutrition.calories) <= MACRO_TOLERANCE_KCAL:
        return meal
    _logger.warning(
        "Meal %s: macro calories %s do not match stated calories %s",
        meal.name,
        calculated,
        nutrition.calories,
    )
    corrected = nutrition.model_copy(update={"calories": round_half_up(calculated)})
    return meal.model_copy(update={"nutrition": corrected})


def _reconcile(meals: list[Meal], targets: Nutrition) -> list[Meal]:
    if not meals:
        return meals
    delta = subtract_nutrition(
        targets, sum_nutrition(meal.nutrition for meal in meals)
    )
    if not _exceeds_thresholds(delta):
        return meals
    last = meals[-1]
    _logger.info("Adjusting meal %s by %s to match targets", last.name, delta)
    adjusted = last.model_copy(
        update={"nutrition": add_nutrition(last.nutrition, delta)}
    )
    return [*meals[:-1], adjusted]


def _exceeds_thresholds(delta: Nutrition) -> bool:
    return (
        abs(delta.calories) > CALORIE_DELTA_THRESHOLD
        or abs(delta.protein) > PROTEIN_DELTA_THRESHOLD
        or abs(delta.carbs) > CARBS_DELTA_THRESHOLD
        or abs(delta.fat) > FAT_DELTA_THRESHOLD
    )


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def replace_meal(plan: DailyMealPlan, meal_id: str, new_meal: Meal) -> DailyMealPlan:
    """Swap one meal in place and recompute the plan totals.

    No reconciliation happens here; the replacement keeps its own values.
    """
    meals = [new_meal if meal.id == meal_id else meal for meal in plan.meals]
    return plan.model_copy(
        update={
            "meals": meals,
            "total_nutrition": sum_nutrition(meal.nutrition for meal in meals),
        }
    )
