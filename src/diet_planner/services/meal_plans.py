"""Meal plan generation and single-meal regeneration."""

import logging
from dataclasses import dataclass

from diet_planner.domain.generation import GeneratedMeal, GeneratedMealPlan
from diet_planner.domain.meals import DailyMealPlan, Meal, MealType
from diet_planner.domain.nutrition import Nutrition, round_half_up
from diet_planner.domain.profile import UserProfile
from diet_planner.services.generation import GenerationService, user_message
from diet_planner.services.macros import scale_targets
from diet_planner.services.plan_normalizer import (
    normalize_meal,
    normalize_plan,
    replace_meal,
)
from diet_planner.services.plans import PlanStore

_logger = logging.getLogger(__name__)

MEAL_SHARES: dict[str, float] = {
    MealType.BREAKFAST.value: 0.30,
    MealType.LUNCH.value: 0.40,
    MealType.DINNER.value: 0.25,
    MealType.SNACK.value: 0.05,
}

PLAN_FAILURE_MESSAGE = "Could not generate a meal plan. Please try again."
MEAL_FAILURE_MESSAGE = "Could not generate a replacement meal. Please try again."


@dataclass
class MealPlanService:
    """Requests meal plans from the generator and stores the results."""

    generation: GenerationService
    plan_store: PlanStore

    async def generate_daily_plan(
        self, profile: UserProfile, targets: Nutrition
    ) -> DailyMealPlan:
        """Generate, normalize and store a plan for the selected date.

        On failure ``GenerationError`` propagates and the stored plan is
        left as it was.
        """
        scaled = scale_targets(targets)
        _logger.info("Generating meal plan for targets %s", scaled)
        generated = await self.generation.generate(
            GeneratedMealPlan,
            schema_name="daily_meal_plan",
            messages=[user_message(_plan_prompt(profile, scaled))],
            failure_message=PLAN_FAILURE_MESSAGE,
        )
        plan = normalize_plan(generated, scaled, plan_date=self.plan_store.selected_date)
        return await self.plan_store.set_current_meal_plan(plan)

    async def regenerate_meal(
        self, meal: Meal, targets: Nutrition, profile: UserProfile
    ) -> Meal:
        """Generate a different meal of the same type sized to its share."""
        meal_targets = meal_share_targets(meal.type, targets)
        generated = await self.generation.generate(
            GeneratedMeal,
            schema_name="meal",
            messages=[user_message(_meal_prompt(meal, meal_targets, profile))],
            failure_message=MEAL_FAILURE_MESSAGE,
        )
        return normalize_meal(generated)

    async def regenerate_meal_in_plan(
        self, meal: Meal, targets: Nutrition, profile: UserProfile
    ) -> DailyMealPlan:
        """Replace ``meal`` in the current plan with a regenerated one."""
        plan = self.plan_store.current_meal_plan
        if plan is None:
            raise LookupError("No meal plan is loaded for the selected date")
        new_meal = await self.regenerate_meal(meal, targets, profile)
        return await self.plan_store.set_current_meal_plan(
            replace_meal(plan, meal.id, new_meal)
        )


def meal_share_targets(meal_type: str, targets: Nutrition) -> Nutrition:
    """Scale daily targets to one meal's share; unknown types count as snacks."""
    share = MEAL_SHARES.get(meal_type, MEAL_SHARES[MealType.SNACK.value])
    return Nutrition(
        calories=round_half_up(targets.calories * share),
        protein=round_half_up(targets.protein * share),
        carbs=round_half_up(targets.carbs * share),
        fat=round_half_up(targets.fat * share),
        fiber=round_half_up(targets.fiber * share),
    )


def _profile_lines(profile: UserProfile) -> str:
    def listed(values: list[str]) -> str:
        return ", ".join(values) or "none"

    diet = profile.diet_type.value if profile.diet_type else "balanced"
    return (
        f"- Age: {profile.age} years\n"
        f"- Weight: {profile.weight} kg\n"
        f"- Height: {profile.height} cm\n"
        f"- Gender: {profile.gender.value}\n"
        f"- Activity level: {profile.activity_level.value}\n"
        f"- Goal: {profile.goal.value}\n"
        f"- Meals per day: {profile.meals_per_day}\n"
        f"- Dietary restrictions: {listed(profile.dietary_restrictions)}\n"
        f"- Allergies: {listed(profile.allergies)}\n"
        f"- Health conditions: {listed(profile.health_conditions)}\n"
        f"- Disliked foods: {listed(profile.disliked_foods)}\n"
        f"- Preferred cuisines: {listed(profile.preferred_cuisines)}\n"
        f"- Diet type: {diet}\n"
    )


def _target_lines(targets: Nutrition) -> str:
    return (
        f"- Calories: {targets.calories} kcal\n"
        f"- Protein: {targets.protein} g\n"
        f"- Carbs: {targets.carbs} g\n"
        f"- Fat: {targets.fat} g\n"
        f"- Fiber: {targets.fiber} g\n"
    )


def _plan_prompt(profile: UserProfile, targets: Nutrition) -> str:
    return (
        "You are a nutritionist. Create a one-day meal plan for this user.\n\n"
        f"User:\n{_profile_lines(profile)}\n"
        f"Daily targets:\n{_target_lines(targets)}\n"
        "Rules:\n"
        "1. Compute each meal's nutrition from its actual ingredients.\n"
        "2. Calories must equal protein*4 + carbs*4 + fat*9.\n"
        "3. Split the day as breakfast 30%, lunch 40%, dinner 25%, snack 5% "
        "(if any).\n"
        "4. Avoid restricted foods and allergens; respect health conditions.\n"
        "5. Keep recipes simple with realistic prep times in minutes.\n"
    )


def _meal_prompt(meal: Meal, targets: Nutrition, profile: UserProfile) -> str:
    return (
        f"You are a nutritionist. Replace this {meal.type} with a completely "
        "different one.\n\n"
        f"Current meal: {meal.name}\n"
        f"Ingredients: {', '.join(meal.ingredients)}\n\n"
        f"User:\n{_profile_lines(profile)}\n"
        f"Targets for the new meal:\n{_target_lines(targets)}\n"
        "Calories must equal protein*4 + carbs*4 + fat*9. Avoid restricted "
        "foods and allergens and keep the recipe simple.\n"
    )
