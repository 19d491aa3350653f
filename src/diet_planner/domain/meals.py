"""Domain models for meal plans and meal logs."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from diet_planner.domain.nutrition import Nutrition


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


MEAL_TYPE_ORDER: dict[str, int] = {
    MealType.BREAKFAST.value: 0,
    MealType.LUNCH.value: 1,
    MealType.DINNER.value: 2,
    MealType.SNACK.value: 3,
}


class Meal(BaseModel):
    """A single planned meal."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    # Usually a MealType value; anything else sorts after snacks.
    type: str
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    nutrition: Nutrition
    prep_time: int = 15
    servings: int = Field(default=1, ge=1)


class DailyMealPlan(BaseModel):
    """Meals for one calendar date with their reconciled totals."""

    model_config = ConfigDict(frozen=True)

    id: str
    date: date
    meals: list[Meal]
    total_nutrition: Nutrition


class MealLog(BaseModel):
    """A "meal eaten" event.

    ``meal_id`` only references the planned meal; name, type and nutrition
    are snapshots taken when the meal was logged.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    meal_id: str
    meal_name: str
    meal_type: str
    date: date
    timestamp: datetime
    nutrition: Nutrition


@dataclass(frozen=True)
class DailyLog:
    """All meal logs attributed to one date and their summed nutrition."""

    date: date
    meals: list[MealLog]
    total_nutrition: Nutrition
