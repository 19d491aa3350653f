"""Structured outputs expected from the generation model."""

from pydantic import BaseModel, Field


class GeneratedNutrition(BaseModel):
    """Macro record as returned by the model, before rounding."""

    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float = Field(default=0, ge=0)


class GeneratedMeal(BaseModel):
    """Single meal from the model."""

    id: str
    name: str
    type: str
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    nutrition: GeneratedNutrition
    prep_time: int | None = Field(default=None, ge=0)
    servings: int | None = Field(default=None, ge=1)


class GeneratedMealPlan(BaseModel):
    """Daily meal plan from the model; totals are recomputed locally."""

    id: str
    date: str | None = None
    meals: list[GeneratedMeal]
    total_nutrition: GeneratedNutrition | None = None


class CalorieItem(BaseModel):
    """One food line parsed from free text."""

    name: str
    quantity: float = 0
    unit: str = ""
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


class MacroTotals(BaseModel):
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


class MealBreakdown(BaseModel):
    items: list[CalorieItem] = Field(default_factory=list)
    totals: MacroTotals = Field(default_factory=MacroTotals)


class CalorieBreakdown(BaseModel):
    """Per-meal calorie estimate of a day described in free text."""

    breakfast: MealBreakdown | None = None
    lunch: MealBreakdown | None = None
    dinner: MealBreakdown | None = None
    snack: MealBreakdown | None = None
    total: MacroTotals = Field(default_factory=MacroTotals)
    notes: str | None = None
