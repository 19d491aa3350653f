"""User profile domain model."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class Goal(str, Enum):
    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class WeightLossMode(str, Enum):
    STANDARD = "standard"
    AGGRESSIVE = "aggressive"


class DietType(str, Enum):
    KETO = "keto"
    LOW_CARB = "low_carb"
    LOW_FAT = "low_fat"
    HIGH_PROTEIN = "high_protein"
    BALANCED = "balanced"
    INTERMITTENT_FASTING = "intermittent_fasting"
    MEDITERRANEAN = "mediterranean"
    PALEO = "paleo"
    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"


class UserProfile(BaseModel):
    """Biometric profile and food preferences of the user.

    The list-valued preference fields are passed through to the meal
    generator untouched; none of them affect target arithmetic.
    """

    model_config = ConfigDict(frozen=True)

    age: int | None
    weight: float | None
    height: float | None
    gender: Gender
    activity_level: ActivityLevel
    goal: Goal
    weight_loss_mode: WeightLossMode = WeightLossMode.STANDARD
    body_fat_percent: float | None = None
    meals_per_day: int = 3
    diet_type: DietType | None = None
    dietary_restrictions: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    health_conditions: list[str] = Field(default_factory=list)
    disliked_foods: list[str] = Field(default_factory=list)
    preferred_cuisines: list[str] = Field(default_factory=list)
