"""Daily calorie and macro target calculation."""

import logging
from dataclasses import dataclass

from diet_planner.domain.nutrition import (
    CARBS_KCAL_PER_G,
    FAT_KCAL_PER_G,
    PROTEIN_KCAL_PER_G,
    Nutrition,
    round_half_up,
)
from diet_planner.domain.profile import (
    ActivityLevel,
    DietType,
    Gender,
    Goal,
    UserProfile,
    WeightLossMode,
)

_logger = logging.getLogger(__name__)

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

CALORIE_ADJUSTMENT = 500
AGGRESSIVE_LOSS_FACTOR = 0.70
LEAN_MASS_PROTEIN_G_PER_KG = 1.8
AGGRESSIVE_LEAN_MASS_PROTEIN_G_PER_KG = 2.2
MIN_FIBER_G = 25
FIBER_G_PER_1000_KCAL = 14
MAX_BODY_FAT_PERCENT = 60


@dataclass(frozen=True)
class MacroSplit:
    """Percent of calories from each macro, as fractions summing to 1."""

    protein: float
    fat: float
    carbs: float


BALANCED_SPLIT = MacroSplit(protein=0.25, fat=0.30, carbs=0.45)

MACRO_SPLITS: dict[DietType, MacroSplit] = {
    DietType.KETO: MacroSplit(protein=0.25, fat=0.70, carbs=0.05),
    DietType.LOW_CARB: MacroSplit(protein=0.30, fat=0.50, carbs=0.20),
    DietType.HIGH_PROTEIN: MacroSplit(protein=0.40, fat=0.25, carbs=0.35),
    DietType.LOW_FAT: MacroSplit(protein=0.30, fat=0.20, carbs=0.50),
    DietType.BALANCED: BALANCED_SPLIT,
    DietType.INTERMITTENT_FASTING: MacroSplit(protein=0.30, fat=0.30, carbs=0.40),
    DietType.MEDITERRANEAN: MacroSplit(protein=0.20, fat=0.35, carbs=0.45),
    DietType.PALEO: MacroSplit(protein=0.30, fat=0.40, carbs=0.30),
    DietType.VEGAN: MacroSplit(protein=0.20, fat=0.25, carbs=0.55),
    DietType.VEGETARIAN: MacroSplit(protein=0.25, fat=0.30, carbs=0.45),
}


class InvalidProfileError(ValueError):
    """Raised when a profile lacks the biometrics needed for targets."""


def compute_targets(profile: UserProfile) -> Nutrition:
    """Derive daily nutrition targets from a user profile.

    Protein is fixed first (from lean body mass when a plausible body fat
    percentage is known), then the remaining calories are split between fat
    and carbs in the diet type's fat:carbs ratio. Results can therefore drift
    from the nominal percentage split.
    """
    age, weight, height = _require_biometrics(profile)

    bmr = basal_metabolic_rate(profile.gender, weight, height, age)
    tdee = bmr * ACTIVITY_MULTIPLIERS[profile.activity_level]
    calories = _calorie_target(tdee, profile.goal, profile.weight_loss_mode)
    split = macro_split(profile.diet_type)

    protein = _protein_grams(profile, weight, calories, split)
    remaining = max(0, calories - protein * PROTEIN_KCAL_PER_G)
    fat_share = split.fat / (split.fat + split.carbs)
    carbs_share = split.carbs / (split.fat + split.carbs)
    fat = round_half_up(remaining * fat_share / FAT_KCAL_PER_G)
    carbs = round_half_up(remaining * carbs_share / CARBS_KCAL_PER_G)
    fiber = round_half_up(max(MIN_FIBER_G, calories / 1000 * FIBER_G_PER_1000_KCAL))

    targets = Nutrition(
        calories=calories, protein=protein, carbs=carbs, fat=fat, fiber=fiber
    )
    _logger.debug("Computed targets: bmr=%.1f tdee=%.1f targets=%s", bmr, tdee, targets)
    return targets


def basal_metabolic_rate(
    gender: Gender, weight: float, height: float, age: float
) -> float:
    """Mifflin-St Jeor BMR in kcal/day."""
    base = 10 * weight + 6.25 * height - 5 * age
    if gender == Gender.MALE:
        return base + 5
    return base - 161


def macro_split(diet_type: DietType | None) -> MacroSplit:
    """Return the macro percentages for a diet type, balanced by default."""
    if diet_type is None:
        return BALANCED_SPLIT
    return MACRO_SPLITS.get(diet_type, BALANCED_SPLIT)


def _calorie_target(tdee: float, goal: Goal, mode: WeightLossMode) -> int:
    if goal == Goal.LOSE:
        if mode == WeightLossMode.AGGRESSIVE:
            return round_half_up(tdee * AGGRESSIVE_LOSS_FACTOR)
        return round_half_up(tdee - CALORIE_ADJUSTMENT)
    if goal == Goal.GAIN:
        return round_half_up(tdee + CALORIE_ADJUSTMENT)
    return round_half_up(tdee)


def _protein_grams(
    profile: UserProfile, weight: float, calories: int, split: MacroSplit
) -> int:
    body_fat = profile.body_fat_percent
    if body_fat is not None and 0 < body_fat < MAX_BODY_FAT_PERCENT:
        lean_mass = weight * (1 - body_fat / 100)
        aggressive = (
            profile.goal == Goal.LOSE
            and profile.weight_loss_mode == WeightLossMode.AGGRESSIVE
        )
        multiplier = (
            AGGRESSIVE_LEAN_MASS_PROTEIN_G_PER_KG
            if aggressive
            else LEAN_MASS_PROTEIN_G_PER_KG
        )
        return round_half_up(lean_mass * multiplier)
    return round_half_up(calories * split.protein / PROTEIN_KCAL_PER_G)


def _require_biometrics(profile: UserProfile) -> tuple[float, float, float]:
    values = {
        "age": profile.age,
        "weight": profile.weight,
        "height": profile.height,
    }
    present: dict[str, float] = {
        name: float(value) for name, value in values.items() if value and value > 0
    }
    missing = [name for name in values if name not in present]
    if missing:
        _logger.error("Incomplete profile, missing: %s", ", ".join(missing))
        raise InvalidProfileError(
            f"Profile is missing required values: {', '.join(missing)}"
        )
    return present["age"], present["weight"], present["height"]


def profile_form_errors(profile: UserProfile) -> dict[str, str]:
    """Return form-level range errors keyed by field name.

    These are the input form's plausibility ranges; ``compute_targets``
    accepts any positive values.
    """
    errors: dict[str, str] = {}
    if not profile.age or not 16 <= profile.age <= 100:  # noqa: PLR2004
        errors["age"] = "Enter a valid age (16-100 years)"
    if not profile.weight or not 30 <= profile.weight <= 300:  # noqa: PLR2004
        errors["weight"] = "Enter a valid weight (30-300 kg)"
    if not profile.height or not 120 <= profile.height <= 250:  # noqa: PLR2004
        errors["height"] = "Enter a valid height (120-250 cm)"
    body_fat = profile.body_fat_percent
    if body_fat is not None and not 3 <= body_fat <= MAX_BODY_FAT_PERCENT:  # noqa: PLR2004
        errors["body_fat_percent"] = "Enter a body fat percentage between 3 and 60"
    return errors
