"""Calorie/macro consistency checks for nutrition targets."""

from dataclasses import dataclass

from diet_planner.domain.nutrition import (
    CARBS_KCAL_PER_G,
    FAT_KCAL_PER_G,
    PROTEIN_KCAL_PER_G,
    Nutrition,
    round_half_up,
)

MACRO_TOLERANCE_KCAL = 50


@dataclass(frozen=True)
class MacroValidation:
    """Outcome of a macro check, with an offered fix when inconsistent."""

    valid: bool
    message: str | None = None
    corrected: Nutrition | None = None


def validate_macros(targets: Nutrition) -> MacroValidation:
    """Check that macros account for the stated calories within tolerance.

    When they don't, each macro keeps its share of the macro-derived calories
    and is rescaled against the stated calorie target. Calories and fiber are
    left untouched.
    """
    protein_kcal = targets.protein * PROTEIN_KCAL_PER_G
    carbs_kcal = targets.carbs * CARBS_KCAL_PER_G
    fat_kcal = targets.fat * FAT_KCAL_PER_G
    total_kcal = protein_kcal + carbs_kcal + fat_kcal

    if abs(total_kcal - targets.calories) <= MACRO_TOLERANCE_KCAL:
        return MacroValidation(valid=True)

    if total_kcal == 0:
        return MacroValidation(
            valid=False,
            message=(
                f"Calories ({targets.calories}) do not match the macros (0 kcal). "
                "Enter protein, carbs or fat to derive a correction."
            ),
        )

    protein_share = protein_kcal / total_kcal
    carbs_share = carbs_kcal / total_kcal
    fat_share = fat_kcal / total_kcal
    corrected = Nutrition(
        calories=targets.calories,
        protein=round_half_up(targets.calories * protein_share / PROTEIN_KCAL_PER_G),
        carbs=round_half_up(targets.calories * carbs_share / CARBS_KCAL_PER_G),
        fat=round_half_up(targets.calories * fat_share / FAT_KCAL_PER_G),
        fiber=targets.fiber,
    )
    message = (
        f"Calories ({targets.calories}) do not match the macros ({total_kcal}). "
        f"Suggested: protein {corrected.protein}g, carbs {corrected.carbs}g, "
        f"fat {corrected.fat}g"
    )
    return MacroValidation(valid=False, message=message, corrected=corrected)


def scale_targets(targets: Nutrition) -> Nutrition:
    """Scale every macro so the macros account for exactly the calories.

    Used before targets are handed to the meal generator. Targets without any
    macro calories are returned unchanged.
    """
    total_kcal = targets.macro_calories
    if total_kcal == 0:
        return targets
    scale = targets.calories / total_kcal
    return Nutrition(
        calories=targets.calories,
        protein=round_half_up(targets.protein * scale),
        carbs=round_half_up(targets.carbs * scale),
        fat=round_half_up(targets.fat * scale),
        fiber=targets.fiber,
    )
