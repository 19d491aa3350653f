"""Workout plan generation."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

from diet_planner.domain.workouts import GeneratedWorkoutPlan, WorkoutInput, WorkoutPlan
from diet_planner.services.generation import GenerationService, user_message
from diet_planner.services.workouts import WorkoutService

_logger = logging.getLogger(__name__)

WORKOUT_FAILURE_MESSAGE = "Could not generate a workout plan. Please try again."


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class WorkoutPlanService:
    """Generates multi-week workout plans and saves them."""

    generation: GenerationService
    workout_service: WorkoutService
    now: Callable[[], datetime] = _utc_now

    async def generate(
        self, workout_input: WorkoutInput, user_id: str | None = None
    ) -> WorkoutPlan:
        """Generate a plan and store it as the current plan."""
        generated = await self.generation.generate(
            GeneratedWorkoutPlan,
            schema_name="workout_plan",
            messages=[user_message(_workout_prompt(workout_input))],
            failure_message=WORKOUT_FAILURE_MESSAGE,
        )
        expected_days = workout_input.days_per_week * workout_input.plan_duration_weeks
        if len(generated.plan) != expected_days:
            _logger.warning(
                "Workout plan has %s days, expected %s",
                len(generated.plan),
                expected_days,
            )
        plan = WorkoutPlan(
            id=uuid4().hex,
            user_id=user_id,
            input=workout_input,
            plan=sorted(generated.plan, key=lambda day: (day.week, day.day)),
            created_at=self.now(),
        )
        await self.workout_service.save_workout_plan(plan)
        return plan


def _workout_prompt(workout_input: WorkoutInput) -> str:
    goals = ", ".join(goal.value for goal in workout_input.goals) or "general fitness"
    equipment = (
        ", ".join(item.value for item in workout_input.equipment) or "bodyweight"
    )
    injuries = ", ".join(workout_input.injuries) or "none"
    return (
        "You are a certified strength coach. Build a progressive workout plan.\n\n"
        f"- Age: {workout_input.age}\n"
        f"- Weight: {workout_input.weight} kg\n"
        f"- Height: {workout_input.height} cm\n"
        f"- Training experience: {workout_input.experience_duration}\n"
        f"- Level: {workout_input.level.value}\n"
        f"- Goals: {goals}\n"
        f"- Days per week: {workout_input.days_per_week}\n"
        f"- Duration: {workout_input.plan_duration_weeks} week(s)\n"
        f"- Location: {workout_input.location.value}\n"
        f"- Equipment: {equipment}\n"
        f"- Injuries: {injuries}\n\n"
        "Return one entry per training day for every week, numbering days "
        "from 1 within each week and weeks from 1. Increase intensity week "
        "over week, avoid exercises that aggravate the listed injuries and "
        "add injury warnings where relevant.\n"
    )
