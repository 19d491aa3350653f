"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from diet_planner.adapters.openai_generation_client import OpenAIGenerationClient
from diet_planner.adapters.supabase_kv_store import SupabaseKeyValueStore
from diet_planner.config import Settings
from diet_planner.services.calorie_estimates import CalorieEstimateService
from diet_planner.services.generation import GenerationService
from diet_planner.services.meal_logs import MealLogService
from diet_planner.services.meal_plans import MealPlanService
from diet_planner.services.plans import PlanStore
from diet_planner.services.profile import ProfileService
from diet_planner.services.storage import SafeStorage
from diet_planner.services.workout_plans import WorkoutPlanService
from diet_planner.services.workouts import WorkoutService


@dataclass
class AppContainer:
    """Holds the services of one user session."""

    settings: Settings
    plan_store: PlanStore
    profile_service: ProfileService
    meal_log_service: MealLogService
    meal_plan_service: MealPlanService
    calorie_estimate_service: CalorieEstimateService
    workout_service: WorkoutService
    workout_plan_service: WorkoutPlanService
    load_state: Callable[[], Awaitable[None]]
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    storage = SafeStorage(
        SupabaseKeyValueStore(supabase_client, table=resolved_settings.kv_table)
    )
    generation_client = OpenAIGenerationClient.create(
        resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.generation_timeout_seconds,
    )
    generation_service = GenerationService(
        client=generation_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        timeout_seconds=resolved_settings.generation_timeout_seconds,
    )
    plan_store = PlanStore(storage)
    profile_service = ProfileService(storage, plan_store)
    meal_log_service = MealLogService(storage, plan_store)
    workout_service = WorkoutService(storage)

    async def load_state() -> None:
        await profile_service.load()
        await plan_store.load()
        await meal_log_service.load()
        await workout_service.load()

    async def close_resources() -> None:
        await generation_client.close()

    return AppContainer(
        settings=resolved_settings,
        plan_store=plan_store,
        profile_service=profile_service,
        meal_log_service=meal_log_service,
        meal_plan_service=MealPlanService(generation_service, plan_store),
        calorie_estimate_service=CalorieEstimateService(generation_service),
        workout_service=workout_service,
        workout_plan_service=WorkoutPlanService(generation_service, workout_service),
        load_state=load_state,
        close_resources=close_resources,
    )
