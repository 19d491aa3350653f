"""Tests for profile and target state."""

import asyncio
from datetime import date

import pytest

from diet_planner.domain.meals import DailyMealPlan
from diet_planner.domain.nutrition import Nutrition
from diet_planner.domain.profile import UserProfile
from diet_planner.services.plans import PlanStore
from diet_planner.services.profile import ProfileService
from diet_planner.services.storage import SafeStorage
from diet_planner.services.targets import InvalidProfileError
from tests.conftest import InMemoryKeyValueStore


def test_set_profile_derives_and_persists_targets(
    storage: SafeStorage,
    plan_store: PlanStore,
    kv_store: InMemoryKeyValueStore,
    profile: UserProfile,
) -> None:
    service = ProfileService(storage, plan_store)

    targets = asyncio.run(service.set_profile(profile))

    assert targets.calories == 2759
    assert service.targets == targets
    assert "userProfile" in kv_store.items

    reloaded = ProfileService(storage, plan_store)
    asyncio.run(reloaded.load())

    assert reloaded.profile == profile
    assert reloaded.targets == targets


def test_set_invalid_profile_leaves_state_unchanged(
    storage: SafeStorage, plan_store: PlanStore, profile: UserProfile
) -> None:
    service = ProfileService(storage, plan_store)
    asyncio.run(service.set_profile(profile))

    with pytest.raises(InvalidProfileError):
        asyncio.run(service.set_profile(profile.model_copy(update={"age": None})))

    assert service.profile == profile


def test_clear_profile_drops_displayed_plan(
    storage: SafeStorage,
    plan_store: PlanStore,
    kv_store: InMemoryKeyValueStore,
    profile: UserProfile,
) -> None:
    service = ProfileService(storage, plan_store)
    asyncio.run(service.set_profile(profile))
    asyncio.run(
        plan_store.set_current_meal_plan(
            DailyMealPlan(
                id="p",
                date=date(2024, 3, 1),
                meals=[],
                total_nutrition=Nutrition(),
            )
        )
    )

    asyncio.run(service.clear_profile())

    assert service.profile is None
    assert service.targets is None
    assert plan_store.current_meal_plan is None
    assert "userProfile" not in kv_store.items


def test_update_targets_rejects_inconsistent_macros(
    storage: SafeStorage, plan_store: PlanStore, profile: UserProfile
) -> None:
    service = ProfileService(storage, plan_store)
    original = asyncio.run(service.set_profile(profile))
    inconsistent = Nutrition(calories=2000, protein=150, carbs=200, fat=50, fiber=30)

    validation = service.update_targets(inconsistent)

    assert not validation.valid
    assert service.targets == original

    service.update_targets(inconsistent, accept_invalid=True)

    assert service.targets == inconsistent


def test_update_targets_applies_consistent_macros(
    storage: SafeStorage, plan_store: PlanStore
) -> None:
    service = ProfileService(storage, plan_store)
    consistent = Nutrition(calories=2000, protein=150, carbs=200, fat=64, fiber=30)

    assert service.update_targets(consistent).valid
    assert service.targets == consistent


def test_load_ignores_unusable_profile(
    storage: SafeStorage, plan_store: PlanStore, kv_store: InMemoryKeyValueStore
) -> None:
    kv_store.items["userProfile"] = '{"age": 30}'
    service = ProfileService(storage, plan_store)

    assert asyncio.run(service.load()) is None
    assert service.targets is None
