"""Tests for free-text calorie estimates."""

import asyncio

import pytest

from diet_planner.domain.meals import MealType
from diet_planner.services.calorie_estimates import (
    CalorieEstimateService,
    EmptyMealDescriptionError,
    safe_amount,
)
from tests.conftest import FakeGenerationClient, make_generation_service


def test_estimate_rounds_and_clamps_numbers() -> None:
    client = FakeGenerationClient(
        payload={
            "breakfast": {
                "items": [
                    {
                        "name": "Eggs",
                        "quantity": 2,
                        "unit": "pcs",
                        "calories": 155.6,
                        "protein": 12.4,
                        "carbs": -1,
                        "fat": 10.5,
                    }
                ],
                "totals": {"calories": 155.6, "protein": 12.4, "carbs": 0, "fat": 10.5},
            },
            "total": {"calories": 155.6, "protein": 12.4, "carbs": -3, "fat": 10.5},
            "notes": "Estimated",
        }
    )
    service = CalorieEstimateService(make_generation_service(client))

    breakdown = asyncio.run(service.estimate({MealType.BREAKFAST: " 2 boiled eggs "}))

    assert breakdown.breakfast is not None
    item = breakdown.breakfast.items[0]
    assert (item.calories, item.protein, item.carbs, item.fat) == (156, 12, 0, 11)
    assert breakdown.total.carbs == 0
    assert breakdown.lunch is None
    assert breakdown.notes == "Estimated"
    prompt = client.calls[0]["messages"][0]["content"][0]["text"]  # type: ignore[index]
    assert "breakfast: 2 boiled eggs" in prompt


def test_estimate_requires_a_description() -> None:
    service = CalorieEstimateService(make_generation_service(FakeGenerationClient()))

    with pytest.raises(EmptyMealDescriptionError):
        asyncio.run(service.estimate({MealType.LUNCH: "   "}))


def test_safe_amount() -> None:
    assert safe_amount(None) == 0
    assert safe_amount(float("nan")) == 0
    assert safe_amount(float("inf")) == 0
    assert safe_amount(-5) == 0
    assert safe_amount(2.5) == 3
