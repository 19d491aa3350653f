"""Tests for the generation service wrapper."""

import asyncio

import pytest

from diet_planner.domain.generation import GeneratedMeal
from diet_planner.services.generation import GenerationError, user_message
from tests.conftest import FakeGenerationClient, make_generation_service

MEAL_PAYLOAD = {
    "id": "m1",
    "name": "Porridge",
    "type": "breakfast",
    "nutrition": {"calories": 400, "protein": 20, "carbs": 60, "fat": 9},
}


def test_generate_returns_validated_model() -> None:
    client = FakeGenerationClient(payload=MEAL_PAYLOAD)
    service = make_generation_service(client)

    meal = asyncio.run(
        service.generate(
            GeneratedMeal,
            schema_name="meal",
            messages=[user_message("hi")],
            failure_message="failed",
        )
    )

    assert meal.name == "Porridge"
    assert client.calls[0]["schema_name"] == "meal"
    assert client.calls[0]["model"] == "test-model"


def test_generate_times_out_with_user_message() -> None:
    client = FakeGenerationClient(payload=MEAL_PAYLOAD, delay_seconds=1)
    service = make_generation_service(client, timeout_seconds=0.01)

    with pytest.raises(GenerationError) as exc_info:
        asyncio.run(
            service.generate(
                GeneratedMeal,
                schema_name="meal",
                messages=[],
                failure_message="Took too long",
            )
        )

    assert exc_info.value.user_message == "Took too long"


def test_generate_wraps_client_errors() -> None:
    service = make_generation_service(
        FakeGenerationClient(error=RuntimeError("boom"))
    )

    with pytest.raises(GenerationError, match="Try again"):
        asyncio.run(
            service.generate(
                GeneratedMeal, schema_name="meal", messages=[], failure_message="Try again"
            )
        )


def test_generate_rejects_payload_outside_schema() -> None:
    service = make_generation_service(
        FakeGenerationClient(payload={"id": "m1", "name": "No nutrition"})
    )

    with pytest.raises(GenerationError):
        asyncio.run(
            service.generate(
                GeneratedMeal, schema_name="meal", messages=[], failure_message="bad"
            )
        )


def test_user_message_includes_images() -> None:
    message = user_message("describe", ["data:image/png;base64,AAAA"])

    assert message["role"] == "user"
    assert message["content"] == [
        {"type": "input_text", "text": "describe"},
        {"type": "input_image", "image_url": "data:image/png;base64,AAAA"},
    ]
