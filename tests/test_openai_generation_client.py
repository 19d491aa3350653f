"""Tests for the OpenAI generation adapter."""

import asyncio
import json

import pytest

from diet_planner.adapters.openai_generation_client import OpenAIGenerationClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)


def _generate(client: OpenAIGenerationClient, reasoning_effort: str | None):  # type: ignore[no-untyped-def]
    return asyncio.run(
        client.generate(
            model="gpt-5.2",
            reasoning_effort=reasoning_effort,
            store=False,
            schema_name="meal",
            schema={"type": "object"},
            messages=[{"role": "user", "content": []}],
        )
    )


def test_openai_generation_client_parses_output() -> None:
    fake = _FakeOpenAI(json.dumps({"id": "m1"}))
    client = OpenAIGenerationClient(client=fake)  # type: ignore[arg-type]

    result = _generate(client, "medium")

    assert result == {"id": "m1"}
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["text"]["format"]["name"] == "meal"  # type: ignore[index]
    assert payload["reasoning"] == {"effort": "medium"}


def test_openai_generation_client_omits_empty_reasoning() -> None:
    fake = _FakeOpenAI("{}")
    client = OpenAIGenerationClient(client=fake)  # type: ignore[arg-type]

    _generate(client, None)

    assert fake.responses.last_payload is not None
    assert "reasoning" not in fake.responses.last_payload


def test_openai_generation_client_rejects_empty_output() -> None:
    client = OpenAIGenerationClient(client=_FakeOpenAI(""))  # type: ignore[arg-type]

    with pytest.raises(RuntimeError):
        _generate(client, None)
