"""Structured generation calls with timeout and result validation."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar

from pydantic import BaseModel, ValidationError

_logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 120.0

ResultT = TypeVar("ResultT", bound=BaseModel)


class GenerationClient(Protocol):
    """Interface for schema-constrained LLM generation."""

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema_name: str,
        schema: dict[str, object],
        messages: list[dict[str, object]],
    ) -> dict[str, object]:
        """Return an object that should conform to ``schema``."""


class GenerationError(RuntimeError):
    """Generation failed; ``user_message`` is safe to show to the user."""

    def __init__(self, user_message: str) -> None:
        super().__init__(user_message)
        self.user_message = user_message


def user_message(text: str, image_data_urls: Sequence[str] = ()) -> dict[str, object]:
    """Build a user message with text and optional images."""
    content: list[dict[str, object]] = [{"type": "input_text", "text": text}]
    content.extend(
        {"type": "input_image", "image_url": image_url}
        for image_url in image_data_urls
    )
    return {"role": "user", "content": content}


@dataclass
class GenerationService:
    """Runs one generation attempt and validates the result type."""

    client: GenerationClient
    model: str
    reasoning_effort: str | None
    store: bool
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    async def generate(
        self,
        result_type: type[ResultT],
        *,
        schema_name: str,
        messages: list[dict[str, object]],
        failure_message: str,
    ) -> ResultT:
        """Call the model and parse its output as ``result_type``.

        Timeouts, client errors and schema violations all surface as
        ``GenerationError(failure_message)``. There is no retry.
        """
        try:
            raw = await asyncio.wait_for(
                self.client.generate(
                    model=self.model,
                    reasoning_effort=self.reasoning_effort,
                    store=self.store,
                    schema_name=schema_name,
                    schema=result_type.model_json_schema(),
                    messages=messages,
                ),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            _logger.warning(
                "Generation %s timed out after %ss", schema_name, self.timeout_seconds
            )
            raise GenerationError(failure_message) from exc
        except Exception as exc:
            _logger.exception("Generation %s failed", schema_name)
            raise GenerationError(failure_message) from exc
        try:
            return result_type.model_validate(raw)
        except ValidationError as exc:
            _logger.warning("Generation %s returned invalid data: %s", schema_name, exc)
            raise GenerationError(failure_message) from exc
