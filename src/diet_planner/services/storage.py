"""Key-value persistence used by the stateful services."""

import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

_logger = logging.getLogger(__name__)

USER_PROFILE_KEY = "userProfile"
SELECTED_DATE_KEY = "selectedDate"
MEAL_LOGS_KEY = "mealLogs"
WORKOUT_PLANS_KEY = "workout_plans"
WORKOUT_LOGS_KEY = "workout_logs"
MEAL_PLAN_KEY_PREFIX = "mealPlan:"


class KeyValueStore(Protocol):
    """Asynchronous string key-value store."""

    async def get_item(self, key: str) -> str | None:
        """Return the stored value or None."""

    async def set_item(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous one."""

    async def remove_item(self, key: str) -> None:
        """Delete a key if present."""


@dataclass
class SafeStorage:
    """Store wrapper that logs failures instead of raising them.

    Reads that fail are reported as missing data; failed writes leave the
    caller's in-memory state as it is.
    """

    store: KeyValueStore

    async def get_item(self, key: str) -> str | None:
        try:
            value = await self.store.get_item(key)
        except Exception:
            _logger.exception("Failed to read %s from storage", key)
            return None
        if value is None or not value.strip():
            return None
        return value

    async def set_item(self, key: str, value: str) -> None:
        try:
            await self.store.set_item(key, value)
        except Exception:
            _logger.exception("Failed to write %s to storage", key)

    async def remove_item(self, key: str) -> None:
        try:
            await self.store.remove_item(key)
        except Exception:
            _logger.exception("Failed to remove %s from storage", key)

    async def get_json(self, key: str) -> object | None:
        """Return the decoded JSON value, or None when missing or corrupt."""
        raw = await self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            _logger.exception("Stored value for %s is not valid JSON", key)
            return None


def meal_plan_key(day: date) -> str:
    return f"{MEAL_PLAN_KEY_PREFIX}{day.isoformat()}"
