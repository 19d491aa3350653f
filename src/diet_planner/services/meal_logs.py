"""Meal logging and daily aggregation."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta

from pydantic import TypeAdapter, ValidationError

from diet_planner.domain.meals import DailyLog, Meal, MealLog
from diet_planner.domain.nutrition import sum_nutrition
from diet_planner.services.plans import PlanStore
from diet_planner.services.storage import MEAL_LOGS_KEY, SafeStorage

_logger = logging.getLogger(__name__)

_MEAL_LOG_LIST = TypeAdapter(list[MealLog])


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class MealLogService:
    """Append-only log of eaten meals, aggregated per date on demand."""

    storage: SafeStorage
    plan_store: PlanStore
    now: Callable[[], datetime] = _utc_now
    logs: list[MealLog] = field(default_factory=list)

    async def load(self) -> list[MealLog]:
        """Load persisted meal logs, keeping the current list on bad data."""
        payload = await self.storage.get_json(MEAL_LOGS_KEY)
        if payload is None:
            return self.logs
        try:
            self.logs = _MEAL_LOG_LIST.validate_python(payload)
        except ValidationError:
            _logger.exception("Stored meal logs are invalid")
            return self.logs
        _logger.info("Loaded %s meal logs", len(self.logs))
        return self.logs

    async def log_meal(self, meal: Meal, log_date: date | None = None) -> MealLog:
        """Record that ``meal`` was eaten.

        The entry is attributed to ``log_date`` or, by default, to the date
        the user is viewing, which may differ from the wall-clock day.
        """
        timestamp = self.now()
        entry = MealLog(
            id=self._unique_id(f"{meal.id}-{timestamp.isoformat()}"),
            meal_id=meal.id,
            meal_name=meal.name,
            meal_type=meal.type,
            date=log_date or self.plan_store.selected_date,
            timestamp=timestamp,
            nutrition=meal.nutrition,
        )
        self.logs = [*self.logs, entry]
        await self._persist()
        _logger.info("Logged meal %s on %s", meal.name, entry.date)
        return entry

    async def unlog_meal(self, log_id: str) -> None:
        """Delete a log entry by id; unknown ids are ignored."""
        self.logs = [log for log in self.logs if log.id != log_id]
        await self._persist()
        _logger.info("Removed meal log %s", log_id)

    def get_daily_log(self, day: date) -> DailyLog:
        """Return the logs attributed to ``day`` and their summed nutrition."""
        day_logs = [log for log in self.logs if log.date == day]
        return DailyLog(
            date=day,
            meals=day_logs,
            total_nutrition=sum_nutrition(log.nutrition for log in day_logs),
        )

    def get_period_logs(self, start: date, days: int) -> list[DailyLog]:
        """Return daily logs for ``days`` consecutive dates from ``start``."""
        return [
            self.get_daily_log(start + timedelta(days=offset))
            for offset in range(days)
        ]

    def is_meal_logged(self, meal_id: str) -> bool:
        """Return True if ``meal_id`` was logged on the selected date."""
        selected = self.plan_store.selected_date
        return any(
            log.meal_id == meal_id and log.date == selected for log in self.logs
        )

    def _unique_id(self, candidate: str) -> str:
        existing = {log.id for log in self.logs}
        unique = candidate
        suffix = 1
        while unique in existing:
            unique = f"{candidate}-{suffix}"
            suffix += 1
        return unique

    async def _persist(self) -> None:
        payload = _MEAL_LOG_LIST.dump_json(self.logs).decode("utf-8")
        await self.storage.set_item(MEAL_LOGS_KEY, payload)
