"""Date-scoped meal plan storage with a selected-date cursor."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, timedelta

from pydantic import ValidationError

from diet_planner.domain.meals import DailyMealPlan
from diet_planner.services.storage import (
    SELECTED_DATE_KEY,
    SafeStorage,
    meal_plan_key,
)

_logger = logging.getLogger(__name__)


@dataclass
class PlanStore:
    """Keeps one meal plan per calendar date and tracks the viewed date."""

    storage: SafeStorage
    today: Callable[[], date] = date.today
    selected_date: date = field(init=False)
    current_meal_plan: DailyMealPlan | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.selected_date = self.today()

    async def load(self) -> DailyMealPlan | None:
        """Restore the persisted cursor and the plan stored for it."""
        stored = await self.storage.get_item(SELECTED_DATE_KEY)
        if stored is not None:
            try:
                self.selected_date = date.fromisoformat(stored.strip())
            except ValueError:
                _logger.warning("Ignoring invalid stored selected date: %s", stored)
        return await self.load_meal_plan(self.selected_date)

    async def set_selected_date(self, day: date) -> DailyMealPlan | None:
        """Move the cursor, persist it and load that date's plan."""
        self.selected_date = day
        await self.storage.set_item(SELECTED_DATE_KEY, day.isoformat())
        return await self.load_meal_plan(day)

    async def navigate_day(self, offset: int) -> DailyMealPlan | None:
        """Shift the cursor by ``offset`` calendar days."""
        return await self.set_selected_date(
            self.selected_date + timedelta(days=offset)
        )

    async def load_meal_plan(self, day: date) -> DailyMealPlan | None:
        """Load the plan stored for ``day`` into ``current_meal_plan``."""
        payload = await self.storage.get_json(meal_plan_key(day))
        plan: DailyMealPlan | None = None
        if payload is not None:
            try:
                plan = DailyMealPlan.model_validate(payload)
            except ValidationError:
                _logger.exception("Stored meal plan for %s is invalid", day)
        if plan is None:
            _logger.info("No meal plan stored for %s", day)
        else:
            _logger.info("Loaded meal plan for %s: %s meals", day, len(plan.meals))
        self.current_meal_plan = plan
        return plan

    async def set_current_meal_plan(self, plan: DailyMealPlan) -> DailyMealPlan:
        """Store ``plan`` for the selected date, replacing any earlier plan."""
        dated = plan.model_copy(update={"date": self.selected_date})
        self.current_meal_plan = dated
        await self.storage.set_item(
            meal_plan_key(self.selected_date), dated.model_dump_json()
        )
        await self.storage.set_item(SELECTED_DATE_KEY, self.selected_date.isoformat())
        _logger.info("Saved meal plan for %s", self.selected_date)
        return dated

    def clear_current_meal_plan(self) -> None:
        """Drop the displayed plan without touching stored plans."""
        self.current_meal_plan = None
