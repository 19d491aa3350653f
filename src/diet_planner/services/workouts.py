"""Workout plan management and workout log statistics."""

import logging
from dataclasses import dataclass, field

from pydantic import TypeAdapter, ValidationError

from diet_planner.domain.nutrition import round_half_up
from diet_planner.domain.workouts import (
    ExerciseProgress,
    ProgressPoint,
    WeeklyStats,
    WorkoutLog,
    WorkoutPlan,
    WorkoutStats,
)
from diet_planner.services.storage import (
    WORKOUT_LOGS_KEY,
    WORKOUT_PLANS_KEY,
    SafeStorage,
)

_logger = logging.getLogger(__name__)

_PLAN_LIST = TypeAdapter(list[WorkoutPlan])
_LOG_LIST = TypeAdapter(list[WorkoutLog])


@dataclass
class WorkoutService:
    """Stores workout plans and logs, newest first."""

    storage: SafeStorage
    plans: list[WorkoutPlan] = field(default_factory=list)
    current_plan: WorkoutPlan | None = None
    logs: list[WorkoutLog] = field(default_factory=list)

    async def load(self) -> None:
        """Load stored plans and logs; the newest plan becomes current."""
        plans = await self.storage.get_json(WORKOUT_PLANS_KEY)
        if plans is not None:
            try:
                self.plans = _PLAN_LIST.validate_python(plans)
            except ValidationError:
                _logger.exception("Stored workout plans are invalid")
            self.current_plan = self.plans[0] if self.plans else None
        logs = await self.storage.get_json(WORKOUT_LOGS_KEY)
        if logs is not None:
            try:
                self.logs = _LOG_LIST.validate_python(logs)
            except ValidationError:
                _logger.exception("Stored workout logs are invalid")

    async def save_workout_plan(self, plan: WorkoutPlan) -> None:
        self.plans = [plan, *self.plans]
        self.current_plan = plan
        await self._persist_plans()

    async def delete_workout_plan(self, plan_id: str) -> None:
        self.plans = [plan for plan in self.plans if plan.id != plan_id]
        if self.current_plan is not None and self.current_plan.id == plan_id:
            self.current_plan = self.plans[0] if self.plans else None
        await self._persist_plans()

    def select_workout_plan(self, plan_id: str) -> WorkoutPlan | None:
        """Make a stored plan current; unknown ids leave the selection as is."""
        for plan in self.plans:
            if plan.id == plan_id:
                self.current_plan = plan
                return plan
        return None

    async def save_workout_log(self, log: WorkoutLog) -> None:
        self.logs = [log, *self.logs]
        await self.storage.set_item(
            WORKOUT_LOGS_KEY, _LOG_LIST.dump_json(self.logs).decode("utf-8")
        )
        _logger.info("Saved workout log for %s", log.exercise_name)

    def get_exercise_logs(self, exercise_name: str, limit: int = 5) -> list[WorkoutLog]:
        """Return the most recent logs of an exercise."""
        return self._logs_for(exercise_name)[:limit]

    def get_last_exercise_log(self, exercise_name: str) -> WorkoutLog | None:
        logs = self._logs_for(exercise_name)
        return logs[0] if logs else None

    def get_workout_stats(self) -> WorkoutStats:
        """Totals over completed sets plus completion rate per plan week.

        Weeks come from each log's recorded week number, not from its date.
        """
        completed_logs = [log for log in self.logs if log.completed]
        completed_sets = [
            workout_set
            for log in self.logs
            for workout_set in log.sets
            if workout_set.completed
        ]
        weeks: dict[int, list[int]] = {}
        for log in self.logs:
            counts = weeks.setdefault(log.week_number, [0, 0])
            counts[1] += 1
            if log.completed:
                counts[0] += 1
        weekly_stats = [
            WeeklyStats(
                week=week,
                completed_exercises=completed,
                total_exercises=total,
                completion_rate=completed / total * 100 if total else 0.0,
            )
            for week, (completed, total) in sorted(weeks.items())
        ]
        return WorkoutStats(
            total_workouts=len(completed_logs),
            total_sets=len(completed_sets),
            total_reps=sum(s.reps for s in completed_sets),
            total_weight=sum(s.reps * s.weight for s in completed_sets),
            completed_exercises=len(completed_logs),
            weekly_stats=weekly_stats,
        )

    def get_exercise_progress(self, exercise_name: str) -> ExerciseProgress:
        """Per-session history of a completed exercise, oldest first."""
        logs = sorted(
            (
                log
                for log in self.logs
                if log.exercise_name == exercise_name and log.completed
            ),
            key=lambda log: log.date,
        )
        history = []
        for log in logs:
            done = [s for s in log.sets if s.completed]
            avg_reps = sum(s.reps for s in done) / len(done) if done else 0
            history.append(
                ProgressPoint(
                    date=log.date,
                    max_weight=max((s.weight for s in done), default=0),
                    total_volume=sum(s.reps * s.weight for s in done),
                    sets=len(done),
                    avg_reps=round_half_up(avg_reps),
                )
            )
        return ExerciseProgress(
            exercise_name=exercise_name,
            exercise_name_ar=logs[0].exercise_name_ar if logs else "",
            history=history,
        )

    def _logs_for(self, exercise_name: str) -> list[WorkoutLog]:
        return sorted(
            (log for log in self.logs if log.exercise_name == exercise_name),
            key=lambda log: log.date,
            reverse=True,
        )

    async def _persist_plans(self) -> None:
        await self.storage.set_item(
            WORKOUT_PLANS_KEY, _PLAN_LIST.dump_json(self.plans).decode("utf-8")
        )
