"""Domain models for workout plans and workout logs."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FitnessLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class WorkoutGoal(str, Enum):
    MUSCLE_BUILDING = "muscle_building"
    FAT_LOSS = "fat_loss"
    FITNESS_IMPROVEMENT = "fitness_improvement"
    STRENGTH = "strength"
    ENDURANCE = "endurance"
    FLEXIBILITY = "flexibility"


class WorkoutLocation(str, Enum):
    HOME = "home"
    GYM = "gym"


class Equipment(str, Enum):
    BODYWEIGHT = "bodyweight"
    RESISTANCE_BAND = "resistance_band"
    DUMBBELLS = "dumbbells"
    GYM_EQUIPMENT = "gym_equipment"


class WorkoutInput(BaseModel):
    """Answers from the workout questionnaire."""

    model_config = ConfigDict(frozen=True)

    age: int = Field(gt=0)
    weight: float = Field(gt=0)
    height: float = Field(gt=0)
    experience_duration: str
    level: FitnessLevel
    goals: list[WorkoutGoal]
    days_per_week: int = Field(ge=1, le=7)
    plan_duration_weeks: int = Field(ge=1, le=3)
    location: WorkoutLocation
    equipment: list[Equipment] = Field(default_factory=list)
    injuries: list[str] = Field(default_factory=list)


class Exercise(BaseModel):
    name: str
    name_ar: str = ""
    sets: int = Field(ge=1)
    reps: str
    rest_time: str
    video_url: str = ""
    notes: str | None = None
    injury_warnings: list[str] = Field(default_factory=list)


class WorkoutDay(BaseModel):
    day: int = Field(ge=1)
    week: int = Field(ge=1)
    day_name: str
    day_name_ar: str = ""
    focus: str
    focus_ar: str = ""
    exercises: list[Exercise]
    weekly_intensity: str | None = None


class GeneratedWorkoutPlan(BaseModel):
    """Structured output for a multi-week plan."""

    plan: list[WorkoutDay]


class WorkoutPlan(BaseModel):
    """A stored workout plan."""

    id: str
    user_id: str | None = None
    input: WorkoutInput
    plan: list[WorkoutDay]
    created_at: datetime


class ExerciseSet(BaseModel):
    set_number: int
    reps: int = Field(ge=0)
    weight: float = Field(ge=0)
    completed: bool


class WorkoutLog(BaseModel):
    """Sets recorded for one exercise of one plan day."""

    id: str
    workout_plan_id: str
    day_number: int
    week_number: int
    exercise_name: str
    exercise_name_ar: str = ""
    sets: list[ExerciseSet]
    date: datetime
    notes: str | None = None
    completed: bool

    @field_validator("date")
    @classmethod
    def _naive_date_as_utc(cls, value: datetime) -> datetime:
        """Log dates are ordered against each other, so all must be aware."""
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


@dataclass(frozen=True)
class WeeklyStats:
    """Completion for one plan week."""

    week: int
    completed_exercises: int
    total_exercises: int
    completion_rate: float


@dataclass(frozen=True)
class WorkoutStats:
    """Totals over all completed sets."""

    total_workouts: int
    total_sets: int
    total_reps: int
    total_weight: float
    completed_exercises: int
    weekly_stats: list[WeeklyStats]


@dataclass(frozen=True)
class ProgressPoint:
    date: datetime
    max_weight: float
    total_volume: float
    sets: int
    avg_reps: int


@dataclass(frozen=True)
class ExerciseProgress:
    exercise_name: str
    exercise_name_ar: str
    history: list[ProgressPoint]
