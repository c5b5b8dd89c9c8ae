"""Pydantic models for repscribe: parsed exercise records, tool inputs/outputs, persisted shape."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

WeightUnit = Literal["kg", "lbs"]
Dialect = Literal["block", "list"]


# --- Parser output ---

class ParsedExercise(BaseModel):
    """One exercise template extracted from free-form text. Immutable once built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    sets: int = Field(default=0, ge=0)
    reps: int = Field(default=0, ge=0)
    weight: Optional[float] = Field(default=None, gt=0)
    unit: Optional[WeightUnit] = None  # required when weight is set
    serial_number: Optional[int] = Field(default=None, alias="serialNumber")
    focus: Optional[str] = None
    rest: Optional[str] = None  # kept verbatim, e.g. "60–90 sec"
    notes: Optional[str] = None
    is_time_based: bool = Field(default=False, alias="isTimeBased")
    duration: Optional[int] = Field(default=None, gt=0)  # seconds

    @model_validator(mode="after")
    def _check_paired_fields(self) -> "ParsedExercise":
        if (self.weight is None) != (self.unit is None):
            raise ValueError("weight and unit must be set together")
        if self.is_time_based and self.duration is None:
            raise ValueError("duration required when isTimeBased is true")
        if not self.is_time_based and self.duration is not None:
            raise ValueError("duration must be null when isTimeBased is false")
        return self

    @property
    def is_under_determined(self) -> bool:
        """True when nothing usable was extracted (no sets, no reps, not timed)."""
        return self.sets == 0 and self.reps == 0 and not self.is_time_based


class ExerciseBuilder(BaseModel):
    """Mutable record filled in pass by pass; build() freezes it."""

    name: str
    sets: int = 0
    reps: int = 0
    weight: Optional[float] = None
    unit: Optional[WeightUnit] = None
    focus: Optional[str] = None
    rest: Optional[str] = None
    is_time_based: bool = False
    duration: Optional[int] = None

    def build(self) -> ParsedExercise:
        return ParsedExercise(**self.model_dump())


# --- Persisted shape (expanded by the caller from a template) ---

class WorkoutSet(BaseModel):
    reps: int = Field(ge=0)
    weight: float = Field(default=0.0, ge=0)
    completed: bool = False


class WorkoutExercise(BaseModel):
    name: str
    sets: list[WorkoutSet] = Field(default_factory=list)


# --- parse_workout ---

class ParseOptions(BaseModel):
    include_unresolved: bool = True  # False drops under-determined records from output


class ParseWorkoutInput(BaseModel):
    text: str
    options: Optional[ParseOptions] = None


class IssueRecord(BaseModel):
    severity: Literal["warning", "blocking"]
    type: str
    location: str
    message: str
    raw_excerpt: Optional[str] = None


class ParseSummary(BaseModel):
    exercises_detected: int = 0
    time_based_exercises: int = 0
    unresolved_exercises: int = 0
    total_sets: int = 0


class ParseSignature(BaseModel):
    exercises_sha256: str
    parser_version: str


class ParseWorkoutOutput(BaseModel):
    status: Literal["ok", "needs_clarification", "error"]
    dialect: Optional[Dialect] = None  # null when nothing was parsed
    exercises: list[ParsedExercise] = Field(default_factory=list)
    issues: list[IssueRecord] = Field(default_factory=list)
    summary: ParseSummary
    signature: ParseSignature


# --- materialize_workout ---

class MaterializeWorkoutInput(BaseModel):
    exercises: list[ParsedExercise] = Field(default_factory=list)
    unit: WeightUnit = "kg"  # unit the persisted weights are expressed in
    default_weight: float = Field(default=0.0, ge=0)


class MaterializeWorkoutOutput(BaseModel):
    exercises: list[WorkoutExercise] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)  # names of under-determined templates


# --- summarize_exercise ---

class ExerciseSummary(BaseModel):
    name: str
    total_sets: int = 0
    total_reps: int = 0
    avg_reps_per_set: float = 0.0
    avg_weight_per_set: float = 0.0
    message: str
    quote: str = ""
