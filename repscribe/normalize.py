"""Normalization: units, weights, expansion of templates into persisted sets, display strings."""

from __future__ import annotations

from typing import Optional

from .models import (
    MaterializeWorkoutInput,
    MaterializeWorkoutOutput,
    ParsedExercise,
    WorkoutExercise,
    WorkoutSet,
)

KG_PER_LB = 0.45359237


def normalize_unit(unit: str | None) -> Optional[str]:
    """Map a captured unit token to "kg" / "lbs"; None when unrecognized."""
    u = (unit or "").strip().lower()
    if u in ("lb", "lbs", "pound", "pounds"):
        return "lbs"
    if u in ("kg", "kgs", "kilo", "kilogram", "kilograms"):
        return "kg"
    return None


def normalize_weight(value: str | None, unit: str | None) -> tuple[Optional[float], Optional[str]]:
    """
    Return (weight, unit) from captured strings, or (None, None) when either is
    missing, unparseable or the weight is not positive.
    """
    if not value:
        return (None, None)
    u = normalize_unit(unit)
    if u is None:
        return (None, None)
    try:
        w = float(value)
    except ValueError:
        return (None, None)
    if w <= 0:
        return (None, None)
    return (w, u)


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    if from_unit == to_unit:
        return value
    if from_unit == "lbs" and to_unit == "kg":
        return round(value * KG_PER_LB, 2)
    if from_unit == "kg" and to_unit == "lbs":
        return round(value / KG_PER_LB, 2)
    raise ValueError(f"Unsupported unit conversion: {from_unit} -> {to_unit}")


def materialize_exercise(
    exercise: ParsedExercise,
    unit: str = "kg",
    default_weight: float = 0.0,
) -> WorkoutExercise:
    """
    Expand a template into `sets` individual WorkoutSet entries (completed=False).
    Time-based and max-effort templates expand with reps=0; weights are converted to `unit`.
    Under-determined templates expand into an exercise with no sets.
    """
    if exercise.weight is not None and exercise.unit:
        weight = convert_weight(exercise.weight, exercise.unit, unit)
    else:
        weight = default_weight
    sets = [
        WorkoutSet(reps=exercise.reps, weight=weight, completed=False)
        for _ in range(exercise.sets)
    ]
    return WorkoutExercise(name=exercise.name, sets=sets)


def materialize_workout_impl(inp: MaterializeWorkoutInput) -> MaterializeWorkoutOutput:
    """Expand every resolved template; under-determined ones are listed in `skipped` by name."""
    out = MaterializeWorkoutOutput()
    for ex in inp.exercises:
        if ex.is_under_determined:
            out.skipped.append(ex.name)
            continue
        out.exercises.append(
            materialize_exercise(ex, unit=inp.unit, default_weight=inp.default_weight)
        )
    return out


def format_duration(seconds: int) -> str:
    """45 -> "45 sec", 90 -> "1 min 30 sec", 120 -> "2 min"."""
    if seconds < 60:
        return f"{seconds} sec"
    minutes, remaining = divmod(seconds, 60)
    if remaining == 0:
        return f"{minutes} min"
    return f"{minutes} min {remaining} sec"


def format_exercise_display(exercise: ParsedExercise) -> str:
    """One-line preview: "3×10 @ 60kg", "3× 45 sec", "Max reps ×2"; "?" when under-determined."""
    if exercise.is_under_determined:
        return "?"
    if exercise.is_time_based and exercise.duration:
        if exercise.sets:
            return f"{exercise.sets}× {format_duration(exercise.duration)}"
        return format_duration(exercise.duration)
    if exercise.reps == 0:
        out = f"Max reps ×{exercise.sets}"
    else:
        out = f"{exercise.sets}×{exercise.reps}"
    if exercise.weight is not None and exercise.unit:
        out += f" @ {exercise.weight:g}{exercise.unit}"
    return out
