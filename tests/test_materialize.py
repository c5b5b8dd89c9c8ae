"""Expanding parsed templates into persisted sets; unit handling and display strings."""

import pytest

from repscribe.models import MaterializeWorkoutInput, ParsedExercise
from repscribe.normalize import (
    convert_weight,
    format_duration,
    format_exercise_display,
    materialize_exercise,
    materialize_workout_impl,
    normalize_unit,
    normalize_weight,
)
from repscribe.parser import parse_workout_text


def test_materialize_expands_sets() -> None:
    ex = parse_workout_text("Bench press 3x10 60kg")[0]
    out = materialize_exercise(ex)
    assert out.name == "Bench press"
    assert len(out.sets) == 3
    assert all(s.reps == 10 and s.weight == 60 and s.completed is False for s in out.sets)


def test_materialize_converts_units() -> None:
    ex = ParsedExercise(name="Squat", sets=2, reps=5, weight=100, unit="lbs")
    out = materialize_exercise(ex, unit="kg")
    assert out.sets[0].weight == 45.36


def test_materialize_time_based_has_zero_reps() -> None:
    ex = parse_workout_text("Plank 3x45sec")[0]
    out = materialize_exercise(ex, default_weight=0)
    assert len(out.sets) == 3
    assert all(s.reps == 0 and s.weight == 0 for s in out.sets)


def test_materialize_workout_skips_under_determined() -> None:
    exercises = parse_workout_text("Row 3x8, ???, Curl 2x12")
    out = materialize_workout_impl(MaterializeWorkoutInput(exercises=exercises, default_weight=10))
    assert [e.name for e in out.exercises] == ["Row", "Curl"]
    assert out.skipped == ["???"]
    assert out.exercises[1].sets[0].weight == 10


def test_materialize_input_accepts_wire_names() -> None:
    inp = MaterializeWorkoutInput.model_validate({
        "exercises": [{"name": "Plank", "sets": 2, "reps": 0, "isTimeBased": True, "duration": 30}],
    })
    out = materialize_workout_impl(inp)
    assert len(out.exercises[0].sets) == 2


@pytest.mark.parametrize(
    "raw,expected",
    [("kg", "kg"), ("KG", "kg"), ("lbs", "lbs"), ("lb", "lbs"), ("stone", None), (None, None)],
)
def test_normalize_unit(raw, expected) -> None:
    assert normalize_unit(raw) == expected


def test_normalize_weight_rejects_non_positive() -> None:
    assert normalize_weight("0", "kg") == (None, None)
    assert normalize_weight("12.5", "kg") == (12.5, "kg")
    assert normalize_weight("10", None) == (None, None)


def test_convert_weight_between_units() -> None:
    assert convert_weight(20, "kg", "kg") == 20
    assert convert_weight(10, "kg", "lbs") == 22.05
    with pytest.raises(ValueError):
        convert_weight(10, "kg", "stone")


@pytest.mark.parametrize(
    "seconds,expected",
    [(45, "45 sec"), (60, "1 min"), (90, "1 min 30 sec"), (125, "2 min 5 sec")],
)
def test_format_duration(seconds: int, expected: str) -> None:
    assert format_duration(seconds) == expected


def test_format_exercise_display() -> None:
    bench, plank, dips, unknown = parse_workout_text(
        "Bench press 3x10 62.5kg, Plank 3x90sec, Dips, Max reps x 2 sets, ???"
    )
    assert format_exercise_display(bench) == "3×10 @ 62.5kg"
    assert format_exercise_display(plank) == "3× 1 min 30 sec"
    assert format_exercise_display(dips) == "Max reps ×2"
    assert format_exercise_display(unknown) == "?"
