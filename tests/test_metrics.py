"""Exercise completion summaries."""

from repscribe.metrics import MOTIVATIONAL_QUOTES, pick_quote, summarize_exercise
from repscribe.models import WorkoutExercise, WorkoutSet


def _exercise(name: str, sets: list[tuple[int, float]]) -> WorkoutExercise:
    return WorkoutExercise(name=name, sets=[WorkoutSet(reps=r, weight=w) for r, w in sets])


def test_heavy_sets_message() -> None:
    """avg weight per set is tonnage / sets: (10*60 + 10*60 + 8*60) / 3 = 560."""
    summary = summarize_exercise(_exercise("Bench press", [(10, 60), (10, 60), (8, 60)]))
    assert summary.total_sets == 3
    assert summary.total_reps == 28
    assert summary.avg_reps_per_set == 9.33
    assert summary.avg_weight_per_set == 560
    assert summary.message == (
        "Great job completing Bench press! You completed 3 sets with an average of 9 reps per set. "
        "Your average weight per set was 560kg. That's some serious strength training! 💪"
    )


def test_endurance_message_for_bodyweight() -> None:
    summary = summarize_exercise(_exercise("Air squats", [(20, 0), (15, 0)]))
    assert summary.avg_weight_per_set == 0
    assert "average weight" not in summary.message
    assert summary.message.endswith("Great endurance work! Keep it up! 🏃‍♂️")
    assert "average of 18 reps" in summary.message


def test_default_closing_line() -> None:
    summary = summarize_exercise(_exercise("Curl", [(10, 4)]))
    assert summary.message.endswith("Every rep counts towards your goals! 🌟")


def test_no_sets() -> None:
    summary = summarize_exercise(WorkoutExercise(name="Plank"))
    assert summary.total_sets == 0
    assert summary.avg_reps_per_set == 0
    assert summary.message == "Great job completing Plank! Every rep counts towards your goals! 🌟"


def test_quote_is_deterministic_per_exercise() -> None:
    first = summarize_exercise(_exercise("Bench press", [(10, 60)]))
    again = summarize_exercise(_exercise("Bench press", [(8, 70), (8, 70)]))
    assert first.quote == again.quote == pick_quote("Bench press")
    assert first.quote in MOTIVATIONAL_QUOTES


def test_pick_quote_index() -> None:
    """'A' is code point 65, and 65 % 15 == 5."""
    assert len(MOTIVATIONAL_QUOTES) == 15
    assert pick_quote("A") == MOTIVATIONAL_QUOTES[5]
    assert pick_quote("") == MOTIVATIONAL_QUOTES[0]
