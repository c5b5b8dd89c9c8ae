"""Completion summaries over materialized exercises: totals, averages, encouragement."""

from __future__ import annotations

import math

from .models import ExerciseSummary, WorkoutExercise

HEAVY_AVG_WEIGHT = 50  # kg per set
ENDURANCE_AVG_REPS = 12

MOTIVATIONAL_QUOTES = (
    "The only bad workout is the one that didn't happen.",
    "Your body can stand almost anything. It's your mind you have to convince.",
    "The hard days are what make you stronger.",
    "Success starts with self-discipline.",
    "Your health is an investment, not an expense.",
    "The only person you are destined to become is the person you decide to be.",
    "Don't wish for it. Work for it.",
    "Your future self is watching you right now through memories.",
    "The difference between try and triumph is just a little umph!",
    "Pain is temporary. Quitting lasts forever.",
    "The only limit is the one you set yourself.",
    "Your body hears everything your mind says.",
    "Fall in love with the process of becoming the very best version of yourself.",
    "The hard days are the best because that's when champions are made.",
    "You are stronger than you think.",
)


def pick_quote(seed: str) -> str:
    """Same seed, same quote: index is the sum of code points modulo the list length."""
    return MOTIVATIONAL_QUOTES[sum(ord(c) for c in seed) % len(MOTIVATIONAL_QUOTES)]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _closing_line(avg_weight: float, avg_reps: float) -> str:
    if avg_weight > HEAVY_AVG_WEIGHT:
        return "That's some serious strength training! 💪"
    if avg_reps > ENDURANCE_AVG_REPS:
        return "Great endurance work! Keep it up! 🏃‍♂️"
    return "Every rep counts towards your goals! 🌟"


def summarize_exercise(exercise: WorkoutExercise) -> ExerciseSummary:
    """
    Summarize one exercise. avg_weight_per_set is total tonnage (weight * reps) divided by sets,
    matching how the workout history reports it.
    """
    total_sets = len(exercise.sets)
    total_reps = sum(s.reps for s in exercise.sets)
    tonnage = sum(s.weight * s.reps for s in exercise.sets)
    avg_reps = total_reps / total_sets if total_sets else 0.0
    avg_weight = tonnage / total_sets if total_sets else 0.0

    message = f"Great job completing {exercise.name}! "
    if total_sets > 0:
        message += (
            f"You completed {total_sets} sets with an average of "
            f"{_round_half_up(avg_reps)} reps per set. "
        )
        if avg_weight > 0:
            message += f"Your average weight per set was {_round_half_up(avg_weight)}kg. "
    message += _closing_line(avg_weight, avg_reps)

    return ExerciseSummary(
        name=exercise.name,
        total_sets=total_sets,
        total_reps=total_reps,
        avg_reps_per_set=round(avg_reps, 2),
        avg_weight_per_set=round(avg_weight, 2),
        message=message,
        quote=pick_quote(exercise.name),
    )
