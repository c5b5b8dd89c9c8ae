"""MCP server: repscribe.parse_workout, repscribe.materialize_workout, repscribe.summarize_exercise."""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from .config import get_settings
from .ingest import parse_workout_impl
from .metrics import summarize_exercise
from .models import MaterializeWorkoutInput, ParseWorkoutInput, WorkoutExercise
from .normalize import materialize_workout_impl

mcp = FastMCP(name="repscribe")


@mcp.tool(name="repscribe.parse_workout")
def repscribe_parse_workout(payload: dict) -> dict:
    """
    Parse free-form workout text (typed or OCR output) into exercise templates.
    Accepts "---"-separated blocks with Focus:/Sets:/Weight suggestion:/Rest: lines, or
    comma-separated shorthand such as "Bench press 3x10 60kg, Plank 3x45sec".
    Unresolved items are returned with sets=0, reps=0 and reported in issues.
    """
    inp = ParseWorkoutInput.model_validate(payload)
    result = parse_workout_impl(inp)
    return result.model_dump(by_alias=True)


@mcp.tool(name="repscribe.materialize_workout")
def repscribe_materialize_workout(payload: dict) -> dict:
    """
    Expand parsed templates into { name, sets: [{ reps, weight, completed }] } records ready to store.
    Optional `unit` (kg|lbs) converts weights; optional `default_weight` fills templates without one.
    """
    inp = MaterializeWorkoutInput.model_validate(payload)
    return materialize_workout_impl(inp).model_dump()


@mcp.tool(name="repscribe.summarize_exercise")
def repscribe_summarize_exercise(payload: dict) -> dict:
    """Summarize a completed exercise: total sets/reps, averages and an encouragement message."""
    exercise = WorkoutExercise.model_validate(payload)
    return summarize_exercise(exercise).model_dump()


def run() -> None:
    """Run the MCP server with stdio transport (default)."""
    logging.basicConfig(level=get_settings().LOG_LEVEL)
    mcp.run()
