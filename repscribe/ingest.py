"""Parse workflow: limits, parse, flag unresolved items, summarize. Stateless. No persistence."""

from __future__ import annotations

import hashlib
import json
import logging

from .config import Settings, get_settings
from .models import (
    IssueRecord,
    ParsedExercise,
    ParseOptions,
    ParseSignature,
    ParseSummary,
    ParseWorkoutInput,
    ParseWorkoutOutput,
)
from .parser import PARSER_VERSION, detect_dialect, parse_workout_text

logger = logging.getLogger(__name__)

GENERIC_PARSE_ERROR = (
    "An error occurred while parsing the workout text. Please check your input format."
)


def _default_options(opts: ParseOptions | None) -> ParseOptions:
    return opts or ParseOptions()


def exercises_sha256(exercises: list[ParsedExercise]) -> str:
    """Stable SHA256 of the emitted exercises (sorted keys, wire aliases)."""
    blob = json.dumps([e.model_dump(by_alias=True) for e in exercises], sort_keys=True)
    return hashlib.sha256(blob.encode()).hexdigest()


def unresolved_issues(exercises: list[ParsedExercise]) -> list[IssueRecord]:
    """One warning per under-determined exercise, located by its index in the parse output."""
    issues: list[IssueRecord] = []
    for i, ex in enumerate(exercises):
        if not ex.is_under_determined:
            continue
        issues.append(IssueRecord(
            severity="warning",
            type="unresolved_exercise",
            location=f"exercises[{i}]",
            message=f"Couldn't fully parse: {ex.name}. Use a format like 'Bench press 3x10 60kg' or add a 'Sets:' line.",
            raw_excerpt=ex.name[:80],
        ))
    return issues


def summarize_parse(exercises: list[ParsedExercise], unresolved: int) -> ParseSummary:
    return ParseSummary(
        exercises_detected=len(exercises),
        time_based_exercises=sum(1 for e in exercises if e.is_time_based),
        unresolved_exercises=unresolved,
        total_sets=sum(e.sets for e in exercises),
    )


def _error_output(issue: IssueRecord) -> ParseWorkoutOutput:
    return ParseWorkoutOutput(
        status="error",
        dialect=None,
        exercises=[],
        issues=[issue],
        summary=ParseSummary(),
        signature=ParseSignature(exercises_sha256="", parser_version=PARSER_VERSION),
    )


def parse_workout_impl(
    payload: ParseWorkoutInput,
    settings: Settings | None = None,
) -> ParseWorkoutOutput:
    """
    Parse free-form workout text into exercise templates.
    Unresolved items become warnings (status needs_clarification); an unexpected fault
    discards all results and returns status error with a generic parse_error issue.
    """
    settings = settings or get_settings()
    options = _default_options(payload.options)
    text = payload.text

    if len(text) > settings.MAX_INPUT_CHARS:
        return _error_output(IssueRecord(
            severity="blocking",
            type="input_too_long",
            location="text",
            message=f"Workout text is {len(text)} characters; the limit is {settings.MAX_INPUT_CHARS}.",
        ))

    try:
        exercises = parse_workout_text(text)
    except Exception:
        logger.exception("Error parsing workout text")
        return _error_output(IssueRecord(
            severity="blocking",
            type="parse_error",
            location="text",
            message=GENERIC_PARSE_ERROR,
            raw_excerpt=text[:200].strip() or None,
        ))

    issues = unresolved_issues(exercises)
    if issues:
        logger.debug("%d of %d exercise(s) unresolved", len(issues), len(exercises))
    if not options.include_unresolved:
        exercises = [e for e in exercises if not e.is_under_determined]

    status = "needs_clarification" if issues else "ok"
    return ParseWorkoutOutput(
        status=status,
        dialect=detect_dialect(text) if text.strip() else None,
        exercises=exercises,
        issues=issues,
        summary=summarize_parse(exercises, unresolved=len(issues)),
        signature=ParseSignature(
            exercises_sha256=exercises_sha256(exercises),
            parser_version=PARSER_VERSION,
        ),
    )
