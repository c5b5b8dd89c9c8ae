"""
Rule-based parser for free-form workout plans (typed or OCR text).

Two top-level dialects:
- block: exercises separated by "---", one labeled field per line
  (Focus:, Sets:, Weight suggestion:, Rest:, "Max reps x N sets").
- list: comma-separated segments; a segment that is not a labeled field
  opens a new exercise.

Malformed items are never dropped and never raise; they come back
under-determined (sets=0, reps=0, not time-based).
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable

from .models import Dialect, ExerciseBuilder, ParsedExercise
from .normalize import normalize_weight

logger = logging.getLogger(__name__)

PARSER_VERSION = "1.0.0"

SECTION_SEPARATOR = "---"
LIST_SEPARATOR = ","

# Sections containing these are headers ("Chest Workouts", "Core Finisher").
# Known false positive: an exercise whose text contains either word is skipped too.
SECTION_SKIP_KEYWORDS = ("Workouts", "Finisher")

FOCUS_PREFIX = "Focus:"
SETS_PREFIX = "Sets:"
WEIGHT_PREFIX = "Weight suggestion:"
REST_PREFIX = "Rest:"
MAX_REPS_MARKER = "Max reps"
LABEL_PREFIXES = (FOCUS_PREFIX, SETS_PREFIX, REST_PREFIX, WEIGHT_PREFIX)

# Enumeration order decides which keyword classifies a name.
TIME_BASED_KEYWORDS = (
    "plank",
    "push-up",
    "pushup",
    "wall sit",
    "wall squat",
    "bridge",
    "glute bridge",
    "superman",
    "bird dog",
    "dead bug",
    "hollow hold",
    "side plank",
    "mountain climber",
    "burpee",
)
DEFAULT_DURATION_SECONDS = 30

_DASH = "[–—-]"  # en dash, em dash, hyphen
# Counts are capped so oversized digit runs fail to match instead of reaching int().
_INT = r"\d{1,6}"
_NUM = r"\d{1,6}(?:\.\d{1,3})?"

Extractor = Callable[[re.Match], dict[str, Any]]


# --- Sets: sub-grammars ---

def _sets_with_rep_list(m: re.Match[str]) -> dict[str, Any]:
    # Only the first rep count of "12 – 12 – 10" (or OCR'd "12 12 10") is kept.
    first = re.match(_INT, m.group("reps"))
    return {"sets": int(m.group("sets")), "reps": int(first.group()) if first else 0}


def _sets_with_rep_range(m: re.Match[str]) -> dict[str, Any]:
    return {"sets": int(m.group("sets")), "reps": int(m.group("reps"))}


def _timed_sets(m: re.Match[str]) -> dict[str, Any]:
    return {
        "sets": int(m.group("sets")),
        "reps": 0,
        "is_time_based": True,
        "duration": int(m.group("seconds")),
    }


SETS_FIELD_PATTERNS: tuple[tuple[re.Pattern[str], Extractor], ...] = (
    # 3 (12 – 12 – 10 reps)
    (re.compile(rf"^(?P<sets>{_INT})\s*\((?P<reps>{_INT}(?:(?:\s*{_DASH}\s*|\s+){_INT})*)\s*reps?\)$"), _sets_with_rep_list),
    # 2 sets x 10–15 reps
    (re.compile(rf"^(?P<sets>{_INT})\s*sets?\s*x\s*(?P<reps>{_INT})(?:{_DASH}{_INT})*\s*reps?$"), _sets_with_rep_range),
    # 2 x 45 sec
    (re.compile(rf"^(?P<sets>{_INT})\s*x\s*(?P<seconds>{_INT})\s*sec$"), _timed_sets),
)

# 25–35–40kg, 12.5 – 15 – 20kg, 30 lbs
WEIGHT_FIELD_PATTERN = re.compile(
    rf"^(?P<weight>{_NUM})\s*(?:{_DASH}\s*{_NUM}\s*)*(?P<unit>kg|lbs)$"
)
MAX_REPS_PATTERN = re.compile(rf"Max reps x (?P<sets>{_INT}) sets")


# --- Name-line shorthand grammars ---

def _sets_reps_weight(m: re.Match[str]) -> dict[str, Any]:
    groups = m.groupdict()
    fields: dict[str, Any] = {
        "name": groups["name"].strip(),
        "sets": int(groups["sets"]),
        "reps": int(groups["reps"]),
    }
    weight, unit = normalize_weight(groups.get("weight"), groups.get("unit"))
    if weight is not None:
        fields["weight"] = weight
        fields["unit"] = unit
    return fields


def _weight_only(m: re.Match[str]) -> dict[str, Any]:
    fields: dict[str, Any] = {"name": m.group("name").strip(), "sets": 0, "reps": 0}
    weight, unit = normalize_weight(m.group("weight"), m.group("unit"))
    if weight is not None:
        fields["weight"] = weight
        fields["unit"] = unit
    return fields


def _timed_shorthand(m: re.Match[str]) -> dict[str, Any]:
    return {
        "name": m.group("name").strip(),
        "sets": int(m.group("sets")),
        "reps": 0,
        "is_time_based": True,
        "duration": int(m.group("seconds")),
    }


_W = rf"(?P<weight>{_NUM})(?P<unit>kg|lbs)"

NAME_PATTERNS: tuple[tuple[re.Pattern[str], Extractor], ...] = (
    # Bench press 3x10 60kg
    (re.compile(rf"^(?P<name>.+?)\s+(?P<sets>{_INT})x(?P<reps>{_INT})(?:\s+{_W})?$", re.IGNORECASE), _sets_reps_weight),
    # Squats 3 sets of 12 reps at 100kg
    (re.compile(rf"^(?P<name>.+?)\s+(?P<sets>{_INT})\s+sets?\s+of\s+(?P<reps>{_INT})\s+reps?(?:\s+at\s+{_W})?$", re.IGNORECASE), _sets_reps_weight),
    # Bench press 3 sets 10 reps 60kg
    (re.compile(rf"^(?P<name>.+?)\s+(?P<sets>{_INT})\s+sets?\s+(?P<reps>{_INT})\s+reps?(?:\s+{_W})?$", re.IGNORECASE), _sets_reps_weight),
    # Deadlift 60kg 3x8
    (re.compile(rf"^(?P<name>.+?)\s+{_W}\s+(?P<sets>{_INT})x(?P<reps>{_INT})$", re.IGNORECASE), _sets_reps_weight),
    # Bench press 60kg
    (re.compile(rf"^(?P<name>.+?)\s+{_W}$", re.IGNORECASE), _weight_only),
    # Pull-ups 3x10
    (re.compile(rf"^(?P<name>.+?)\s+(?P<sets>{_INT})x(?P<reps>{_INT})$", re.IGNORECASE), _sets_reps_weight),
    # Plank 3x45sec
    (re.compile(rf"^(?P<name>.+?)\s+(?P<sets>{_INT})x(?P<seconds>{_INT})(?:sec|s)$", re.IGNORECASE), _timed_shorthand),
)


def _apply(draft: ExerciseBuilder, fields: dict[str, Any]) -> None:
    for key, value in fields.items():
        setattr(draft, key, value)


def match_first(
    patterns: tuple[tuple[re.Pattern[str], Extractor], ...],
    text: str,
) -> dict[str, Any] | None:
    """Run an ordered grammar list against text; fields from the first match, else None."""
    for pattern, extract in patterns:
        m = pattern.match(text)
        if m:
            return extract(m)
    return None


def apply_name_patterns(draft: ExerciseBuilder, line: str) -> bool:
    """Try the shorthand cascade on a name line. On match the name is replaced by the clean name."""
    fields = match_first(NAME_PATTERNS, line)
    if fields is None:
        return False
    _apply(draft, fields)
    return True


def apply_labeled_field(draft: ExerciseBuilder, line: str) -> bool:
    """Consume one labeled line into draft. Returns False when the line carries nothing usable."""
    if line.startswith(FOCUS_PREFIX):
        draft.focus = line[len(FOCUS_PREFIX):].strip() or None
        return True
    if line.startswith(SETS_PREFIX):
        fields = match_first(SETS_FIELD_PATTERNS, line[len(SETS_PREFIX):].strip())
        if fields is not None:
            _apply(draft, fields)
            return True
    if line.startswith(WEIGHT_PREFIX):
        m = WEIGHT_FIELD_PATTERN.match(line[len(WEIGHT_PREFIX):].strip())
        if m:
            weight, unit = normalize_weight(m.group("weight"), m.group("unit"))
            if weight is not None:
                draft.weight = weight
                draft.unit = unit
                return True
    if line.startswith(REST_PREFIX):
        draft.rest = line[len(REST_PREFIX):].strip() or None
        return True
    if MAX_REPS_MARKER in line:
        m = MAX_REPS_PATTERN.search(line)
        if m:
            draft.sets = int(m.group("sets"))
            draft.reps = 0
            return True
    return False


def classify_time_based(draft: ExerciseBuilder) -> ExerciseBuilder:
    """Flag isometric/bodyweight work as time-based. Safe to run more than once."""
    if not draft.is_time_based:
        name = draft.name.lower()
        if any(keyword in name for keyword in TIME_BASED_KEYWORDS):
            draft.is_time_based = True
    if draft.is_time_based and not draft.duration:
        draft.duration = DEFAULT_DURATION_SECONDS
    return draft


def detect_dialect(text: str) -> Dialect:
    return "block" if SECTION_SEPARATOR in text else "list"


def is_header_section(section: str) -> bool:
    return any(keyword in section for keyword in SECTION_SKIP_KEYWORDS)


def is_continuation_segment(segment: str) -> bool:
    return segment.startswith(LABEL_PREFIXES) or MAX_REPS_MARKER in segment


def parse_block_dialect(text: str) -> list[ParsedExercise]:
    out: list[ParsedExercise] = []
    sections = [s.strip() for s in text.split(SECTION_SEPARATOR)]
    for section in sections:
        if not section or is_header_section(section):
            continue
        lines = [line.strip() for line in section.splitlines() if line.strip()]
        name_line = lines[0]
        draft = ExerciseBuilder(name=name_line)
        for line in lines[1:]:
            apply_labeled_field(draft, line)
        if draft.sets == 0 and draft.reps == 0:
            apply_name_patterns(draft, name_line)
        out.append(classify_time_based(draft).build())
    return out


def parse_list_dialect(text: str) -> list[ParsedExercise]:
    out: list[ParsedExercise] = []
    current: ExerciseBuilder | None = None
    segments = [s.strip() for s in text.split(LIST_SEPARATOR)]
    for segment in segments:
        if not segment:
            continue
        if not is_continuation_segment(segment):
            if current is not None:
                out.append(classify_time_based(current).build())
            current = ExerciseBuilder(name=segment)
            apply_name_patterns(current, segment)
        elif current is not None:
            apply_labeled_field(current, segment)
        else:
            logger.debug("Dropping labeled segment with no open exercise: %r", segment[:80])
    if current is not None:
        out.append(classify_time_based(current).build())
    return out


def parse_workout_text(text: str) -> list[ParsedExercise]:
    """
    Parse a workout plan into exercise templates, in input order.
    Raises TypeError for non-string input; never raises for malformed text.
    """
    if not isinstance(text, str):
        raise TypeError(f"workout text must be a string, got {type(text).__name__}")
    dialect = detect_dialect(text)
    if dialect == "block":
        exercises = parse_block_dialect(text)
    else:
        exercises = parse_list_dialect(text)
    logger.debug("Parsed %d exercise(s) from %d chars as %s dialect", len(exercises), len(text), dialect)
    return exercises
