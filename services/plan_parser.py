"""
Parser and validator for model output.

Model output is untrusted: it is expected to resemble JSON but may be
wrapped in code fences, surrounded by prose, truncated or shaped wrong.
Every entry point here either returns fully validated models or raises
PlanValidationError. No other exception type escapes.

Validation issues use two severities:
- ERROR: the output is rejected
- WARNING: the output is accepted; the message is surfaced as a suggestion
"""

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from application.exceptions import AdviceValidationError, PlanValidationError
from core.constants import ADVICE_ITEMS, ADVICE_KEYS, PLAN_DAYS
from models.plan import AdviceSet, ExerciseDraft, GeneratedPlan, PlanDay, StatusBlock
from models.profile import ExperienceLevel
from services.llm.prompts import LEVEL_RULES, plan_dates

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```[a-zA-Z]*\s*\n?|```")


class ValidationSeverity(str, Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Output is rejected
    WARNING = "warning"  # Accepted, surfaced to the user


@dataclass
class ValidationIssue:
    """A single validation issue."""

    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR
    location: Optional[str] = None  # e.g., "days[2].exercises[0]"

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


@dataclass
class ParsedPlan:
    """A validated plan plus non-fatal issues."""

    plan: GeneratedPlan
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        return [
            str(i) for i in self.issues if i.severity == ValidationSeverity.WARNING
        ]


def strip_fences(raw: str) -> str:
    """
    Remove Markdown code fences and a leading language tag.

    "```json\\n{...}\\n```" -> "{...}"
    """
    return _FENCE_RE.sub("", raw).strip()


def _extract_json(raw: str, opening: str, closing: str) -> str:
    """Cut the text down to the outermost JSON object/array, dropping prose around it."""
    text = strip_fences(raw)
    start = text.find(opening)
    end = text.rfind(closing)
    if start == -1 or end == -1 or end < start:
        return text
    return text[start:end + 1]


def _load(raw: Any, opening: str, closing: str, error_cls=PlanValidationError) -> Any:
    if not isinstance(raw, str) or not raw.strip():
        raise error_cls("Model returned an empty response")
    text = _extract_json(raw, opening, closing)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        # Truncated output is the common case here
        logger.debug(f"Unparseable model output: {raw!r}")
        raise error_cls(f"Model output is not valid JSON: {e.msg}") from e
    except RecursionError as e:
        raise error_cls("Model output is nested too deeply") from e


def _positive_int(value: Any) -> Optional[int]:
    """Accept ints, integral floats and numeric strings; None if not a positive integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, int) and value > 0:
        return value
    return None


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


def _advice_lists(
    data: Dict, issues: List[ValidationIssue]
) -> Dict[str, List[str]]:
    advice = {}
    for key in ADVICE_KEYS:
        value = data.get(key)
        if not isinstance(value, list):
            issues.append(ValidationIssue(f"'{key}' must be an array", location=key))
            continue
        if len(value) != ADVICE_ITEMS:
            issues.append(ValidationIssue(
                f"'{key}' must have exactly {ADVICE_ITEMS} items, got {len(value)}",
                location=key,
            ))
            continue
        if not all(isinstance(item, str) and item.strip() for item in value):
            issues.append(ValidationIssue(
                f"'{key}' must contain only non-empty strings", location=key
            ))
            continue
        advice[key] = [item.strip() for item in value]
    return advice


def _parse_exercise(
    raw: Any, location: str, issues: List[ValidationIssue]
) -> Optional[ExerciseDraft]:
    if not isinstance(raw, dict):
        issues.append(ValidationIssue("exercise must be an object", location=location))
        return None

    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        issues.append(ValidationIssue("missing 'name'", location=location))
        return None

    avg_sets = _positive_int(raw.get("avgSets"))
    avg_reps = _positive_int(raw.get("avgReps"))
    if avg_sets is None:
        issues.append(ValidationIssue("'avgSets' must be a positive integer", location=location))
    if avg_reps is None:
        issues.append(ValidationIssue("'avgReps' must be a positive integer", location=location))
    if not isinstance(raw.get("status"), dict):
        issues.append(ValidationIssue("missing 'status' object", location=location))
        return None
    if avg_sets is None or avg_reps is None:
        return None

    calories = _number(raw.get("calorieBurnPerRep"))
    if calories is None or calories < 0:
        if raw.get("calorieBurnPerRep") is not None:
            issues.append(ValidationIssue(
                "invalid 'calorieBurnPerRep', using 0",
                severity=ValidationSeverity.WARNING,
                location=location,
            ))
        calories = 0.0

    rating = _number(raw.get("rating"))
    if rating is not None and not 0 <= rating <= 5:
        rating = None

    description = raw.get("description")
    try:
        # The model's status block is discarded: a fresh one is derived
        # from sets and reps so totals always match.
        return ExerciseDraft(
            name=name.strip(),
            description=description.strip() if isinstance(description, str) else "",
            type=_optional_text(raw.get("type")),
            body_part=_optional_text(raw.get("bodyPart")),
            equipment=_optional_text(raw.get("equipment")),
            level=_optional_text(raw.get("level")),
            avg_sets=avg_sets,
            avg_reps=avg_reps,
            calorie_burn_per_rep=calories,
            rating=rating,
            rating_desc=_optional_text(raw.get("ratingDesc")),
            status=StatusBlock.fresh(avg_sets, avg_reps),
        )
    except ValidationError as e:
        issues.append(ValidationIssue(f"invalid exercise: {e.errors()[0]['msg']}", location=location))
        return None


def _parse_days(
    raw_days: Any,
    start_date: Optional[date],
    issues: List[ValidationIssue],
) -> List[PlanDay]:
    if not isinstance(raw_days, list):
        issues.append(ValidationIssue("'days' must be an array", location="days"))
        return []
    if len(raw_days) != PLAN_DAYS:
        issues.append(ValidationIssue(
            f"'days' must have exactly {PLAN_DAYS} entries, got {len(raw_days)}",
            location="days",
        ))
        return []

    days: List[PlanDay] = []
    for i, raw_day in enumerate(raw_days):
        location = f"days[{i}]"
        if not isinstance(raw_day, dict):
            issues.append(ValidationIssue("day must be an object", location=location))
            continue

        raw_date = raw_day.get("date")
        try:
            day_date = date.fromisoformat(raw_date) if isinstance(raw_date, str) else None
        except ValueError:
            day_date = None
        if day_date is None:
            issues.append(ValidationIssue(
                f"'date' must be an ISO date (YYYY-MM-DD), got {raw_date!r}",
                location=location,
            ))
            continue

        raw_exercises = raw_day.get("exercises")
        if not isinstance(raw_exercises, list):
            issues.append(ValidationIssue("'exercises' must be an array", location=location))
            continue

        exercises = []
        for j, raw_exercise in enumerate(raw_exercises):
            draft = _parse_exercise(raw_exercise, f"{location}.exercises[{j}]", issues)
            if draft is not None:
                exercises.append(draft)
        days.append(PlanDay(date=day_date, exercises=exercises))

    if len(days) != PLAN_DAYS:
        return days

    dates = [d.date for d in days]
    if start_date is not None:
        expected = plan_dates(start_date)
        if dates != expected:
            issues.append(ValidationIssue(
                f"dates must be the {PLAN_DAYS} consecutive days from "
                f"{start_date.isoformat()}, got {[d.isoformat() for d in dates]}",
                location="days",
            ))
    elif len(set(dates)) != PLAN_DAYS:
        issues.append(ValidationIssue("dates must be distinct", location="days"))
    return days


def _level_issues(
    plan: GeneratedPlan, experience_level: ExperienceLevel
) -> List[ValidationIssue]:
    rules = LEVEL_RULES[experience_level]
    min_ex, max_ex = rules["exercises"]
    min_sets, max_sets = rules["sets"]
    issues = []
    for day in plan.training_days:
        location = day.date.isoformat()
        count = len(day.exercises)
        if not min_ex <= count <= max_ex:
            issues.append(ValidationIssue(
                f"{count} exercises planned; {min_ex}-{max_ex} suit a "
                f"{experience_level.value} level",
                severity=ValidationSeverity.WARNING,
                location=location,
            ))
        for exercise in day.exercises:
            if not min_sets <= exercise.avg_sets <= max_sets:
                issues.append(ValidationIssue(
                    f"{exercise.name} has {exercise.avg_sets} sets; "
                    f"{min_sets}-{max_sets} suit a {experience_level.value} level",
                    severity=ValidationSeverity.WARNING,
                    location=location,
                ))
    return issues


def _raise_for_errors(issues: List[ValidationIssue], error_cls=PlanValidationError) -> None:
    errors = [i for i in issues if i.severity == ValidationSeverity.ERROR]
    if errors:
        messages = [str(i) for i in errors]
        logger.warning(f"Model output rejected with {len(errors)} error(s): {messages[0]}")
        raise error_cls(f"Model output failed validation: {messages[0]}", messages)


def parse_plan(
    raw: str,
    days_per_week: int,
    start_date: Optional[date] = None,
    experience_level: Optional[ExperienceLevel] = None,
) -> ParsedPlan:
    """
    Parse and validate a weekly plan from raw model output.

    Args:
        raw: Raw completion text
        days_per_week: Required number of non-empty days
        start_date: When given, the dates must be the 7 days from here
        experience_level: When given, level ranges are checked as warnings

    Returns:
        ParsedPlan with the validated GeneratedPlan and warnings

    Raises:
        PlanValidationError: If the output is malformed in any way
    """
    data = _load(raw, "{", "}")
    if not isinstance(data, dict):
        raise PlanValidationError("Model output must be a JSON object")

    missing = [key for key in ("days",) + ADVICE_KEYS if key not in data]
    if missing:
        raise PlanValidationError(
            f"Model output is missing keys: {', '.join(missing)}",
            [f"missing key '{key}'" for key in missing],
        )

    issues: List[ValidationIssue] = []
    days = _parse_days(data["days"], start_date, issues)
    advice = _advice_lists(data, issues)
    _raise_for_errors(issues)

    training = sum(1 for d in days if not d.is_rest_day)
    if training != days_per_week:
        # Mismatches are rejected rather than trimmed or padded
        raise PlanValidationError(
            f"Plan has {training} training days, expected {days_per_week}",
            [f"expected {days_per_week} non-empty days, got {training}"],
        )

    try:
        plan = GeneratedPlan(days=days, **advice)
    except ValidationError as e:
        raise PlanValidationError(
            "Model output failed validation",
            [err["msg"] for err in e.errors()],
        ) from e

    if experience_level is not None:
        issues.extend(_level_issues(plan, experience_level))

    return ParsedPlan(plan=plan, issues=issues)


def parse_advice(raw: str) -> AdviceSet:
    """
    Parse the four advice arrays on their own.

    Raises:
        AdviceValidationError: If the output is malformed
    """
    data = _load(raw, "{", "}", error_cls=AdviceValidationError)
    if not isinstance(data, dict):
        raise AdviceValidationError("Model output must be a JSON object")

    issues: List[ValidationIssue] = []
    advice = _advice_lists(data, issues)
    _raise_for_errors(issues, error_cls=AdviceValidationError)
    return AdviceSet(**advice)


def parse_substitutes(raw: str) -> Dict[str, ExerciseDraft]:
    """
    Parse substitute exercises keyed by the id of the exercise they replace.

    Entries without an id or with invalid sets/reps are skipped; an
    output with no usable entry is rejected.

    Raises:
        PlanValidationError: If the output is not a usable array
    """
    data = _load(raw, "[", "]")
    if isinstance(data, dict) and isinstance(data.get("exercises"), list):
        data = data["exercises"]
    if not isinstance(data, list):
        raise PlanValidationError("Model output must be a JSON array of exercises")

    substitutes: Dict[str, ExerciseDraft] = {}
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            continue
        exercise_id = item.get("id") or item.get("_id")
        if not isinstance(exercise_id, str) or not exercise_id:
            continue
        issues: List[ValidationIssue] = []
        # Substitutes carry no status; one is derived from sets and reps
        draft = _parse_exercise({**item, "status": {}}, f"[{i}]", issues)
        if draft is not None:
            substitutes[exercise_id] = draft

    if not substitutes:
        raise PlanValidationError("Model output contains no usable substitutes")
    return substitutes
