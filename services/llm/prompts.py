"""
LLM prompt templates for the weekly planner and coach features.

Prompts are rendered deterministically from their inputs: the same
profile, preferences and start date always produce the same text.
Free-text user input is sanitized before it is interpolated.
"""

import json
import math
from datetime import date, timedelta
from typing import Dict, List

from core.constants import ADVICE_ITEMS, MAX_CHAT_MESSAGE_LENGTH, PLAN_DAYS
from core.sanitization import sanitize_user_input
from models.profile import ExperienceLevel, PreferenceSet, ProfileSnapshot, StrengthBaseline

# Re-export for clearer domain naming
sanitize_preference = sanitize_user_input

# (exercises per training day, avgSets) by experience level
LEVEL_RULES: Dict[ExperienceLevel, Dict[str, tuple]] = {
    ExperienceLevel.BEGINNER: {"exercises": (3, 5), "sets": (2, 3)},
    ExperienceLevel.INTERMEDIATE: {"exercises": (4, 6), "sets": (3, 4)},
    ExperienceLevel.ADVANCED: {"exercises": (5, 8), "sets": (4, 5)},
}

LEVEL_FOCUS = {
    ExperienceLevel.BEGINNER: "bodyweight exercises (e.g., pushups, squats, planks)",
    ExperienceLevel.INTERMEDIATE: "a mix of bodyweight and equipment-based exercises",
    ExperienceLevel.ADVANCED: "advanced exercises, compound lifts and weighted movements",
}

PLAN_OUTPUT_SCHEMA = """{
  "days": [
    {
      "date": "YYYY-MM-DD",
      "exercises": [
        {
          "name": "String",
          "description": "String",
          "type": "String",
          "bodyPart": "String",
          "equipment": "String",
          "level": "String",
          "avgSets": Number,
          "avgReps": Number,
          "calorieBurnPerRep": Number,
          "rating": Number,
          "ratingDesc": "String",
          "status": {
            "completedByUser": false,
            "completePercent": 0,
            "totalSets": Number,
            "completedSets": 0,
            "totalReps": Number,
            "completedReps": 0
          }
        }
      ]
    }
  ],
  "nutrition": ["String", "String", "String", "String", "String"],
  "recommendations": ["String", "String", "String", "String", "String"],
  "goals": ["String", "String", "String", "String", "String"],
  "prediction": ["String", "String", "String", "String", "String"]
}"""

ADVICE_OUTPUT_SCHEMA = """{
  "nutrition": ["String", "String", "String", "String", "String"],
  "recommendations": ["String", "String", "String", "String", "String"],
  "goals": ["String", "String", "String", "String", "String"],
  "prediction": ["String", "String", "String", "String", "String"]
}"""

PURE_JSON_RULE = (
    "Output must be a pure JSON response: no explanation, no code block tags, "
    "no Markdown, and it must be syntactically valid."
)

PLAN_PROMPT = """You are a professional fitness AI coach. Given the user's profile, strength baseline and preferences, return a weekly workout planner in valid JSON only. Follow every rule below strictly.

USER PROFILE:
{profile_section}

STRENGTH BASELINE:
{strength_section}

PREFERENCES:
{preferences_section}

RULES:

1. The output JSON must follow this schema exactly:
{schema}

2. "days" must contain exactly {plan_days} entries, one per calendar date, in this order:
{dates}
   Every "date" must be one of these ISO dates (YYYY-MM-DD), each used once.

3. Exactly {days_per_week} of the {plan_days} days are training days with a non-empty "exercises" array. The other {rest_days} day(s) are rest days and must have "exercises": [].
   Spread rest days between training days. Suggested training dates: {training_dates}.

4. Experience level is {experience_level}: focus on {level_focus}.
   Each training day has {min_exercises}-{max_exercises} exercises.
   avgSets must be between {min_sets} and {max_sets}.
   avgReps must suit the user's capability (e.g. if maxPushups is 20 and sets = 3, reps = 10).

5. For every exercise compute:
   status.totalSets = avgSets
   status.completedSets = 0
   status.totalReps = avgSets * avgReps
   status.completedReps = 0
   status.completePercent = 0
   status.completedByUser = false

6. Use realistic values: calorieBurnPerRep (e.g. 0.3 for pushups, 0.5 for squats, 0.8 for burpees), rating between 3.5 and 5, ratingDesc a short motivating review.

7. Fill in exactly {advice_items} strings for each of:
   nutrition: practical meal or hydration advice
   recommendations: fitness habits or routine tips
   goals: tangible results expected after following this planner
   prediction: changes the user may feel after 1-4 weeks

{pure_json_rule}
"""

HISTORY_PROMPT = """You are a professional fitness AI coach. Given the user's recent workout history, produce four lists of advice.

1. nutrition: {advice_items} practical nutrition or hydration tips supporting the recent training.
2. recommendations: {advice_items} fitness or lifestyle suggestions to improve upcoming sessions based on effort and consistency.
3. goals: {advice_items} achievable goals for the next 1-4 weeks based on performance trends.
4. prediction: {advice_items} outcome statements on what the user is likely to observe if they keep a similar effort.

WORKOUT HISTORY (JSON):
{history}

Return JSON with this exact structure:
{schema}

{pure_json_rule}
"""

ADJUSTMENT_PROMPT = """You are a fitness recommendation assistant. The user checked in before today's workout.

CHECK-IN:
- Energy level: {energy}
- Pre-workout supplement taken: {pre_workout}
- Sore body parts: {sore_parts}

PLANNED EXERCISES (JSON):
{exercises}

Return a JSON array with the same number of exercises, each modified or substituted based on the check-in:
- Keep the "id" of the exercise being replaced.
- Match or adjust for the same body part or type where sensible.
- Avoid sore body parts.
- If energy is low, reduce difficulty or use bodyweight/light alternatives.
- If the pre-workout supplement was taken and energy is high, slightly harder or compound exercises are allowed.
- Maintain diversity across muscle groups.

Each element must have this structure:
{{
  "id": "String",
  "name": "String",
  "description": "String",
  "type": "String",
  "bodyPart": "String",
  "equipment": "String",
  "level": "String",
  "avgSets": Number,
  "avgReps": Number,
  "calorieBurnPerRep": Number,
  "rating": Number,
  "ratingDesc": "String"
}}

{pure_json_rule}
"""

CHAT_PROMPT = """You are a friendly, knowledgeable fitness coach. Answer the user's message concisely and safely. Do not give medical diagnoses; suggest seeing a professional for injuries or pain.

USER MESSAGE:
{message}
"""


def plan_dates(start_date: date) -> List[date]:
    """The seven consecutive calendar dates of a plan."""
    return [start_date + timedelta(days=i) for i in range(PLAN_DAYS)]


def training_day_offsets(days_per_week: int) -> List[int]:
    """
    Spread training days evenly over the week.

    Offsets are indexes into the 7 plan dates; rest days fall between
    training days. E.g. 3 days -> [0, 2, 5].
    """
    if not 1 <= days_per_week <= PLAN_DAYS:
        raise ValueError(f"days_per_week must be between 1 and {PLAN_DAYS}")
    return [
        math.floor(i * PLAN_DAYS / days_per_week + 0.5)
        for i in range(days_per_week)
    ]


def _format_optional(label: str, value) -> str:
    return f"- {label}: {value if value not in (None, '') else 'not provided'}"


def _profile_section(profile: ProfileSnapshot) -> str:
    return "\n".join([
        _format_optional("Name", profile.name),
        _format_optional("Gender", profile.gender.value if profile.gender else None),
        _format_optional("Age", profile.age),
        _format_optional("Body type", profile.body_type),
        _format_optional("Weight (kg)", profile.weight_kg),
        _format_optional("Height (cm)", profile.height_cm),
        _format_optional("Body fat (%)", profile.body_fat_pct),
        _format_optional("Experience level", profile.experience_level.value),
    ])


def _strength_section(strength: StrengthBaseline) -> str:
    return "\n".join([
        _format_optional("Max pushups", strength.max_pushups),
        _format_optional("Max pullups", strength.max_pullups),
        _format_optional("Max bodyweight squats", strength.max_squats),
        _format_optional("Max bench press (kg)", strength.max_bench_kg),
        _format_optional("Max squat (kg)", strength.max_squat_kg),
        _format_optional("Max deadlift (kg)", strength.max_deadlift_kg),
    ])


def _preferences_section(preferences: PreferenceSet) -> str:
    equipment = [sanitize_preference(e) for e in preferences.equipment]
    equipment = [e for e in equipment if e]
    lines = [
        _format_optional("Goal", sanitize_preference(preferences.goal)),
        _format_optional("Training days per week", preferences.days_per_week),
        _format_optional(
            "Plan style",
            sanitize_preference(preferences.plan_style) if preferences.plan_style else None,
        ),
        _format_optional("Session duration (minutes)", preferences.session_duration_minutes),
        _format_optional("Equipment", ", ".join(equipment) if equipment else "Bodyweight only"),
        _format_optional(
            "Available time",
            sanitize_preference(preferences.available_time) if preferences.available_time else None,
        ),
    ]
    if preferences.limitations:
        limitation = sanitize_preference(preferences.limitations)
        if limitation:
            lines.append(f"- Limitations (AVOID exercises that stress these areas): {limitation}")
    return "\n".join(lines)


def build_plan_prompt(
    profile: ProfileSnapshot,
    strength: StrengthBaseline,
    preferences: PreferenceSet,
    start_date: date,
) -> str:
    """
    Build the weekly plan prompt.

    Args:
        profile: Body metrics and experience level
        strength: Strength baseline used to bias reps
        preferences: Goal, days per week and other preferences
        start_date: First date of the plan

    Returns:
        Formatted prompt string
    """
    rules = LEVEL_RULES[profile.experience_level]
    dates = plan_dates(start_date)
    offsets = training_day_offsets(preferences.days_per_week)

    return PLAN_PROMPT.format(
        profile_section=_profile_section(profile),
        strength_section=_strength_section(strength),
        preferences_section=_preferences_section(preferences),
        schema=PLAN_OUTPUT_SCHEMA,
        plan_days=PLAN_DAYS,
        dates="\n".join(f"   {i + 1}. {d.isoformat()}" for i, d in enumerate(dates)),
        days_per_week=preferences.days_per_week,
        rest_days=PLAN_DAYS - preferences.days_per_week,
        training_dates=", ".join(dates[i].isoformat() for i in offsets),
        experience_level=profile.experience_level.value,
        level_focus=LEVEL_FOCUS[profile.experience_level],
        min_exercises=rules["exercises"][0],
        max_exercises=rules["exercises"][1],
        min_sets=rules["sets"][0],
        max_sets=rules["sets"][1],
        advice_items=ADVICE_ITEMS,
        pure_json_rule=PURE_JSON_RULE,
    )


def build_history_prompt(history: List[Dict]) -> str:
    """
    Build the advice prompt from recent exercise history.

    Args:
        history: Days as {"date": ..., "exercises": [{name, totalSets, ...}]}

    Returns:
        Formatted prompt string
    """
    return HISTORY_PROMPT.format(
        advice_items=ADVICE_ITEMS,
        history=json.dumps({"history": history}, indent=2, default=str),
        schema=ADVICE_OUTPUT_SCHEMA,
        pure_json_rule=PURE_JSON_RULE,
    )


def build_adjustment_prompt(
    exercises: List[Dict],
    energy: str,
    pre_workout_taken: bool,
    sore_body_parts: List[str],
) -> str:
    """
    Build the prompt that substitutes a day's exercises after a check-in.

    Args:
        exercises: Planned exercises as {"id", "name", "bodyPart", ...}
        energy: low, medium or high
        pre_workout_taken: Whether a pre-workout supplement was taken
        sore_body_parts: Sore areas to avoid

    Returns:
        Formatted prompt string
    """
    sore = [sanitize_preference(p) for p in sore_body_parts]
    sore = [p for p in sore if p]
    return ADJUSTMENT_PROMPT.format(
        energy=energy,
        pre_workout="Yes" if pre_workout_taken else "No",
        sore_parts=", ".join(sore) if sore else "none",
        exercises=json.dumps(exercises, indent=2, default=str),
        pure_json_rule=PURE_JSON_RULE,
    )


def build_chat_prompt(message: str) -> str:
    """Wrap a sanitized user message for the chat coach."""
    return CHAT_PROMPT.format(
        message=sanitize_user_input(message, max_length=MAX_CHAT_MESSAGE_LENGTH),
    )
