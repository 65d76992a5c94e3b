"""Structured plan parsing: raw model text -> Plan.

The model is asked for a bare JSON document but often wraps it in a
markdown fence (```json ... ``` or plain ``` ... ```). The fence is removed,
the text is decoded and validated against the plan shape. Parsing is
all-or-nothing: anything that does not decode or validate raises
MalformedResponse carrying the raw text.
"""
from __future__ import annotations
import json
import logging
import re
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from studio.domain.Exercise import Exercise
from studio.domain.Plan import DayBlock, NutritionAdvice, Plan, WeekBlock
from studio.domain.errors import MalformedResponse

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(
    r"^```(?P<lang>[A-Za-z0-9_+-]*)[ \t]*\n?(?P<body>.*?)\n?[ \t]*(?:```)?$",
    flags=re.S,
)


# === Wire shape ===
class _ExercisePayload(BaseModel):
    name: str
    sets: str
    reps: str
    rpe: str
    rest: str
    description: str
    imageQuery: str


class _DayPayload(BaseModel):
    day: str
    exercises: List[_ExercisePayload]


class _WeekPayload(BaseModel):
    week: int = Field(..., gt=0)
    plan: List[_DayPayload]


class _NutritionPayload(BaseModel):
    protein: str
    hydration: str
    sleep: str


class _PlanPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    introduction: str
    weeklyPlan: List[_WeekPayload]
    nutritionAdvice: _NutritionPayload
    finalMessage: str

    @model_validator(mode="after")
    def unique_weeks(self):
        seen = set()
        for block in self.weeklyPlan:
            if block.week in seen:
                raise ValueError(f"duplicate week index {block.week}")
            seen.add(block.week)
        return self


# === Text Cleaning ===
def strip_code_fences(text: str) -> str:
    """Remove one surrounding markdown fence (json-tagged or generic), if present."""
    body = (text or "").strip()
    if not body.startswith("```"):
        return body
    match = _FENCE_RE.match(body)
    if match is None:  # pragma: no cover - the pattern accepts any fenced text
        return body
    lang = match.group("lang").lower()
    if lang and lang != "json":
        logger.debug("Stripping code fence tagged %r", lang)
    return match.group("body").strip()


def exercise_key(week: int, day_index: int, exercise_index: int) -> str:
    return f"w{week}-d{day_index}-e{exercise_index}"


def _to_plan(payload: _PlanPayload, plan_id: str) -> Plan:
    weeks = []
    for week_block in payload.weeklyPlan:
        days = []
        for day_index, day_block in enumerate(week_block.plan):
            exercises = tuple(
                Exercise.from_dict(ex.model_dump(), exercise_key(week_block.week, day_index, ex_index))
                for ex_index, ex in enumerate(day_block.exercises)
            )
            days.append(DayBlock(day=day_block.day, exercises=exercises))
        weeks.append(WeekBlock(week=week_block.week, days=tuple(days)))
    nutrition = payload.nutritionAdvice
    return Plan(
        title=payload.title,
        introduction=payload.introduction,
        weeks=tuple(weeks),
        nutrition=NutritionAdvice(nutrition.protein, nutrition.hydration, nutrition.sleep),
        final_message=payload.finalMessage,
        plan_id=plan_id,
    )


def parse_plan(raw_text: str, plan_id: Optional[str] = None) -> Plan:
    """Decode a model response into a Plan or raise MalformedResponse."""
    cleaned = strip_code_fences(raw_text)
    try:
        data = json.loads(cleaned)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, oversized integer literals and runaway nesting
        logger.warning("Plan response is not valid JSON: %s", str(e)[:200])
        raise MalformedResponse(raw_text, reason=f"invalid JSON: {type(e).__name__}") from e
    try:
        payload = _PlanPayload.model_validate(data)
    except ValidationError as e:
        logger.warning("Plan response does not match the plan shape: %s", e.errors()[:3])
        raise MalformedResponse(raw_text, reason=f"invalid plan shape: {e.error_count()} error(s)") from e
    return _to_plan(payload, plan_id or uuid4().hex)


__all__ = ["parse_plan", "strip_code_fences", "exercise_key"]
