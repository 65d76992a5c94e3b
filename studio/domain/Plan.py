"""Plan domain entity: a multi-week training plan (weeks -> days -> exercises).

Every node is a frozen dataclass holding tuples, so a Plan is an immutable
snapshot; changing an exercise means building a new Plan (see
studio.logic.enrichment.merge).
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Tuple

from studio.domain.Exercise import Exercise, LeafAddress


@dataclass(frozen=True)
class DayBlock:
    day: str
    exercises: Tuple[Exercise, ...] = ()

    def to_dict(self) -> dict:
        return {"day": self.day, "exercises": [ex.to_dict() for ex in self.exercises]}


@dataclass(frozen=True)
class WeekBlock:
    week: int
    days: Tuple[DayBlock, ...] = ()

    def to_dict(self) -> dict:
        return {"week": self.week, "plan": [d.to_dict() for d in self.days]}


@dataclass(frozen=True)
class NutritionAdvice:
    protein: str
    hydration: str
    sleep: str

    def to_dict(self) -> dict:
        return {"protein": self.protein, "hydration": self.hydration, "sleep": self.sleep}


@dataclass(frozen=True)
class Plan:
    title: str
    introduction: str
    weeks: Tuple[WeekBlock, ...]
    nutrition: NutritionAdvice
    final_message: str
    # identity of the generation run; not part of the plan's value
    plan_id: str = field(default="", compare=False)

    def leaves(self) -> Iterator[Tuple[LeafAddress, Exercise]]:
        """Yield every exercise depth-first, left to right, with its address."""
        for week in self.weeks:
            for day_index, day in enumerate(week.days):
                for exercise in day.exercises:
                    yield LeafAddress(week.week, day_index, exercise.key, exercise.name, self.plan_id), exercise

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "introduction": self.introduction,
            "weeklyPlan": [w.to_dict() for w in self.weeks],
            "nutritionAdvice": self.nutrition.to_dict(),
            "finalMessage": self.final_message,
        }
