"""Immutable merge of an exercise image into a Plan snapshot.

Only the containers on the path root -> week -> day -> exercise are rebuilt;
every sibling week, day and exercise is reused as the same object. An address
that is not present in the snapshot (or belongs to another plan) leaves the
snapshot untouched.
"""
from __future__ import annotations
from dataclasses import replace
from typing import Optional, Tuple, TypeVar

from studio.domain.Exercise import LeafAddress
from studio.domain.Plan import Plan

T = TypeVar("T")


def _replace_at(items: Tuple[T, ...], index: int, value: T) -> Tuple[T, ...]:
    return items[:index] + (value,) + items[index + 1:]


def merge_artifact(plan: Optional[Plan], address: LeafAddress, artifact: str) -> Optional[Plan]:
    """Return a snapshot where the addressed exercise carries ``artifact``."""
    if plan is None:
        return None
    if address.plan_id and plan.plan_id and address.plan_id != plan.plan_id:
        return plan

    week_pos = next((i for i, w in enumerate(plan.weeks) if w.week == address.week), None)
    if week_pos is None:
        return plan
    week = plan.weeks[week_pos]
    if not 0 <= address.day_index < len(week.days):
        return plan
    day = week.days[address.day_index]
    ex_pos = next((i for i, ex in enumerate(day.exercises) if ex.key == address.key), None)
    if ex_pos is None:
        return plan

    exercise = day.exercises[ex_pos]
    if exercise.image == artifact:
        return plan

    new_day = replace(day, exercises=_replace_at(day.exercises, ex_pos, exercise.with_image(artifact)))
    new_week = replace(week, days=_replace_at(week.days, address.day_index, new_day))
    return replace(plan, weeks=_replace_at(plan.weeks, week_pos, new_week))


__all__ = ["merge_artifact"]
