"""Exercise domain entity: the enrichable leaf of a Plan, plus its address."""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class LeafAddress:
    """Where an exercise lives: week index, day position and the synthetic key.

    The name is carried for log messages only; matching uses ``key``.
    plan_id pins the address to the snapshot it was taken from.
    """
    week: int
    day_index: int
    key: str
    name: str = ""
    plan_id: str = ""

    def __str__(self) -> str:
        return f"week {self.week} / day {self.day_index} / {self.name or self.key}"


@dataclass(frozen=True)
class Exercise:
    key: str
    name: str
    sets: str
    reps: str
    rpe: str
    rest: str
    description: str
    image_query: str
    image: Optional[str] = None  # data URI, absent until enriched

    @property
    def pending(self) -> bool:
        return self.image is None

    def with_image(self, image: str) -> "Exercise":
        return replace(self, image=image)

    @staticmethod
    def from_dict(data: dict, key: str) -> "Exercise":
        return Exercise(
            key=key,
            name=data["name"],
            sets=data["sets"],
            reps=data["reps"],
            rpe=data["rpe"],
            rest=data["rest"],
            description=data["description"],
            image_query=data["imageQuery"],
        )

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "rpe": self.rpe,
            "rest": self.rest,
            "description": self.description,
            "imageQuery": self.image_query,
            "image": self.image,
        }
