"""Domain models for daily nutrition summaries."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID


@dataclass(frozen=True)
class DailyAggregate:
    """Total calories and macros logged on one calendar day."""

    day: date
    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fat_g: float


@dataclass(frozen=True)
class GoalEvaluation:
    """Goal snapshot and hit flags for a daily aggregate."""

    calorie_goal: float
    protein_target_g: float
    hit_calorie_goal: bool
    hit_protein_goal: bool

    @property
    def hit_goals(self) -> bool:
        """Return True when both the calorie and protein goals were hit."""
        return self.hit_calorie_goal and self.hit_protein_goal


@dataclass(frozen=True)
class DailySummary:
    """Materialized per-day totals with goal snapshots."""

    id: UUID
    day: date
    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fat_g: float
    calorie_goal: float
    protein_target_g: float
    hit_calorie_goal: bool
    hit_protein_goal: bool

    @property
    def hit_goals(self) -> bool:
        """Return True when both goals were hit for the day."""
        return self.hit_calorie_goal and self.hit_protein_goal


class DayStatus(StrEnum):
    """History classification of a summarized day."""

    GOAL_HIT = "goal_hit"
    LOGGED = "logged"
    EMPTY = "empty"
