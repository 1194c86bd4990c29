"""Domain models for logged meals."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


@dataclass(frozen=True)
class MealDraft:
    """Meal values supplied by the caller before persistence.

    ``request_id`` is the client-generated id of the submission. When set it
    becomes the meal id, so resubmitting the same request stores one meal.
    """

    calories: float
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    title: str = "Meal"
    notes: str | None = None
    source: str = "manual"
    logged_at: datetime | None = None
    request_id: UUID | None = None


@dataclass(frozen=True)
class MealChanges:
    """Edited meal values; ``None`` leaves a field unchanged."""

    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    title: str | None = None
    notes: str | None = None
    logged_at: datetime | None = None


@dataclass(frozen=True)
class Meal:
    """A stored meal with its estimated nutrition."""

    id: UUID
    logged_at: datetime
    calories: float
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    title: str = "Meal"
    notes: str | None = None
    source: str = "manual"
    edited: bool = False


class HistoryRange(StrEnum):
    """Time windows offered by the meal history."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_7_DAYS = "last_7_days"
    LAST_30_DAYS = "last_30_days"
    ALL_TIME = "all_time"
