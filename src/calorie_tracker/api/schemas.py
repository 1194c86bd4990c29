"""Pydantic request and response models for the HTTP API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from calorie_tracker.domain.meals import Meal, MealChanges, MealDraft
from calorie_tracker.domain.profiles import UserProfile
from calorie_tracker.domain.streaks import Streak, StreakType, StreakUpdate
from calorie_tracker.domain.summaries import DailySummary, DayStatus
from calorie_tracker.services.summaries import day_status


class MealCreate(BaseModel):
    """Manually entered meal."""

    calories: float = Field(ge=0)
    protein_g: float | None = Field(default=None, ge=0)
    carbs_g: float | None = Field(default=None, ge=0)
    fat_g: float | None = Field(default=None, ge=0)
    title: str = "Meal"
    notes: str | None = None
    logged_at: datetime | None = None
    request_id: UUID | None = None

    def to_draft(self) -> MealDraft:
        """Return the meal values as a draft."""
        return MealDraft(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
            title=self.title,
            notes=self.notes,
            source="manual",
            logged_at=self.logged_at,
            request_id=self.request_id,
        )


class MealEstimate(BaseModel):
    """Nutrition estimate returned by the photo estimation webhook.

    Missing calories count as zero and a missing label becomes "Meal", so a
    sparse estimate still produces a meal the user can correct later.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    label: str | None = None
    calories: float | None = Field(default=None, ge=0)
    protein_g: float | None = Field(default=None, alias="proteinG", ge=0)
    carbs_g: float | None = Field(default=None, alias="carbsG", ge=0)
    fat_g: float | None = Field(default=None, alias="fatG", ge=0)
    notes: str | None = None
    request_id: UUID | None = Field(default=None, alias="requestId")

    def to_draft(self) -> MealDraft:
        """Return the estimate as a camera-sourced draft."""
        return MealDraft(
            calories=self.calories or 0.0,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
            title=self.label or "Meal",
            notes=self.notes,
            source="camera",
            request_id=self.request_id,
        )


class MealUpdate(BaseModel):
    """Edited meal fields; omitted fields keep their stored value."""

    calories: float | None = Field(default=None, ge=0)
    protein_g: float | None = Field(default=None, ge=0)
    carbs_g: float | None = Field(default=None, ge=0)
    fat_g: float | None = Field(default=None, ge=0)
    title: str | None = None
    notes: str | None = None
    logged_at: datetime | None = None

    def to_changes(self) -> MealChanges:
        return MealChanges(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
            title=self.title,
            notes=self.notes,
            logged_at=self.logged_at,
        )


class MealOut(BaseModel):
    """Stored meal."""

    id: UUID
    logged_at: datetime
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    title: str
    notes: str | None
    source: str
    edited: bool

    @classmethod
    def from_meal(cls, meal: Meal) -> "MealOut":
        return cls(
            id=meal.id,
            logged_at=meal.logged_at,
            calories=meal.calories,
            protein_g=meal.protein_g,
            carbs_g=meal.carbs_g,
            fat_g=meal.fat_g,
            title=meal.title,
            notes=meal.notes,
            source=meal.source,
            edited=meal.edited,
        )


class SummaryOut(BaseModel):
    """Daily summary with its history status."""

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
    status: DayStatus

    @classmethod
    def from_summary(cls, summary: DailySummary) -> "SummaryOut":
        return cls(
            id=summary.id,
            day=summary.day,
            total_calories=summary.total_calories,
            total_protein_g=summary.total_protein_g,
            total_carbs_g=summary.total_carbs_g,
            total_fat_g=summary.total_fat_g,
            calorie_goal=summary.calorie_goal,
            protein_target_g=summary.protein_target_g,
            hit_calorie_goal=summary.hit_calorie_goal,
            hit_protein_goal=summary.hit_protein_goal,
            status=day_status(summary),
        )


class BackfillRequest(BaseModel):
    """Inclusive day range to recompute."""

    start: date
    end: date


class StreakOut(BaseModel):
    """Streak counters for one type."""

    type: StreakType
    current_count: int
    longest_count: int
    last_date_counted: date | None

    @classmethod
    def from_streak(cls, streak: Streak) -> "StreakOut":
        return cls(
            type=streak.type,
            current_count=streak.current_count,
            longest_count=streak.longest_count,
            last_date_counted=streak.last_date_counted,
        )


class StreakUpdateOut(BaseModel):
    """Result of a streak update."""

    day: date
    skipped: bool
    advanced: list[StreakType]
    streaks: list[StreakOut]

    @classmethod
    def from_update(cls, update: StreakUpdate) -> "StreakUpdateOut":
        return cls(
            day=update.day,
            skipped=update.skipped,
            advanced=sorted(update.advanced),
            streaks=[
                StreakOut.from_streak(update.logging),
                StreakOut.from_streak(update.goal),
            ],
        )


class ProfileUpdate(BaseModel):
    """Goal inputs for the user profile."""

    weight_kg: float | None = Field(default=None, gt=0)
    calorie_goal: float | None = Field(default=None, gt=0)


class ProfileOut(BaseModel):
    """Stored user profile."""

    id: UUID
    weight_kg: float | None
    calorie_goal: float | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "ProfileOut":
        return cls(
            id=profile.id,
            weight_kg=profile.weight_kg,
            calorie_goal=profile.calorie_goal,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
