"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer, wire_services
from calorie_tracker.domain.errors import StoreReadFailure, StoreWriteFailure
from calorie_tracker.domain.meals import Meal
from calorie_tracker.domain.profiles import UserProfile
from calorie_tracker.domain.streaks import Streak, StreakType
from calorie_tracker.domain.summaries import DailySummary
from calorie_tracker.services.meals import MealRepository
from calorie_tracker.services.profiles import ProfileRepository
from calorie_tracker.services.streaks import StreakRepository
from calorie_tracker.services.summaries import SummaryRepository

NOW = datetime(2025, 8, 12, 12, 0, tzinfo=UTC)
TODAY = date(2025, 8, 12)


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, Meal] = field(default_factory=dict)

    def meals_between(self, start: datetime, end: datetime) -> list[Meal]:
        return [meal for meal in self.meals.values() if start <= meal.logged_at < end]

    def add_meal(self, meal: Meal) -> None:
        self.meals[meal.id] = meal

    def get_meal(self, meal_id: UUID) -> Meal | None:
        return self.meals.get(meal_id)

    def update_meal(self, meal: Meal) -> None:
        self.meals[meal.id] = meal

    def search_meals(
        self, start: datetime | None, end: datetime | None, text: str | None
    ) -> list[Meal]:
        needle = (text or "").casefold()
        return [
            meal
            for meal in self.meals.values()
            if (start is None or meal.logged_at >= start)
            and (end is None or meal.logged_at < end)
            and (
                needle in meal.title.casefold()
                or needle in (meal.notes or "").casefold()
            )
        ]

    def delete_meal(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)

    def delete_all(self) -> None:
        self.meals.clear()


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profile: UserProfile | None = None

    def current_profile(self) -> UserProfile | None:
        return self.profile

    def save_profile(self, profile: UserProfile) -> None:
        self.profile = profile

    def delete_all(self) -> None:
        self.profile = None


@dataclass
class InMemorySummaryRepository(SummaryRepository):
    """In-memory summary repository keyed on day."""

    summaries: dict[date, DailySummary] = field(default_factory=dict)
    saves: int = 0

    def summary_for_day(self, day: date) -> DailySummary | None:
        return self.summaries.get(day)

    def save_summary(self, summary: DailySummary) -> None:
        self.saves += 1
        self.summaries[summary.day] = summary

    def summaries_between(self, start: date, end: date) -> list[DailySummary]:
        return [
            summary
            for day, summary in self.summaries.items()
            if start <= day <= end
        ]

    def delete_all(self) -> None:
        self.summaries.clear()


@dataclass
class InMemoryStreakRepository(StreakRepository):
    """In-memory streak repository recording each combined save."""

    streaks: dict[StreakType, Streak] = field(default_factory=dict)
    saves: list[tuple[Streak, Streak]] = field(default_factory=list)

    def streak_for_type(self, streak_type: StreakType) -> Streak | None:
        return self.streaks.get(streak_type)

    def save_streaks(self, logging_streak: Streak, goal_streak: Streak) -> None:
        self.saves.append((logging_streak, goal_streak))
        self.streaks[logging_streak.type] = logging_streak
        self.streaks[goal_streak.type] = goal_streak

    def delete_all(self) -> None:
        self.streaks.clear()


@dataclass
class FailingStreakRepository(InMemoryStreakRepository):
    """Streak repository whose saves always fail."""

    def save_streaks(self, logging_streak: Streak, goal_streak: Streak) -> None:
        raise StoreWriteFailure("Failed to save streaks")


@dataclass
class FailingSummaryRepository(InMemorySummaryRepository):
    """Summary repository whose saves always fail."""

    def save_summary(self, summary: DailySummary) -> None:
        raise StoreWriteFailure("Failed to save daily summary")


@dataclass
class FailingMealRepository(InMemoryMealRepository):
    """Meal repository whose queries always fail."""

    def meals_between(self, start: datetime, end: datetime) -> list[Meal]:
        raise StoreReadFailure("Failed to list meals")


def make_meal(  # noqa: PLR0913
    logged_at: datetime,
    calories: float,
    protein_g: float = 0.0,
    carbs_g: float = 0.0,
    fat_g: float = 0.0,
    title: str = "Meal",
) -> Meal:
    return Meal(
        id=uuid4(),
        logged_at=logged_at,
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        title=title,
    )


def make_profile(weight_kg: float | None, calorie_goal: float | None) -> UserProfile:
    return UserProfile(
        id=uuid4(),
        weight_kg=weight_kg,
        calorie_goal=calorie_goal,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
    )


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def summary_repository() -> InMemorySummaryRepository:
    return InMemorySummaryRepository()


@pytest.fixture
def streak_repository() -> InMemoryStreakRepository:
    return InMemoryStreakRepository()


@pytest.fixture
def container(
    settings: Settings,
    meal_repository: InMemoryMealRepository,
    profile_repository: InMemoryProfileRepository,
    summary_repository: InMemorySummaryRepository,
    streak_repository: InMemoryStreakRepository,
) -> AppContainer:
    built = wire_services(
        settings,
        meal_repository=meal_repository,
        profile_repository=profile_repository,
        summary_repository=summary_repository,
        streak_repository=streak_repository,
    )
    built.summary_service.now = lambda: NOW
    built.profile_service.now = lambda: NOW
    return built
