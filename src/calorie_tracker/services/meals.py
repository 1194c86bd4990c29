"""Meal logging service."""

import logging
from dataclasses import asdict, dataclass, replace
from datetime import date, datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4

from calorie_tracker.domain.errors import MealNotFoundError
from calorie_tracker.domain.meals import HistoryRange, Meal, MealChanges, MealDraft
from calorie_tracker.services.aggregation import MealSource, day_bounds, local_day
from calorie_tracker.services.streaks import StreakService
from calorie_tracker.services.summaries import DailySummaryService

_logger = logging.getLogger(__name__)


class MealRepository(MealSource, Protocol):
    """Persistence interface for meals."""

    def add_meal(self, meal: Meal) -> None:
        """Insert a meal, or overwrite the meal stored under the same id."""

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id."""

    def update_meal(self, meal: Meal) -> None:
        """Replace the stored values of an existing meal."""

    def search_meals(
        self, start: datetime | None, end: datetime | None, text: str | None
    ) -> list[Meal]:
        """Return meals in ``[start, end)`` whose title or notes contain ``text``.

        Missing bounds are open and a missing ``text`` matches every meal.
        Matching ignores case.
        """

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal by id."""

    def delete_all(self) -> None:
        """Delete every stored meal."""


@dataclass
class MealService:
    """Persists meals and refreshes the records derived from them."""

    repository: MealRepository
    summary_service: DailySummaryService
    streak_service: StreakService

    def log_meal(self, draft: MealDraft) -> Meal:
        """Store a meal, refresh its day summary and update streaks.

        Logging a draft whose ``request_id`` is already stored skips the
        insert and only reruns the refresh, so a client may retry a
        submission whose refresh failed.
        """
        if draft.request_id is not None:
            existing = self.repository.get_meal(draft.request_id)
            if existing is not None:
                _logger.info("Meal already logged: id=%s", existing.id)
                self._refresh(existing.logged_at)
                return existing
        meal = Meal(
            id=draft.request_id or uuid4(),
            logged_at=self._localize(draft.logged_at or self.summary_service.now()),
            calories=draft.calories,
            protein_g=draft.protein_g or 0.0,
            carbs_g=draft.carbs_g or 0.0,
            fat_g=draft.fat_g or 0.0,
            title=draft.title,
            notes=draft.notes or None,
            source=draft.source,
        )
        self.repository.add_meal(meal)
        _logger.info("Meal logged: id=%s calories=%s", meal.id, meal.calories)
        self._refresh(meal.logged_at)
        return meal

    def update_meal(self, meal_id: UUID, changes: MealChanges) -> Meal:
        """Apply edits to a meal and refresh the days it touches."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise MealNotFoundError(str(meal_id))
        values = {
            name: value for name, value in asdict(changes).items() if value is not None
        }
        if "notes" in values:
            values["notes"] = values["notes"] or None
        if "logged_at" in values:
            values["logged_at"] = self._localize(values["logged_at"])
        updated = replace(meal, **values, edited=True)
        self.repository.update_meal(updated)
        _logger.info("Meal updated: id=%s calories=%s", meal_id, updated.calories)

        tz = self.summary_service.tz
        if local_day(meal.logged_at, tz) != local_day(updated.logged_at, tz):
            self.summary_service.compute_daily_summary(meal.logged_at)
        self._refresh(updated.logged_at)
        return updated

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal and refresh the summary for its day."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise MealNotFoundError(str(meal_id))
        self.repository.delete_meal(meal_id)
        _logger.info("Meal deleted: id=%s", meal_id)
        self.summary_service.compute_daily_summary(meal.logged_at)

    def meals_for_day(self, day: date) -> list[Meal]:
        """Return meals logged on a local calendar day, oldest first."""
        start, end = day_bounds(day, self.summary_service.tz)
        meals = self.repository.meals_between(start, end)
        return sorted(meals, key=lambda meal: meal.logged_at)

    def history(
        self, period: HistoryRange = HistoryRange.ALL_TIME, text: str | None = None
    ) -> list[Meal]:
        """Return meals in a history window matching ``text``, newest first."""
        start, end = self._history_bounds(period)
        query = text.strip() if text else None
        meals = self.repository.search_meals(start, end, query or None)
        return sorted(meals, key=lambda meal: meal.logged_at, reverse=True)

    def _history_bounds(
        self, period: HistoryRange
    ) -> tuple[datetime | None, datetime | None]:
        today = self.summary_service.today()
        tz = self.summary_service.tz
        if period is HistoryRange.TODAY:
            return day_bounds(today, tz)
        if period is HistoryRange.YESTERDAY:
            return day_bounds(today - timedelta(days=1), tz)
        if period is HistoryRange.LAST_7_DAYS:
            return self.summary_service.now() - timedelta(days=7), None
        if period is HistoryRange.LAST_30_DAYS:
            return self.summary_service.now() - timedelta(days=30), None
        return None, None

    def _localize(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=self.summary_service.tz)
        return value

    def _refresh(self, logged_at: datetime) -> None:
        self.summary_service.compute_daily_summary(logged_at)
        self.streak_service.update_streaks()
