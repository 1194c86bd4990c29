"""Per-day nutrition aggregation over logged meals."""

from collections.abc import Iterable
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo

from calorie_tracker.domain.meals import Meal
from calorie_tracker.domain.summaries import DailyAggregate


class MealSource(Protocol):
    """Read interface for meals in a time range."""

    def meals_between(self, start: datetime, end: datetime) -> list[Meal]:
        """Return meals logged in the half-open range ``[start, end)``."""


def day_bounds(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Return the UTC bounds of a local calendar day as ``[start, end)``."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)


def local_day(value: date | datetime, tz: ZoneInfo) -> date:
    """Return the local calendar day for a date or timestamp."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(tz).date()
    return value


def aggregate_meals(day: date, meals: Iterable[Meal]) -> DailyAggregate:
    """Sum calories and macros for the given meals."""
    calories = protein = carbs = fat = 0.0
    for meal in meals:
        calories += meal.calories
        protein += meal.protein_g or 0.0
        carbs += meal.carbs_g or 0.0
        fat += meal.fat_g or 0.0
    return DailyAggregate(
        day=day,
        total_calories=calories,
        total_protein_g=protein,
        total_carbs_g=carbs,
        total_fat_g=fat,
    )


def aggregate_day(day: date, meals: MealSource, tz: ZoneInfo) -> DailyAggregate:
    """Return totals for every meal logged on a local calendar day."""
    start, end = day_bounds(day, tz)
    return aggregate_meals(day, meals.meals_between(start, end))
