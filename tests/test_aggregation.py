"""Tests for per-day nutrition aggregation."""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from calorie_tracker.services.aggregation import (
    aggregate_day,
    aggregate_meals,
    day_bounds,
    local_day,
)
from tests.conftest import InMemoryMealRepository, make_meal


def test_day_bounds_use_local_midnight() -> None:
    tz = ZoneInfo("America/New_York")

    start, end = day_bounds(date(2025, 8, 12), tz)

    assert start == datetime(2025, 8, 12, 4, 0, tzinfo=UTC)
    assert end == datetime(2025, 8, 13, 4, 0, tzinfo=UTC)


def test_day_bounds_span_dst_change() -> None:
    tz = ZoneInfo("Europe/Berlin")

    start, end = day_bounds(date(2025, 3, 30), tz)

    assert (end - start).total_seconds() == 23 * 3600


def test_aggregate_meals_treats_missing_macros_as_zero() -> None:
    meals = [
        make_meal(datetime(2025, 8, 12, 8, tzinfo=UTC), 400, protein_g=20),
        make_meal(datetime(2025, 8, 12, 13, tzinfo=UTC), 600, carbs_g=70, fat_g=15),
    ]

    aggregate = aggregate_meals(date(2025, 8, 12), meals)

    assert aggregate.total_calories == 1000
    assert aggregate.total_protein_g == 20
    assert aggregate.total_carbs_g == 70
    assert aggregate.total_fat_g == 15


def test_aggregate_day_is_half_open() -> None:
    repo = InMemoryMealRepository()
    for meal in [
        make_meal(datetime(2025, 8, 12, 0, 0, tzinfo=UTC), 100),
        make_meal(datetime(2025, 8, 12, 23, 59, 59, tzinfo=UTC), 200),
        make_meal(datetime(2025, 8, 13, 0, 0, tzinfo=UTC), 400),
        make_meal(datetime(2025, 8, 11, 23, 59, tzinfo=UTC), 800),
    ]:
        repo.add_meal(meal)

    aggregate = aggregate_day(date(2025, 8, 12), repo, ZoneInfo("UTC"))

    assert aggregate.total_calories == 300


def test_aggregate_day_respects_timezone() -> None:
    repo = InMemoryMealRepository()
    # 02:00 UTC on the 13th is still the 12th in Los Angeles.
    repo.add_meal(make_meal(datetime(2025, 8, 13, 2, 0, tzinfo=UTC), 500))

    tz = ZoneInfo("America/Los_Angeles")

    assert aggregate_day(date(2025, 8, 12), repo, tz).total_calories == 500
    assert aggregate_day(date(2025, 8, 13), repo, tz).total_calories == 0


def test_local_day_handles_dates_and_naive_timestamps() -> None:
    tz = ZoneInfo("Asia/Tokyo")

    assert local_day(date(2025, 8, 12), tz) == date(2025, 8, 12)
    assert local_day(datetime(2025, 8, 12, 20, 0), tz) == date(2025, 8, 13)
