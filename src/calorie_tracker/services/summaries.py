"""Daily summary upserts and history."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import uuid4
from zoneinfo import ZoneInfo

from calorie_tracker.domain.summaries import DailySummary, DayStatus
from calorie_tracker.services.aggregation import MealSource, aggregate_day, local_day
from calorie_tracker.services.goals import GoalDefaults, evaluate_goals
from calorie_tracker.services.profiles import ProfileRepository

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class SummaryRepository(Protocol):
    """Persistence interface for daily summaries."""

    def summary_for_day(self, day: date) -> DailySummary | None:
        """Return the summary keyed on a calendar day, if present."""

    def save_summary(self, summary: DailySummary) -> None:
        """Insert or update a summary by its day key."""

    def summaries_between(self, start: date, end: date) -> list[DailySummary]:
        """Return summaries for days in the inclusive range."""

    def delete_all(self) -> None:
        """Delete every stored summary."""


@dataclass
class DailySummaryService:
    """Computes and upserts one summary record per calendar day."""

    meal_repository: MealSource
    profile_repository: ProfileRepository
    summary_repository: SummaryRepository
    timezone: str = "UTC"
    goal_defaults: GoalDefaults = field(default_factory=GoalDefaults)
    now: Callable[[], datetime] = _utc_now
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    @property
    def tz(self) -> ZoneInfo:
        """Return the zone that defines calendar-day boundaries."""
        return ZoneInfo(self.timezone)

    def today(self) -> date:
        """Return the current local calendar day."""
        return local_day(self.now(), self.tz)

    def compute_daily_summary(self, day: date | datetime) -> DailySummary:
        """Recompute totals and goal flags for a day and store them.

        An existing summary for the day keeps its id and day key and has
        every computed field overwritten; otherwise a new one is created.
        """
        target = local_day(day, self.tz)
        with self._lock:
            aggregate = aggregate_day(target, self.meal_repository, self.tz)
            evaluation = evaluate_goals(
                aggregate,
                self.profile_repository.current_profile(),
                self.goal_defaults,
            )
            existing = self.summary_repository.summary_for_day(target)
            values = {
                "total_calories": aggregate.total_calories,
                "total_protein_g": aggregate.total_protein_g,
                "total_carbs_g": aggregate.total_carbs_g,
                "total_fat_g": aggregate.total_fat_g,
                "calorie_goal": evaluation.calorie_goal,
                "protein_target_g": evaluation.protein_target_g,
                "hit_calorie_goal": evaluation.hit_calorie_goal,
                "hit_protein_goal": evaluation.hit_protein_goal,
            }
            if existing is None:
                summary = DailySummary(id=uuid4(), day=target, **values)
                _logger.info("Daily summary created: day=%s", target)
            else:
                summary = replace(existing, **values)
                if summary == existing:
                    return existing
                _logger.info("Daily summary updated: day=%s", target)
            self.summary_repository.save_summary(summary)
            return summary

    def get_summary(self, day: date) -> DailySummary | None:
        """Return the stored summary for a day without recomputing it."""
        return self.summary_repository.summary_for_day(day)

    def recent_summaries(self, today: date, days: int = 30) -> list[DailySummary]:
        """Return stored summaries for the last ``days`` days, newest first."""
        start = today - timedelta(days=max(days, 1) - 1)
        summaries = self.summary_repository.summaries_between(start, today)
        return sorted(summaries, key=lambda summary: summary.day, reverse=True)

    def backfill(self, start: date, end: date) -> list[DailySummary]:
        """Recompute summaries for every day from ``start`` to ``end``."""
        if end < start:
            raise ValueError("backfill end must not be before start")
        results = []
        for offset in range((end - start).days + 1):
            results.append(self.compute_daily_summary(start + timedelta(days=offset)))
        return results


def day_status(summary: DailySummary) -> DayStatus:
    """Classify a summarized day for the streak history view."""
    if summary.hit_goals:
        return DayStatus.GOAL_HIT
    if summary.total_calories > 0:
        return DayStatus.LOGGED
    return DayStatus.EMPTY
