"""Streak state machine for logging and goal streaks."""

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Protocol

from calorie_tracker.domain.streaks import Streak, StreakGate, StreakType, StreakUpdate
from calorie_tracker.services.aggregation import day_bounds, local_day
from calorie_tracker.services.summaries import DailySummaryService

_logger = logging.getLogger(__name__)


class StreakRepository(Protocol):
    """Persistence interface for streak counters."""

    def streak_for_type(self, streak_type: StreakType) -> Streak | None:
        """Return the stored streak for a type, if present."""

    def save_streaks(self, logging_streak: Streak, goal_streak: Streak) -> None:
        """Persist both streak records together."""

    def delete_all(self) -> None:
        """Delete every stored streak."""


def advance_streak(streak: Streak, day: date) -> Streak:
    """Count a qualifying day.

    The count extends only when the previous counted day is exactly the day
    before; any other previous value (none, a gap, a later day) restarts it
    at one.
    """
    if streak.last_date_counted == day - timedelta(days=1):
        current = streak.current_count + 1
    else:
        current = 1
    return replace(
        streak,
        current_count=current,
        longest_count=max(streak.longest_count, current),
        last_date_counted=day,
    )


@dataclass
class StreakService:
    """Maintains the logging and goal streak counters.

    ``update_streaks`` is meant to run once per foreground or day-roll event.
    Calls are serialized since each update reads counters before writing
    them back.
    """

    summary_service: DailySummaryService
    repository: StreakRepository
    gate: StreakGate = StreakGate.PER_TYPE
    refresh_summary: bool = True
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def get_streaks(self) -> dict[StreakType, Streak]:
        """Return current streaks, with zeroed values for missing types."""
        return {
            streak_type: self.repository.streak_for_type(streak_type)
            or Streak(type=streak_type)
            for streak_type in StreakType
        }

    def update_streaks(self, today: date | datetime | None = None) -> StreakUpdate:
        """Evaluate today for both streak types and persist the result.

        A timestamp counts for its local calendar day.
        """
        if today is None:
            day = self.summary_service.today()
        else:
            day = local_day(today, self.summary_service.tz)
        with self._lock:
            logging_streak, logging_created = self._load(StreakType.LOGGING)
            goal_streak, goal_created = self._load(StreakType.GOAL)

            if self.gate is StreakGate.LOGGING:
                if logging_streak.last_date_counted == day:
                    _logger.info("Streaks already counted: day=%s", day)
                    return StreakUpdate(
                        day=day,
                        logging=logging_streak,
                        goal=goal_streak,
                        skipped=True,
                    )
                pending = set(StreakType)
            else:
                pending = {
                    streak.type
                    for streak in (logging_streak, goal_streak)
                    if streak.last_date_counted != day
                }
                if not pending:
                    _logger.info("Streaks already counted: day=%s", day)
                    return StreakUpdate(
                        day=day,
                        logging=logging_streak,
                        goal=goal_streak,
                        skipped=True,
                    )

            advanced: set[StreakType] = set()
            if StreakType.LOGGING in pending and self._has_logged_meal(day):
                logging_streak = advance_streak(logging_streak, day)
                advanced.add(StreakType.LOGGING)
            if StreakType.GOAL in pending and self._has_hit_goals(day):
                goal_streak = advance_streak(goal_streak, day)
                advanced.add(StreakType.GOAL)

            if advanced or logging_created or goal_created:
                self.repository.save_streaks(logging_streak, goal_streak)
            for streak in (logging_streak, goal_streak):
                if streak.type in advanced:
                    _logger.info(
                        "Streak counted: type=%s day=%s current=%s longest=%s",
                        streak.type,
                        day,
                        streak.current_count,
                        streak.longest_count,
                    )
            return StreakUpdate(
                day=day,
                logging=logging_streak,
                goal=goal_streak,
                advanced=frozenset(advanced),
            )

    def _load(self, streak_type: StreakType) -> tuple[Streak, bool]:
        existing = self.repository.streak_for_type(streak_type)
        if existing is None:
            return Streak(type=streak_type), True
        return existing, False

    def _has_logged_meal(self, day: date) -> bool:
        start, end = day_bounds(day, self.summary_service.tz)
        return bool(self.summary_service.meal_repository.meals_between(start, end))

    def _has_hit_goals(self, day: date) -> bool:
        if self.refresh_summary:
            summary = self.summary_service.compute_daily_summary(day)
        else:
            summary = self.summary_service.get_summary(day)
        return summary is not None and summary.hit_goals
