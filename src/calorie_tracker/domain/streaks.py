"""Domain models for consecutive-day streaks."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class StreakType(StrEnum):
    """Criteria a streak counts."""

    LOGGING = "logging"
    GOAL = "goal"


class StreakGate(StrEnum):
    """How a streak update decides today was already counted.

    ``PER_TYPE`` skips each streak whose own ``last_date_counted`` is today.
    ``LOGGING`` skips the whole update once the logging streak counted today,
    which can leave the goal streak behind for that day.
    """

    PER_TYPE = "per_type"
    LOGGING = "logging"


@dataclass(frozen=True)
class Streak:
    """Counter pair for one streak type."""

    type: StreakType
    current_count: int = 0
    longest_count: int = 0
    last_date_counted: date | None = None


@dataclass(frozen=True)
class StreakUpdate:
    """Outcome of evaluating streaks for a day."""

    day: date
    logging: Streak
    goal: Streak
    advanced: frozenset[StreakType] = frozenset()
    skipped: bool = False
