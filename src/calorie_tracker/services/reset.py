"""Bulk data reset."""

import logging
from dataclasses import dataclass

from calorie_tracker.services.meals import MealRepository
from calorie_tracker.services.profiles import ProfileRepository
from calorie_tracker.services.streaks import StreakRepository
from calorie_tracker.services.summaries import SummaryRepository

_logger = logging.getLogger(__name__)


@dataclass
class DataResetService:
    """Deletes every stored record."""

    meal_repository: MealRepository
    summary_repository: SummaryRepository
    streak_repository: StreakRepository
    profile_repository: ProfileRepository

    def reset_all(self) -> None:
        """Delete meals, derived summaries and streaks, and the profile."""
        self.meal_repository.delete_all()
        self.summary_repository.delete_all()
        self.streak_repository.delete_all()
        self.profile_repository.delete_all()
        _logger.warning("All meal, summary, streak and profile data deleted")
