"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from calorie_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from calorie_tracker.adapters.supabase_streak_repository import (
    SupabaseStreakRepository,
)
from calorie_tracker.adapters.supabase_summary_repository import (
    SupabaseSummaryRepository,
)
from calorie_tracker.config import Settings
from calorie_tracker.services.meals import MealRepository, MealService
from calorie_tracker.services.profiles import ProfileRepository, ProfileService
from calorie_tracker.services.reset import DataResetService
from calorie_tracker.services.streaks import StreakRepository, StreakService
from calorie_tracker.services.summaries import (
    DailySummaryService,
    SummaryRepository,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_service: MealService
    summary_service: DailySummaryService
    streak_service: StreakService
    profile_service: ProfileService
    reset_service: DataResetService


def wire_services(
    settings: Settings,
    meal_repository: MealRepository,
    profile_repository: ProfileRepository,
    summary_repository: SummaryRepository,
    streak_repository: StreakRepository,
) -> AppContainer:
    """Build the service graph over the given repositories."""
    summary_service = DailySummaryService(
        meal_repository=meal_repository,
        profile_repository=profile_repository,
        summary_repository=summary_repository,
        timezone=settings.timezone,
        goal_defaults=settings.goal_defaults(),
    )
    streak_service = StreakService(
        summary_service=summary_service,
        repository=streak_repository,
        gate=settings.streak_gate,
        refresh_summary=settings.refresh_summary_before_streaks,
    )
    meal_service = MealService(
        repository=meal_repository,
        summary_service=summary_service,
        streak_service=streak_service,
    )
    reset_service = DataResetService(
        meal_repository=meal_repository,
        summary_repository=summary_repository,
        streak_repository=streak_repository,
        profile_repository=profile_repository,
    )
    return AppContainer(
        settings=settings,
        meal_service=meal_service,
        summary_service=summary_service,
        streak_service=streak_service,
        profile_service=ProfileService(profile_repository),
        reset_service=reset_service,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    return wire_services(
        resolved_settings,
        meal_repository=SupabaseMealRepository(supabase_client),
        profile_repository=SupabaseProfileRepository(supabase_client),
        summary_repository=SupabaseSummaryRepository(supabase_client),
        streak_repository=SupabaseStreakRepository(supabase_client),
    )
