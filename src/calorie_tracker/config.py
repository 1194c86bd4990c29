"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from calorie_tracker.domain.streaks import StreakGate
from calorie_tracker.services.goals import GoalDefaults

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    timezone: str = "UTC"
    default_calorie_goal: float = 2000.0
    default_weight_kg: float = 70.0
    protein_g_per_kg: float = 1.2
    streak_gate: StreakGate = StreakGate.PER_TYPE
    refresh_summary_before_streaks: bool = True
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def goal_defaults(self) -> GoalDefaults:
        """Return goal fallbacks used when no profile value is stored."""
        return GoalDefaults(
            calorie_goal=self.default_calorie_goal,
            weight_kg=self.default_weight_kg,
            protein_g_per_kg=self.protein_g_per_kg,
        )
