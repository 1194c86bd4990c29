"""User profile service."""

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from calorie_tracker.domain.profiles import UserProfile


class ProfileRepository(Protocol):
    """Persistence interface for the user profile."""

    def current_profile(self) -> UserProfile | None:
        """Return the active profile, if one exists."""

    def save_profile(self, profile: UserProfile) -> None:
        """Insert or update a profile."""

    def delete_all(self) -> None:
        """Delete every stored profile."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ProfileService:
    """Application service for the single user profile."""

    repository: ProfileRepository
    now: Callable[[], datetime] = _utc_now

    def current_profile(self) -> UserProfile | None:
        """Return the stored profile, if any."""
        return self.repository.current_profile()

    def update_goals(
        self, weight_kg: float | None, calorie_goal: float | None
    ) -> UserProfile:
        """Create the profile if needed and store new goal inputs.

        Existing daily summaries keep the goal snapshots they were computed
        with.
        """
        timestamp = self.now()
        existing = self.repository.current_profile()
        if existing:
            profile = replace(
                existing,
                weight_kg=weight_kg,
                calorie_goal=calorie_goal,
                updated_at=timestamp,
            )
        else:
            profile = UserProfile(
                id=uuid4(),
                weight_kg=weight_kg,
                calorie_goal=calorie_goal,
                created_at=timestamp,
                updated_at=timestamp,
            )
        self.repository.save_profile(profile)
        return profile
