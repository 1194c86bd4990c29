"""Tests for the profile service."""

from datetime import UTC, datetime

from calorie_tracker.services.profiles import ProfileService
from tests.conftest import InMemoryProfileRepository


def test_update_goals_creates_profile() -> None:
    created_at = datetime(2025, 8, 1, tzinfo=UTC)
    repository = InMemoryProfileRepository()
    service = ProfileService(repository, now=lambda: created_at)

    profile = service.update_goals(weight_kg=82, calorie_goal=2200)

    assert repository.profile == profile
    assert profile.created_at == created_at
    assert profile.updated_at == created_at


def test_update_goals_keeps_identity() -> None:
    repository = InMemoryProfileRepository()
    first_time = datetime(2025, 8, 1, tzinfo=UTC)
    later = datetime(2025, 8, 10, tzinfo=UTC)
    service = ProfileService(repository, now=lambda: first_time)
    created = service.update_goals(weight_kg=82, calorie_goal=2200)

    service.now = lambda: later
    updated = service.update_goals(weight_kg=78, calorie_goal=None)

    assert updated.id == created.id
    assert updated.created_at == first_time
    assert updated.updated_at == later
    assert updated.weight_kg == 78
    assert updated.calorie_goal is None
    assert service.current_profile() == updated
