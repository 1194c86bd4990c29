"""Domain models for the user profile."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserProfile:
    """Goal-related profile values for the single app user."""

    id: UUID
    weight_kg: float | None
    calorie_goal: float | None
    created_at: datetime
    updated_at: datetime
