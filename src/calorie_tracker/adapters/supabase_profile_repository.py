"""Supabase repository for the user profile."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_errors import store_read, store_write
from calorie_tracker.domain.profiles import UserProfile
from calorie_tracker.services.profiles import ProfileRepository

_NIL_UUID = "00000000-0000-0000-0000-000000000000"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the user profile."""

    client: Client

    def current_profile(self) -> UserProfile | None:
        """Return the most recently updated profile."""
        with store_read("fetch profile"):
            response = (
                self.client.table("user_profiles")
                .select("id, weight_kg, calorie_goal, created_at, updated_at")
                .order("updated_at", desc=True)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        row = response.data[0]
        return UserProfile(
            id=UUID(str(row["id"])),
            weight_kg=_optional_float(row.get("weight_kg")),
            calorie_goal=_optional_float(row.get("calorie_goal")),
            created_at=datetime.fromisoformat(str(row["created_at"])),
            updated_at=datetime.fromisoformat(str(row["updated_at"])),
        )

    def save_profile(self, profile: UserProfile) -> None:
        """Insert or update the profile row."""
        with store_write("save profile"):
            self.client.table("user_profiles").upsert(
                {
                    "id": str(profile.id),
                    "weight_kg": profile.weight_kg,
                    "calorie_goal": profile.calorie_goal,
                    "created_at": profile.created_at.isoformat(),
                    "updated_at": profile.updated_at.isoformat(),
                },
                on_conflict="id",
            ).execute()

    def delete_all(self) -> None:
        """Delete every profile row."""
        with store_write("delete profiles"):
            self.client.table("user_profiles").delete().neq("id", _NIL_UUID).execute()


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
