"""Supabase repository for streak counters."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from calorie_tracker.adapters.supabase_errors import store_read, store_write
from calorie_tracker.domain.streaks import Streak, StreakType
from calorie_tracker.services.streaks import StreakRepository


@dataclass
class SupabaseStreakRepository(StreakRepository):
    """Supabase implementation for streaks keyed on ``type``."""

    client: Client

    def streak_for_type(self, streak_type: StreakType) -> Streak | None:
        """Return the streak row for a type."""
        with store_read("fetch streak"):
            response = (
                self.client.table("streaks")
                .select("type, current_count, longest_count, last_date_counted")
                .eq("type", streak_type.value)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        row = response.data[0]
        last_date = row.get("last_date_counted")
        return Streak(
            type=StreakType(str(row["type"])),
            current_count=int(row.get("current_count") or 0),
            longest_count=int(row.get("longest_count") or 0),
            last_date_counted=date.fromisoformat(str(last_date)[:10])
            if last_date
            else None,
        )

    def save_streaks(self, logging_streak: Streak, goal_streak: Streak) -> None:
        """Upsert both streak rows in one request."""
        with store_write("save streaks"):
            self.client.table("streaks").upsert(
                [_serialize(logging_streak), _serialize(goal_streak)],
                on_conflict="type",
            ).execute()

    def delete_all(self) -> None:
        """Delete every streak row."""
        with store_write("delete streaks"):
            self.client.table("streaks").delete().in_(
                "type", [streak_type.value for streak_type in StreakType]
            ).execute()


def _serialize(streak: Streak) -> dict[str, object]:
    return {
        "type": streak.type.value,
        "current_count": streak.current_count,
        "longest_count": streak.longest_count,
        "last_date_counted": streak.last_date_counted.isoformat()
        if streak.last_date_counted
        else None,
    }
