"""Supabase repository for daily summaries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_errors import store_read, store_write
from calorie_tracker.domain.summaries import DailySummary
from calorie_tracker.services.summaries import SummaryRepository

_SUMMARY_COLUMNS = (
    "id, day, total_calories, total_protein_g, total_carbs_g, total_fat_g, "
    "calorie_goal, protein_target_g, hit_calorie_goal, hit_protein_goal"
)
_NIL_UUID = "00000000-0000-0000-0000-000000000000"


@dataclass
class SupabaseSummaryRepository(SummaryRepository):
    """Supabase implementation for daily summaries keyed on ``day``."""

    client: Client

    def summary_for_day(self, day: date) -> DailySummary | None:
        """Return the summary for a calendar day."""
        with store_read("fetch daily summary"):
            response = (
                self.client.table("daily_summaries")
                .select(_SUMMARY_COLUMNS)
                .eq("day", day.isoformat())
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_summary(response.data[0])

    def save_summary(self, summary: DailySummary) -> None:
        """Upsert a summary on its day key."""
        with store_write("save daily summary"):
            self.client.table("daily_summaries").upsert(
                {
                    "id": str(summary.id),
                    "day": summary.day.isoformat(),
                    "total_calories": summary.total_calories,
                    "total_protein_g": summary.total_protein_g,
                    "total_carbs_g": summary.total_carbs_g,
                    "total_fat_g": summary.total_fat_g,
                    "calorie_goal": summary.calorie_goal,
                    "protein_target_g": summary.protein_target_g,
                    "hit_calorie_goal": summary.hit_calorie_goal,
                    "hit_protein_goal": summary.hit_protein_goal,
                },
                on_conflict="day",
            ).execute()

    def summaries_between(self, start: date, end: date) -> list[DailySummary]:
        """Return summaries for days in the inclusive range."""
        with store_read("list daily summaries"):
            response = (
                self.client.table("daily_summaries")
                .select(_SUMMARY_COLUMNS)
                .gte("day", start.isoformat())
                .lte("day", end.isoformat())
                .order("day", desc=True)
                .execute()
            )
        return [_parse_summary(row) for row in response.data or []]

    def delete_all(self) -> None:
        """Delete every summary row."""
        with store_write("delete daily summaries"):
            self.client.table("daily_summaries").delete().neq(
                "id", _NIL_UUID
            ).execute()


def _parse_summary(row: dict[str, object]) -> DailySummary:
    return DailySummary(
        id=UUID(str(row["id"])),
        day=date.fromisoformat(str(row["day"])[:10]),
        total_calories=float(row.get("total_calories") or 0.0),
        total_protein_g=float(row.get("total_protein_g") or 0.0),
        total_carbs_g=float(row.get("total_carbs_g") or 0.0),
        total_fat_g=float(row.get("total_fat_g") or 0.0),
        calorie_goal=float(row.get("calorie_goal") or 0.0),
        protein_target_g=float(row.get("protein_target_g") or 0.0),
        hit_calorie_goal=bool(row.get("hit_calorie_goal")),
        hit_protein_goal=bool(row.get("hit_protein_goal")),
    )
