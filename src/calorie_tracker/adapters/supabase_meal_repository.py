"""Supabase repository for meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_errors import store_read, store_write
from calorie_tracker.domain.errors import StoreWriteFailure
from calorie_tracker.domain.meals import Meal
from calorie_tracker.services.meals import MealRepository

_MEAL_COLUMNS = (
    "id, logged_at, calories, protein_g, carbs_g, fat_g, title, notes, source, edited"
)
_NIL_UUID = "00000000-0000-0000-0000-000000000000"
# Characters with meaning inside a PostgREST ``or`` filter.
_FILTER_RESERVED = frozenset(',()*%\\"')


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def meals_between(self, start: datetime, end: datetime) -> list[Meal]:
        """Return meals logged in ``[start, end)``."""
        with store_read("list meals"):
            response = (
                self.client.table("meals")
                .select(_MEAL_COLUMNS)
                .gte("logged_at", start.isoformat())
                .lt("logged_at", end.isoformat())
                .order("logged_at", desc=False)
                .execute()
            )
        return [_parse_meal(row) for row in response.data or []]

    def add_meal(self, meal: Meal) -> None:
        """Upsert a meal row on its id."""
        with store_write("create meal"):
            response = (
                self.client.table("meals")
                .upsert(_serialize(meal), on_conflict="id")
                .execute()
            )
        if not response.data:
            raise StoreWriteFailure("Failed to create meal")

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id."""
        with store_read("fetch meal"):
            response = (
                self.client.table("meals")
                .select(_MEAL_COLUMNS)
                .eq("id", str(meal_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def update_meal(self, meal: Meal) -> None:
        """Overwrite the editable columns of a meal row."""
        payload = _serialize(meal)
        payload.pop("id")
        with store_write("update meal"):
            response = (
                self.client.table("meals")
                .update(payload)
                .eq("id", str(meal.id))
                .execute()
            )
        if not response.data:
            raise StoreWriteFailure("Failed to update meal")

    def search_meals(
        self, start: datetime | None, end: datetime | None, text: str | None
    ) -> list[Meal]:
        """Return matching meals, newest first."""
        query = self.client.table("meals").select(_MEAL_COLUMNS)
        if start is not None:
            query = query.gte("logged_at", start.isoformat())
        if end is not None:
            query = query.lt("logged_at", end.isoformat())
        pattern = _search_pattern(text)
        if pattern:
            query = query.or_(f"title.ilike.*{pattern}*,notes.ilike.*{pattern}*")
        with store_read("search meals"):
            response = query.order("logged_at", desc=True).execute()
        return [_parse_meal(row) for row in response.data or []]

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal row."""
        with store_write("delete meal"):
            self.client.table("meals").delete().eq("id", str(meal_id)).execute()

    def delete_all(self) -> None:
        """Delete every meal row."""
        with store_write("delete meals"):
            self.client.table("meals").delete().neq("id", _NIL_UUID).execute()


def _search_pattern(text: str | None) -> str:
    if not text:
        return ""
    return "".join(char for char in text if char not in _FILTER_RESERVED).strip()


def _serialize(meal: Meal) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "logged_at": meal.logged_at.isoformat(),
        "calories": meal.calories,
        "protein_g": meal.protein_g,
        "carbs_g": meal.carbs_g,
        "fat_g": meal.fat_g,
        "title": meal.title,
        "notes": meal.notes,
        "source": meal.source,
        "edited": meal.edited,
    }


def _parse_meal(row: dict[str, object]) -> Meal:
    return Meal(
        id=UUID(str(row["id"])),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fat_g=float(row.get("fat_g") or 0.0),
        title=str(row.get("title") or "Meal"),
        notes=row.get("notes"),
        source=str(row.get("source") or "manual"),
        edited=bool(row.get("edited")),
    )
