"""Supabase repository for food logs."""

from dataclasses import dataclass
from datetime import date, datetime

from supabase import Client

from nutrilog.domain.food_logs import FoodLog, FoodNutrients, NewFoodLog, to_number
from nutrilog.services.food_logs import FoodLogRepository

DEFAULT_FOODS_TABLE = "makanan"


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for food logs.

    The nutrient join requires a foreign key ``food_logs.food_id`` referencing
    ``<foods_table>.id``; without it PostgREST cannot embed the catalog row.
    """

    client: Client
    foods_table: str = DEFAULT_FOODS_TABLE

    def list_by_date(self, user_id: int, day: date) -> list[FoodLog]:
        """Return logs for the day ordered by logged_at."""
        response = (
            self.client.table("food_logs")
            .select("*")
            .eq("user_id", user_id)
            .eq("date", day.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def create(self, food_log: NewFoodLog) -> FoodLog:
        """Insert a food log row and return it."""
        response = (
            self.client.table("food_logs")
            .insert(
                {
                    "user_id": food_log.user_id,
                    "date": food_log.date.isoformat(),
                    "food_name_custom": food_log.food_name,
                    "calories": food_log.calories,
                    "food_id": food_log.food_id,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food log")
        return _parse_row(response.data[0])

    def delete(self, food_log_id: int, user_id: int | None = None) -> None:
        """Delete a food log row, scoped to the owner when given."""
        query = self.client.table("food_logs").delete().eq("id", food_log_id)
        if user_id is not None:
            query = query.eq("user_id", user_id)
        query.execute()

    def list_calories(self, user_id: int, start: date, end: date) -> list[object]:
        """Return calorie values for logs within the inclusive range."""
        response = (
            self.client.table("food_logs")
            .select("calories")
            .eq("user_id", user_id)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .execute()
        )
        return [row.get("calories") for row in response.data or []]

    def list_nutrients(self, user_id: int, day: date) -> list[FoodNutrients]:
        """Return joined catalog nutrients for the day's logs."""
        response = (
            self.client.table("food_logs")
            .select(f"calories, {self.foods_table}!inner(proteins, fat, carbohydrate)")
            .eq("user_id", user_id)
            .eq("date", day.isoformat())
            .execute()
        )
        nutrients = []
        for row in response.data or []:
            food = row.get(self.foods_table)
            if not food:
                continue
            nutrients.append(
                FoodNutrients(
                    proteins=to_number(food.get("proteins")),
                    carbohydrate=to_number(food.get("carbohydrate")),
                    fat=to_number(food.get("fat")),
                )
            )
        return nutrients


def _parse_row(row: dict[str, object]) -> FoodLog:
    logged_at_raw = row.get("logged_at")
    food_id = row.get("food_id")
    return FoodLog(
        id=int(row["id"]),  # type: ignore[arg-type]
        user_id=int(row["user_id"]),  # type: ignore[arg-type]
        date=date.fromisoformat(str(row["date"])),
        food_name=str(row.get("food_name_custom") or ""),
        calories=to_number(row.get("calories")),
        food_id=int(food_id) if food_id is not None else None,  # type: ignore[arg-type]
        logged_at=(
            datetime.fromisoformat(logged_at_raw)
            if isinstance(logged_at_raw, str) and logged_at_raw
            else None
        ),
    )
