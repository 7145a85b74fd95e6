"""Food log operations and daily aggregations."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from nutrilog.domain.food_logs import (
    FoodLog,
    FoodNutrients,
    NewFoodLog,
    NutritionSummary,
    to_number,
)
from nutrilog.services.errors import suppress_errors

_logger = logging.getLogger(__name__)


class FoodLogRepository(Protocol):
    """Persistence interface for food logs."""

    def list_by_date(self, user_id: int, day: date) -> list[FoodLog]:
        """Return logs for a user and day, oldest first."""

    def create(self, food_log: NewFoodLog) -> FoodLog:
        """Insert a food log and return the stored row."""

    def delete(self, food_log_id: int, user_id: int | None = None) -> None:
        """Delete a food log by id, restricted to its owner when given."""

    def list_calories(self, user_id: int, start: date, end: date) -> list[object]:
        """Return raw calorie values for logs in the inclusive date range."""

    def list_nutrients(self, user_id: int, day: date) -> list[FoodNutrients]:
        """Return catalog nutrients for logs of the day that reference a food."""


@dataclass
class FoodLogService:
    """Service for logging foods and computing daily totals."""

    repository: FoodLogRepository

    def get_food_logs_by_date(self, user_id: int, day: date) -> list[FoodLog]:
        """Return the user's food logs for a day ordered by logged_at."""
        return self.repository.list_by_date(user_id, day)

    def add_food_log(  # noqa: PLR0913
        self,
        user_id: int,
        day: date,
        food_name: str,
        calories: float,
        food_id: int | None = None,
    ) -> FoodLog:
        """Record a food consumption and return the created log."""
        return self.repository.create(
            NewFoodLog(
                user_id=user_id,
                date=day,
                food_name=food_name,
                calories=calories,
                food_id=food_id,
            )
        )

    def delete_food_log(self, food_log_id: int, user_id: int | None = None) -> None:
        """Delete a food log, only if owned by user_id when given.

        Deleting an unknown or foreign id is a no-op.
        """
        self.repository.delete(food_log_id, user_id=user_id)

    def get_total_calories_in_range(
        self, user_id: int, start: date, end: date
    ) -> float:
        """Sum calories logged between start and end, both inclusive."""
        values = self.repository.list_calories(user_id, start, end)
        return sum((to_number(value) for value in values), 0)

    @suppress_errors(fallback=NutritionSummary, logger=_logger)
    def get_daily_nutrition_summary(self, user_id: int, day: date) -> NutritionSummary:
        """Return protein, carbs and fat totals for the day.

        Failures never reach the caller: they are logged and an all-zero
        summary is returned instead.
        """
        protein = carbs = fat = 0.0
        for nutrients in self.repository.list_nutrients(user_id, day):
            protein += nutrients.proteins
            carbs += nutrients.carbohydrate
            fat += nutrients.fat
        return NutritionSummary(protein=protein, carbs=carbs, fat=fat)
