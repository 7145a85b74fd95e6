"""Domain models for food logs and nutrition summaries."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class FoodLog:
    """A single logged food consumption."""

    id: int
    user_id: int
    date: date
    food_name: str
    calories: float
    food_id: int | None = None
    logged_at: datetime | None = None


@dataclass(frozen=True)
class NewFoodLog:
    """Input for creating a food log."""

    user_id: int
    date: date
    food_name: str
    calories: float
    food_id: int | None = None


@dataclass(frozen=True)
class FoodNutrients:
    """Nutrient values of a catalog food joined to a log."""

    proteins: float
    carbohydrate: float
    fat: float


@dataclass(frozen=True)
class NutritionSummary:
    """Daily protein, carbs and fat totals."""

    protein: float = 0
    carbs: float = 0
    fat: float = 0


def to_number(value: object) -> float:
    """Coerce a stored value to a number, treating missing or invalid as 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0
    if number != number:  # NaN
        return 0
    return number
