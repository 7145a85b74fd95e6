"""Pydantic models for API payloads."""

import datetime

from pydantic import BaseModel, Field


class SyncUserRequest(BaseModel):
    """Optional profile data sent when syncing a Firebase user."""

    username: str | None = None


class CalorieTargetRequest(BaseModel):
    """New daily calorie target; an explicit null clears it."""

    daily_calorie_target: float | str | None


class AddFoodLogRequest(BaseModel):
    """Food log creation payload."""

    date: datetime.date
    food_name: str = Field(min_length=1)
    calories: float = 0
    food_id: int | None = None
