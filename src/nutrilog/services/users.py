"""User-related business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol

from nutrilog.domain.models import UserRecord, username_from_email
from nutrilog.services.errors import (
    InvalidCalorieTargetError,
    MissingFirebaseUidError,
    UserAlreadyExistsError,
)

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_firebase_uid(self, firebase_uid: str) -> UserRecord | None:
        """Return the user for a Firebase uid, if present."""

    def create_user(
        self, firebase_uid: str, email: str | None, username: str | None
    ) -> UserRecord:
        """Create and return a new user record.

        Raises ``UserAlreadyExistsError`` when the uid is already taken.
        """

    def get_daily_calorie_target(self, user_id: int) -> float | None:
        """Return the stored calorie target, or None if unset or missing."""

    def set_daily_calorie_target(self, user_id: int, target: float | None) -> None:
        """Persist the calorie target for a user."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def sync_firebase_user(
        self,
        firebase_uid: str | None,
        email: str | None = None,
        username: str | None = None,
    ) -> int:
        """Ensure a user row exists for the Firebase identity and return its id."""
        if not firebase_uid:
            raise MissingFirebaseUidError

        try:
            existing = self.repository.get_by_firebase_uid(firebase_uid)
        except Exception:
            _logger.exception("Failed to look up user: firebase_uid=%s", firebase_uid)
            raise
        if existing:
            return existing.id

        try:
            created = self.repository.create_user(
                firebase_uid,
                email=email,
                username=username or username_from_email(email),
            )
        except UserAlreadyExistsError:
            _logger.info(
                "User created concurrently, re-fetching: firebase_uid=%s",
                firebase_uid,
            )
            concurrent = self.repository.get_by_firebase_uid(firebase_uid)
            if concurrent is None:
                raise
            return concurrent.id
        except Exception:
            _logger.exception("Failed to create user: firebase_uid=%s", firebase_uid)
            raise
        return created.id

    def get_daily_calorie_target(self, user_id: int) -> float | None:
        """Return the user's daily calorie target, or None when unset."""
        return self.repository.get_daily_calorie_target(user_id)

    def update_daily_calorie_target(
        self, user_id: int, target: float | str | None
    ) -> float | None:
        """Normalize and store the daily calorie target, returning the stored value."""
        value = normalize_calorie_target(target)
        self.repository.set_daily_calorie_target(user_id, value)
        return value


def normalize_calorie_target(target: float | str | None) -> float | None:
    """Convert a target to a number; None stays None."""
    if target is None:
        return None
    if isinstance(target, bool):
        raise InvalidCalorieTargetError(target)
    if isinstance(target, str):
        cleaned = target.strip()
        if not cleaned:
            raise InvalidCalorieTargetError(target)
        try:
            number = float(cleaned)
        except ValueError as exc:
            raise InvalidCalorieTargetError(target) from exc
    else:
        number = float(target)
    if number != number or number in {float("inf"), float("-inf")}:
        raise InvalidCalorieTargetError(target)
    if number.is_integer():
        return int(number)
    return number
