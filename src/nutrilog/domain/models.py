"""Domain models for users."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: int
    firebase_uid: str
    email: str | None = None
    username: str | None = None
    daily_calorie_target: float | None = None


def username_from_email(email: str | None) -> str | None:
    """Return the local part of an email address."""
    if not email:
        return None
    return email.split("@")[0]
