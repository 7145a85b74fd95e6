"""Supabase-backed user repository."""

from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from nutrilog.domain.models import UserRecord
from nutrilog.services.errors import UserAlreadyExistsError
from nutrilog.services.users import UserRepository

UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_firebase_uid(self, firebase_uid: str) -> UserRecord | None:
        """Return the user for a Firebase uid, if present."""
        response = (
            self.client.table("users")
            .select("id, firebase_uid, email, username, daily_calorie_target")
            .eq("firebase_uid", firebase_uid)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(
        self, firebase_uid: str, email: str | None, username: str | None
    ) -> UserRecord:
        """Create a new user row and return it."""
        try:
            response = (
                self.client.table("users")
                .insert(
                    {"firebase_uid": firebase_uid, "email": email, "username": username}
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise UserAlreadyExistsError(firebase_uid) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def get_daily_calorie_target(self, user_id: int) -> float | None:
        """Return the daily calorie target for a user."""
        response = (
            self.client.table("users")
            .select("daily_calorie_target")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_target(response.data[0].get("daily_calorie_target"))

    def set_daily_calorie_target(self, user_id: int, target: float | None) -> None:
        """Update the daily calorie target for a user."""
        self.client.table("users").update({"daily_calorie_target": target}).eq(
            "id", user_id
        ).execute()


def _parse_target(value: object) -> float | None:
    if value is None:
        return None
    number = float(value)  # type: ignore[arg-type]
    return int(number) if number.is_integer() else number


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=int(row["id"]),  # type: ignore[arg-type]
        firebase_uid=str(row.get("firebase_uid", "")),
        email=row.get("email"),  # type: ignore[arg-type]
        username=row.get("username"),  # type: ignore[arg-type]
        daily_calorie_target=_parse_target(row.get("daily_calorie_target")),
    )
