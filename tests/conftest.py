"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from itertools import count

import pytest

from nutrilog.adapters.firebase_auth import TokenVerifier
from nutrilog.config import Settings
from nutrilog.containers import AppContainer
from nutrilog.domain.food_logs import FoodLog, FoodNutrients, NewFoodLog
from nutrilog.domain.models import UserRecord
from nutrilog.services.errors import UserAlreadyExistsError
from nutrilog.services.food_logs import FoodLogRepository, FoodLogService
from nutrilog.services.users import UserRepository, UserService

VALID_TOKEN = "valid-token"


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[int, UserRecord] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    _ids: count = field(default_factory=lambda: count(1))

    def get_by_firebase_uid(self, firebase_uid: str) -> UserRecord | None:
        self.calls.append("get_by_firebase_uid")
        for user in self.users.values():
            if user.firebase_uid == firebase_uid:
                return user
        return None

    def create_user(
        self, firebase_uid: str, email: str | None, username: str | None
    ) -> UserRecord:
        self.calls.append("create_user")
        if any(user.firebase_uid == firebase_uid for user in self.users.values()):
            raise UserAlreadyExistsError(firebase_uid)
        user = UserRecord(
            id=next(self._ids),
            firebase_uid=firebase_uid,
            email=email,
            username=username,
        )
        self.users[user.id] = user
        return user

    def get_daily_calorie_target(self, user_id: int) -> float | None:
        self.calls.append("get_daily_calorie_target")
        user = self.users.get(user_id)
        return user.daily_calorie_target if user else None

    def set_daily_calorie_target(self, user_id: int, target: float | None) -> None:
        self.calls.append("set_daily_calorie_target")
        user = self.users.get(user_id)
        if user is None:
            return
        self.users[user_id] = UserRecord(
            id=user.id,
            firebase_uid=user.firebase_uid,
            email=user.email,
            username=user.username,
            daily_calorie_target=target,
        )


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food log repository for tests."""

    logs: dict[int, FoodLog] = field(default_factory=dict)
    raw_calories: dict[int, object] = field(default_factory=dict)
    catalog: dict[int, FoodNutrients] = field(default_factory=dict)
    _ids: count = field(default_factory=lambda: count(1))
    _clock: datetime = field(
        default_factory=lambda: datetime(2024, 5, 1, 8, 0, tzinfo=UTC)
    )

    def list_by_date(self, user_id: int, day: date) -> list[FoodLog]:
        rows = [
            log
            for log in self.logs.values()
            if log.user_id == user_id and log.date == day
        ]
        return sorted(rows, key=lambda log: log.logged_at or datetime.min)

    def create(self, food_log: NewFoodLog) -> FoodLog:
        self._clock += timedelta(minutes=5)
        log = FoodLog(
            id=next(self._ids),
            user_id=food_log.user_id,
            date=food_log.date,
            food_name=food_log.food_name,
            calories=food_log.calories,
            food_id=food_log.food_id,
            logged_at=self._clock,
        )
        self.logs[log.id] = log
        self.raw_calories[log.id] = food_log.calories
        return log

    def delete(self, food_log_id: int, user_id: int | None = None) -> None:
        log = self.logs.get(food_log_id)
        if log is None or (user_id is not None and log.user_id != user_id):
            return
        del self.logs[food_log_id]
        self.raw_calories.pop(food_log_id, None)

    def list_calories(self, user_id: int, start: date, end: date) -> list[object]:
        return [
            self.raw_calories[log.id]
            for log in self.logs.values()
            if log.user_id == user_id and start <= log.date <= end
        ]

    def list_nutrients(self, user_id: int, day: date) -> list[FoodNutrients]:
        return [
            self.catalog[log.food_id]
            for log in self.list_by_date(user_id, day)
            if log.food_id in self.catalog
        ]


@dataclass
class FakeTokenVerifier(TokenVerifier):
    """Token verifier accepting a single known token."""

    claims: dict[str, object] = field(
        default_factory=lambda: {"uid": "firebase-uid-1", "email": "rina@example.com"}
    )
    calls: list[str] = field(default_factory=list)

    async def verify(self, token: str) -> dict[str, object]:
        self.calls.append(token)
        if token != VALID_TOKEN:
            raise ValueError("Token expired")
        return dict(self.claims)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        firebase_project_id="nutrilog-test",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def food_log_repository() -> InMemoryFoodLogRepository:
    return InMemoryFoodLogRepository()


@pytest.fixture
def token_verifier() -> FakeTokenVerifier:
    return FakeTokenVerifier()


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    food_log_repository: InMemoryFoodLogRepository,
    token_verifier: FakeTokenVerifier,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        token_verifier=token_verifier,
        user_service=UserService(user_repository),
        food_log_service=FoodLogService(food_log_repository),
    )


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
