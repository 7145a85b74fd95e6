"""FastAPI application factory."""

import datetime
import logging

from fastapi import APIRouter, Depends, FastAPI, Query, Request, Response, status
from fastapi.responses import JSONResponse

from nutrilog.api.auth import (
    FirebaseAuthRoute,
    Unauthorized,
    require_firebase_user,
    unauthorized_handler,
)
from nutrilog.api.schemas import (
    AddFoodLogRequest,
    CalorieTargetRequest,
    SyncUserRequest,
)
from nutrilog.app_logging import configure_logging
from nutrilog.containers import AppContainer
from nutrilog.domain.food_logs import FoodLog, NutritionSummary
from nutrilog.services.errors import InvalidCalorieTargetError, MissingFirebaseUidError

FirebaseUser = dict[str, object]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container
    app.add_exception_handler(Unauthorized, unauthorized_handler)

    async def validation_error_handler(
        _request: Request, exc: ValueError
    ) -> JSONResponse:
        logger.info("Rejected request: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": str(exc)},
        )

    app.add_exception_handler(MissingFirebaseUidError, validation_error_handler)
    app.add_exception_handler(InvalidCalorieTargetError, validation_error_handler)

    router = APIRouter(route_class=FirebaseAuthRoute)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @router.post("/users/sync")
    def sync_user(
        request: Request,
        payload: SyncUserRequest | None = None,
        firebase_user: FirebaseUser = Depends(require_firebase_user),
    ) -> dict[str, int]:
        """Create or reuse the user row for the verified Firebase identity."""
        state_container: AppContainer = request.app.state.container
        user_id = state_container.user_service.sync_firebase_user(
            _claim(firebase_user, "uid"),
            email=_claim(firebase_user, "email"),
            username=payload.username if payload else None,
        )
        return {"user_id": user_id}

    @router.get("/users/me/calorie-target")
    def get_calorie_target(
        request: Request,
        firebase_user: FirebaseUser = Depends(require_firebase_user),
    ) -> dict[str, int | float | None]:
        """Return the current user's daily calorie target."""
        state_container: AppContainer = request.app.state.container
        user_id = _current_user_id(state_container, firebase_user)
        target = state_container.user_service.get_daily_calorie_target(user_id)
        return {"daily_calorie_target": target}

    @router.put("/users/me/calorie-target")
    def update_calorie_target(
        payload: CalorieTargetRequest,
        request: Request,
        firebase_user: FirebaseUser = Depends(require_firebase_user),
    ) -> dict[str, int | float | None]:
        """Set or clear the current user's daily calorie target."""
        state_container: AppContainer = request.app.state.container
        user_id = _current_user_id(state_container, firebase_user)
        target = state_container.user_service.update_daily_calorie_target(
            user_id, payload.daily_calorie_target
        )
        return {"daily_calorie_target": target}

    @router.get("/food-logs")
    def list_food_logs(
        request: Request,
        day: datetime.date = Query(alias="date"),
        firebase_user: FirebaseUser = Depends(require_firebase_user),
    ) -> dict[str, list[FoodLog]]:
        """Return the current user's food logs for a day."""
        state_container: AppContainer = request.app.state.container
        user_id = _current_user_id(state_container, firebase_user)
        logs = state_container.food_log_service.get_food_logs_by_date(user_id, day)
        return {"food_logs": logs}

    @router.post("/food-logs", status_code=status.HTTP_201_CREATED)
    def add_food_log(
        payload: AddFoodLogRequest,
        request: Request,
        firebase_user: FirebaseUser = Depends(require_firebase_user),
    ) -> FoodLog:
        """Log a food for the current user."""
        state_container: AppContainer = request.app.state.container
        user_id = _current_user_id(state_container, firebase_user)
        return state_container.food_log_service.add_food_log(
            user_id,
            payload.date,
            payload.food_name,
            payload.calories,
            food_id=payload.food_id,
        )

    @router.delete("/food-logs/{food_log_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_food_log(
        food_log_id: int,
        request: Request,
        firebase_user: FirebaseUser = Depends(require_firebase_user),
    ) -> Response:
        """Delete one of the current user's food logs by id."""
        state_container: AppContainer = request.app.state.container
        user_id = _current_user_id(state_container, firebase_user)
        state_container.food_log_service.delete_food_log(food_log_id, user_id=user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.get("/food-logs/calories")
    def total_calories(
        request: Request,
        start_date: datetime.date,
        end_date: datetime.date,
        firebase_user: FirebaseUser = Depends(require_firebase_user),
    ) -> dict[str, int | float]:
        """Return total calories logged between two dates, inclusive."""
        state_container: AppContainer = request.app.state.container
        user_id = _current_user_id(state_container, firebase_user)
        total = state_container.food_log_service.get_total_calories_in_range(
            user_id, start_date, end_date
        )
        return {"total_calories": total}

    @router.get("/nutrition/summary")
    def nutrition_summary(
        request: Request,
        day: datetime.date = Query(alias="date"),
        firebase_user: FirebaseUser = Depends(require_firebase_user),
    ) -> NutritionSummary:
        """Return protein, carbs and fat totals for a day."""
        state_container: AppContainer = request.app.state.container
        user_id = _current_user_id(state_container, firebase_user)
        return state_container.food_log_service.get_daily_nutrition_summary(
            user_id, day
        )

    app.include_router(router)
    return app


def _claim(firebase_user: FirebaseUser, name: str) -> str | None:
    value = firebase_user.get(name)
    return str(value) if value else None


def _current_user_id(container: AppContainer, firebase_user: FirebaseUser) -> int:
    """Resolve the internal user id for the verified Firebase identity."""
    return container.user_service.sync_firebase_user(
        _claim(firebase_user, "uid"), email=_claim(firebase_user, "email")
    )
