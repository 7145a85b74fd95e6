"""Dependency container wiring for the application."""

import logging
from dataclasses import dataclass

import firebase_admin
from firebase_admin import credentials
from supabase import Client, create_client

from nutrilog.adapters.firebase_auth import FirebaseTokenVerifier, TokenVerifier
from nutrilog.adapters.supabase_food_log_repository import SupabaseFoodLogRepository
from nutrilog.adapters.supabase_user_repository import SupabaseUserRepository
from nutrilog.config import Settings
from nutrilog.services.food_logs import FoodLogService
from nutrilog.services.users import UserService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_verifier: TokenVerifier
    user_service: UserService
    food_log_service: FoodLogService


def init_supabase_client(settings: Settings) -> Client:
    """Create the process-wide Supabase client.

    Missing configuration is reported as a warning; the client library
    decides whether the values it received are usable.
    """
    missing = settings.missing_supabase_settings()
    if missing:
        _logger.warning("Supabase settings are not configured: %s", ", ".join(missing))
    return create_client(settings.supabase_url, settings.supabase_service_key)


def init_firebase_app(settings: Settings) -> firebase_admin.App:
    """Return the default Firebase app, initializing it on first use."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass
    credential = (
        credentials.Certificate(settings.firebase_credentials_path)
        if settings.firebase_credentials_path
        else None
    )
    options = (
        {"projectId": settings.firebase_project_id}
        if settings.firebase_project_id
        else None
    )
    return firebase_admin.initialize_app(credential, options)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = init_supabase_client(resolved_settings)
    firebase_app = init_firebase_app(resolved_settings)
    user_repository = SupabaseUserRepository(supabase_client)
    food_log_repository = SupabaseFoodLogRepository(
        supabase_client, foods_table=resolved_settings.foods_table
    )
    return AppContainer(
        settings=resolved_settings,
        token_verifier=FirebaseTokenVerifier(
            firebase_app, check_revoked=resolved_settings.firebase_check_revoked
        ),
        user_service=UserService(user_repository),
        food_log_service=FoodLogService(food_log_repository),
    )
