"""Service-level errors and per-operation error policies."""

import functools
import logging
from collections.abc import Callable
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
T = TypeVar("T")


class MissingFirebaseUidError(ValueError):
    """Raised when a user sync is attempted without a Firebase uid."""

    def __init__(self) -> None:
        super().__init__("firebase_uid is required")


class InvalidCalorieTargetError(ValueError):
    """Raised when a calorie target cannot be read as a number."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid daily calorie target: {value!r}")
        self.value = value


class UserAlreadyExistsError(Exception):
    """Raised by repositories when a user insert hits the uniqueness constraint."""

    def __init__(self, firebase_uid: str) -> None:
        super().__init__(f"User already exists for firebase_uid={firebase_uid}")
        self.firebase_uid = firebase_uid


def suppress_errors(
    fallback: Callable[[], T], logger: logging.Logger
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Return a decorator that logs any failure and returns ``fallback()``.

    Operations without this decorator propagate store errors to the caller.
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception:
                logger.exception("%s failed; returning fallback", func.__name__)
                return fallback()

        return wrapper

    return decorator
