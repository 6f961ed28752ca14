"""
Fixed-window rate limiting, kept in process memory.

- login (POST {api_prefix}/login): rate_limit_login_per_hour per client IP
- everything else under {api_prefix}: rate_limit_api_per_window per signed-in
  user, or per IP for anonymous callers
"""

import time
from typing import Callable, Optional, Tuple

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from trip_planner.api.deps import get_client_ip
from trip_planner.config import get_settings
from trip_planner.kernel.identity.session import AuthError, get_session_authenticator

LOGIN_WINDOW_SECONDS = 3600
TOO_MANY_REQUESTS = "Too many requests. Please try again later."


class InMemoryRateLimitStore:
    """Counters keyed by ``scope:identifier``, each with its own window start."""

    def __init__(self):
        self._windows: dict[str, Tuple[int, float, int]] = {}

    def check_and_incr(
        self,
        scope: str,
        identifier: str,
        limit: int,
        window_seconds: int,
    ) -> bool:
        """Count one hit. False (and no count) once ``limit`` is reached in the window."""
        key = f"{scope}:{identifier}"
        now = time.monotonic()
        count, started, length = self._windows.get(key, (0, now, window_seconds))
        if now - started >= length:
            count, started, length = 0, now, window_seconds
        if count >= limit:
            return False
        self._windows[key] = (count + 1, started, length)
        return True

    def cleanup_old(self, max_age_seconds: int = 3600) -> None:
        """Forget windows that started more than ``max_age_seconds`` ago."""
        now = time.monotonic()
        for key, (_, started, _) in list(self._windows.items()):
            if now - started > max_age_seconds:
                del self._windows[key]


_store: Optional[InMemoryRateLimitStore] = None


def get_store() -> InMemoryRateLimitStore:
    global _store
    if _store is None:
        _store = InMemoryRateLimitStore()
    return _store


def _subject_key(request: Request) -> Optional[str]:
    settings = get_settings()
    try:
        subject = get_session_authenticator().verify(request.cookies.get(settings.session_cookie_name))
    except AuthError:
        return None
    return f"user-{subject.id}"


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        settings = get_settings()
        path = request.url.path
        if not settings.rate_limit_enabled or not path.startswith(settings.api_prefix):
            return await call_next(request)

        store = get_store()
        store.cleanup_old(max_age_seconds=2 * LOGIN_WINDOW_SECONDS)

        if request.method == "POST" and path == f"{settings.api_prefix}/login":
            allowed = store.check_and_incr(
                "login",
                get_client_ip(request),
                settings.rate_limit_login_per_hour,
                LOGIN_WINDOW_SECONDS,
            )
        else:
            allowed = store.check_and_incr(
                "api",
                _subject_key(request) or get_client_ip(request),
                settings.rate_limit_api_per_window,
                settings.rate_limit_api_window_seconds,
            )

        if not allowed:
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"detail": TOO_MANY_REQUESTS},
            )
        return await call_next(request)
