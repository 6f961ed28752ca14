"""
FastAPI dependencies for authentication and database sessions.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import AsyncSession

from trip_planner.config import get_settings
from trip_planner.database import get_db
from trip_planner.kernel.identity.session import (
    AuthError,
    SessionAuthenticator,
    Subject,
    get_session_authenticator,
)
from trip_planner.logging_config import get_logger

logger = get_logger(__name__)

# Security scheme: the session credential lives in a cookie
session_cookie = APIKeyCookie(name=get_settings().session_cookie_name, auto_error=False)


DbSession = Annotated[AsyncSession, Depends(get_db)]
Authenticator = Annotated[SessionAuthenticator, Depends(get_session_authenticator)]


async def get_current_subject(
    request: Request,
    credential: Annotated[Optional[str], Depends(session_cookie)],
    authenticator: Authenticator,
) -> Subject:
    """
    Resolve the caller from the session cookie or raise 401.

    The failure reason is logged but never returned, so a forger cannot
    tell a bad signature from an expired token.
    """
    try:
        subject = authenticator.verify(credential)
    except AuthError as e:
        logger.warning(
            "Authentication failed",
            extra={"reason": e.reason.value, "path": request.url.path},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    request.state.subject = subject
    return subject


CurrentSubject = Annotated[Subject, Depends(get_current_subject)]


def get_client_ip(request: Request) -> str:
    """First X-Forwarded-For hop when behind a proxy, else the peer address."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
