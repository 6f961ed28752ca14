"""
Stateless session credentials.

A credential is an HS256 JWT carried in the ``token`` cookie. Its validity
is decided by signature and expiry alone; nothing is stored server-side, so
logging out only tells the client to drop the cookie.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Optional

from jose import JWTError, jwt

from trip_planner.config import get_settings


class AuthFailure(str, Enum):
    """Why a credential was rejected. Internal only; callers see a single 401."""
    MISSING = "missing"
    INVALID = "invalid"
    EXPIRED = "expired"


class AuthError(Exception):
    """Raised by SessionAuthenticator.verify when a credential is not accepted."""

    def __init__(self, reason: AuthFailure, message: Optional[str] = None):
        self.reason = reason
        super().__init__(message or f"Credential {reason.value}")


@dataclass(frozen=True)
class Subject:
    """The authenticated user a request acts on behalf of."""

    id: int
    name: str


@dataclass(frozen=True)
class IssuedCredential:
    """A freshly signed credential and its validity window."""

    token: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class CookieDirective:
    """
    How the HTTP layer should set or clear the session cookie.

    ``value`` is None for a clearing directive.
    """

    name: str
    value: Optional[str]
    max_age: Optional[int]
    secure: bool
    httponly: bool = True
    samesite: str = "strict"
    path: str = "/"

    def apply(self, response: Any) -> None:
        """Apply to any response object exposing set_cookie/delete_cookie."""
        if self.value is None:
            response.delete_cookie(
                self.name,
                path=self.path,
                secure=self.secure,
                httponly=self.httponly,
                samesite=self.samesite,
            )
        else:
            response.set_cookie(
                self.name,
                self.value,
                max_age=self.max_age,
                path=self.path,
                secure=self.secure,
                httponly=self.httponly,
                samesite=self.samesite,
            )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionAuthenticator:
    """
    Issue, verify and revoke session credentials.

    Usage:
        authenticator = get_session_authenticator()
        credential = authenticator.issue(user.id, user.username)
        subject = authenticator.verify(request.cookies.get("token"))
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        lifetime: Optional[timedelta] = None,
        cookie_name: Optional[str] = None,
        cookie_secure: Optional[bool] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        settings = get_settings()
        self.secret_key = secret_key or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.lifetime = lifetime or timedelta(days=settings.session_lifetime_days)
        self.cookie_name = cookie_name or settings.session_cookie_name
        self.cookie_secure = settings.cookie_secure if cookie_secure is None else cookie_secure
        self.clock = clock

    def issue(self, subject_id: int, subject_name: str) -> IssuedCredential:
        """
        Sign a credential for an already authenticated user.

        Args:
            subject_id: User's id
            subject_name: User's login name

        Returns:
            IssuedCredential with the token and its validity window
        """
        issued_at = self.clock().replace(microsecond=0)
        expires_at = issued_at + self.lifetime
        payload = {
            "sub": str(subject_id),
            "name": subject_name,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return IssuedCredential(token=token, issued_at=issued_at, expires_at=expires_at)

    def verify(self, credential: Optional[str]) -> Subject:
        """
        Check a presented credential and return who it belongs to.

        Raises:
            AuthError: MISSING when nothing was presented, INVALID when the
                signature or payload is bad, EXPIRED when now >= exp.
        """
        if not credential:
            raise AuthError(AuthFailure.MISSING)

        try:
            # Expiry is checked below against self.clock so that a token
            # is rejected at exp itself, not one second after.
            payload = jwt.decode(
                credential,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as e:
            raise AuthError(AuthFailure.INVALID, str(e)) from e

        subject = self._subject_from_payload(payload)

        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        if self.clock() >= expires_at:
            raise AuthError(AuthFailure.EXPIRED)

        return subject

    @staticmethod
    def _subject_from_payload(payload: dict) -> Subject:
        sub = payload.get("sub")
        name = payload.get("name")
        exp = payload.get("exp")
        if not isinstance(sub, str) or not sub.isdigit():
            raise AuthError(AuthFailure.INVALID, "Malformed subject")
        if not isinstance(name, str):
            raise AuthError(AuthFailure.INVALID, "Malformed subject name")
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise AuthError(AuthFailure.INVALID, "Malformed expiry")
        return Subject(id=int(sub), name=name)

    def cookie_for(self, credential: IssuedCredential) -> CookieDirective:
        """Directive that stores the credential in the client's cookie jar."""
        return CookieDirective(
            name=self.cookie_name,
            value=credential.token,
            max_age=int(self.lifetime.total_seconds()),
            secure=self.cookie_secure,
        )

    def revoke(self) -> CookieDirective:
        """
        Directive that tells the client to discard its credential.

        The credential itself stays valid until it expires: a copy replayed
        from elsewhere is still accepted.
        """
        return CookieDirective(
            name=self.cookie_name,
            value=None,
            max_age=None,
            secure=self.cookie_secure,
        )


_authenticator: Optional[SessionAuthenticator] = None


def get_session_authenticator() -> SessionAuthenticator:
    """Get or create the default authenticator."""
    global _authenticator
    if _authenticator is None:
        _authenticator = SessionAuthenticator()
    return _authenticator
