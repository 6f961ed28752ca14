"""
Identity Core - password hashing, session credentials and user lookup.
"""

from trip_planner.kernel.identity.password import hash_password, needs_rehash, verify_password
from trip_planner.kernel.identity.session import (
    AuthError,
    AuthFailure,
    CookieDirective,
    IssuedCredential,
    SessionAuthenticator,
    Subject,
    get_session_authenticator,
)
from trip_planner.kernel.identity.identity_service import IdentityService

__all__ = [
    "hash_password",
    "needs_rehash",
    "verify_password",
    "AuthError",
    "AuthFailure",
    "CookieDirective",
    "IssuedCredential",
    "SessionAuthenticator",
    "Subject",
    "get_session_authenticator",
    "IdentityService",
]
