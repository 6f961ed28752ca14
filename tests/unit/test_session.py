"""Unit tests for stateless session credentials."""

from datetime import timedelta

import pytest
from jose import jwt

from trip_planner.kernel.identity.session import (
    AuthError,
    AuthFailure,
    SessionAuthenticator,
    Subject,
)


def _flip_signature_char(token: str) -> str:
    header, payload, signature = token.split(".")
    first = "B" if signature[0] != "B" else "C"
    return ".".join([header, payload, first + signature[1:]])


class FakeResponse:
    """Records cookie calls the way a Starlette response would receive them."""

    def __init__(self):
        self.set_calls = []
        self.delete_calls = []

    def set_cookie(self, key, value, **kwargs):
        self.set_calls.append((key, value, kwargs))

    def delete_cookie(self, key, **kwargs):
        self.delete_calls.append((key, kwargs))


class TestIssueAndVerify:
    def test_round_trip_returns_subject(self, authenticator: SessionAuthenticator):
        credential = authenticator.issue(42, "ana")
        assert authenticator.verify(credential.token) == Subject(id=42, name="ana")

    def test_lifetime_is_seven_days(self, authenticator: SessionAuthenticator):
        credential = authenticator.issue(1, "ana")
        assert credential.expires_at - credential.issued_at == timedelta(days=7)

    def test_payload_claims(self, authenticator: SessionAuthenticator):
        credential = authenticator.issue(7, "ben")
        claims = jwt.get_unverified_claims(credential.token)
        assert claims["sub"] == "7"
        assert claims["name"] == "ben"
        assert claims["exp"] - claims["iat"] == 7 * 24 * 3600

    def test_still_valid_just_before_expiry(self, authenticator, clock):
        credential = authenticator.issue(1, "ana")
        clock.advance(timedelta(days=7) - timedelta(seconds=1))
        assert authenticator.verify(credential.token).id == 1


class TestVerifyFailures:
    def test_missing_credential(self, authenticator: SessionAuthenticator):
        for value in (None, ""):
            with pytest.raises(AuthError) as exc_info:
                authenticator.verify(value)
            assert exc_info.value.reason is AuthFailure.MISSING

    def test_issued_eight_days_ago_is_expired(self, authenticator, clock):
        credential = authenticator.issue(1, "ana")
        clock.advance(timedelta(days=8))
        with pytest.raises(AuthError) as exc_info:
            authenticator.verify(credential.token)
        assert exc_info.value.reason is AuthFailure.EXPIRED

    def test_expired_exactly_at_expiry(self, authenticator, clock):
        credential = authenticator.issue(1, "ana")
        clock.advance(timedelta(days=7))
        with pytest.raises(AuthError) as exc_info:
            authenticator.verify(credential.token)
        assert exc_info.value.reason is AuthFailure.EXPIRED

    def test_flipped_signature_is_invalid(self, authenticator: SessionAuthenticator):
        credential = authenticator.issue(1, "ana")
        with pytest.raises(AuthError) as exc_info:
            authenticator.verify(_flip_signature_char(credential.token))
        assert exc_info.value.reason is AuthFailure.INVALID

    def test_other_secret_is_invalid(self, authenticator, clock):
        forger = SessionAuthenticator(secret_key="some-other-secret", clock=clock)
        token = forger.issue(1, "ana").token
        with pytest.raises(AuthError) as exc_info:
            authenticator.verify(token)
        assert exc_info.value.reason is AuthFailure.INVALID

    def test_garbage_is_invalid(self, authenticator: SessionAuthenticator):
        with pytest.raises(AuthError) as exc_info:
            authenticator.verify("not-a-token")
        assert exc_info.value.reason is AuthFailure.INVALID

    @pytest.mark.parametrize(
        "claims",
        [
            {"sub": "abc", "name": "ana"},
            {"sub": "1"},
            {"name": "ana"},
            {"sub": "1", "name": "ana", "exp": "soon"},
        ],
    )
    def test_malformed_payload_is_invalid(self, authenticator, claims):
        payload = {"exp": 4102444800, **claims}
        token = jwt.encode(payload, authenticator.secret_key, algorithm="HS256")
        with pytest.raises(AuthError) as exc_info:
            authenticator.verify(token)
        assert exc_info.value.reason is AuthFailure.INVALID

    def test_disallowed_algorithm_is_invalid(self, authenticator: SessionAuthenticator):
        token = jwt.encode({"sub": "1", "name": "ana", "exp": 4102444800}, "x", algorithm="HS512")
        with pytest.raises(AuthError) as exc_info:
            authenticator.verify(token)
        assert exc_info.value.reason is AuthFailure.INVALID


class TestCookies:
    def test_cookie_for_sets_token_cookie(self, authenticator: SessionAuthenticator):
        credential = authenticator.issue(1, "ana")
        response = FakeResponse()
        authenticator.cookie_for(credential).apply(response)

        key, value, kwargs = response.set_calls[0]
        assert key == "token"
        assert value == credential.token
        assert kwargs["httponly"] is True
        assert kwargs["samesite"] == "strict"
        assert kwargs["max_age"] == 7 * 24 * 3600

    def test_revoke_clears_cookie(self, authenticator: SessionAuthenticator):
        response = FakeResponse()
        authenticator.revoke().apply(response)
        assert response.delete_calls[0][0] == "token"
        assert response.set_calls == []

    def test_revoke_does_not_invalidate_copied_credential(self, authenticator):
        """Stateless: a replayed, unexpired credential is still accepted."""
        credential = authenticator.issue(1, "ana")
        authenticator.revoke()
        assert authenticator.verify(credential.token).id == 1
