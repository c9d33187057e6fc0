"""
Test suite for token handling, the access guard and password hashing.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from budget_tracker.security.passwords import hash_password, verify_password
from budget_tracker.security.tokens import Expired, InvalidSignature, TokenService

from conftest import SAMPLE_TRANSACTION, bearer


@pytest.fixture
def token_service():
    return TokenService(access_secret="access", refresh_secret="refresh")


def expired_token(secret, user_id=1):
    past = datetime.now(timezone.utc) - timedelta(minutes=5)
    return jwt.encode({"id": user_id, "exp": past}, secret, algorithm="HS256")


class TestTokenService:
    """Test signing and verification."""

    def test_access_token_round_trip(self, token_service):
        token = token_service.issue_access_token(7)
        assert token_service.verify_access_token(token)["id"] == 7

    def test_refresh_token_round_trip(self, token_service):
        token = token_service.issue_refresh_token(7)
        assert token_service.verify_refresh_token(token)["id"] == 7

    def test_refresh_token_lives_one_day(self, token_service):
        payload = token_service.verify_refresh_token(token_service.issue_refresh_token(1))
        assert payload["exp"] - payload["iat"] == 24 * 60 * 60

    def test_access_ttl_is_configurable(self):
        service = TokenService("a", "r", access_ttl=timedelta(seconds=30))
        payload = service.verify_access_token(service.issue_access_token(1))
        assert payload["exp"] - payload["iat"] == 30

    def test_tokens_issued_back_to_back_differ(self, token_service):
        assert token_service.issue_refresh_token(1) != token_service.issue_refresh_token(1)

    def test_access_and_refresh_secrets_are_separate(self, token_service):
        with pytest.raises(InvalidSignature):
            token_service.verify_refresh_token(token_service.issue_access_token(1))
        with pytest.raises(InvalidSignature):
            token_service.verify_access_token(token_service.issue_refresh_token(1))

    def test_expired_token(self, token_service):
        with pytest.raises(Expired):
            token_service.verify(expired_token("access"), "access")

    def test_garbage_token(self, token_service):
        with pytest.raises(InvalidSignature):
            token_service.verify("not.a.token", "access")


class TestAccessGuard:
    """Protected routes require a valid bearer access token."""

    ROUTES = [
        ("get", "/auth/transactions", None),
        ("post", "/auth/create", SAMPLE_TRANSACTION),
        ("put", "/auth/update/abc", SAMPLE_TRANSACTION),
        ("delete", "/auth/delete/abc", None),
    ]

    def _call(self, client, method, path, body, headers=None):
        kwargs = {"headers": headers or {}}
        if body is not None:
            kwargs["json"] = body
        return getattr(client, method)(path, **kwargs)

    def test_missing_token(self, client):
        for method, path, body in self.ROUTES:
            assert self._call(client, method, path, body).status_code == 401, path

    def test_non_bearer_scheme(self, client):
        headers = {"Authorization": "Basic YWxpY2U6cHdk"}
        for method, path, body in self.ROUTES:
            assert self._call(client, method, path, body, headers).status_code == 401, path

    def test_expired_token(self, client):
        headers = bearer(expired_token("test-access-secret"))
        for method, path, body in self.ROUTES:
            assert self._call(client, method, path, body, headers).status_code == 403, path

    def test_malformed_token(self, client):
        headers = bearer("garbage")
        for method, path, body in self.ROUTES:
            assert self._call(client, method, path, body, headers).status_code == 403, path

    def test_forged_token(self, client):
        headers = bearer(jwt.encode({"id": 1}, "wrong-secret", algorithm="HS256"))
        for method, path, body in self.ROUTES:
            assert self._call(client, method, path, body, headers).status_code == 403, path

    def test_refresh_token_is_not_an_access_token(self, client):
        client.post("/register", json={"user": "alice", "pwd": "pw"})
        headers = bearer(client.cookies["jwt"])
        assert client.get("/auth/transactions", headers=headers).status_code == 403

    def test_token_without_id_claim(self, client):
        headers = bearer(jwt.encode({"sub": "alice"}, "test-access-secret", algorithm="HS256"))
        assert client.get("/auth/transactions", headers=headers).status_code == 403


class TestPasswordSecurity:
    """Test password handling security."""

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("s3cret")
        assert "s3cret" not in hashed
        assert verify_password("s3cret", hashed) is True
        assert verify_password("S3cret", hashed) is False

    def test_hash_is_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_malformed_hash(self):
        assert verify_password("anything", "not-a-hash") is False

    def test_stored_password_is_hashed(self, client, app):
        client.post("/register", json={"user": "alice", "pwd": "plaintext-pw"})

        from budget_tracker.users.models import User

        db = app.state.session_factory()
        try:
            user = db.query(User).filter(User.username == "alice").first()
            assert user.hashed_password != "plaintext-pw"
            assert verify_password("plaintext-pw", user.hashed_password)
        finally:
            db.close()
