# Overview: Pytest coverage for registration, login and token authentication.

"""
Authentication Tests

Verifies:
1. Registration issues unique tokens that resolve back to their user
2. Duplicate usernames are rejected without disturbing the first account
3. Login returns the existing token and hides which credential was wrong
4. Protected routes answer 401 without a token and 403 with an unknown one
"""

import pytest

from chatdesk.extensions import db
from chatdesk.models import User
from chatdesk.services import auth_service, session_service
from chatdesk.services.auth_service import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from chatdesk.validation import InvalidInputError

from conftest import auth_headers, register_user


class TestCredentialStore:
    """auth_service register/authenticate behaviour."""

    def test_register_stores_hash_not_password(self, app):
        user = auth_service.register("alice", "secret1")
        assert user.password_hash != "secret1"
        assert auth_service.verify_password("secret1", user.password_hash)
        assert len(user.token) == 64

    def test_register_rejects_duplicate(self, app, alice):
        with pytest.raises(DuplicateUsernameError):
            auth_service.register("alice", "another")
        assert session_service.resolve_token(alice.token).username == "alice"

    def test_usernames_are_case_sensitive(self, app, alice):
        other = auth_service.register("Alice", "secret1")
        assert other.token != alice.token

    @pytest.mark.parametrize(
        "username,password",
        [
            (None, "secret1"),
            ("alice", None),
            ("", "secret1"),
            ("al", "secret1"),
            ("alice", "se"),
            ("a" * 65, "secret1"),
            ("alice", "x" * 73),
            (123, "secret1"),
        ],
    )
    def test_register_rejects_invalid_input(self, app, username, password):
        with pytest.raises(InvalidInputError):
            auth_service.register(username, password)
        assert db.session.query(User).count() == 0

    def test_authenticate_returns_same_token(self, app, alice):
        user = auth_service.authenticate("alice", "secret1")
        assert user.token == alice.token

    def test_authenticate_wrong_password(self, app, alice):
        with pytest.raises(InvalidCredentialsError):
            auth_service.authenticate("alice", "wrong-password")

    def test_authenticate_unknown_user(self, app):
        with pytest.raises(UserNotFoundError):
            auth_service.authenticate("nobody", "secret1")

    def test_login_errors_share_message(self):
        assert str(UserNotFoundError()) == str(InvalidCredentialsError())

    def test_register_race_hits_unique_constraint(self, app, alice, monkeypatch):
        # A concurrent registration can pass the pre-check; the unique index decides
        monkeypatch.setattr(auth_service, "_username_taken", lambda username: False)
        with pytest.raises(DuplicateUsernameError):
            auth_service.register("alice", "another")

        assert db.session.query(User).filter_by(username="alice").count() == 1
        assert session_service.resolve_token(alice.token).username == "alice"

    def test_resolve_token_unknown(self, app, alice):
        assert session_service.resolve_token("not-a-token") is None
        assert session_service.resolve_token("") is None


class TestTokenExtraction:
    """Authorization header parsing."""

    @pytest.mark.parametrize(
        "header,expected",
        [
            (None, None),
            ("", None),
            ("   ", None),
            ("abc123", "abc123"),
            ("Bearer abc123", "abc123"),
            ("Bearer ", None),
            ("Bearer", None),
            ("  Bearer   ", None),
            ("bearer abc123", "abc123"),
            ("BEARER  abc123 ", "abc123"),
        ],
    )
    def test_extract_token(self, header, expected):
        assert session_service.extract_token(header) == expected


class TestRegisterAndLoginRoutes:
    """POST /api/register, POST /api/login, GET /api/user."""

    def test_register_returns_token(self, client):
        resp = client.post("/api/register", json={"username": "alice", "password": "secret1"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["token"] == data["userKey"]
        assert "error" not in data
        assert "password" not in data

    def test_tokens_unique_and_resolve_via_whoami(self, client):
        names = ["alice", "bob", "carol", "dave"]
        tokens = {name: register_user(client, name, "secret1") for name in names}
        assert len(set(tokens.values())) == len(names)

        for name, token in tokens.items():
            resp = client.get("/api/user", headers=auth_headers(token))
            assert resp.status_code == 200
            assert resp.get_json()["username"] == name
            assert resp.get_json()["token"] == token

    def test_duplicate_registration_keeps_first_token(self, client):
        token = register_user(client, "alice", "secret1")
        resp = client.post("/api/register", json={"username": "alice", "password": "other-pass"})
        assert resp.status_code == 400
        assert "error" in resp.get_json()

        resp = client.get("/api/user", headers=auth_headers(token))
        assert resp.status_code == 200

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"username": "alice"},
            {"password": "secret1"},
            {"username": "al", "password": "secret1"},
            {"username": "alice", "password": "12"},
        ],
    )
    def test_register_validation(self, client, payload):
        resp = client.post("/api/register", json=payload)
        assert resp.status_code == 400
        assert set(resp.get_json()) == {"error"}

    def test_register_malformed_json(self, client):
        resp = client.post("/api/register", data="{not json", content_type="application/json")
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_login_returns_registration_token(self, client):
        token = register_user(client, "alice", "secret1")
        resp = client.post("/api/login", json={"username": "alice", "password": "secret1"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["token"] == token
        assert data["username"] == "alice"

    def test_login_failures_indistinguishable(self, client):
        register_user(client, "alice", "secret1")
        wrong_password = client.post("/api/login", json={"username": "alice", "password": "nope"})
        unknown_user = client.post("/api/login", json={"username": "zed", "password": "nope"})

        assert wrong_password.status_code == unknown_user.status_code == 400
        assert wrong_password.get_json() == unknown_user.get_json()

    def test_login_missing_fields(self, client):
        resp = client.post("/api/login", json={"username": "alice"})
        assert resp.status_code == 400


class TestTokenAuthenticator:
    """require_auth on protected routes."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/api/user"),
            ("GET", "/api/messages"),
            ("POST", "/api/messages"),
            ("POST", "/api/migrate"),
            ("GET", "/api/requests"),
            ("GET", "/api/my-requests"),
            ("POST", "/api/requests"),
            ("DELETE", "/api/requests/1"),
            ("PATCH", "/api/requests/1/status"),
        ],
    )
    def test_requires_token(self, client, method, path):
        resp = getattr(client, method.lower())(path)
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Authorization required"}

    def test_unknown_token_forbidden(self, client, alice):
        resp = client.get("/api/user", headers=auth_headers("f" * 64))
        assert resp.status_code == 403
        assert resp.get_json() == {"error": "Invalid token"}

    def test_bearer_prefix_accepted(self, client, alice):
        resp = client.get("/api/user", headers={"Authorization": f"Bearer {alice.token}"})
        assert resp.status_code == 200
        assert resp.get_json()["username"] == "alice"

    @pytest.mark.parametrize("header", ["Bearer ", "Bearer", "   "])
    def test_blank_token_after_scheme_is_missing(self, client, alice, header):
        resp = client.get("/api/user", headers={"Authorization": header})
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Authorization required"}
