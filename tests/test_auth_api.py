"""
Tests for registration, login, admin login and the auth guards
"""
from datetime import timedelta

from streamhub.core.jwt_auth import JWTAuth, TokenTier
from streamhub.models.user import User


def _headers(token):
    return {"Authorization": f"Bearer {token}"}


class TestRegistration:

    def test_register_returns_user_token(self, client):
        response = client.post("/api/auth/register", json={"username": "viewer", "password": "watch-me"})

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["username"] == "viewer"
        assert data["user"]["is_admin"] is False
        payload = JWTAuth.verify(data["token"], TokenTier.USER)
        assert payload["sub"] == str(data["user"]["id"])

    def test_duplicate_username_rejected_and_single_row_kept(self, client, db):
        first = client.post("/api/auth/register", json={"username": "dup", "password": "one-pass"})
        second = client.post("/api/auth/register", json={"username": "dup", "password": "two-pass"})

        assert first.status_code == 201
        assert second.status_code == 400
        assert second.json()["code"] == "CONFLICT"
        assert db.query(User).filter(User.username == "dup").count() == 1

    def test_register_missing_fields(self, client):
        assert client.post("/api/auth/register", json={"username": "nopass"}).status_code == 400
        assert client.post("/api/auth/register", json={"password": "x"}).status_code == 400
        assert client.post("/api/auth/register", json={"username": "  ", "password": "x"}).status_code == 400

    def test_password_is_not_stored_in_clear(self, client, db):
        client.post("/api/auth/register", json={"username": "viewer", "password": "watch-me"})

        user = db.query(User).filter(User.username == "viewer").one()
        assert user.password_hash != "watch-me"
        assert user.password_hash.startswith("$2")


class TestLogin:

    def test_login_success(self, client, user_token):
        response = client.post("/api/auth/login", json={"username": "viewer", "password": "watch-me"})

        assert response.status_code == 200
        assert JWTAuth.verify(response.json()["token"], TokenTier.USER)["username"] == "viewer"

    def test_unknown_user_and_wrong_password_look_identical(self, client, user_token):
        wrong_password = client.post("/api/auth/login", json={"username": "viewer", "password": "nope"})
        unknown_user = client.post("/api/auth/login", json={"username": "nobody", "password": "nope"})

        assert wrong_password.status_code == unknown_user.status_code == 400
        assert wrong_password.json() == unknown_user.json()

    def test_me_returns_profile(self, client, user_headers):
        response = client.get("/api/auth/me", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["username"] == "viewer"


class TestAdminLogin:

    def test_seeded_admin_gets_admin_token(self, client):
        response = client.post("/api/auth/admin/login", json={"username": "admin", "password": "admin-pass"})

        assert response.status_code == 200
        payload = JWTAuth.verify(response.json()["token"], TokenTier.ADMIN)
        assert payload["is_admin"] is True
        assert payload["exp"] - payload["iat"] == 12 * 3600

    def test_non_admin_account_refused_even_with_correct_password(self, client, user_token):
        response = client.post("/api/auth/admin/login", json={"username": "viewer", "password": "watch-me"})

        assert response.status_code == 403

    def test_non_admin_account_with_wrong_password(self, client, user_token):
        response = client.post("/api/auth/admin/login", json={"username": "viewer", "password": "bad"})

        assert response.status_code == 400

    def test_admin_wrong_password(self, client):
        response = client.post("/api/auth/admin/login", json={"username": "admin", "password": "bad"})

        assert response.status_code == 400

    def test_admin_user_login_gets_user_tier_only(self, client, admin_headers):
        # Regular login for the admin account still yields a user-tier token
        response = client.post("/api/auth/login", json={"username": "admin", "password": "admin-pass"})
        token = response.json()["token"]

        assert client.get("/api/admin/stats", headers=_headers(token)).status_code == 401


class TestGuards:

    def test_user_route_requires_token(self, client):
        response = client.get("/api/history")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_user_route_rejects_admin_token(self, client, admin_headers):
        assert client.get("/api/history", headers=admin_headers).status_code == 401

    def test_user_route_rejects_expired_token(self, client, user_token):
        payload = JWTAuth.verify(user_token, TokenTier.USER)
        expired = JWTAuth.issue({"sub": payload["sub"], "username": "viewer"}, TokenTier.USER, ttl=timedelta(seconds=-1))

        assert client.get("/api/history", headers=_headers(expired)).status_code == 401

    def test_admin_route_rejects_user_token(self, client, user_headers):
        assert client.get("/api/admin/stats", headers=user_headers).status_code == 401

    def test_admin_route_rejects_admin_tier_token_without_flag(self, client):
        token = JWTAuth.issue({"sub": "1", "username": "admin"}, TokenTier.ADMIN)
        flagless = client.get("/api/admin/stats", headers=_headers(token))
        missing = client.get("/api/admin/stats")

        assert flagless.status_code == missing.status_code == 401
        assert flagless.json() == missing.json()

    def test_admin_route_rejects_expired_admin_token(self, client):
        token = JWTAuth.issue(
            {"sub": "1", "username": "admin", "is_admin": True},
            TokenTier.ADMIN,
            ttl=timedelta(seconds=-1)
        )

        assert client.get("/api/admin/stats", headers=_headers(token)).status_code == 401

    def test_admin_route_accepts_admin_token(self, client, admin_headers):
        assert client.get("/api/admin/stats", headers=admin_headers).status_code == 200
