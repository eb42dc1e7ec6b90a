"""
Unit tests for authentication endpoints.

Tests:
- User registration
- Login
- Current user profile
- Token validation on job routes
"""

import inspect
from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.deps import get_current_user
from app.core.security import create_access_token, decode_token, verify_password
from app.crud import user as user_crud
from app.models.user import User
from tests.conftest import TEST_PASSWORD, auth_headers


class TestUserRegistration:
    """Test user registration endpoint"""

    def test_register_success(self, client, db_session):
        """Test successful user registration"""
        response = client.post(
            "/api/v1/auth/register",
            json={
                "name": "Ada",
                "email": "ada@example.com",
                "password": "secret123"
            }
        )

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["email"] == "ada@example.com"
        assert data["user"]["lastName"] == "lastName"
        assert data["user"]["location"] == "my city"
        assert decode_token(data["token"])["sub"] == data["user"]["id"]

        stored = db_session.query(User).filter(User.email == "ada@example.com").one()
        assert stored.hashed_password != "secret123"
        assert verify_password("secret123", stored.hashed_password)

    def test_register_duplicate_email(self, client, user):
        """Test registration with duplicate email fails"""
        response = client.post(
            "/api/v1/auth/register",
            json={
                "name": "Someone",
                "email": user.email,
                "password": "secret123"
            }
        )

        assert response.status_code == 400
        assert "already registered" in response.json()["detail"].lower()

    def test_register_short_password(self, client):
        """Test registration with a too short password fails"""
        response = client.post(
            "/api/v1/auth/register",
            json={"name": "Ada", "email": "ada@example.com", "password": "abc"}
        )

        assert response.status_code == 422

    def test_register_invalid_email(self, client):
        """Test registration with invalid email fails"""
        response = client.post(
            "/api/v1/auth/register",
            json={"name": "Ada", "email": "not-an-email", "password": "secret123"}
        )

        assert response.status_code == 422


class TestUserLogin:
    """Test user login endpoint"""

    def test_login_success(self, client, user):
        """Test successful login"""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": user.email, "password": TEST_PASSWORD}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == str(user.id)
        assert decode_token(data["token"])["sub"] == str(user.id)

    def test_login_wrong_password(self, client, user):
        """Test login with wrong password"""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": user.email, "password": "wrong-password"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid Credentials"

    def test_login_unknown_email(self, client):
        """Test login with an email nobody registered"""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": TEST_PASSWORD}
        )

        assert response.status_code == 401

    def test_login_token_works_on_jobs(self, client, user):
        """Test the issued token authenticates job routes"""
        token = client.post(
            "/api/v1/auth/login",
            json={"email": user.email, "password": TEST_PASSWORD}
        ).json()["token"]

        response = client.get("/api/v1/jobs/", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200


class TestProfile:
    """Test current-user endpoints"""

    def test_me(self, client, user, headers):
        """Test fetching the current profile"""
        response = client.get("/api/v1/auth/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["email"] == user.email

    def test_update_me(self, client, user, headers):
        """Test updating the profile returns a new token"""
        response = client.patch("/api/v1/auth/me", json={
            "name": "Renamed",
            "email": "renamed@example.com",
            "lastName": "Lovelace",
            "location": "London"
        }, headers=headers)

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["name"] == "Renamed"
        assert data["user"]["lastName"] == "Lovelace"
        assert data["token"]

    def test_update_me_email_taken(self, client, headers, other_user):
        """Test the new email must not belong to another user"""
        response = client.patch("/api/v1/auth/me", json={
            "name": "Renamed",
            "email": other_user.email,
            "lastName": "Lovelace",
            "location": "London"
        }, headers=headers)

        assert response.status_code == 400

    def test_update_me_database_error_rolls_back(self, client, headers, db_session, monkeypatch, caplog):
        """Test a failed profile write is rolled back and logged"""
        rollbacks = []
        real_rollback = db_session.rollback

        def failing_update(db, user, user_data):
            raise IntegrityError("UPDATE users", {}, Exception("duplicate key"))

        def tracking_rollback():
            rollbacks.append(True)
            real_rollback()

        monkeypatch.setattr(user_crud, "update_profile", failing_update)
        monkeypatch.setattr(db_session, "rollback", tracking_rollback)

        with pytest.raises(IntegrityError):
            client.patch("/api/v1/auth/me", json={
                "name": "Renamed",
                "email": "renamed@example.com",
                "lastName": "Lovelace",
                "location": "London"
            }, headers=headers)

        assert rollbacks
        assert "Error updating profile" in caplog.text


class TestTokenValidation:
    """Test bearer token handling on protected routes"""

    def test_missing_token(self, client):
        """Test job routes require a token"""
        for method, url in [
            ("get", "/api/v1/jobs/"),
            ("get", "/api/v1/jobs/stats"),
            ("get", "/api/v1/jobs/1"),
            ("delete", "/api/v1/jobs/1"),
        ]:
            response = getattr(client, method)(url)
            assert response.status_code == 401

    def test_invalid_token(self, client):
        """Test a garbage token is rejected"""
        response = client.get("/api/v1/jobs/", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_expired_token(self, client, user):
        """Test an expired token is rejected"""
        token = create_access_token({"sub": str(user.id)}, expires_delta=timedelta(minutes=-1))

        response = client.get("/api/v1/jobs/", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_token_for_deleted_user(self, client, db_session, user):
        """Test a token whose user no longer exists is rejected"""
        headers = auth_headers(user)
        db_session.delete(user)
        db_session.commit()

        response = client.get("/api/v1/jobs/", headers=headers)

        assert response.status_code == 401

    def test_token_without_subject(self, client):
        """Test a token without a sub claim is rejected"""
        token = create_access_token({"name": "nobody"})

        response = client.get("/api/v1/jobs/", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_current_user_dependency_runs_in_threadpool(self):
        """Test the DB-backed auth dependency is synchronous, not a coroutine"""
        assert not inspect.iscoroutinefunction(get_current_user)
