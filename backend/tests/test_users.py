"""
Tests for the user account endpoints.
"""

from menu_api.models import Restaurant, User
from menu_api.services.domain import UserService


class TestProfile:
    """Test GET /api/user/profile."""

    def test_profile_returns_user_view(self, client, auth_headers, seed_owner):
        """Profile contains id, name, email and avatar only."""
        response = client.get("/api/user/profile", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data == {
            "id": seed_owner.id,
            "name": "Test Owner",
            "email": "owner@test.com",
            "avatar_url": None,
        }


class TestUpdateUser:
    """Test PUT /api/user."""

    def test_update_name(self, client, auth_headers):
        """Provided fields are applied."""
        response = client.put("/api/user", json={"name": "New Name"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "New Name"
        assert response.json()["data"]["email"] == "owner@test.com"

    def test_update_email_taken_by_other_user(self, client, auth_headers, seed_other_user):
        """Taking another user's email answers 409."""
        response = client.put("/api/user", json={"email": "other@test.com"}, headers=auth_headers)
        assert response.status_code == 409
        assert response.json()["error"] == "Email already in use by another user"

    def test_email_race_lost_at_commit_is_conflict(
        self, client, auth_headers, db_session, seed_other_user, monkeypatch
    ):
        """The unique email constraint still answers 409 when the pre-check misses the other account."""
        monkeypatch.setattr(UserService, "_find_by_email", lambda self, email: None)

        response = client.put("/api/user", json={"email": "other@test.com"}, headers=auth_headers)
        assert response.status_code == 409
        assert response.json()["kind"] == "CONFLICT"
        assert response.json()["error"] == "Email already in use by another user"

        db_session.expire_all()
        assert db_session.query(User).filter_by(email="owner@test.com").count() == 1

    def test_update_same_email_is_allowed(self, client, auth_headers):
        """Re-submitting one's own email together with a name change is fine."""
        response = client.put(
            "/api/user",
            json={"email": "owner@test.com", "name": "Same Mail"},
            headers=auth_headers,
        )
        assert response.status_code == 200

    def test_update_without_fields(self, client, auth_headers):
        """Nothing to apply answers 400."""
        response = client.put("/api/user", json={}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "No valid fields to update"

    def test_blank_fields_are_ignored(self, client, auth_headers):
        """Blank values leave the stored ones untouched."""
        response = client.put(
            "/api/user",
            json={"name": "Kept Apart", "email": "", "password": "  "},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["email"] == "owner@test.com"

        login = client.post(
            "/api/auth/login",
            json={"email": "owner@test.com", "password": "ownerpass123"},
        )
        assert login.status_code == 200

    def test_password_change_allows_new_login(self, client, auth_headers):
        """A changed password is hashed and used for the next login."""
        response = client.put("/api/user", json={"password": "brandnew123"}, headers=auth_headers)
        assert response.status_code == 200

        login = client.post(
            "/api/auth/login",
            json={"email": "owner@test.com", "password": "brandnew123"},
        )
        assert login.status_code == 200


class TestDeleteUser:
    """Test DELETE /api/user."""

    def test_delete_user_cascades_to_restaurants(self, client, auth_headers, db_session, seed_restaurant):
        """Deleting the account removes the restaurants it owns."""
        restaurant_id = seed_restaurant.id

        response = client.delete("/api/user", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["email"] == "owner@test.com"

        db_session.expire_all()
        assert db_session.get(Restaurant, restaurant_id) is None
        assert db_session.query(User).filter_by(email="owner@test.com").first() is None
