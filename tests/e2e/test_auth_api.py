"""End-to-end tests for registration, login and profiles."""

from forum.domain.value import Role
from tests.harness import create_client_fixture, seed_account

client = create_client_fixture()


def _register(client, username="alice", password="secret123"):
    return client.post(
        "/auth/register",
        json={
            "username": username,
            "email": f"{username}@university.edu",
            "password": password,
        },
    )


class TestAuthFlow:
    """End-to-end tests for password authentication."""

    def test_health(self, client):
        """Should report the service as healthy."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_register_login_and_me(self, client):
        """Should register, log in by email and fetch the own profile."""
        # Act
        registered = _register(client)
        login = client.post(
            "/auth/login",
            json={"email": "alice@university.edu", "password": "secret123"},
        )
        token = login.json()["data"]["token"]
        me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        # Assert
        assert registered.status_code == 201
        body = registered.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        assert body["data"]["user"]["role"] == "user"
        assert login.status_code == 200
        assert me.status_code == 200
        assert me.json()["data"]["username"] == "alice"
        assert me.json()["data"]["email"] == "alice@university.edu"

    def test_duplicate_registration(self, client):
        """Should refuse a taken username with 400."""
        _register(client)

        response = _register(client)

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["message"] == "User with this username already exists"

    def test_short_password_is_validation_error(self, client):
        """Should answer malformed bodies with the 400 envelope."""
        response = _register(client, password="123")

        assert response.status_code == 400
        assert response.json()["message"] == "Validation error"
        assert "password" in response.json()["error"]

    def test_wrong_password(self, client):
        """Should refuse bad credentials with 401."""
        _register(client)

        response = client.post(
            "/auth/login", json={"username": "alice", "password": "wrong-pass"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_me_without_token(self, client):
        """Should require a bearer token."""
        response = client.get("/auth/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_banned_user_locked_out(self, client):
        """A banned user's token and login should both be refused with 403."""
        # Arrange
        admin = seed_account(client, "mod", role=Role.ADMIN_LEVEL_1)
        registered = _register(client).json()["data"]
        token = f"Bearer {registered['token']}"

        # Act
        ban = client.post(
            f"/admin/users/{registered['user']['id']}/ban",
            json={"duration": 24},
            headers={"Authorization": admin},
        )
        me = client.get("/auth/me", headers={"Authorization": token})
        login = client.post(
            "/auth/login", json={"username": "alice", "password": "secret123"}
        )

        # Assert
        assert ban.status_code == 200
        assert ban.json()["message"].startswith("User banned until ")
        assert me.status_code == 403
        assert login.status_code == 403


class TestProfiles:
    """End-to-end tests for user profiles."""

    def test_update_and_view_profile(self, client):
        """Own edits should show up on the public profile without private fields."""
        # Arrange
        data = _register(client).json()["data"]
        headers = {"Authorization": f"Bearer {data['token']}"}

        # Act
        updated = client.patch(
            "/users/me", json={"bio": "CS major", "class_year": "2026"}, headers=headers
        )
        public = client.get(f"/users/{data['user']['id']}")

        # Assert
        assert updated.status_code == 200
        assert updated.json()["data"]["bio"] == "CS major"
        assert public.status_code == 200
        assert public.json()["data"]["class_year"] == "2026"
        assert public.json()["data"]["email"] is None

    def test_unknown_user(self, client):
        """Should return 404 for an unknown user."""
        response = client.get("/users/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
        assert response.json()["message"].startswith("User not found")
