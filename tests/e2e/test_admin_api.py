"""End-to-end tests for the admin endpoints."""

from forum.domain.value import Role
from tests.harness import create_client_fixture, seed_account

client = create_client_fixture()


def _user_id(client, token):
    return client.get("/auth/me", headers={"Authorization": token}).json()["data"]["id"]


class TestBans:
    """Banning and unbanning users."""

    def test_banned_author_content_hidden(self, client):
        """A banned author's threads should 404 publicly but stay visible to admins."""
        # Arrange
        alice = seed_account(client, "alice")
        admin = seed_account(client, "mod", role=Role.ADMIN_LEVEL_1)
        alice_id = _user_id(client, alice)
        thread_id = client.post(
            "/threads",
            data={
                "title": "Selling textbooks",
                "content": "Organic chemistry, barely used, cheap.",
                "category": "marketplace",
            },
            headers={"Authorization": alice},
        ).json()["data"]["id"]
        client.post(f"/threads/admin/{thread_id}/approve", headers={"Authorization": admin})

        # Act
        ban = client.post(
            f"/admin/users/{alice_id}/ban", headers={"Authorization": admin}
        )
        public = client.get(f"/threads/{thread_id}")
        listing = client.get("/threads").json()
        as_admin = client.get(f"/admin/threads/{thread_id}", headers={"Authorization": admin})
        profile = client.get(f"/users/{alice_id}")

        # Assert
        assert ban.json()["message"] == "User banned permanently"
        assert ban.json()["data"]["ban_expiry"] == "Permanent"
        assert public.status_code == 404
        assert listing["pagination"]["total"] == 0
        assert as_admin.status_code == 200
        assert profile.status_code == 404

    def test_unban_restores_access(self, client):
        """Unbanning should let the user log in again."""
        # Arrange
        alice = seed_account(client, "alice")
        admin = seed_account(client, "mod", role=Role.ADMIN_LEVEL_1)
        alice_id = _user_id(client, alice)
        client.post(
            f"/admin/users/{alice_id}/ban",
            json={"duration": "forever"},
            headers={"Authorization": admin},
        )

        # Act
        unban = client.post(
            f"/admin/users/{alice_id}/unban", headers={"Authorization": admin}
        )
        me = client.get("/auth/me", headers={"Authorization": alice})

        # Assert
        assert unban.status_code == 200
        assert unban.json()["data"]["is_active"] is True
        assert me.status_code == 200

    def test_invalid_duration(self, client):
        """A non-positive duration should be refused with 400."""
        alice = seed_account(client, "alice")
        admin = seed_account(client, "mod", role=Role.ADMIN_LEVEL_1)

        response = client.post(
            f"/admin/users/{_user_id(client, alice)}/ban",
            json={"duration": 0},
            headers={"Authorization": admin},
        )

        assert response.status_code == 400

    def test_admin_level_1_cannot_ban_admin(self, client):
        """Admin Level 1 should not ban another admin."""
        admin = seed_account(client, "mod", role=Role.ADMIN_LEVEL_1)
        root = seed_account(client, "root", role=Role.ADMIN_LEVEL_2)

        response = client.post(
            f"/admin/users/{_user_id(client, root)}/ban",
            headers={"Authorization": admin},
        )

        assert response.status_code == 403


class TestUserManagement:
    """Admin user management."""

    def test_regular_user_refused(self, client):
        """Admin endpoints should answer 403 to regular users."""
        alice = seed_account(client, "alice")

        response = client.get("/admin/users", headers={"Authorization": alice})

        assert response.status_code == 403
        assert response.json()["message"] == "Admin access required"

    def test_create_admin_and_list(self, client):
        """Admin Level 2 should create admins who then show in the listing."""
        # Arrange
        root = seed_account(client, "root", role=Role.ADMIN_LEVEL_2)

        # Act
        created = client.post(
            "/admin/users",
            json={
                "username": "newmod",
                "email": "newmod@university.edu",
                "password": "secret123",
                "role": "admin_level_1",
            },
            headers={"Authorization": root},
        )
        listing = client.get("/admin/users", headers={"Authorization": root})

        # Assert
        assert created.status_code == 201
        assert created.json()["data"]["role"] == "admin_level_1"
        assert listing.json()["pagination"]["total"] == 2
        assert {u["username"] for u in listing.json()["data"]} == {"root", "newmod"}

    def test_delete_and_restore(self, client):
        """Deleting a user should lock them out until restored."""
        # Arrange
        alice = seed_account(client, "alice")
        root = seed_account(client, "root", role=Role.ADMIN_LEVEL_2)
        alice_id = _user_id(client, alice)

        # Act
        deleted = client.delete(
            f"/admin/users/{alice_id}", headers={"Authorization": root}
        )
        locked_out = client.get("/auth/me", headers={"Authorization": alice})
        restored = client.post(
            f"/admin/users/{alice_id}/restore", headers={"Authorization": root}
        )

        # Assert
        assert deleted.json()["message"] == "User deactivated successfully"
        assert locked_out.status_code == 403
        assert restored.json()["data"]["is_active"] is True

    def test_edit_user(self, client):
        """Admins should edit profile fields of regular users."""
        alice = seed_account(client, "alice")
        admin = seed_account(client, "mod", role=Role.ADMIN_LEVEL_1)

        response = client.put(
            f"/admin/users/{_user_id(client, alice)}",
            json={"major": "History"},
            headers={"Authorization": admin},
        )

        assert response.status_code == 200
        assert response.json()["data"]["major"] == "History"


class TestContentModeration:
    """Admin comment management."""

    def test_restore_comment(self, client):
        """Admin Level 2 should restore a deleted comment."""
        # Arrange
        alice = seed_account(client, "alice")
        root = seed_account(client, "root", role=Role.ADMIN_LEVEL_2)
        thread_id = client.post(
            "/threads",
            data={
                "title": "Library quiet hours",
                "content": "Is the third floor silent during finals?",
                "category": "academics",
            },
            headers={"Authorization": alice},
        ).json()["data"]["id"]
        client.post(f"/threads/admin/{thread_id}/approve", headers={"Authorization": root})
        comment_id = client.post(
            f"/comments/thread/{thread_id}",
            json={"content": "Yes, strictly."},
            headers={"Authorization": alice},
        ).json()["data"]["id"]
        client.delete(f"/admin/comments/{comment_id}", headers={"Authorization": root})

        # Act
        listing = client.get("/admin/comments", headers={"Authorization": root})
        restored = client.post(
            f"/admin/comments/{comment_id}/restore", headers={"Authorization": root}
        )

        # Assert
        assert listing.json()["data"][0]["is_active"] is False
        assert restored.json()["data"]["is_active"] is True
        assert client.get(f"/threads/{thread_id}").json()["data"]["replies"] == 1
