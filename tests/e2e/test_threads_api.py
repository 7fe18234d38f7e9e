"""End-to-end tests for the thread lifecycle."""

from forum.domain.value import Role
from tests.harness import create_client_fixture, seed_account

client = create_client_fixture()

THREAD_FORM = {
    "title": "Study group for calculus",
    "content": "Anyone up for weekly sessions before the midterm?",
    "category": "academics",
}


def _create_thread(client, token, files=None):
    return client.post(
        "/threads",
        data=THREAD_FORM,
        files=files or [],
        headers={"Authorization": token},
    )


class TestThreadLifecycle:
    """Thread creation, moderation and browsing."""

    def test_pending_thread_hidden_until_approved(self, client):
        """A new thread should stay out of public view until an admin approves it."""
        # Arrange
        author = seed_account(client, "alice")
        admin = seed_account(client, "mod", role=Role.ADMIN_LEVEL_1)

        # Act
        created = _create_thread(client, author)
        thread_id = created.json()["data"]["id"]
        hidden = client.get(f"/threads/{thread_id}")
        queue = client.get("/threads/admin/pending", headers={"Authorization": admin})
        approved = client.post(
            f"/threads/admin/{thread_id}/approve", headers={"Authorization": admin}
        )
        listing = client.get("/threads")

        # Assert
        assert created.status_code == 201
        assert created.json()["message"] == (
            "Thread created successfully and is pending approval"
        )
        assert created.json()["data"]["status"] == "pending"
        assert hidden.status_code == 404
        assert [t["id"] for t in queue.json()["data"]] == [thread_id]
        assert approved.json()["data"]["status"] == "approved"
        assert listing.json()["pagination"]["total"] == 1
        assert listing.json()["data"][0]["author"]["username"] == "alice"

    def test_regular_user_cannot_moderate(self, client):
        """Moderation endpoints should answer 403 to regular users."""
        author = seed_account(client, "alice")
        thread_id = _create_thread(client, author).json()["data"]["id"]

        response = client.post(
            f"/threads/admin/{thread_id}/approve", headers={"Authorization": author}
        )

        assert response.status_code == 403
        assert response.json()["success"] is False

    def test_anonymous_cannot_create(self, client):
        """Creating a thread should require authentication."""
        response = client.post("/threads", data=THREAD_FORM)

        assert response.status_code == 401

    def test_short_title_is_validation_error(self, client):
        """Form validation failures should use the 400 envelope."""
        author = seed_account(client, "alice")

        response = client.post(
            "/threads",
            data={**THREAD_FORM, "title": "Hi"},
            headers={"Authorization": author},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Validation error"

    def test_like_toggle_and_views(self, client):
        """Liking twice should undo the like; viewing with the flag counts a view."""
        # Arrange
        author = seed_account(client, "alice")
        admin = seed_account(client, "mod", role=Role.ADMIN_LEVEL_1)
        thread_id = _create_thread(client, author).json()["data"]["id"]
        client.post(
            f"/threads/admin/{thread_id}/approve", headers={"Authorization": admin}
        )

        # Act
        liked = client.post(
            f"/threads/{thread_id}/like", headers={"Authorization": author}
        )
        unliked = client.post(
            f"/threads/{thread_id}/like", headers={"Authorization": author}
        )
        client.get(f"/threads/{thread_id}", params={"increment_view": "true"})
        viewed = client.get(f"/threads/{thread_id}")

        # Assert
        assert liked.json()["data"] == {"likes": 1, "user_liked": True}
        assert unliked.json()["data"] == {"likes": 0, "user_liked": False}
        assert viewed.json()["data"]["views"] == 1

    def test_stats(self, client):
        """Public and admin stats should count threads by status."""
        # Arrange
        author = seed_account(client, "alice")
        admin = seed_account(client, "mod", role=Role.ADMIN_LEVEL_1)
        first = _create_thread(client, author).json()["data"]["id"]
        _create_thread(client, author)
        client.post(f"/threads/admin/{first}/approve", headers={"Authorization": admin})

        # Act
        public = client.get("/threads/stats/public").json()["data"]
        admin_stats = client.get(
            "/threads/admin/stats", headers={"Authorization": admin}
        ).json()["data"]

        # Assert
        assert public["total_members"] == 2
        assert public["total_threads"] == 1
        assert public["categories"]["academics"]["threads"] == 1
        assert admin_stats == {"total": 2, "pending": 1, "approved": 1, "rejected": 0}

    def test_author_deletes_thread(self, client):
        """A deleted thread should disappear from public view."""
        author = seed_account(client, "alice")
        admin = seed_account(client, "mod", role=Role.ADMIN_LEVEL_1)
        thread_id = _create_thread(client, author).json()["data"]["id"]
        client.post(
            f"/threads/admin/{thread_id}/approve", headers={"Authorization": admin}
        )

        deleted = client.delete(
            f"/threads/{thread_id}", headers={"Authorization": author}
        )

        assert deleted.status_code == 200
        assert deleted.json()["message"] == "Thread deleted successfully"
        assert client.get(f"/threads/{thread_id}").status_code == 404


class TestAttachments:
    """Thread attachments."""

    def test_upload_and_download(self, client):
        """Uploaded files should be served back with their name and type."""
        # Arrange
        author = seed_account(client, "alice")
        files = [("files", ("notes v2.txt", b"derivatives", "text/plain"))]

        # Act
        created = _create_thread(client, author, files=files).json()["data"]
        attachment_id = created["attachments"][0]
        info = client.get(f"/attachments/{attachment_id}/info")
        download = client.get(f"/attachments/{attachment_id}")

        # Assert
        assert info.json()["data"]["filename"] == "notes v2.txt"
        assert info.json()["data"]["size"] == len(b"derivatives")
        assert download.status_code == 200
        assert download.content == b"derivatives"
        assert download.headers["content-type"].startswith("text/plain")
        assert download.headers["content-disposition"] == (
            "inline; filename*=UTF-8''notes%20v2.txt"
        )

    def test_replace_attachment_on_update(self, client):
        """Updating should drop the listed attachments and add the new files."""
        # Arrange
        author = seed_account(client, "alice")
        created = _create_thread(
            client, author, files=[("files", ("old.txt", b"old", "text/plain"))]
        ).json()["data"]
        old_id = created["attachments"][0]

        # Act
        updated = client.put(
            f"/threads/{created['id']}",
            data={"title": "Calculus study group", "deleted_attachments": f'["{old_id}"]'},
            files=[("files", ("new.txt", b"new", "text/plain"))],
            headers={"Authorization": author},
        )

        # Assert
        assert updated.status_code == 200
        data = updated.json()["data"]
        assert data["title"] == "Calculus study group"
        assert len(data["attachments"]) == 1
        assert data["attachments"][0] != old_id
        assert client.get(f"/attachments/{old_id}").status_code == 404

    def test_unknown_attachment(self, client):
        """Should return 404 for an unknown attachment."""
        response = client.get("/attachments/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
