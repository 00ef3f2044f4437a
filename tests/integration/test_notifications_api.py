"""
Integration tests for the notifications endpoints.
"""

import pytest

from tests.fakes.records import OTHER_USER_ID, TEST_USER_ID


@pytest.mark.integration
class TestNotifications:
    """Tests for listing and marking notifications."""

    def test_lists_own_notifications_with_unseen_count(self, client, fake_notification_repo):
        fake_notification_repo.seed([
            {"id": "n1", "user_id": TEST_USER_ID, "message": "Workout left", "date": "2025-03-03"},
            {"id": "n2", "user_id": TEST_USER_ID, "message": "Workout left", "date": "2025-03-04", "seen": True},
            {"id": "n3", "user_id": OTHER_USER_ID, "message": "Workout left", "date": "2025-03-04"},
        ])

        response = client.get("/notifications")

        assert response.status_code == 200
        body = response.json()
        assert {n["id"] for n in body["notifications"]} == {"n1", "n2"}
        assert body["unseen"] == 1

    def test_mark_seen(self, client, fake_notification_repo):
        fake_notification_repo.seed([
            {"id": "n1", "user_id": TEST_USER_ID, "message": "Workout left", "date": "2025-03-03"},
        ])

        response = client.post("/notifications/n1/seen")

        assert response.status_code == 200
        assert response.json()["seen"] is True
        assert fake_notification_repo.get_all()[0]["seen"] is True

    def test_mark_seen_other_users_notification_returns_404(self, client, fake_notification_repo):
        fake_notification_repo.seed([
            {"id": "n3", "user_id": OTHER_USER_ID, "message": "Workout left", "date": "2025-03-03"},
        ])

        response = client.post("/notifications/n3/seen")

        assert response.status_code == 404
        assert fake_notification_repo.get_all()[0]["seen"] is False
