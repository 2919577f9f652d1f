"""Integration tests for the admin notifications endpoints."""

from fastapi.testclient import TestClient


def _register_elsewhere(app, email="meera@example.com"):
    """Sign up from a separate browser so the admin session is untouched."""
    client = TestClient(app)
    client.post("/api/auth/signup", json={"email": email, "password": "tulip-42", "full_name": "Meera Iyer"})


class TestListNotifications:
    def test_requires_admin(self, shopper_client):
        assert shopper_client.get("/api/admin/notifications").status_code == 403

    def test_lists_newest_first(self, admin_client, shopper_client):
        notifications = admin_client.get("/api/admin/notifications").json()

        assert [n["recipient"] for n in notifications] == ["priya@example.com", "owner@example.com"]
        assert all(n["notification_type"] == "Welcome" for n in notifications)

    def test_filter_by_recipient(self, admin_client, shopper_client):
        notifications = admin_client.get(
            "/api/admin/notifications", params={"recipient": "priya@example.com"}
        ).json()
        assert len(notifications) == 1

    def test_filter_by_status(self, admin_client, outbox):
        outbox.configure(should_succeed=False)
        _register_elsewhere(admin_client.app)

        failed = admin_client.get("/api/admin/notifications", params={"status": "Failed"}).json()
        assert [n["recipient"] for n in failed] == ["meera@example.com"]


class TestRetryEndpoint:
    def test_retry_failed_notification(self, admin_client, outbox):
        outbox.configure(should_succeed=False)
        _register_elsewhere(admin_client.app)
        [failed] = admin_client.get("/api/admin/notifications", params={"status": "Failed"}).json()

        outbox.configure(should_succeed=True)
        response = admin_client.post(f"/api/admin/notifications/{failed['id']}/retry")

        assert response.status_code == 200
        assert response.json()["status"] == "Sent"
        assert len(outbox.sent_to("meera@example.com")) == 1

    def test_retry_sent_notification_is_a_bad_request(self, admin_client):
        [sent] = admin_client.get("/api/admin/notifications").json()
        assert admin_client.post(f"/api/admin/notifications/{sent['id']}/retry").status_code == 400

    def test_retry_unknown(self, admin_client):
        assert admin_client.post("/api/admin/notifications/missing/retry").status_code == 404
