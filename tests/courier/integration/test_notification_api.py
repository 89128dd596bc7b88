"""Integration tests for the notification API endpoints."""

import pytest
from fastapi.testclient import TestClient

ORDER_DATA = {"order_id": "12345678", "customer_name": "Ada", "order_total": "$42.00"}


@pytest.fixture()
def client(service):
    """Minimal FastAPI test client with the notification routes."""
    from courier.api.routes import router
    from fastapi import FastAPI

    app = FastAPI()
    app.include_router(router)
    app.state.notification_service = service
    return TestClient(app)


def _create(client, **overrides):
    body = {"recipient_id": "cust-1", "event": "ORDER_PLACED", "template_data": ORDER_DATA, "channels": ["inapp"]}
    body.update(overrides)
    return client.post("/notifications", json=body)


# ---------------------------------------------------------------
# Create
# ---------------------------------------------------------------
class TestCreateNotification:
    def test_create_returns_sent_notification(self, client):
        resp = _create(client)
        assert resp.status_code == 201
        data = resp.json()
        assert data["status"] == "sent"
        assert data["title"] == "Order Confirmed"
        assert data["template_id"] == "customer_order_placed"
        assert data["notification_type"] == "system"

    def test_type_field_overrides_template_type(self, client):
        resp = _create(client, type="marketing")
        assert resp.json()["notification_type"] == "marketing"

    def test_unknown_event_returns_404(self, client):
        resp = _create(client, event="UNKNOWN_EVENT")
        assert resp.status_code == 404
        assert "UNKNOWN_EVENT" in resp.json()["detail"]

    def test_unknown_channel_returns_422(self, client):
        resp = _create(client, channels=["fax"])
        assert resp.status_code == 422

    def test_empty_channel_list_returns_422(self, client):
        resp = _create(client, channels=[])
        assert resp.status_code == 422

    def test_push_failure_is_reported_not_raised(self, client):
        resp = _create(client, channels=["push", "inapp"])
        assert resp.status_code == 201
        assert resp.json()["status"] == "sent"


# ---------------------------------------------------------------
# Read and lifecycle
# ---------------------------------------------------------------
class TestNotificationLifecycle:
    def test_get_notification(self, client):
        notification_id = _create(client).json()["notification_id"]
        resp = client.get(f"/notifications/{notification_id}")
        assert resp.status_code == 200
        assert resp.json()["notification_id"] == notification_id

    def test_get_unknown_notification_returns_404(self, client):
        assert client.get("/notifications/missing").status_code == 404

    def test_audit_trail(self, client):
        notification_id = _create(client, channels=["push", "inapp"]).json()["notification_id"]
        resp = client.get(f"/notifications/{notification_id}/audit")
        assert resp.status_code == 200
        entries = resp.json()["entries"]
        assert [(e["sequence"], e["channel"], e["event"]) for e in entries] == [
            (1, "push", "failed"),
            (2, "inapp", "sent"),
        ]
        assert entries[0]["details"]["error_code"] == "no_recipient"

    def test_mark_read(self, client):
        notification_id = _create(client).json()["notification_id"]
        resp = client.put(f"/notifications/{notification_id}/read")
        assert resp.status_code == 200
        assert resp.json()["read_at"] is not None

    def test_mark_delivered(self, client):
        notification_id = _create(client).json()["notification_id"]
        resp = client.put(f"/notifications/{notification_id}/delivered", json={"channel": "inapp"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "delivered"

    def test_mark_delivered_twice_returns_400(self, client):
        notification_id = _create(client).json()["notification_id"]
        client.put(f"/notifications/{notification_id}/delivered")
        resp = client.put(f"/notifications/{notification_id}/delivered")
        assert resp.status_code == 400
        assert "status" in resp.json()["detail"]

    def test_list_for_recipient(self, client, clock):
        _create(client)
        clock.advance(minutes=1)
        newest = _create(client, event="ORDER_DELIVERED").json()["notification_id"]
        _create(client, recipient_id="cust-2")

        resp = client.get("/notifications/recipients/cust-1", params={"limit": 5})
        ids = [n["notification_id"] for n in resp.json()["notifications"]]
        assert len(ids) == 2
        assert ids[0] == newest

    def test_list_unread_only(self, client):
        read_id = _create(client).json()["notification_id"]
        client.put(f"/notifications/{read_id}/read")
        _create(client)

        resp = client.get("/notifications/recipients/cust-1", params={"unread_only": True})
        assert len(resp.json()["notifications"]) == 1


# ---------------------------------------------------------------
# Retry sweep
# ---------------------------------------------------------------
class TestRetryDueAPI:
    def test_retry_due_processes_due_notifications(self, client, service, clock, push_transport):
        service.register_device("cust-1", "tok-1")
        push_transport.configure(fail_times=1)
        notification_id = _create(client, channels=["push"]).json()["notification_id"]

        clock.advance(seconds=5)
        resp = client.post("/notifications/maintenance/retry-due")
        assert resp.status_code == 200
        assert resp.json()["processed"] == [notification_id]
        assert client.get(f"/notifications/{notification_id}").json()["status"] == "sent"

    def test_retry_due_with_explicit_as_of(self, client):
        resp = client.post("/notifications/maintenance/retry-due", json={"as_of": "2026-03-01T12:00:00+00:00"})
        assert resp.status_code == 200
        assert resp.json()["processed"] == []


# ---------------------------------------------------------------
# Devices
# ---------------------------------------------------------------
class TestDevicesAPI:
    def test_register_and_deactivate(self, client):
        resp = client.post("/notifications/devices", json={"recipient_id": "cust-1", "push_token": "tok-1"})
        assert resp.status_code == 201
        device = resp.json()
        assert device["device_type"] == "mobile"
        assert device["is_active"] is True

        resp = client.delete(f"/notifications/devices/{device['device_id']}")
        assert resp.status_code == 200
        assert resp.json()["is_active"] is False

    def test_deactivate_unknown_device_returns_404(self, client):
        assert client.delete("/notifications/devices/missing").status_code == 404

    def test_invalid_device_type_returns_422(self, client):
        resp = client.post(
            "/notifications/devices",
            json={"recipient_id": "cust-1", "push_token": "tok-1", "device_type": "toaster"},
        )
        assert resp.status_code == 422


# ---------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------
class TestPreferencesAPI:
    def test_get_preferences_returns_defaults(self, client):
        resp = client.get("/notifications/preferences/cust-new")
        assert resp.status_code == 200
        data = resp.json()
        assert data["recipient_id"] == "cust-new"
        assert data["push_enabled"] is True
        assert data["unsubscribed_events"] == []

    def test_update_preferences(self, client):
        resp = client.put("/notifications/preferences/cust-1", json={"push_enabled": False})
        assert resp.status_code == 200
        assert resp.json()["push_enabled"] is False
        assert client.get("/notifications/preferences/cust-1").json()["push_enabled"] is False

    def test_update_without_channels_returns_400(self, client):
        resp = client.put("/notifications/preferences/cust-1", json={})
        assert resp.status_code == 400
        assert "channels" in resp.json()["detail"]

    def test_unsubscribe_and_resubscribe(self, client):
        resp = client.post("/notifications/preferences/cust-1/unsubscribe", json={"event": "ORDER_PLACED"})
        assert resp.status_code == 201
        assert resp.json()["unsubscribed_events"] == ["ORDER_PLACED"]

        resp = client.post("/notifications/preferences/cust-1/resubscribe", json={"event": "ORDER_PLACED"})
        assert resp.status_code == 201
        assert resp.json()["unsubscribed_events"] == []

    def test_duplicate_unsubscribe_returns_400(self, client):
        client.post("/notifications/preferences/cust-1/unsubscribe", json={"event": "ORDER_PLACED"})
        resp = client.post("/notifications/preferences/cust-1/unsubscribe", json={"event": "ORDER_PLACED"})
        assert resp.status_code == 400
