"""Application tests for StatusTracker outcomes."""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest
from courier.audit.audit_log import AuditLogger
from courier.channel.senders import DeliveryReceipt
from courier.errors import ChannelError, NoRecipientError, PersistenceError, TransportError
from courier.notification.notification import Notification, NotificationStatus
from courier.notification.tracker import StatusTracker


def _make_notification(**overrides):
    defaults = {
        "recipient_id": "cust-1",
        "notification_type": "system",
        "template_id": "customer_order_placed",
        "title": "Order Confirmed",
        "message": "Your order is in.",
        "channels": ["push", "email"],
        "max_retries": 3,
    }
    defaults.update(overrides)
    return Notification.create(**defaults)


@pytest.fixture()
def tracker(clock):
    return StatusTracker(AuditLogger(), clock=clock)


class TestRecordSuccess:
    def test_marks_sent_and_audits(self, tracker):
        notification = tracker.save(_make_notification())
        receipt = DeliveryReceipt(channel="push", message_ids=("m-1",), provider="FakePushAdapter")

        notification = tracker.record_success(notification, "push", receipt)

        assert notification.status == NotificationStatus.SENT.value
        entry = tracker.audit_logger.entries_for(notification.id)[0]
        assert entry.event == "sent"
        assert entry.status == "sent"
        assert entry.get_details() == {"message_ids": ["m-1"], "delivered": True, "provider": "FakePushAdapter"}


class TestRecordFailure:
    def test_retryable_failure_schedules_retry(self, tracker, clock):
        notification = tracker.save(_make_notification())

        notification = tracker.record_failure(notification, "email", TransportError("email", "SMTP 451", "Fake"))

        assert notification.status == NotificationStatus.PENDING.value
        assert notification.retry_channel == "email"
        assert notification.next_retry_at == clock.now + timedelta(seconds=10)
        details = tracker.audit_logger.entries_for(notification.id)[0].get_details()
        assert details["error_code"] == "transport_error"
        assert details["provider"] == "Fake"
        assert details["retry_count"] == 1
        assert details["max_retries"] == 3
        assert details["next_retry_at"] == (clock.now + timedelta(seconds=10)).isoformat()

    def test_non_retryable_failure_is_terminal(self, tracker):
        notification = tracker.save(_make_notification())

        notification = tracker.record_failure(notification, "push", NoRecipientError("push", "No devices"))

        assert notification.status == NotificationStatus.FAILED.value
        assert notification.has_retry_scheduled() is False
        entry = tracker.audit_logger.entries_for(notification.id)[0]
        assert entry.event == "failed"
        assert entry.get_details() == {"error_code": "no_recipient", "error_message": "No devices"}

    def test_plain_channel_error_is_terminal(self, tracker):
        notification = tracker.save(_make_notification())
        notification = tracker.record_failure(notification, "push", ChannelError("push", "boom"))
        assert notification.status == NotificationStatus.FAILED.value

    def test_channel_without_retries_is_terminal(self, tracker):
        notification = tracker.save(_make_notification(channels=["socket"]))
        notification = tracker.record_failure(notification, "socket", TransportError("socket", "down"))
        assert notification.status == NotificationStatus.FAILED.value
        assert notification.retry_count == 0

    def test_retry_limit_override(self, tracker):
        notification = tracker.save(_make_notification(retry_limit=0, max_retries=0))
        notification = tracker.record_failure(notification, "email", TransportError("email", "down"))
        assert notification.status == NotificationStatus.FAILED.value


class TestSave:
    def test_save_returns_stored_copy(self, tracker):
        notification = _make_notification()
        stored = tracker.save(notification)
        assert stored is not notification
        assert stored.id == notification.id

    def test_storage_failure_raises_persistence_error(self, tracker):
        mock_repo = MagicMock()
        mock_repo.add.side_effect = RuntimeError("disk full")

        with patch("courier.notification.tracker.current_domain") as mock_domain:
            mock_domain.repository_for = MagicMock(return_value=mock_repo)
            with pytest.raises(PersistenceError):
                tracker.save(_make_notification())

        mock_repo.get.assert_not_called()
