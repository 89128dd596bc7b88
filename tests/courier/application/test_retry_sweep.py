"""Application tests for the retry sweep."""

from datetime import timedelta

from courier.notification.notification import NotificationStatus

PAYMENT_DATA = {"amount": "$12.50", "order_id": "777", "customer_name": "Ada", "transaction_id": "tx-1"}


def _payment_email(service, directory, **overrides):
    directory.add("cust-1", email="ada@example.com")
    payload = {
        "recipient_id": "cust-1",
        "event": "PAYMENT_RECEIVED",
        "template_data": PAYMENT_DATA,
        "channels": ["email"],
    }
    payload.update(overrides)
    return service.process_notification(payload)


class TestEmailRetryExhaustion:
    def test_email_retried_with_backoff_until_terminal(self, service, clock, email_transport, directory):
        email_transport.configure(should_succeed=False, failure_reason="SMTP 451")
        start = clock.now

        notification = _payment_email(service, directory)
        assert notification.status == NotificationStatus.PENDING.value
        assert notification.retry_count == 1
        assert notification.max_retries == 3
        assert notification.next_retry_at == start + timedelta(seconds=10)

        for delay, expected_count in ((10, 2), (20, 3)):
            clock.advance(seconds=delay)
            assert service.retry_due_notifications() == [str(notification.id)]
            notification = service.get_notification(notification.id)
            assert notification.status == NotificationStatus.PENDING.value
            assert notification.retry_count == expected_count

        clock.advance(seconds=40)
        assert service.retry_due_notifications() == [str(notification.id)]

        notification = service.get_notification(notification.id)
        assert notification.status == NotificationStatus.FAILED.value
        assert notification.retry_count == 3
        assert notification.failure_reason == "SMTP 451"
        assert notification.has_retry_scheduled() is False
        assert email_transport.calls == 4

        events = [entry.event for entry in service.audit_trail(notification.id)]
        assert events == ["retried", "retried", "retried", "failed"]

    def test_exhausted_record_is_not_swept_again(self, service, clock, email_transport, directory):
        email_transport.configure(should_succeed=False)
        notification = _payment_email(service, directory, max_retries=1)

        clock.advance(seconds=10)
        service.retry_due_notifications()
        clock.advance(hours=1)
        assert service.retry_due_notifications() == []
        assert service.get_notification(notification.id).status == NotificationStatus.FAILED.value


class TestTransientFailure:
    def test_retry_succeeds_after_transient_failure(self, service, clock, email_transport, directory):
        email_transport.configure(fail_times=1)
        notification = _payment_email(service, directory)

        clock.advance(seconds=10)
        service.retry_due_notifications()

        notification = service.get_notification(notification.id)
        assert notification.status == NotificationStatus.SENT.value
        assert notification.retry_count == 1
        assert notification.channel == "email"
        assert len(email_transport.sent_emails) == 1
        assert [entry.event for entry in service.audit_trail(notification.id)] == ["retried", "sent"]

    def test_retry_uses_stored_context(self, service, clock, email_transport, directory):
        email_transport.configure(fail_times=1)
        _payment_email(service, directory)

        clock.advance(seconds=10)
        service.retry_due_notifications()

        assert email_transport.sent_emails[0]["subject"] == "Payment Receipt"
        assert "$12.50" in email_transport.sent_emails[0]["text"]


class TestDueSelection:
    def test_not_due_before_next_retry_at(self, service, clock, email_transport, directory):
        email_transport.configure(should_succeed=False)
        _payment_email(service, directory)

        clock.advance(seconds=9)
        assert service.retry_due_notifications() == []
        assert email_transport.calls == 1

    def test_explicit_as_of(self, service, clock, email_transport, directory):
        email_transport.configure(should_succeed=False)
        notification = _payment_email(service, directory)

        assert service.due_for_retry(clock.now + timedelta(seconds=10)) == [notification]
        assert service.due_for_retry(clock.now) == []

    def test_push_backoff(self, service, clock, push_transport):
        service.register_device("cust-1", "tok-1")
        push_transport.configure(should_succeed=False)
        start = clock.now

        notification = service.process_notification(
            {"recipient_id": "cust-1", "event": "ORDER_DELIVERED", "channels": ["push"]}
        )
        assert notification.next_retry_at == start + timedelta(seconds=5)

        clock.advance(seconds=5)
        service.retry_due_notifications()
        notification = service.get_notification(notification.id)
        assert notification.retry_count == 2
        assert notification.next_retry_at == start + timedelta(seconds=15)

    def test_sent_record_with_pending_retry_is_swept(self, service, clock, push_transport):
        service.register_device("cust-1", "tok-1")
        push_transport.configure(fail_times=1)

        notification = service.process_notification(
            {"recipient_id": "cust-1", "event": "ORDER_DELIVERED", "channels": ["push", "inapp"]}
        )
        assert notification.status == NotificationStatus.SENT.value
        assert notification.retry_channel == "push"

        clock.advance(seconds=5)
        assert service.retry_due_notifications() == [str(notification.id)]
        assert len(push_transport.sent_pushes) == 1

    def test_due_retry_found_beyond_default_page(self, service, clock, push_transport):
        for index in range(101):
            service.process_notification(
                {"recipient_id": f"cust-{index}", "event": "ORDER_DELIVERED", "channels": ["inapp"]}
            )

        service.register_device("cust-1", "tok-1")
        push_transport.configure(fail_times=1)
        notification = service.process_notification(
            {"recipient_id": "cust-1", "event": "ORDER_DELIVERED", "channels": ["push", "inapp"]}
        )
        assert notification.status == NotificationStatus.SENT.value
        assert notification.retry_channel == "push"

        clock.advance(seconds=5)
        assert service.retry_due_notifications() == [str(notification.id)]

    def test_batch_size_limits_sweep(self, service, clock, email_transport, directory):
        email_transport.configure(should_succeed=False)
        first = _payment_email(service, directory)
        clock.advance(seconds=1)
        _payment_email(service, directory)

        clock.advance(minutes=1)
        assert service.retry_due_notifications(batch_size=1) == [str(first.id)]

    def test_delivered_record_is_never_swept(self, service, clock, push_transport):
        service.register_device("cust-1", "tok-1")
        push_transport.configure(should_succeed=False)
        notification = service.process_notification(
            {"recipient_id": "cust-1", "event": "ORDER_DELIVERED", "channels": ["push", "inapp"]}
        )

        service.mark_delivered(notification.id)
        clock.advance(minutes=1)
        assert service.retry_due_notifications() == []
