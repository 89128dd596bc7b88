"""Domain events for the Notification aggregate."""

from courier.domain import courier
from protean.fields import DateTime, Identifier, Integer, String


@courier.event(part_of="Notification")
class NotificationCreated:
    """A notification record was created and is about to be dispatched."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    notification_type: String(required=True)
    template_id: String(required=True)
    event_name: String()
    title: String()
    created_at: DateTime(required=True)


@courier.event(part_of="Notification")
class NotificationSent:
    """A channel accepted the notification."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    channel: String(required=True)
    sent_at: DateTime(required=True)


@courier.event(part_of="Notification")
class NotificationDelivered:
    """A transport confirmed delivery to the recipient."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    channel: String(required=True)
    delivered_at: DateTime(required=True)


@courier.event(part_of="Notification")
class NotificationFailed:
    """A channel attempt failed."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    channel: String(required=True)
    reason: String(required=True)
    retry_count: Integer(required=True)
    max_retries: Integer(required=True)
    failed_at: DateTime(required=True)


@courier.event(part_of="Notification")
class NotificationRetryScheduled:
    """A failed channel attempt was scheduled for another try."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    channel: String(required=True)
    retry_count: Integer(required=True)
    next_retry_at: DateTime(required=True)
    scheduled_at: DateTime(required=True)


@courier.event(part_of="Notification")
class NotificationRead:
    """The recipient opened the notification."""

    __version__ = 1

    notification_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    read_at: DateTime(required=True)
