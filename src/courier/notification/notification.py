"""Notification aggregate (CQRS) — one dispatched notification and its lifecycle.

A record is created once per ``process_notification`` call and then mutated
in place as each channel is attempted. ``channel`` always holds the channel
that was attempted last and ``status`` reflects that attempt's outcome.

State Machine (4 states):
    PENDING → SENT → DELIVERED
    PENDING → FAILED → (retry) → PENDING
    SENT ↔ FAILED   (a later channel's outcome follows an earlier one's)
    DELIVERED is terminal
"""

import json
from datetime import UTC, datetime
from enum import Enum

from courier.domain import courier
from courier.notification.events import (
    NotificationCreated,
    NotificationDelivered,
    NotificationFailed,
    NotificationRead,
    NotificationRetryScheduled,
    NotificationSent,
)
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class NotificationType(Enum):
    SYSTEM = "system"  # Order / ride status updates
    TRANSACTIONAL = "transactional"  # Payments, receipts, confirmations
    OPERATIONAL = "operational"  # Driver assignment, order acceptance
    MARKETING = "marketing"  # Promotions, engagement
    CRITICAL = "critical"  # Fraud, disputes, escalations


class NotificationChannel(Enum):
    PUSH = "push"
    IN_APP = "inapp"
    SOCKET = "socket"
    EMAIL = "email"
    SMS = "sms"


class NotificationStatus(Enum):
    PENDING = "pending"
    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"


class NotificationPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
_VALID_TRANSITIONS = {
    NotificationStatus.PENDING: {
        NotificationStatus.SENT,
        NotificationStatus.FAILED,
    },
    NotificationStatus.SENT: {
        NotificationStatus.SENT,  # Next channel in the fan-out succeeded
        NotificationStatus.DELIVERED,
        NotificationStatus.FAILED,
    },
    NotificationStatus.FAILED: {
        NotificationStatus.FAILED,
        NotificationStatus.SENT,  # Fallback channel succeeded
        NotificationStatus.PENDING,  # Via retry
    },
    NotificationStatus.DELIVERED: set(),  # Terminal
}


def as_utc(value):
    """Treat naive datetimes as UTC so stored and computed times compare."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@courier.aggregate
class Notification:
    """A single notification rendered from a template and fanned out over channels."""

    # Recipient
    recipient_id: Identifier(required=True)

    # Classification
    notification_type: String(choices=NotificationType, required=True)
    priority: String(choices=NotificationPriority, default=NotificationPriority.MEDIUM.value)

    # Rendered content (primary push/in-app representation)
    title: String(max_length=500)
    message: Text()

    # Template
    template_id: String(max_length=200, required=True)
    event_name: String(max_length=200)
    context_data: Text()  # JSON — variables used to render the template
    attributes: Text()  # JSON — caller supplied metadata
    planned_channels: Text()  # JSON — ordered channel list for this notification

    # Delivery state
    channel: String(choices=NotificationChannel, default=NotificationChannel.IN_APP.value)
    status: String(choices=NotificationStatus, default=NotificationStatus.PENDING.value)
    failure_reason: String(max_length=1000)

    # Delivery tracking
    sent_at: DateTime()
    delivered_at: DateTime()
    read_at: DateTime()

    # Retry
    retry_count: Integer(default=0)
    max_retries: Integer(default=0)
    retry_limit: Integer()  # Caller override of the per-channel max
    retry_channel: String(max_length=20)
    next_retry_at: DateTime()

    # Timestamps
    created_at: DateTime()
    updated_at: DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        recipient_id,
        notification_type,
        template_id,
        title,
        message,
        event_name=None,
        priority=NotificationPriority.MEDIUM.value,
        context=None,
        metadata=None,
        channels=None,
        max_retries=0,
        retry_limit=None,
        created_at=None,
    ):
        """Create a new notification in PENDING status."""
        now = created_at or datetime.now(UTC)

        notification = cls(
            recipient_id=recipient_id,
            notification_type=notification_type,
            priority=priority,
            title=title,
            message=message,
            template_id=template_id,
            event_name=event_name,
            context_data=json.dumps(context or {}, default=str),
            attributes=json.dumps(metadata or {}, default=str),
            planned_channels=json.dumps(list(channels or [])),
            channel=NotificationChannel.IN_APP.value,
            status=NotificationStatus.PENDING.value,
            retry_count=0,
            max_retries=max_retries,
            retry_limit=retry_limit,
            created_at=now,
            updated_at=now,
        )

        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                recipient_id=str(recipient_id),
                notification_type=notification_type,
                template_id=template_id,
                event_name=event_name,
                title=title,
                created_at=now,
            )
        )

        return notification

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate state machine transition."""
        current = NotificationStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def mark_sent(self, channel, sent_at=None):
        """Record that ``channel`` accepted the notification."""
        self._assert_can_transition(NotificationStatus.SENT)

        now = sent_at or datetime.now(UTC)
        self.status = NotificationStatus.SENT.value
        self.channel = channel
        self.sent_at = now
        self.failure_reason = None
        self.updated_at = now

        self.raise_(
            NotificationSent(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                channel=channel,
                sent_at=now,
            )
        )

    def mark_failed(self, channel, reason, failed_at=None):
        """Record that the attempt on ``channel`` failed."""
        self._assert_can_transition(NotificationStatus.FAILED)

        now = failed_at or datetime.now(UTC)
        self.status = NotificationStatus.FAILED.value
        self.channel = channel
        self.failure_reason = reason
        self.updated_at = now

        self.raise_(
            NotificationFailed(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                channel=channel,
                reason=reason,
                retry_count=self.retry_count,
                max_retries=self.max_retries,
                failed_at=now,
            )
        )

    def schedule_retry(self, channel, next_retry_at, max_retries, scheduled_at=None):
        """Move a failed notification back to PENDING with a retry timestamp.

        ``max_retries`` is the limit of the channel that owns the retry; it
        replaces the record's limit so ``retry_count <= max_retries`` holds.
        """
        if NotificationStatus(self.status) != NotificationStatus.FAILED:
            raise ValidationError({"status": ["Only failed notifications can be retried"]})
        if self.retry_count >= max_retries:
            raise ValidationError({"retry_count": ["Maximum retry attempts exceeded"]})
        if self.retry_channel and self.retry_channel != channel:
            raise ValidationError({"retry_channel": [f"A retry is already scheduled on {self.retry_channel}"]})

        self._assert_can_transition(NotificationStatus.PENDING)

        now = scheduled_at or datetime.now(UTC)
        self.status = NotificationStatus.PENDING.value
        self.max_retries = max_retries
        self.retry_count = self.retry_count + 1
        self.retry_channel = channel
        self.next_retry_at = next_retry_at
        self.updated_at = now

        self.raise_(
            NotificationRetryScheduled(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                channel=channel,
                retry_count=self.retry_count,
                next_retry_at=next_retry_at,
                scheduled_at=now,
            )
        )

    def claim_retry(self):
        """Take the scheduled retry off the record and return its channel."""
        if not self.retry_channel or self.next_retry_at is None:
            raise ValidationError({"next_retry_at": ["No retry is scheduled"]})

        channel = self.retry_channel
        self.retry_channel = None
        self.next_retry_at = None
        return channel

    def mark_delivered(self, delivered_at=None):
        """Mark the notification as confirmed delivered. Drops any pending retry."""
        self._assert_can_transition(NotificationStatus.DELIVERED)

        now = delivered_at or datetime.now(UTC)
        self.status = NotificationStatus.DELIVERED.value
        self.delivered_at = now
        self.retry_channel = None
        self.next_retry_at = None
        self.updated_at = now

        self.raise_(
            NotificationDelivered(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                channel=self.channel,
                delivered_at=now,
            )
        )

    def mark_read(self, read_at=None):
        """Stamp the first read. Returns False when it was already read."""
        if self.read_at is not None:
            return False

        now = read_at or datetime.now(UTC)
        self.read_at = now
        self.updated_at = now

        self.raise_(
            NotificationRead(
                notification_id=str(self.id),
                recipient_id=str(self.recipient_id),
                read_at=now,
            )
        )
        return True

    # -------------------------------------------------------------------
    # Query helpers
    # -------------------------------------------------------------------
    def get_context(self):
        return json.loads(self.context_data) if self.context_data else {}

    def get_metadata(self):
        return json.loads(self.attributes) if self.attributes else {}

    def get_planned_channels(self):
        return json.loads(self.planned_channels) if self.planned_channels else []

    def has_retry_scheduled(self):
        return bool(self.retry_channel) and self.next_retry_at is not None

    def is_retry_due(self, as_of):
        """True when a retry is scheduled at or before ``as_of``."""
        if not self.has_retry_scheduled():
            return False
        if self.retry_count > self.max_retries:
            return False
        return as_utc(self.next_retry_at) <= as_utc(as_of)
