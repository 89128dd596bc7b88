"""Status tracker — turns one channel outcome into a transition and an audit entry.

Every call persists the record and appends exactly one audit entry:
``sent`` on success, ``retried`` when a retry was scheduled and ``failed``
when the failure is terminal for the channel.
"""

from datetime import UTC, datetime

import structlog
from courier.audit.audit_log import AuditEvent
from courier.errors import PersistenceError
from courier.notification.notification import Notification
from courier.notification.retry import DEFAULT_RETRY_POLICIES, resolve_policy
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)


def utc_now():
    return datetime.now(UTC)


class StatusTracker:
    def __init__(self, audit_logger, retry_policies=None, clock=utc_now):
        self.audit_logger = audit_logger
        self.retry_policies = retry_policies if retry_policies is not None else DEFAULT_RETRY_POLICIES
        self.clock = clock

    def save(self, notification) -> Notification:
        """Persist ``notification`` and return the stored copy."""
        repo = current_domain.repository_for(Notification)
        try:
            repo.add(notification)
            return repo.get(notification.id)
        except Exception as exc:
            logger.error(
                "notification_persist_failed",
                notification_id=str(notification.id),
                error=str(exc),
            )
            raise PersistenceError(f"Could not persist notification {notification.id}") from exc

    def record_success(self, notification, channel, receipt) -> Notification:
        notification.mark_sent(channel, sent_at=self.clock())
        notification = self.save(notification)

        self.audit_logger.append(
            notification.id,
            AuditEvent.SENT,
            channel,
            notification.status,
            details=receipt.to_details(),
            recipient_id=notification.recipient_id,
        )
        logger.info(
            "notification_sent",
            notification_id=str(notification.id),
            channel=channel,
            delivered=receipt.delivered,
        )
        return notification

    def record_failure(self, notification, channel, error) -> Notification:
        """Mark the attempt failed and schedule a retry when the policy allows one.

        Only one channel may own the retry slot of a record at a time; a
        retryable failure on another channel is terminal for that channel.
        """
        now = self.clock()
        notification.mark_failed(channel, str(error), failed_at=now)

        details = {"error_code": error.code, "error_message": str(error)}
        provider = getattr(error, "provider", None)
        if provider:
            details["provider"] = provider

        event = AuditEvent.FAILED
        policy = resolve_policy(self.retry_policies, channel, notification.retry_limit)
        slot_free = not notification.retry_channel or notification.retry_channel == channel
        if error.retryable and slot_free and policy.allows_retry(notification.retry_count):
            next_retry_at = policy.next_retry_at(notification.retry_count, now)
            notification.schedule_retry(channel, next_retry_at, policy.max_retries, scheduled_at=now)
            event = AuditEvent.RETRIED
            details.update(
                retry_count=notification.retry_count,
                max_retries=notification.max_retries,
                next_retry_at=next_retry_at.isoformat(),
            )

        notification = self.save(notification)

        self.audit_logger.append(
            notification.id,
            event,
            channel,
            notification.status,
            details=details,
            recipient_id=notification.recipient_id,
        )
        if event == AuditEvent.RETRIED:
            logger.warning(
                "notification_retry_scheduled",
                notification_id=str(notification.id),
                channel=channel,
                retry_count=notification.retry_count,
                next_retry_at=str(notification.next_retry_at),
                error_code=error.code,
            )
        else:
            logger.warning(
                "notification_channel_failed",
                notification_id=str(notification.id),
                channel=channel,
                error_code=error.code,
                reason=str(error),
            )
        return notification
