"""Audit log — append-only history of every channel attempt.

Entries are written once and never changed. ``sequence`` orders the
entries of one notification; timestamps alone can collide.
"""

import json
from datetime import UTC, datetime
from enum import Enum

import structlog
from courier.domain import courier
from courier.errors import PersistenceError
from protean.fields import DateTime, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)


class AuditEvent(Enum):
    CREATED = "created"
    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"
    RETRIED = "retried"
    READ = "read"


@courier.aggregate
class AuditLogEntry:
    """One recorded attempt or lifecycle step of a notification."""

    notification_id: Identifier(required=True)
    recipient_id: Identifier()
    sequence: Integer(required=True, min_value=1)
    channel: String(max_length=20)
    event: String(choices=AuditEvent, required=True)
    status: String(max_length=20, required=True)
    details: Text()  # JSON — error code/message, provider, message ids, retry schedule
    created_at: DateTime(required=True)

    @classmethod
    def record(cls, notification_id, sequence, event, status, channel=None, details=None, recipient_id=None):
        return cls(
            notification_id=notification_id,
            recipient_id=recipient_id,
            sequence=sequence,
            channel=channel,
            event=event,
            status=status,
            details=json.dumps(details, default=str) if details is not None else None,
            created_at=datetime.now(UTC),
        )

    def get_details(self):
        return json.loads(self.details) if self.details else {}


class AuditLogger:
    """Write-only access to the audit log, plus ordered reads per notification."""

    def _repo(self):
        return current_domain.repository_for(AuditLogEntry)

    def entries_for(self, notification_id) -> list[AuditLogEntry]:
        query = self._repo()._dao.query.filter(notification_id=str(notification_id)).order_by("sequence")
        return query.limit(None).all().items

    def append(self, notification_id, event, channel, status, details=None, recipient_id=None) -> AuditLogEntry:
        """Append one entry. Storage failures surface as ``PersistenceError``."""
        event = AuditEvent(event).value
        try:
            sequence = len(self.entries_for(notification_id)) + 1
            entry = AuditLogEntry.record(
                notification_id=str(notification_id),
                sequence=sequence,
                event=event,
                status=status,
                channel=channel,
                details=details,
                recipient_id=str(recipient_id) if recipient_id else None,
            )
            self._repo().add(entry)
        except Exception as exc:
            logger.error(
                "audit_append_failed",
                notification_id=str(notification_id),
                audit_event=event,
                channel=channel,
                error=str(exc),
            )
            raise PersistenceError(f"Could not write audit entry for notification {notification_id}") from exc

        logger.debug(
            "audit_entry_appended",
            notification_id=str(notification_id),
            audit_event=event,
            channel=channel,
            status=status,
            sequence=sequence,
        )
        return entry
