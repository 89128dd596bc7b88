"""Notification service — routes one event to rendered messages on every channel.

``process_notification`` resolves the template, renders every channel's
content, persists one PENDING record and then attempts each channel in
order. A failing channel never stops the next one. ``retry_due_notifications``
is the sweep an external scheduler calls to re-attempt due retries.
"""

import os

import structlog
from courier.audit.audit_log import AuditEvent, AuditLogger
from courier.channel import build_sender_registry
from courier.device.registry import DeviceRegistry
from courier.errors import ChannelError, ChannelUnavailableError, PersistenceError, TransportError
from courier.notification.notification import (
    Notification,
    NotificationChannel,
    NotificationStatus,
    NotificationType,
    as_utc,
)
from courier.notification.payload import NotificationPayload
from courier.notification.retry import CHANNEL_PRIORITY, DEFAULT_RETRY_POLICIES, max_retries_for
from courier.notification.tracker import StatusTracker, utc_now
from courier.preference.preference import NotificationPreference
from courier.templates import TEMPLATE_REGISTRY
from courier.templates.render import MissingVariablePolicy, Renderer
from courier.utils.logging import bind_notification_context, clear_notification_context
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)

# Statuses a record with a scheduled retry can be in
_RETRYABLE_STATUSES = (
    NotificationStatus.PENDING.value,
    NotificationStatus.SENT.value,
    NotificationStatus.FAILED.value,
)


class NotificationService:
    """Delivery router. Holds collaborators only, no per-call state."""

    def __init__(
        self,
        senders,
        templates=None,
        renderer=None,
        retry_policies=None,
        channel_priority=None,
        audit_logger=None,
        devices=None,
        clock=utc_now,
    ):
        self.senders = senders
        self.templates = templates or TEMPLATE_REGISTRY
        self.renderer = renderer or Renderer()
        self.retry_policies = retry_policies or DEFAULT_RETRY_POLICIES
        self.channel_priority = channel_priority or CHANNEL_PRIORITY
        self.audit_logger = audit_logger or AuditLogger()
        self.devices = devices or DeviceRegistry()
        self.clock = clock
        self.tracker = StatusTracker(self.audit_logger, self.retry_policies, clock)

    # -------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------
    def process_notification(self, payload) -> Notification:
        """Create a notification for ``payload`` and attempt every selected channel.

        Raises ``TemplateNotFoundError`` or ``MissingTemplateVariableError``
        before anything is stored. Channel failures are recorded on the
        notification and never raised.
        """
        if not isinstance(payload, NotificationPayload):
            payload = NotificationPayload.model_validate(payload)

        role = payload.role.value if payload.role else None
        template = self.templates.require(payload.event, role, payload.template_id)
        variables = dict(payload.template_data)

        notification_type = (
            payload.notification_type.value if payload.notification_type else template.notification_type
        )
        priority = payload.priority.value if payload.priority else template.priority
        channels = self.select_channels(payload, notification_type, template.event)

        primary = self.renderer.render_primary(template, variables)
        contents = {channel: self.renderer.render(template, variables, channel) for channel in channels}

        notification = Notification.create(
            recipient_id=payload.recipient_id,
            notification_type=notification_type,
            template_id=template.id,
            title=primary.title,
            message=primary.body,
            event_name=template.event,
            priority=priority,
            context=variables,
            metadata=payload.metadata,
            channels=channels,
            max_retries=max_retries_for(self.retry_policies, channels, payload.max_retries),
            retry_limit=payload.max_retries,
            created_at=self.clock(),
        )
        notification = self.tracker.save(notification)

        bind_notification_context(notification_id=str(notification.id), recipient_id=payload.recipient_id)
        try:
            logger.info(
                "notification_created",
                event_name=template.event,
                template_id=template.id,
                channels=channels,
            )
            for channel in channels:
                notification = self._attempt(notification, channel, contents[channel], payload.metadata)
        finally:
            clear_notification_context()

        return notification

    def select_channels(self, payload, notification_type, event_name) -> list[str]:
        """Caller's channels as given; otherwise the type's routing minus opted-out channels for ``event_name``."""
        if payload.channels:
            return [channel.value for channel in payload.channels]

        channels = list(self.channel_priority.get(notification_type, [NotificationChannel.IN_APP.value]))
        if notification_type == NotificationType.CRITICAL.value:
            return channels

        preference = self.get_preferences(payload.recipient_id)
        if preference is None:
            return channels
        return preference.filter_channels(channels, event_name) or [NotificationChannel.IN_APP.value]

    def _attempt(self, notification, channel, content, metadata) -> Notification:
        """Send through one channel and record the outcome."""
        sender = self.senders.get(channel)
        try:
            if sender is None:
                raise ChannelUnavailableError(channel, f"No sender registered for channel: {channel}")
            receipt = sender.send(notification, content, metadata or {})
        except ChannelError as exc:
            error = exc
        except Exception as exc:
            logger.error(
                "channel_sender_crashed",
                notification_id=str(notification.id),
                channel=channel,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            error = TransportError(channel, str(exc) or type(exc).__name__)
        else:
            return self.tracker.record_success(notification, channel, receipt)

        return self.tracker.record_failure(notification, channel, error)

    # -------------------------------------------------------------------
    # Retry sweep
    # -------------------------------------------------------------------
    def due_for_retry(self, as_of=None) -> list[Notification]:
        """Records whose scheduled retry is due, oldest schedule first."""
        as_of = as_of or self.clock()
        repo = current_domain.repository_for(Notification)

        # limit() last: later builder calls reset it to the aggregate default
        scheduled = (
            repo._dao.query.filter(status__in=list(_RETRYABLE_STATUSES), next_retry_at__isnull=False)
            .order_by("next_retry_at")
            .limit(None)
            .all()
            .items
        )
        due = [notification for notification in scheduled if notification.is_retry_due(as_of)]
        return sorted(due, key=lambda n: as_utc(n.next_retry_at))

    def retry_due_notifications(self, as_of=None, batch_size=100) -> list[str]:
        """Re-attempt the owning channel of every due retry. Returns processed ids."""
        as_of = as_of or self.clock()
        processed = []

        for notification in self.due_for_retry(as_of)[:batch_size]:
            bind_notification_context(notification_id=str(notification.id))
            try:
                channel = notification.claim_retry()
                template = self.templates.get_by_id(notification.template_id)
                if template is None:
                    notification = self.tracker.record_failure(
                        notification,
                        channel,
                        ChannelError(channel, f"Template no longer available: {notification.template_id}"),
                    )
                else:
                    content = self.renderer.render(template, notification.get_context(), channel)
                    notification = self._attempt(notification, channel, content, notification.get_metadata())
                processed.append(str(notification.id))
            except PersistenceError as exc:
                logger.error("retry_attempt_not_recorded", error=str(exc))
            finally:
                clear_notification_context()

        logger.info("retry_sweep_completed", processed=len(processed), as_of=str(as_of))
        return processed

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def get_notification(self, notification_id) -> Notification:
        return current_domain.repository_for(Notification).get(notification_id)

    def list_notifications(self, recipient_id, limit=20, unread_only=False) -> list[Notification]:
        """A recipient's notifications, newest first."""
        repo = current_domain.repository_for(Notification)
        query = repo._dao.query.filter(recipient_id=str(recipient_id))
        if unread_only:
            query = query.filter(read_at__isnull=True)
        return query.order_by("-created_at").limit(limit).all().items

    def mark_delivered(self, notification_id, channel=None) -> Notification:
        """Transport confirmed delivery. Cancels any scheduled retry."""
        notification = self.get_notification(notification_id)
        notification.mark_delivered(delivered_at=self.clock())
        notification = self.tracker.save(notification)

        self.audit_logger.append(
            notification.id,
            AuditEvent.DELIVERED,
            channel or notification.channel,
            notification.status,
            recipient_id=notification.recipient_id,
        )
        logger.info("notification_delivered", notification_id=str(notification.id), channel=channel)
        return notification

    def mark_read(self, notification_id) -> Notification:
        """Stamp ``read_at`` once. Reading again changes nothing."""
        notification = self.get_notification(notification_id)
        if not notification.mark_read(read_at=self.clock()):
            return notification

        notification = self.tracker.save(notification)
        self.audit_logger.append(
            notification.id,
            AuditEvent.READ,
            NotificationChannel.IN_APP.value,
            notification.status,
            recipient_id=notification.recipient_id,
        )
        return notification

    def audit_trail(self, notification_id):
        return self.audit_logger.entries_for(notification_id)

    # -------------------------------------------------------------------
    # Devices
    # -------------------------------------------------------------------
    def register_device(self, recipient_id, push_token, device_type="mobile"):
        return self.devices.register(recipient_id, push_token, device_type)

    def deactivate_device(self, device_id):
        return self.devices.deactivate(device_id)

    # -------------------------------------------------------------------
    # Preferences
    # -------------------------------------------------------------------
    def get_preferences(self, recipient_id) -> NotificationPreference | None:
        repo = current_domain.repository_for(NotificationPreference)
        prefs = repo._dao.query.filter(recipient_id=str(recipient_id)).all().items
        return prefs[0] if prefs else None

    def _preferences_or_default(self, recipient_id):
        return self.get_preferences(recipient_id) or NotificationPreference.create_default(recipient_id)

    def _save_preferences(self, preference):
        repo = current_domain.repository_for(NotificationPreference)
        repo.add(preference)
        return repo.get(preference.id)

    def update_preferences(self, recipient_id, push=None, email=None, sms=None, socket=None):
        preference = self._preferences_or_default(recipient_id)
        preference.update_channels(push=push, email=email, sms=sms, socket=socket)
        return self._save_preferences(preference)

    def unsubscribe(self, recipient_id, event_name):
        preference = self._preferences_or_default(recipient_id)
        preference.unsubscribe_from(event_name)
        return self._save_preferences(preference)

    def resubscribe(self, recipient_id, event_name):
        preference = self._preferences_or_default(recipient_id)
        preference.resubscribe_to(event_name)
        return self._save_preferences(preference)


def build_notification_service(**overrides) -> NotificationService:
    """Wire a service from the environment.

    ``NOTIFICATION_MISSING_VARIABLES`` picks the render policy (``blank`` or
    ``raise``); ``NOTIFICATION_EMAIL_FOOTER`` replaces the email footer.
    """
    policy = os.environ.get("NOTIFICATION_MISSING_VARIABLES", MissingVariablePolicy.BLANK.value).strip().lower()
    devices = overrides.pop("devices", None) or DeviceRegistry()
    senders = overrides.pop("senders", None) or build_sender_registry(
        devices, email_footer=os.environ.get("NOTIFICATION_EMAIL_FOOTER")
    )
    renderer = overrides.pop("renderer", None) or Renderer(MissingVariablePolicy(policy))
    return NotificationService(senders, renderer=renderer, devices=devices, **overrides)
