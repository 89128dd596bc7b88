"""NotificationPreference aggregate — a recipient's channel opt-ins.

Push, email, SMS and socket can each be switched off. In-app can not: the
stored record is the in-app message. Unsubscribing from an event narrows
that event to in-app only. Critical notifications ignore preferences.
"""

import json
from datetime import UTC, datetime

from courier.domain import courier
from courier.notification.notification import NotificationChannel
from courier.preference.events import (
    ChannelsUpdated,
    EventResubscribed,
    EventUnsubscribed,
    PreferencesCreated,
)
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Text


@courier.aggregate
class NotificationPreference:
    """Which channels a recipient accepts, and which events they muted."""

    recipient_id: Identifier(required=True, unique=True)

    # Channel opt-ins
    push_enabled: Boolean(default=True)
    email_enabled: Boolean(default=True)
    sms_enabled: Boolean(default=True)
    socket_enabled: Boolean(default=True)

    # Per-event unsubscribe
    unsubscribed_events: Text()  # JSON list of event names

    # Timestamps
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create_default(cls, recipient_id):
        """Every channel enabled, nothing muted."""
        now = datetime.now(UTC)

        preference = cls(
            recipient_id=recipient_id,
            push_enabled=True,
            email_enabled=True,
            sms_enabled=True,
            socket_enabled=True,
            unsubscribed_events=json.dumps([]),
            created_at=now,
            updated_at=now,
        )

        preference.raise_(
            PreferencesCreated(
                preference_id=str(preference.id),
                recipient_id=str(recipient_id),
                push_enabled=True,
                email_enabled=True,
                sms_enabled=True,
                socket_enabled=True,
                created_at=now,
            )
        )

        return preference

    def update_channels(self, push=None, email=None, sms=None, socket=None):
        """Update channel opt-ins. Pass None to keep unchanged."""
        if push is None and email is None and sms is None and socket is None:
            raise ValidationError({"channels": ["At least one channel preference must be provided"]})

        now = datetime.now(UTC)

        if push is not None:
            self.push_enabled = push
        if email is not None:
            self.email_enabled = email
        if sms is not None:
            self.sms_enabled = sms
        if socket is not None:
            self.socket_enabled = socket
        self.updated_at = now

        self.raise_(
            ChannelsUpdated(
                preference_id=str(self.id),
                recipient_id=str(self.recipient_id),
                push_enabled=self.push_enabled,
                email_enabled=self.email_enabled,
                sms_enabled=self.sms_enabled,
                socket_enabled=self.socket_enabled,
                updated_at=now,
            )
        )

    def unsubscribe_from(self, event_name):
        events = self.get_unsubscribed_events()

        if event_name in events:
            raise ValidationError({"unsubscribed_events": [f"Already unsubscribed from {event_name}"]})

        events.append(event_name)
        now = datetime.now(UTC)
        self.unsubscribed_events = json.dumps(events)
        self.updated_at = now

        self.raise_(
            EventUnsubscribed(
                preference_id=str(self.id),
                recipient_id=str(self.recipient_id),
                event_name=event_name,
                unsubscribed_at=now,
            )
        )

    def resubscribe_to(self, event_name):
        events = self.get_unsubscribed_events()

        if event_name not in events:
            raise ValidationError({"unsubscribed_events": [f"Not currently unsubscribed from {event_name}"]})

        events.remove(event_name)
        now = datetime.now(UTC)
        self.unsubscribed_events = json.dumps(events)
        self.updated_at = now

        self.raise_(
            EventResubscribed(
                preference_id=str(self.id),
                recipient_id=str(self.recipient_id),
                event_name=event_name,
                resubscribed_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Query helpers
    # -------------------------------------------------------------------
    def get_unsubscribed_events(self):
        return json.loads(self.unsubscribed_events) if self.unsubscribed_events else []

    def is_subscribed_to(self, event_name):
        return event_name not in self.get_unsubscribed_events()

    def allows(self, channel):
        """True when the recipient accepts notifications on ``channel``."""
        flags = {
            NotificationChannel.PUSH.value: self.push_enabled,
            NotificationChannel.EMAIL.value: self.email_enabled,
            NotificationChannel.SMS.value: self.sms_enabled,
            NotificationChannel.SOCKET.value: self.socket_enabled,
        }
        return flags.get(channel, True)

    def filter_channels(self, channels, event_name=None):
        """Drop channels this recipient turned off. In-app always stays.

        An unsubscribed event keeps in-app only.
        """
        if event_name and not self.is_subscribed_to(event_name):
            return [channel for channel in channels if channel == NotificationChannel.IN_APP.value]
        return [channel for channel in channels if self.allows(channel)]
