"""Domain events for the NotificationPreference aggregate."""

from courier.domain import courier
from protean.fields import Boolean, DateTime, Identifier, String


@courier.event(part_of="NotificationPreference")
class PreferencesCreated:
    """Preferences were created for a recipient."""

    __version__ = 1

    preference_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    push_enabled: Boolean(required=True)
    email_enabled: Boolean(required=True)
    sms_enabled: Boolean(required=True)
    socket_enabled: Boolean(required=True)
    created_at: DateTime(required=True)


@courier.event(part_of="NotificationPreference")
class ChannelsUpdated:
    """A recipient changed which channels they receive notifications on."""

    __version__ = 1

    preference_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    push_enabled: Boolean(required=True)
    email_enabled: Boolean(required=True)
    sms_enabled: Boolean(required=True)
    socket_enabled: Boolean(required=True)
    updated_at: DateTime(required=True)


@courier.event(part_of="NotificationPreference")
class EventUnsubscribed:
    """A recipient opted out of an event's non-in-app channels."""

    __version__ = 1

    preference_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    event_name: String(required=True)
    unsubscribed_at: DateTime(required=True)


@courier.event(part_of="NotificationPreference")
class EventResubscribed:
    """A recipient opted back in to an event."""

    __version__ = 1

    preference_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    event_name: String(required=True)
    resubscribed_at: DateTime(required=True)
