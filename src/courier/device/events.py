"""Domain events for the DeviceToken aggregate."""

from courier.domain import courier
from protean.fields import DateTime, Identifier, String


@courier.event(part_of="DeviceToken")
class DeviceRegistered:
    """A push token was registered for a recipient's device."""

    __version__ = 1

    device_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    device_type: String(required=True)
    registered_at: DateTime(required=True)


@courier.event(part_of="DeviceToken")
class DeviceDeactivated:
    """A device stopped receiving push notifications."""

    __version__ = 1

    device_id: Identifier(required=True)
    recipient_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
