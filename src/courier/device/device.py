"""DeviceToken aggregate — a recipient's push registration on one device.

Tokens are deactivated, never deleted. Re-registering a known token
reactivates it.
"""

from datetime import UTC, datetime
from enum import Enum

from courier.device.events import DeviceDeactivated, DeviceRegistered
from courier.domain import courier
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, String


class DeviceType(Enum):
    MOBILE = "mobile"
    DESKTOP = "desktop"
    WEB = "web"


@courier.aggregate
class DeviceToken:
    recipient_id: Identifier(required=True)
    device_type: String(choices=DeviceType, default=DeviceType.MOBILE.value)
    push_token: String(max_length=4096, required=True)
    is_active: Boolean(default=True)
    last_used_at: DateTime()
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def register(cls, recipient_id, push_token, device_type=DeviceType.MOBILE.value):
        if not push_token or not push_token.strip():
            raise ValidationError({"push_token": ["Push token cannot be empty"]})

        now = datetime.now(UTC)
        device = cls(
            recipient_id=recipient_id,
            device_type=device_type,
            push_token=push_token.strip(),
            is_active=True,
            last_used_at=now,
            created_at=now,
            updated_at=now,
        )
        device.raise_(
            DeviceRegistered(
                device_id=str(device.id),
                recipient_id=str(recipient_id),
                device_type=device_type,
                registered_at=now,
            )
        )
        return device

    def reactivate(self):
        now = datetime.now(UTC)
        self.is_active = True
        self.last_used_at = now
        self.updated_at = now

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["Device is already inactive"]})

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(
            DeviceDeactivated(
                device_id=str(self.id),
                recipient_id=str(self.recipient_id),
                deactivated_at=now,
            )
        )
