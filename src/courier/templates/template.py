"""Template value types — immutable per-event, per-channel message content."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from courier.notification.notification import NotificationChannel


class TemplateRole(Enum):
    CUSTOMER = "customer"
    VENDOR = "vendor"
    DRIVER = "driver"
    ADMIN = "admin"


@dataclass(frozen=True)
class ChannelContent:
    """Title, body and deep link for one channel. Placeholders use ``{{name}}``."""

    body: str
    title: str | None = None
    deep_link: str | None = None


# Channels whose content doubles as the stored title/message, in order.
PRIMARY_CHANNELS = (NotificationChannel.PUSH.value, NotificationChannel.IN_APP.value)


@dataclass(frozen=True)
class NotificationTemplate:
    id: str
    name: str
    event: str
    role: str
    notification_type: str
    channels: Mapping[str, ChannelContent] = field(hash=False)
    variables: tuple[str, ...] = ()
    priority: str = "medium"
    is_active: bool = True
    description: str = field(default="", compare=False)

    def __post_init__(self):
        object.__setattr__(self, "channels", MappingProxyType(dict(self.channels)))
        object.__setattr__(self, "variables", tuple(self.variables))

    def content_for(self, channel):
        """Content declared for ``channel``, or None."""
        return self.channels.get(channel)

    def primary_content(self):
        """Push content, else in-app, else whatever channel comes first."""
        for channel in PRIMARY_CHANNELS:
            if channel in self.channels:
                return self.channels[channel]
        return next(iter(self.channels.values()))
