"""Channel senders — one per delivery channel, each wrapping its transport.

A sender either returns a ``DeliveryReceipt`` or raises a ``ChannelError``
subclass. It never touches the notification record; the router turns the
outcome into a status transition and an audit entry.
"""

import html
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import structlog
from courier.channel.socket_port import channel_key
from courier.errors import ChannelUnavailableError, NoRecipientError, TransportError
from courier.notification.notification import NotificationChannel

logger = structlog.get_logger(__name__)

DEFAULT_EMAIL_FOOTER = "This is an automated message. Please do not reply to this email."


@dataclass(frozen=True)
class DeliveryReceipt:
    """Outcome of a successful channel attempt."""

    channel: str
    delivered: bool = True  # False when the channel accepted but nothing was sent
    message_ids: tuple[str, ...] = ()
    provider: str | None = None
    details: dict = field(default_factory=dict, hash=False, compare=False)

    def to_details(self):
        details = {"message_ids": list(self.message_ids), "delivered": self.delivered}
        if self.provider:
            details["provider"] = self.provider
        details.update(self.details)
        return details


def format_email_body(text: str, footer: str = DEFAULT_EMAIL_FOOTER) -> str:
    """Wrap each line of ``text`` in an escaped paragraph and append the footer."""
    paragraphs = "".join(f"<p>{html.escape(line)}</p>" for line in (text or "").split("\n"))
    return (
        '<html><body style="font-family: Arial, sans-serif; color: #333;">'
        '<div style="max-width: 600px; margin: 0 auto; padding: 20px;">'
        f"{paragraphs}"
        '<hr style="border: none; border-top: 1px solid #ddd; margin: 20px 0;" />'
        f'<p style="font-size: 12px; color: #999;">{html.escape(footer)}</p>'
        "</div></body></html>"
    )


def _provider_name(transport):
    return type(transport).__name__ if transport is not None else None


def _accepted(result, channel, provider, default_error):
    """Message id of a ``"sent"`` transport result; raise TransportError otherwise."""
    if not result or result.get("status") != "sent":
        error = (result or {}).get("error") or default_error
        raise TransportError(channel, error, provider=provider)
    return result.get("message_id")


class ChannelSender(ABC):
    """Delivers rendered content for one channel."""

    channel: str

    @abstractmethod
    def send(self, notification, content, metadata: dict) -> DeliveryReceipt:
        """Deliver ``content`` for ``notification``. Raises ``ChannelError`` on failure."""
        ...


class PushSender(ChannelSender):
    """Fans out to every active device token of the recipient."""

    channel = NotificationChannel.PUSH.value

    def __init__(self, transport, devices):
        self.transport = transport
        self.devices = devices

    def send(self, notification, content, metadata):
        if self.transport is None:
            raise ChannelUnavailableError(self.channel, "Push transport not configured")

        tokens = self.devices.active_tokens(notification.recipient_id)
        if not tokens:
            raise NoRecipientError(self.channel, "No active devices for recipient")

        data = {key: str(value) for key, value in (metadata or {}).items()}
        data["notification_id"] = str(notification.id)
        data["deep_link"] = content.deep_link or ""

        provider = _provider_name(self.transport)
        message_ids = []
        errors = []
        for token in tokens:
            try:
                result = self.transport.send_to_token(token, content.title, content.body, data)
                message_ids.append(_accepted(result, self.channel, provider, "Push delivery failed"))
            except TransportError as exc:
                errors.append(str(exc))
            except Exception as exc:
                errors.append(str(exc) or type(exc).__name__)

        if not message_ids:
            raise TransportError(self.channel, "; ".join(errors), provider=provider)

        if errors:
            logger.warning(
                "push_partially_delivered",
                notification_id=str(notification.id),
                delivered=len(message_ids),
                failed=len(errors),
            )
        return DeliveryReceipt(
            channel=self.channel,
            message_ids=tuple(message_ids),
            provider=provider,
            details={"tokens": len(tokens), "failed_tokens": len(errors)},
        )


class InAppSender(ChannelSender):
    """The stored record is the in-app message; nothing to transmit."""

    channel = NotificationChannel.IN_APP.value

    def send(self, notification, content, metadata):
        logger.debug("inapp_notification_stored", notification_id=str(notification.id))
        return DeliveryReceipt(channel=self.channel)


class SocketSender(ChannelSender):
    channel = NotificationChannel.SOCKET.value

    def __init__(self, transport=None):
        self.transport = transport

    def send(self, notification, content, metadata):
        if self.transport is None:
            logger.info("socket_transport_not_configured", notification_id=str(notification.id))
            return DeliveryReceipt(channel=self.channel, delivered=False)

        created_at = notification.created_at.isoformat() if notification.created_at else None
        key = channel_key(notification.recipient_id)
        result = self.transport.emit(
            key,
            {
                "id": str(notification.id),
                "title": content.title,
                "body": content.body,
                "type": notification.notification_type,
                "created_at": created_at,
            },
        )
        provider = _provider_name(self.transport)
        message_id = _accepted(result, self.channel, provider, "Socket emit failed")
        return DeliveryReceipt(
            channel=self.channel,
            message_ids=(message_id,) if message_id else (),
            provider=provider,
            details={"channel_key": key},
        )


class EmailSender(ChannelSender):
    channel = NotificationChannel.EMAIL.value

    def __init__(self, transport, directory, footer=DEFAULT_EMAIL_FOOTER):
        self.transport = transport
        self.directory = directory
        self.footer = footer or DEFAULT_EMAIL_FOOTER

    def send(self, notification, content, metadata):
        if self.transport is None:
            raise ChannelUnavailableError(self.channel, "Email transport not configured")

        address = self.directory.email_for(notification.recipient_id) if self.directory else None
        if not address:
            raise NoRecipientError(self.channel, "Recipient email not found")

        provider = _provider_name(self.transport)
        result = self.transport.send(
            to=address,
            subject=content.title,
            html=format_email_body(content.body, self.footer),
            text=content.body,
        )
        message_id = _accepted(result, self.channel, provider, "Email delivery failed")
        return DeliveryReceipt(channel=self.channel, message_ids=(message_id,), provider=provider)


class SmsSender(ChannelSender):
    channel = NotificationChannel.SMS.value

    def __init__(self, transport, directory):
        self.transport = transport
        self.directory = directory

    def send(self, notification, content, metadata):
        if self.transport is None:
            raise ChannelUnavailableError(self.channel, "SMS transport not configured")

        phone = self.directory.phone_for(notification.recipient_id) if self.directory else None
        if not phone:
            raise NoRecipientError(self.channel, "Recipient phone not found")

        provider = _provider_name(self.transport)
        result = self.transport.send(to=phone, body=content.body)
        message_id = _accepted(result, self.channel, provider, "SMS delivery failed")
        return DeliveryReceipt(channel=self.channel, message_ids=(message_id,), provider=provider)
