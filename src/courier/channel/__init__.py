"""Channel registry — transports and the senders that wrap them.

Transports are singletons per kind. Only the in-memory fakes ship with
this package; ``NOTIFICATION_TRANSPORT`` selects the backend and anything
other than ``fake`` is rejected.
"""

import os

from courier.channel.senders import (
    DEFAULT_EMAIL_FOOTER,
    ChannelSender,
    EmailSender,
    InAppSender,
    PushSender,
    SmsSender,
    SocketSender,
)

PUSH = "push"
EMAIL = "email"
SMS = "sms"
SOCKET = "socket"
DIRECTORY = "directory"

_transport_instances: dict[str, object] = {}


def transport_backend() -> str:
    backend = os.environ.get("NOTIFICATION_TRANSPORT", "fake").strip().lower()
    if backend != "fake":
        raise ValueError(f"Unsupported notification transport: {backend}")
    return backend


def get_transport(kind: str):
    """Return the configured transport for ``kind`` (singleton per kind).

    Args:
        kind: One of "push", "email", "sms", "socket", "directory"
    """
    if kind not in _transport_instances:
        transport_backend()
        if kind == PUSH:
            from courier.channel.fake_push import FakePushAdapter

            _transport_instances[kind] = FakePushAdapter()
        elif kind == EMAIL:
            from courier.channel.fake_email import FakeEmailAdapter

            _transport_instances[kind] = FakeEmailAdapter()
        elif kind == SMS:
            from courier.channel.fake_sms import FakeSmsAdapter

            _transport_instances[kind] = FakeSmsAdapter()
        elif kind == SOCKET:
            from courier.channel.fake_socket import FakeSocketAdapter

            _transport_instances[kind] = FakeSocketAdapter()
        elif kind == DIRECTORY:
            from courier.channel.fake_directory import InMemoryRecipientDirectory

            _transport_instances[kind] = InMemoryRecipientDirectory()
        else:
            raise ValueError(f"Unknown transport kind: {kind}")

    return _transport_instances[kind]


def reset_transports():
    """Reset all transport singletons (useful for testing)."""
    _transport_instances.clear()


class SenderRegistry:
    """Maps a channel name to its sender. Adding a channel is one ``register`` call."""

    def __init__(self, senders=()):
        self._senders: dict[str, ChannelSender] = {}
        for sender in senders:
            self.register(sender)

    def register(self, sender: ChannelSender):
        self._senders[sender.channel] = sender

    def get(self, channel: str) -> ChannelSender | None:
        return self._senders.get(channel)

    def channels(self) -> list[str]:
        return list(self._senders)

    def __contains__(self, channel):
        return channel in self._senders


def build_sender_registry(devices, email_footer: str | None = None) -> SenderRegistry:
    """Senders for every built-in channel, wired to the configured transports."""
    directory = get_transport(DIRECTORY)
    return SenderRegistry(
        [
            PushSender(get_transport(PUSH), devices),
            InAppSender(),
            SocketSender(get_transport(SOCKET)),
            EmailSender(get_transport(EMAIL), directory, email_footer or DEFAULT_EMAIL_FOOTER),
            SmsSender(get_transport(SMS), directory),
        ]
    )
