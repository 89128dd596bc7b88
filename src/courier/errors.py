"""Exception taxonomy for notification dispatch.

Only ``TemplateNotFoundError``, ``MissingTemplateVariableError`` and
``PersistenceError`` ever reach a caller of ``process_notification``.
``ChannelError`` subclasses are channel scoped: the router converts them
into status transitions and audit entries.
"""


class NotificationError(Exception):
    """Base class for every error raised by the dispatch core."""


class TemplateNotFoundError(NotificationError):
    """No active template is registered for the requested event."""

    def __init__(self, event, role=None):
        self.event = event
        self.role = role
        target = f"{role}:{event}" if role else event
        super().__init__(f"No template found for event: {target}")


class MissingTemplateVariableError(NotificationError):
    """A placeholder had no value and the render policy is strict."""

    def __init__(self, names):
        self.names = sorted(set(names))
        super().__init__(f"Missing template variables: {', '.join(self.names)}")


class PersistenceError(NotificationError):
    """A record or audit entry could not be written."""


class ChannelError(NotificationError):
    """Delivery through a single channel failed."""

    code = "channel_error"
    retryable = False

    def __init__(self, channel, message):
        self.channel = channel
        super().__init__(message)


class NoRecipientError(ChannelError):
    """The recipient has no token, address or phone number for the channel."""

    code = "no_recipient"


class ChannelUnavailableError(ChannelError):
    """No sender or transport is configured for the channel."""

    code = "channel_unavailable"


class TransportError(ChannelError):
    """The transport rejected or failed the delivery. Retried per policy."""

    code = "transport_error"
    retryable = True

    def __init__(self, channel, message, provider=None):
        self.provider = provider
        super().__init__(channel, message)
