"""Socket channel port — abstract interface for real-time emits."""

from abc import ABC, abstractmethod


def channel_key(recipient_id) -> str:
    """Socket channel a recipient's notifications are emitted on."""
    return f"user:{recipient_id}:notification"


class SocketTransport(ABC):
    """Abstract interface for real-time socket emitters."""

    @abstractmethod
    def emit(self, channel_key: str, payload: dict) -> dict:
        """Emit ``payload`` on ``channel_key``.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
