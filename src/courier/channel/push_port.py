"""Push notification channel port — abstract interface for push dispatch."""

from abc import ABC, abstractmethod


class PushTransport(ABC):
    """Abstract interface for push notification dispatch adapters."""

    @abstractmethod
    def send_to_token(
        self,
        token: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        """Send a push notification to a single device token.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
