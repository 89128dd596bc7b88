"""Recipient directory port — resolves contact addresses for a recipient."""

from abc import ABC, abstractmethod


class RecipientDirectory(ABC):
    """Looks up where a recipient can be reached. Read only."""

    @abstractmethod
    def email_for(self, recipient_id: str) -> str | None:
        """Email address of the recipient, or None when unknown."""
        ...

    @abstractmethod
    def phone_for(self, recipient_id: str) -> str | None:
        """Phone number of the recipient, or None when unknown."""
        ...
