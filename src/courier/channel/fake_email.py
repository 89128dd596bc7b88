"""Fake email adapter — records sent emails for testing."""

from courier.channel.email_port import EmailTransport
from courier.channel.fake_base import FakeTransport


class FakeEmailAdapter(FakeTransport, EmailTransport):
    """Email adapter that records messages in memory for test assertions."""

    prefix = "email"
    default_failure = "Email delivery failed"

    def __init__(self):
        super().__init__()
        self.sent_emails: list[dict] = []

    def send(self, to: str, subject: str, html: str, text: str) -> dict:
        failure = self._attempt()
        if failure:
            return failure

        message_id = self._message_id()
        self.sent_emails.append(
            {
                "message_id": message_id,
                "to": to,
                "subject": subject,
                "html": html,
                "text": text,
            }
        )
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        super().reset()
        self.sent_emails.clear()
