"""Fake push notification adapter — records sent pushes for testing."""

from courier.channel.fake_base import FakeTransport
from courier.channel.push_port import PushTransport


class FakePushAdapter(FakeTransport, PushTransport):
    """Push adapter that records notifications in memory for test assertions."""

    prefix = "push"
    default_failure = "Push delivery failed"

    def __init__(self):
        super().__init__()
        self.sent_pushes: list[dict] = []
        self.failing_tokens: set[str] = set()

    def fail_token(self, token: str):
        """Make every send to ``token`` fail, e.g. an expired registration."""
        self.failing_tokens.add(token)

    def send_to_token(
        self,
        token: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        failure = self._attempt()
        if failure:
            return failure
        if token in self.failing_tokens:
            return {"message_id": None, "status": "failed", "error": "Unregistered token"}

        message_id = self._message_id()
        self.sent_pushes.append(
            {
                "message_id": message_id,
                "token": token,
                "title": title,
                "body": body,
                "data": data,
            }
        )
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        super().reset()
        self.sent_pushes.clear()
        self.failing_tokens.clear()
