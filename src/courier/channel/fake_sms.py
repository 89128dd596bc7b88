"""Fake SMS adapter — records sent messages for testing."""

from courier.channel.fake_base import FakeTransport
from courier.channel.sms_port import SmsTransport


class FakeSmsAdapter(FakeTransport, SmsTransport):
    """SMS adapter that records messages in memory for test assertions."""

    prefix = "sms"
    default_failure = "SMS delivery failed"

    def __init__(self):
        super().__init__()
        self.sent_messages: list[dict] = []

    def send(self, to: str, body: str) -> dict:
        failure = self._attempt()
        if failure:
            return failure

        message_id = self._message_id()
        self.sent_messages.append({"message_id": message_id, "to": to, "body": body})
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        super().reset()
        self.sent_messages.clear()
