"""Fake socket emitter — records emitted payloads for testing."""

from courier.channel.fake_base import FakeTransport
from courier.channel.socket_port import SocketTransport


class FakeSocketAdapter(FakeTransport, SocketTransport):
    """Socket emitter that records payloads in memory for test assertions."""

    prefix = "socket"
    default_failure = "Socket emit failed"

    def __init__(self):
        super().__init__()
        self.emitted: list[dict] = []

    def emit(self, channel_key: str, payload: dict) -> dict:
        failure = self._attempt()
        if failure:
            return failure

        message_id = self._message_id()
        self.emitted.append({"message_id": message_id, "channel_key": channel_key, "payload": payload})
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        super().reset()
        self.emitted.clear()
