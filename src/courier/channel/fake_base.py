"""Shared behaviour of the in-memory transport fakes."""

from uuid import uuid4


class FakeTransport:
    """Records calls in memory and fails on demand.

    A fake either returns a ``"failed"`` result or raises, depending on
    ``raise_error``. With ``fail_times`` set it fails that many calls and
    then succeeds, which models a transient outage.
    """

    prefix = "fake"
    default_failure = "Delivery failed"

    def __init__(self):
        self.should_succeed = True
        self.failure_reason = self.default_failure
        self.raise_error = False
        self.fail_times: int | None = None
        self.calls = 0

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str | None = None,
        raise_error: bool = False,
        fail_times: int | None = None,
    ):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason or self.default_failure
        self.raise_error = raise_error
        self.fail_times = fail_times

    def _attempt(self):
        """Count a call and return a failure result, or None on success."""
        self.calls += 1

        failing = not self.should_succeed
        if self.fail_times is not None:
            failing = self.fail_times > 0
            self.fail_times = max(self.fail_times - 1, 0)

        if not failing:
            return None
        if self.raise_error:
            raise ConnectionError(self.failure_reason)
        return {
            "message_id": None,
            "status": "failed",
            "error": self.failure_reason,
        }

    def _message_id(self):
        return f"{self.prefix}-{uuid4().hex[:12]}"

    def reset(self):
        """Clear recorded calls and failure settings (useful between tests)."""
        self.should_succeed = True
        self.failure_reason = self.default_failure
        self.raise_error = False
        self.fail_times = None
        self.calls = 0
