"""Retry policies and default channel routing.

Both tables are fixed configuration. A record persists only the resolved
outcome of a policy: ``retry_count``, ``max_retries`` and ``next_retry_at``.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from courier.notification.notification import NotificationChannel, NotificationType


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how fast a channel is retried after a transport failure."""

    channel: str
    max_retries: int
    backoff_multiplier: float
    initial_delay_ms: int

    def delay_for(self, retry_count: int) -> timedelta:
        """Backoff before the retry that follows ``retry_count`` earlier retries."""
        delay_ms = self.initial_delay_ms * self.backoff_multiplier**retry_count
        return timedelta(milliseconds=delay_ms)

    def next_retry_at(self, retry_count: int, now: datetime) -> datetime:
        return now + self.delay_for(retry_count)

    def allows_retry(self, retry_count: int) -> bool:
        return retry_count < self.max_retries

    def with_max_retries(self, max_retries: int) -> "RetryPolicy":
        return replace(self, max_retries=max_retries)


DEFAULT_RETRY_POLICIES: dict[str, RetryPolicy] = {
    NotificationChannel.PUSH.value: RetryPolicy(
        channel=NotificationChannel.PUSH.value,
        max_retries=2,
        backoff_multiplier=2,
        initial_delay_ms=5000,
    ),
    NotificationChannel.EMAIL.value: RetryPolicy(
        channel=NotificationChannel.EMAIL.value,
        max_retries=3,
        backoff_multiplier=2,
        initial_delay_ms=10000,
    ),
    NotificationChannel.SMS.value: RetryPolicy(
        channel=NotificationChannel.SMS.value,
        max_retries=1,
        backoff_multiplier=2,
        initial_delay_ms=5000,
    ),
    NotificationChannel.IN_APP.value: RetryPolicy(
        channel=NotificationChannel.IN_APP.value,
        max_retries=0,
        backoff_multiplier=1,
        initial_delay_ms=0,
    ),
    NotificationChannel.SOCKET.value: RetryPolicy(
        channel=NotificationChannel.SOCKET.value,
        max_retries=0,
        backoff_multiplier=1,
        initial_delay_ms=0,
    ),
}

# Fallback for channels registered without a policy: never retried.
NO_RETRY = RetryPolicy(channel="*", max_retries=0, backoff_multiplier=1, initial_delay_ms=0)


CHANNEL_PRIORITY: dict[str, list[str]] = {
    NotificationType.SYSTEM.value: [
        NotificationChannel.PUSH.value,
        NotificationChannel.IN_APP.value,
        NotificationChannel.SOCKET.value,
    ],
    NotificationType.TRANSACTIONAL.value: [
        NotificationChannel.PUSH.value,
        NotificationChannel.IN_APP.value,
        NotificationChannel.EMAIL.value,
    ],
    NotificationType.OPERATIONAL.value: [
        NotificationChannel.PUSH.value,
        NotificationChannel.SOCKET.value,
        NotificationChannel.IN_APP.value,
    ],
    NotificationType.MARKETING.value: [
        NotificationChannel.IN_APP.value,
        NotificationChannel.EMAIL.value,
    ],
    NotificationType.CRITICAL.value: [
        NotificationChannel.PUSH.value,
        NotificationChannel.SMS.value,
        NotificationChannel.EMAIL.value,
    ],
}


def resolve_policy(policies, channel, retry_limit=None) -> RetryPolicy:
    """Policy for ``channel``, with the caller's retry override applied.

    The override never makes a no-retry channel (socket, in-app) retryable.
    """
    policy = policies.get(channel, NO_RETRY)
    if retry_limit is not None and policy.max_retries > 0:
        policy = policy.with_max_retries(retry_limit)
    return policy


def max_retries_for(policies, channels, retry_limit=None) -> int:
    """Largest retry budget among ``channels``; the record's initial limit."""
    return max((resolve_policy(policies, channel, retry_limit).max_retries for channel in channels), default=0)
