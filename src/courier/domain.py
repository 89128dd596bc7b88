"""Courier bounded context — multi-channel notification dispatch.

Turns domain events (order placed, account approved, delivery assigned, ...)
into rendered messages and fans them out over Push, In-App, Socket, Email
and SMS. Every notification is a persisted record with a status state
machine, channel-specific retry scheduling, and an append-only audit trail.
"""

import structlog
from protean.domain import Domain

courier = Domain(name="courier")

logger = structlog.get_logger(__name__)
