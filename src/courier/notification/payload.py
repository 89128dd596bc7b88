"""Inbound notification request, validated at the boundary."""

from typing import Any

from courier.notification.notification import (
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from courier.templates.template import TemplateRole
from pydantic import BaseModel, ConfigDict, Field, field_validator


class NotificationPayload(BaseModel):
    """What a caller asks for: an event for a recipient, plus template data.

    ``notification_type`` and ``priority`` default to the template's own.
    ``channels`` overrides the type's default routing. ``max_retries``
    overrides every channel's retry budget.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    recipient_id: str = Field(..., min_length=1)
    event: str = Field(..., min_length=1, examples=["ORDER_PLACED"])
    notification_type: NotificationType | None = Field(default=None, alias="type")
    priority: NotificationPriority | None = None
    template_id: str | None = None
    role: TemplateRole | None = None
    template_data: dict[str, Any] = Field(default_factory=dict)
    channels: list[NotificationChannel] | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    max_retries: int | None = Field(default=None, ge=0, le=10)

    @field_validator("channels")
    @classmethod
    def _unique_channels(cls, value):
        if value is None:
            return value
        if not value:
            raise ValueError("channels must not be empty")
        seen = []
        for channel in value:
            if channel not in seen:
                seen.append(channel)
        return seen
