"""Pydantic request/response models for the Courier API.

API schemas are separate from the domain payload and aggregates.
"""

from datetime import datetime
from typing import Any

from courier.device.device import DeviceType
from courier.notification.notification import (
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from courier.templates.template import TemplateRole
from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------
class CreateNotificationRequest(BaseModel):
    recipient_id: str = Field(..., min_length=1)
    event: str = Field(..., min_length=1, examples=["ORDER_PLACED"])
    type: NotificationType | None = None
    priority: NotificationPriority | None = None
    template_id: str | None = None
    role: TemplateRole | None = None
    template_data: dict[str, Any] = Field(default_factory=dict)
    channels: list[NotificationChannel] | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    max_retries: int | None = Field(default=None, ge=0, le=10)


class MarkDeliveredRequest(BaseModel):
    channel: NotificationChannel | None = None


class RegisterDeviceRequest(BaseModel):
    recipient_id: str = Field(..., min_length=1)
    push_token: str = Field(..., min_length=1)
    device_type: DeviceType = DeviceType.MOBILE


class UpdatePreferencesRequest(BaseModel):
    push_enabled: bool | None = None
    email_enabled: bool | None = None
    sms_enabled: bool | None = None
    socket_enabled: bool | None = None


class SubscriptionRequest(BaseModel):
    event: str = Field(..., min_length=1, examples=["ORDER_DELIVERED"])


class RetryDueRequest(BaseModel):
    as_of: datetime | None = None
    batch_size: int = Field(default=100, ge=1, le=1000)


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class NotificationResponse(BaseModel):
    notification_id: str
    recipient_id: str
    notification_type: str
    priority: str | None = None
    title: str | None = None
    message: str | None = None
    channel: str
    status: str
    template_id: str
    event_name: str | None = None
    failure_reason: str | None = None
    retry_count: int = 0
    max_retries: int = 0
    next_retry_at: str | None = None
    sent_at: str | None = None
    delivered_at: str | None = None
    read_at: str | None = None
    created_at: str | None = None


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]


class AuditEntryResponse(BaseModel):
    sequence: int
    channel: str | None = None
    event: str
    status: str
    details: dict[str, Any] = {}
    created_at: str | None = None


class AuditTrailResponse(BaseModel):
    notification_id: str
    entries: list[AuditEntryResponse]


class DeviceResponse(BaseModel):
    device_id: str
    recipient_id: str
    device_type: str
    is_active: bool


class PreferencesResponse(BaseModel):
    preference_id: str
    recipient_id: str
    push_enabled: bool
    email_enabled: bool
    sms_enabled: bool
    socket_enabled: bool
    unsubscribed_events: list[str] = []


class RetryDueResponse(BaseModel):
    status: str = "ok"
    processed: list[str] = []
