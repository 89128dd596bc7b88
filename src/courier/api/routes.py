"""FastAPI routes for the Courier domain.

Thin adapters over ``NotificationService``. Domain errors are translated
here: unknown ids and templates become 404, rule violations 400.
"""

from contextlib import contextmanager

from courier.api.schemas import (
    AuditEntryResponse,
    AuditTrailResponse,
    CreateNotificationRequest,
    DeviceResponse,
    MarkDeliveredRequest,
    NotificationListResponse,
    NotificationResponse,
    PreferencesResponse,
    RegisterDeviceRequest,
    RetryDueRequest,
    RetryDueResponse,
    SubscriptionRequest,
    UpdatePreferencesRequest,
)
from courier.errors import MissingTemplateVariableError, PersistenceError, TemplateNotFoundError
from courier.notification.payload import NotificationPayload
from courier.notification.service import NotificationService, build_notification_service
from fastapi import APIRouter, Depends, HTTPException, Request
from protean.exceptions import ObjectNotFoundError, ValidationError
from pydantic import ValidationError as PayloadValidationError

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(request: Request) -> NotificationService:
    """The app's service, built from the environment on first use."""
    service = getattr(request.app.state, "notification_service", None)
    if service is None:
        service = build_notification_service()
        request.app.state.notification_service = service
    return service


@contextmanager
def _domain_errors():
    try:
        yield
    except (ObjectNotFoundError, TemplateNotFoundError) as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.messages) from exc
    except MissingTemplateVariableError as exc:
        raise HTTPException(status_code=400, detail={"template_data": [str(exc)]}) from exc
    except PayloadValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc
    except PersistenceError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


def _iso(value):
    return value.isoformat() if value else None


def _notification_response(notification) -> NotificationResponse:
    return NotificationResponse(
        notification_id=str(notification.id),
        recipient_id=str(notification.recipient_id),
        notification_type=notification.notification_type,
        priority=notification.priority,
        title=notification.title,
        message=notification.message,
        channel=notification.channel,
        status=notification.status,
        template_id=notification.template_id,
        event_name=notification.event_name,
        failure_reason=notification.failure_reason,
        retry_count=notification.retry_count or 0,
        max_retries=notification.max_retries or 0,
        next_retry_at=_iso(notification.next_retry_at),
        sent_at=_iso(notification.sent_at),
        delivered_at=_iso(notification.delivered_at),
        read_at=_iso(notification.read_at),
        created_at=_iso(notification.created_at),
    )


def _device_response(device) -> DeviceResponse:
    return DeviceResponse(
        device_id=str(device.id),
        recipient_id=str(device.recipient_id),
        device_type=device.device_type,
        is_active=device.is_active,
    )


def _preferences_response(preference) -> PreferencesResponse:
    return PreferencesResponse(
        preference_id=str(preference.id),
        recipient_id=str(preference.recipient_id),
        push_enabled=preference.push_enabled,
        email_enabled=preference.email_enabled,
        sms_enabled=preference.sms_enabled,
        socket_enabled=preference.socket_enabled,
        unsubscribed_events=preference.get_unsubscribed_events(),
    )


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------
@router.get("/preferences/{recipient_id}", response_model=PreferencesResponse)
async def get_preferences(
    recipient_id: str,
    service: NotificationService = Depends(get_notification_service),
) -> PreferencesResponse:
    """A recipient's channel preferences; every channel enabled when none are stored."""
    preference = service.get_preferences(recipient_id)
    if preference is None:
        return PreferencesResponse(
            preference_id="",
            recipient_id=recipient_id,
            push_enabled=True,
            email_enabled=True,
            sms_enabled=True,
            socket_enabled=True,
        )
    return _preferences_response(preference)


@router.put("/preferences/{recipient_id}", response_model=PreferencesResponse)
async def update_preferences(
    recipient_id: str,
    body: UpdatePreferencesRequest,
    service: NotificationService = Depends(get_notification_service),
) -> PreferencesResponse:
    with _domain_errors():
        preference = service.update_preferences(
            recipient_id,
            push=body.push_enabled,
            email=body.email_enabled,
            sms=body.sms_enabled,
            socket=body.socket_enabled,
        )
    return _preferences_response(preference)


@router.post("/preferences/{recipient_id}/unsubscribe", status_code=201, response_model=PreferencesResponse)
async def unsubscribe(
    recipient_id: str,
    body: SubscriptionRequest,
    service: NotificationService = Depends(get_notification_service),
) -> PreferencesResponse:
    """Mute an event: it will reach this recipient in-app only."""
    with _domain_errors():
        preference = service.unsubscribe(recipient_id, body.event)
    return _preferences_response(preference)


@router.post("/preferences/{recipient_id}/resubscribe", status_code=201, response_model=PreferencesResponse)
async def resubscribe(
    recipient_id: str,
    body: SubscriptionRequest,
    service: NotificationService = Depends(get_notification_service),
) -> PreferencesResponse:
    with _domain_errors():
        preference = service.resubscribe(recipient_id, body.event)
    return _preferences_response(preference)


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------
@router.post("/devices", status_code=201, response_model=DeviceResponse)
async def register_device(
    body: RegisterDeviceRequest,
    service: NotificationService = Depends(get_notification_service),
) -> DeviceResponse:
    with _domain_errors():
        device = service.register_device(body.recipient_id, body.push_token, body.device_type.value)
    return _device_response(device)


@router.delete("/devices/{device_id}", response_model=DeviceResponse)
async def deactivate_device(
    device_id: str,
    service: NotificationService = Depends(get_notification_service),
) -> DeviceResponse:
    with _domain_errors():
        device = service.deactivate_device(device_id)
    return _device_response(device)


# ---------------------------------------------------------------------------
# Maintenance — periodic background job endpoints
# ---------------------------------------------------------------------------
@router.post("/maintenance/retry-due", response_model=RetryDueResponse)
async def retry_due_notifications(
    body: RetryDueRequest | None = None,
    service: NotificationService = Depends(get_notification_service),
) -> RetryDueResponse:
    """Re-attempt every notification whose retry is due. Called by a scheduler."""
    body = body or RetryDueRequest()
    processed = service.retry_due_notifications(as_of=body.as_of, batch_size=body.batch_size)
    return RetryDueResponse(processed=processed)


# ---------------------------------------------------------------------------
# Notification history
# ---------------------------------------------------------------------------
@router.get("/recipients/{recipient_id}", response_model=NotificationListResponse)
async def list_notifications(
    recipient_id: str,
    limit: int = 20,
    unread_only: bool = False,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationListResponse:
    """A recipient's notifications, newest first."""
    notifications = service.list_notifications(recipient_id, limit=limit, unread_only=unread_only)
    return NotificationListResponse(notifications=[_notification_response(n) for n in notifications])


# ---------------------------------------------------------------------------
# Notification lifecycle
# ---------------------------------------------------------------------------
@router.post("", status_code=201, response_model=NotificationResponse)
async def create_notification(
    body: CreateNotificationRequest,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    """Render and dispatch a notification for a domain event."""
    with _domain_errors():
        payload = NotificationPayload.model_validate(body.model_dump())
        notification = service.process_notification(payload)
    return _notification_response(notification)


@router.get("/{notification_id}", response_model=NotificationResponse)
async def get_notification(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    with _domain_errors():
        notification = service.get_notification(notification_id)
    return _notification_response(notification)


@router.get("/{notification_id}/audit", response_model=AuditTrailResponse)
async def get_audit_trail(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
) -> AuditTrailResponse:
    with _domain_errors():
        service.get_notification(notification_id)
    entries = service.audit_trail(notification_id)
    return AuditTrailResponse(
        notification_id=notification_id,
        entries=[
            AuditEntryResponse(
                sequence=entry.sequence,
                channel=entry.channel,
                event=entry.event,
                status=entry.status,
                details=entry.get_details(),
                created_at=_iso(entry.created_at),
            )
            for entry in entries
        ],
    )


@router.put("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    with _domain_errors():
        notification = service.mark_read(notification_id)
    return _notification_response(notification)


@router.put("/{notification_id}/delivered", response_model=NotificationResponse)
async def mark_delivered(
    notification_id: str,
    body: MarkDeliveredRequest | None = None,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    """Transport callback: the notification reached the recipient."""
    channel = body.channel.value if body and body.channel else None
    with _domain_errors():
        notification = service.mark_delivered(notification_id, channel=channel)
    return _notification_response(notification)
