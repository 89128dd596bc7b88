"""Admin templates — registrations awaiting review, escalations, fraud."""

from enum import Enum

from courier.notification.notification import (
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from courier.templates.template import ChannelContent, NotificationTemplate, TemplateRole

PUSH = NotificationChannel.PUSH.value
IN_APP = NotificationChannel.IN_APP.value
SMS = NotificationChannel.SMS.value


class AdminEvent(Enum):
    NEW_VENDOR_REGISTRATION = "NEW_VENDOR_REGISTRATION"
    NEW_DRIVER_REGISTRATION = "NEW_DRIVER_REGISTRATION"
    DISPUTE_ESCALATION = "DISPUTE_ESCALATION"
    FRAUD_ALERT = "FRAUD_ALERT"


def _admin(event, **kwargs):
    return NotificationTemplate(event=event.value, role=TemplateRole.ADMIN.value, **kwargs)


NEW_VENDOR_REGISTRATION = _admin(
    AdminEvent.NEW_VENDOR_REGISTRATION,
    id="admin_new_vendor_registration",
    name="New Vendor Registration",
    notification_type=NotificationType.OPERATIONAL.value,
    channels={
        PUSH: ChannelContent(
            title="New Vendor Registration",
            body="{{vendor_name}} ({{vendor_type}}) registered and awaiting approval",
            deep_link="/admin/vendors/pending",
        ),
        IN_APP: ChannelContent(
            title="New Vendor Registration",
            body="{{vendor_name}} ({{vendor_type}}) registered and awaiting approval",
        ),
    },
    variables=("vendor_name", "vendor_type", "vendor_id"),
    priority=NotificationPriority.HIGH.value,
)

NEW_DRIVER_REGISTRATION = _admin(
    AdminEvent.NEW_DRIVER_REGISTRATION,
    id="admin_new_driver_registration",
    name="New Driver Registration",
    notification_type=NotificationType.OPERATIONAL.value,
    channels={
        PUSH: ChannelContent(
            title="New Driver Registration",
            body="{{driver_name}} registered and awaiting approval",
            deep_link="/admin/drivers/pending",
        ),
        IN_APP: ChannelContent(
            title="New Driver Registration",
            body="{{driver_name}} registered and awaiting approval",
        ),
    },
    variables=("driver_name", "driver_id"),
    priority=NotificationPriority.HIGH.value,
)

DISPUTE_ESCALATION = _admin(
    AdminEvent.DISPUTE_ESCALATION,
    id="admin_dispute_escalation",
    name="Dispute Escalation",
    notification_type=NotificationType.CRITICAL.value,
    channels={
        PUSH: ChannelContent(
            title="Dispute Escalated",
            body="Dispute #{{dispute_id}} for order #{{order_id}} requires attention",
            deep_link="/admin/disputes/{{dispute_id}}",
        ),
        IN_APP: ChannelContent(
            title="Dispute Escalated",
            body="Dispute #{{dispute_id}} for order #{{order_id}} requires attention",
        ),
    },
    variables=("dispute_id", "order_id", "reason"),
    priority=NotificationPriority.CRITICAL.value,
)

FRAUD_ALERT = _admin(
    AdminEvent.FRAUD_ALERT,
    id="admin_fraud_alert",
    name="Fraud Alert",
    notification_type=NotificationType.CRITICAL.value,
    channels={
        PUSH: ChannelContent(
            title="Fraud Alert",
            body="Suspicious activity detected: {{fraud_type}}",
            deep_link="/admin/security/alerts",
        ),
        IN_APP: ChannelContent(title="Fraud Alert", body="Suspicious activity detected: {{fraud_type}}"),
        SMS: ChannelContent(body="ALERT: Suspicious activity detected on the platform. {{fraud_type}}"),
    },
    variables=("fraud_type", "user_id", "details"),
    priority=NotificationPriority.CRITICAL.value,
)

ADMIN_TEMPLATES = {
    template.event: template
    for template in (
        NEW_VENDOR_REGISTRATION,
        NEW_DRIVER_REGISTRATION,
        DISPUTE_ESCALATION,
        FRAUD_ALERT,
    )
}
