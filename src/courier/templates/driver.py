"""Driver templates — delivery offers and assignments, wallet payouts, account review."""

from enum import Enum

from courier.notification.notification import (
    NotificationChannel,
    NotificationPriority,
    NotificationType,
)
from courier.templates.template import ChannelContent, NotificationTemplate, TemplateRole

PUSH = NotificationChannel.PUSH.value
IN_APP = NotificationChannel.IN_APP.value
SOCKET = NotificationChannel.SOCKET.value
EMAIL = NotificationChannel.EMAIL.value


class DriverEvent(Enum):
    NEW_DELIVERY = "NEW_DELIVERY"
    DELIVERY_ASSIGNED = "DELIVERY_ASSIGNED"
    DELIVERY_CANCELLED = "DELIVERY_CANCELLED"
    DELIVERY_COMPLETED = "DELIVERY_COMPLETED"
    PAYOUT_COMPLETED = "PAYOUT_COMPLETED"
    ACCOUNT_APPROVED = "ACCOUNT_APPROVED"
    ACCOUNT_REJECTED = "ACCOUNT_REJECTED"


def _driver(event, **kwargs):
    return NotificationTemplate(event=event.value, role=TemplateRole.DRIVER.value, **kwargs)


NEW_DELIVERY = _driver(
    DriverEvent.NEW_DELIVERY,
    id="driver_new_delivery",
    name="New Delivery Available",
    notification_type=NotificationType.OPERATIONAL.value,
    channels={
        PUSH: ChannelContent(
            title="New Delivery",
            body="New delivery available near you - {{order_total}} earnings",
            deep_link="/driver/deliveries/available",
        ),
        IN_APP: ChannelContent(
            title="New Delivery Available",
            body="New delivery from {{vendor_name}} - {{order_total}} earnings",
        ),
        SOCKET: ChannelContent(title="Delivery Alert", body="New delivery available"),
    },
    variables=("order_id", "vendor_name", "order_total", "pickup_location"),
    priority=NotificationPriority.CRITICAL.value,
)

DELIVERY_ASSIGNED = _driver(
    DriverEvent.DELIVERY_ASSIGNED,
    id="driver_delivery_assigned",
    name="Delivery Assigned",
    notification_type=NotificationType.OPERATIONAL.value,
    channels={
        PUSH: ChannelContent(
            title="Delivery Assigned",
            body="Order #{{order_id}} assigned to you - {{delivery_fee}} earnings",
            deep_link="/driver/deliveries/{{order_id}}",
        ),
        IN_APP: ChannelContent(
            title="Delivery Assigned",
            body="Order #{{order_id}} assigned to you - {{delivery_fee}} earnings",
        ),
    },
    variables=("order_id", "delivery_fee", "pickup_location", "dropoff_location"),
    priority=NotificationPriority.CRITICAL.value,
)

DELIVERY_CANCELLED = _driver(
    DriverEvent.DELIVERY_CANCELLED,
    id="driver_delivery_cancelled",
    name="Delivery Cancelled",
    notification_type=NotificationType.SYSTEM.value,
    channels={
        PUSH: ChannelContent(title="Delivery Cancelled", body="Order #{{order_id}} has been cancelled."),
        IN_APP: ChannelContent(title="Delivery Cancelled", body="Order #{{order_id}} has been cancelled."),
    },
    variables=("order_id",),
    priority=NotificationPriority.MEDIUM.value,
)

DELIVERY_COMPLETED = _driver(
    DriverEvent.DELIVERY_COMPLETED,
    id="driver_delivery_completed",
    name="Delivery Completed",
    notification_type=NotificationType.SYSTEM.value,
    channels={
        PUSH: ChannelContent(
            title="Delivery Completed",
            body="Order #{{order_id}} delivered. {{delivery_fee}} added to your wallet.",
        ),
        IN_APP: ChannelContent(
            title="Delivery Completed",
            body="Order #{{order_id}} delivered. {{delivery_fee}} added to your wallet.",
        ),
    },
    variables=("order_id", "delivery_fee"),
    priority=NotificationPriority.HIGH.value,
)

PAYOUT_COMPLETED = _driver(
    DriverEvent.PAYOUT_COMPLETED,
    id="driver_payout_completed",
    name="Payout Completed",
    notification_type=NotificationType.TRANSACTIONAL.value,
    channels={
        PUSH: ChannelContent(title="Payout Received", body="{{amount}} has been credited to your wallet."),
        IN_APP: ChannelContent(title="Payout Received", body="{{amount}} has been credited to your wallet."),
        EMAIL: ChannelContent(
            title="Payout Confirmation",
            body=(
                "Hi {{driver_name}},\n\n"
                "{{amount}} has been credited to your wallet.\n\n"
                "Transaction ID: {{transaction_id}}"
            ),
        ),
    },
    variables=("amount", "driver_name", "transaction_id"),
    priority=NotificationPriority.HIGH.value,
)

ACCOUNT_APPROVED = _driver(
    DriverEvent.ACCOUNT_APPROVED,
    id="driver_account_approved",
    name="Account Approved",
    notification_type=NotificationType.SYSTEM.value,
    channels={
        PUSH: ChannelContent(
            title="Account Approved",
            body="Your driver account has been approved! Start accepting deliveries.",
            deep_link="/driver/dashboard",
        ),
        IN_APP: ChannelContent(
            title="Account Approved",
            body="Your driver account has been approved! Start accepting deliveries.",
        ),
        EMAIL: ChannelContent(
            title="Account Approval",
            body=(
                "Hi {{driver_name}},\n\n"
                "Congratulations! Your driver account has been approved.\n\n"
                "You can now start accepting deliveries."
            ),
        ),
    },
    variables=("driver_name",),
    priority=NotificationPriority.HIGH.value,
)

ACCOUNT_REJECTED = _driver(
    DriverEvent.ACCOUNT_REJECTED,
    id="driver_account_rejected",
    name="Account Rejected",
    notification_type=NotificationType.CRITICAL.value,
    channels={
        PUSH: ChannelContent(
            title="Account Rejected",
            body="Your driver account application was rejected. Reason: {{rejection_reason}}",
        ),
        IN_APP: ChannelContent(
            title="Account Rejected",
            body="Your driver account application was rejected. Reason: {{rejection_reason}}",
        ),
        EMAIL: ChannelContent(
            title="Account Rejection",
            body=(
                "Hi {{driver_name}},\n\n"
                "Unfortunately, your driver account application was rejected.\n\n"
                "Reason: {{rejection_reason}}\n\n"
                "Please contact support for more information."
            ),
        ),
    },
    variables=("driver_name", "rejection_reason"),
    priority=NotificationPriority.CRITICAL.value,
)

DRIVER_TEMPLATES = {
    template.event: template
    for template in (
        NEW_DELIVERY,
        DELIVERY_ASSIGNED,
        DELIVERY_CANCELLED,
        DELIVERY_COMPLETED,
        PAYOUT_COMPLETED,
        ACCOUNT_APPROVED,
        ACCOUNT_REJECTED,
    )
}
