"""Vendor templates — incoming orders, payouts, account review."""

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


class VendorEvent(Enum):
    NEW_ORDER = "NEW_ORDER"
    ORDER_CANCELLED = "ORDER_CANCELLED"
    DRIVER_ASSIGNED = "DRIVER_ASSIGNED"
    DELIVERY_COMPLETED = "DELIVERY_COMPLETED"
    PAYOUT_PROCESSED = "PAYOUT_PROCESSED"
    ACCOUNT_APPROVED = "ACCOUNT_APPROVED"
    ACCOUNT_REJECTED = "ACCOUNT_REJECTED"


def _vendor(event, **kwargs):
    return NotificationTemplate(event=event.value, role=TemplateRole.VENDOR.value, **kwargs)


NEW_ORDER = _vendor(
    VendorEvent.NEW_ORDER,
    id="vendor_new_order",
    name="New Order",
    notification_type=NotificationType.OPERATIONAL.value,
    channels={
        PUSH: ChannelContent(
            title="New Order",
            body="New order #{{order_id}} from {{customer_name}} - {{order_total}}",
            deep_link="/vendor/orders/{{order_id}}",
        ),
        IN_APP: ChannelContent(
            title="New Order",
            body="New order #{{order_id}} from {{customer_name}} - {{order_total}}",
        ),
        SOCKET: ChannelContent(title="New Order Alert", body="Order received"),
    },
    variables=("order_id", "customer_name", "order_total", "order_items"),
    priority=NotificationPriority.CRITICAL.value,
)

ORDER_CANCELLED = _vendor(
    VendorEvent.ORDER_CANCELLED,
    id="vendor_order_cancelled",
    name="Order Cancelled",
    notification_type=NotificationType.SYSTEM.value,
    channels={
        PUSH: ChannelContent(
            title="Order Cancelled",
            body="Order #{{order_id}} from {{customer_name}} has been cancelled.",
        ),
        IN_APP: ChannelContent(
            title="Order Cancelled",
            body="Order #{{order_id}} from {{customer_name}} has been cancelled.",
        ),
    },
    variables=("order_id", "customer_name"),
    priority=NotificationPriority.MEDIUM.value,
)

DRIVER_ASSIGNED = _vendor(
    VendorEvent.DRIVER_ASSIGNED,
    id="vendor_driver_assigned",
    name="Driver Assigned",
    notification_type=NotificationType.OPERATIONAL.value,
    channels={
        PUSH: ChannelContent(
            title="Driver Assigned",
            body="{{driver_name}} is coming to pick up order #{{order_id}}",
        ),
        IN_APP: ChannelContent(
            title="Driver Assigned",
            body="{{driver_name}} is coming to pick up order #{{order_id}}",
        ),
    },
    variables=("order_id", "driver_name", "driver_phone"),
    priority=NotificationPriority.HIGH.value,
)

DELIVERY_COMPLETED = _vendor(
    VendorEvent.DELIVERY_COMPLETED,
    id="vendor_delivery_completed",
    name="Delivery Completed",
    notification_type=NotificationType.SYSTEM.value,
    channels={
        PUSH: ChannelContent(
            title="Delivery Completed",
            body="Order #{{order_id}} has been delivered successfully.",
        ),
        IN_APP: ChannelContent(
            title="Delivery Completed",
            body="Order #{{order_id}} has been delivered successfully.",
        ),
    },
    variables=("order_id",),
    priority=NotificationPriority.MEDIUM.value,
)

PAYOUT_PROCESSED = _vendor(
    VendorEvent.PAYOUT_PROCESSED,
    id="vendor_payout_processed",
    name="Payout Processed",
    notification_type=NotificationType.TRANSACTIONAL.value,
    channels={
        PUSH: ChannelContent(
            title="Payout Received",
            body="{{amount}} has been credited to your account.",
        ),
        IN_APP: ChannelContent(
            title="Payout Received",
            body="{{amount}} has been credited to your account.",
        ),
        EMAIL: ChannelContent(
            title="Payout Confirmation",
            body=(
                "Hi {{vendor_name}},\n\n"
                "{{amount}} has been credited to your account.\n\n"
                "Transaction ID: {{transaction_id}}"
            ),
        ),
    },
    variables=("amount", "vendor_name", "transaction_id"),
    priority=NotificationPriority.HIGH.value,
)

ACCOUNT_APPROVED = _vendor(
    VendorEvent.ACCOUNT_APPROVED,
    id="vendor_account_approved",
    name="Account Approved",
    notification_type=NotificationType.SYSTEM.value,
    channels={
        PUSH: ChannelContent(
            title="Account Approved",
            body="Your vendor account has been approved! Start receiving orders.",
            deep_link="/vendor/dashboard",
        ),
        IN_APP: ChannelContent(
            title="Account Approved",
            body="Your vendor account has been approved! Start receiving orders.",
        ),
        EMAIL: ChannelContent(
            title="Account Approval",
            body=(
                "Hi {{vendor_name}},\n\n"
                "Congratulations! Your vendor account has been approved.\n\n"
                "You can now start receiving orders."
            ),
        ),
    },
    variables=("vendor_name",),
    priority=NotificationPriority.HIGH.value,
)

ACCOUNT_REJECTED = _vendor(
    VendorEvent.ACCOUNT_REJECTED,
    id="vendor_account_rejected",
    name="Account Rejected",
    notification_type=NotificationType.CRITICAL.value,
    channels={
        PUSH: ChannelContent(
            title="Account Rejected",
            body="Your vendor account application was rejected. Reason: {{rejection_reason}}",
        ),
        IN_APP: ChannelContent(
            title="Account Rejected",
            body="Your vendor account application was rejected. Reason: {{rejection_reason}}",
        ),
        EMAIL: ChannelContent(
            title="Account Rejection",
            body=(
                "Hi {{vendor_name}},\n\n"
                "Unfortunately, your vendor account application was rejected.\n\n"
                "Reason: {{rejection_reason}}\n\n"
                "Please contact support for more information."
            ),
        ),
    },
    variables=("vendor_name", "rejection_reason"),
    priority=NotificationPriority.CRITICAL.value,
)

VENDOR_TEMPLATES = {
    template.event: template
    for template in (
        NEW_ORDER,
        ORDER_CANCELLED,
        DRIVER_ASSIGNED,
        DELIVERY_COMPLETED,
        PAYOUT_PROCESSED,
        ACCOUNT_APPROVED,
        ACCOUNT_REJECTED,
    )
}
