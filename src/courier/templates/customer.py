"""Customer-facing templates — order lifecycle, payments, disputes."""

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


class CustomerEvent(Enum):
    ORDER_PLACED = "ORDER_PLACED"
    ORDER_CONFIRMED = "ORDER_CONFIRMED"
    VENDOR_ACCEPTED = "VENDOR_ACCEPTED"
    VENDOR_REJECTED = "VENDOR_REJECTED"
    DRIVER_ASSIGNED = "DRIVER_ASSIGNED"
    ORDER_PICKED_UP = "ORDER_PICKED_UP"
    ORDER_DELIVERED = "ORDER_DELIVERED"
    DISPUTE_OPENED = "DISPUTE_OPENED"
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"
    REFUND_INITIATED = "REFUND_INITIATED"


def _customer(event, **kwargs):
    return NotificationTemplate(event=event.value, role=TemplateRole.CUSTOMER.value, **kwargs)


ORDER_PLACED = _customer(
    CustomerEvent.ORDER_PLACED,
    id="customer_order_placed",
    name="Order Placed",
    notification_type=NotificationType.SYSTEM.value,
    channels={
        PUSH: ChannelContent(
            title="Order Confirmed",
            body="Your order #{{order_id}} has been received. Vendor will confirm shortly.",
            deep_link="/orders/{{order_id}}",
        ),
        IN_APP: ChannelContent(
            title="Order Confirmed",
            body="Your order #{{order_id}} has been received. Vendor will confirm shortly.",
        ),
        EMAIL: ChannelContent(
            title="Order Confirmation",
            body=(
                "Hi {{customer_name}},\n\n"
                "Your order #{{order_id}} has been placed successfully.\n\n"
                "Order Total: {{order_total}}\n\n"
                "We'll notify you once the vendor confirms."
            ),
        ),
    },
    variables=("order_id", "customer_name", "order_total"),
    priority=NotificationPriority.HIGH.value,
)

VENDOR_ACCEPTED = _customer(
    CustomerEvent.VENDOR_ACCEPTED,
    id="customer_vendor_accepted",
    name="Vendor Accepted Order",
    notification_type=NotificationType.SYSTEM.value,
    channels={
        PUSH: ChannelContent(
            title="Order Confirmed",
            body="{{vendor_name}} is preparing your order #{{order_id}}",
            deep_link="/orders/{{order_id}}",
        ),
        IN_APP: ChannelContent(
            title="Order Confirmed",
            body="{{vendor_name}} is preparing your order #{{order_id}}",
        ),
        SOCKET: ChannelContent(
            title="Order Status Update",
            body="{{vendor_name}} is preparing your order",
        ),
    },
    variables=("order_id", "vendor_name"),
    priority=NotificationPriority.HIGH.value,
)

VENDOR_REJECTED = _customer(
    CustomerEvent.VENDOR_REJECTED,
    id="customer_vendor_rejected",
    name="Order Rejected",
    notification_type=NotificationType.CRITICAL.value,
    channels={
        PUSH: ChannelContent(
            title="Order Cancelled",
            body="{{vendor_name}} cancelled order #{{order_id}}. Refund initiated.",
            deep_link="/orders/{{order_id}}",
        ),
        IN_APP: ChannelContent(
            title="Order Cancelled",
            body="{{vendor_name}} cancelled order #{{order_id}}. Refund initiated.",
        ),
        EMAIL: ChannelContent(
            title="Order Cancellation",
            body=(
                "Hi {{customer_name}},\n\n"
                "{{vendor_name}} has cancelled your order #{{order_id}}.\n\n"
                "Refund of {{order_total}} will be processed within 24 hours."
            ),
        ),
    },
    variables=("order_id", "vendor_name", "customer_name", "order_total"),
    priority=NotificationPriority.CRITICAL.value,
)

DRIVER_ASSIGNED = _customer(
    CustomerEvent.DRIVER_ASSIGNED,
    id="customer_driver_assigned",
    name="Driver Assigned",
    notification_type=NotificationType.OPERATIONAL.value,
    channels={
        PUSH: ChannelContent(
            title="Driver on the Way",
            body="{{driver_name}} is heading to {{vendor_name}} to pick up your order.",
            deep_link="/orders/{{order_id}}/track",
        ),
        IN_APP: ChannelContent(
            title="Driver Assigned",
            body="{{driver_name}} is heading to {{vendor_name}} to pick up your order.",
        ),
        SOCKET: ChannelContent(
            title="Driver Update",
            body="{{driver_name}} assigned to your delivery",
        ),
    },
    variables=("order_id", "driver_name", "vendor_name", "driver_phone"),
    priority=NotificationPriority.HIGH.value,
)

ORDER_PICKED_UP = _customer(
    CustomerEvent.ORDER_PICKED_UP,
    id="customer_order_picked_up",
    name="Order Picked Up",
    notification_type=NotificationType.SYSTEM.value,
    channels={
        PUSH: ChannelContent(
            title="Order on the Way",
            body="{{driver_name}} picked up your order and is heading to you.",
            deep_link="/orders/{{order_id}}/track",
        ),
        IN_APP: ChannelContent(
            title="Order on the Way",
            body="{{driver_name}} picked up your order and is heading to you.",
        ),
        SOCKET: ChannelContent(
            title="Delivery Update",
            body="Order picked up and on the way",
        ),
    },
    variables=("order_id", "driver_name"),
    priority=NotificationPriority.MEDIUM.value,
)

ORDER_DELIVERED = _customer(
    CustomerEvent.ORDER_DELIVERED,
    id="customer_order_delivered",
    name="Order Delivered",
    notification_type=NotificationType.SYSTEM.value,
    channels={
        PUSH: ChannelContent(
            title="Order Delivered",
            body="Your order #{{order_id}} has been delivered. Enjoy!",
            deep_link="/orders/{{order_id}}/review",
        ),
        IN_APP: ChannelContent(
            title="Order Delivered",
            body="Your order #{{order_id}} has been delivered. Enjoy!",
        ),
        EMAIL: ChannelContent(
            title="Order Delivered",
            body=(
                "Hi {{customer_name}},\n\n"
                "Your order #{{order_id}} has been delivered successfully.\n\n"
                "We'd love your feedback! Please rate your experience."
            ),
        ),
    },
    variables=("order_id", "customer_name"),
    priority=NotificationPriority.MEDIUM.value,
)

DISPUTE_OPENED = _customer(
    CustomerEvent.DISPUTE_OPENED,
    id="customer_dispute_opened",
    name="Dispute Opened",
    notification_type=NotificationType.CRITICAL.value,
    channels={
        PUSH: ChannelContent(
            title="Dispute Opened",
            body="A dispute has been opened for order #{{order_id}}. We're investigating.",
            deep_link="/disputes/{{dispute_id}}",
        ),
        IN_APP: ChannelContent(
            title="Dispute Opened",
            body="A dispute has been opened for order #{{order_id}}. We're investigating.",
        ),
        EMAIL: ChannelContent(
            title="Dispute Notification",
            body=(
                "Hi {{customer_name}},\n\n"
                "We've received your dispute for order #{{order_id}}.\n\n"
                "Our team will review and respond within 24 hours."
            ),
        ),
    },
    variables=("order_id", "customer_name", "dispute_id"),
    priority=NotificationPriority.CRITICAL.value,
)

PAYMENT_RECEIVED = _customer(
    CustomerEvent.PAYMENT_RECEIVED,
    id="customer_payment_received",
    name="Payment Confirmation",
    notification_type=NotificationType.TRANSACTIONAL.value,
    channels={
        PUSH: ChannelContent(
            title="Payment Confirmed",
            body="Payment of {{amount}} received for order #{{order_id}}",
        ),
        IN_APP: ChannelContent(
            title="Payment Confirmed",
            body="Payment of {{amount}} received for order #{{order_id}}",
        ),
        EMAIL: ChannelContent(
            title="Payment Receipt",
            body=(
                "Hi {{customer_name}},\n\n"
                "Payment of {{amount}} has been received.\n\n"
                "Transaction ID: {{transaction_id}}\n"
                "Order ID: {{order_id}}"
            ),
        ),
    },
    variables=("order_id", "customer_name", "amount", "transaction_id"),
    priority=NotificationPriority.HIGH.value,
)

REFUND_INITIATED = _customer(
    CustomerEvent.REFUND_INITIATED,
    id="customer_refund_initiated",
    name="Refund Initiated",
    notification_type=NotificationType.TRANSACTIONAL.value,
    channels={
        PUSH: ChannelContent(
            title="Refund Initiated",
            body="Refund of {{amount}} has been initiated for order #{{order_id}}",
        ),
        IN_APP: ChannelContent(
            title="Refund Initiated",
            body="Refund of {{amount}} has been initiated for order #{{order_id}}",
        ),
        EMAIL: ChannelContent(
            title="Refund Notification",
            body=(
                "Hi {{customer_name}},\n\n"
                "Refund of {{amount}} has been initiated.\n\n"
                "It will appear in your account within 24-48 hours."
            ),
        ),
    },
    variables=("order_id", "customer_name", "amount"),
    priority=NotificationPriority.HIGH.value,
)

CUSTOMER_TEMPLATES = {
    template.event: template
    for template in (
        ORDER_PLACED,
        VENDOR_ACCEPTED,
        VENDOR_REJECTED,
        DRIVER_ASSIGNED,
        ORDER_PICKED_UP,
        ORDER_DELIVERED,
        DISPUTE_OPENED,
        PAYMENT_RECEIVED,
        REFUND_INITIATED,
    )
}
