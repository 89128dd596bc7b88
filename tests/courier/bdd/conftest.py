"""Shared BDD fixtures and step definitions for notification dispatch."""

import pytest
from courier.errors import NotificationError
from pytest_bdd import given, parsers, then, when

ORDER_DATA = {"customer_name": "Ada", "order_total": "$42.00"}


@pytest.fixture()
def error():
    """Container for captured dispatch errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps — recipients and transports
# ---------------------------------------------------------------------------
@given(parsers.cfparse('recipient "{recipient_id}" has a device with token "{token}"'))
def recipient_device(service, recipient_id, token):
    service.register_device(recipient_id, token)


@given(parsers.cfparse('recipient "{recipient_id}" has email "{email}"'))
def recipient_email(directory, recipient_id, email):
    directory.add(recipient_id, email=email)


@given(parsers.cfparse('recipient "{recipient_id}" has disabled "{channel}"'))
def recipient_disabled_channel(service, recipient_id, channel):
    service.update_preferences(recipient_id, **{channel: False})


@given(parsers.cfparse('the {kind} transport is down'))
def transport_down(kind, push_transport, email_transport, sms_transport):
    transports = {"push": push_transport, "email": email_transport, "sms": sms_transport}
    transports[kind].configure(should_succeed=False)


@given(parsers.cfparse("the {kind} transport fails {times:d} time"))
@given(parsers.cfparse("the {kind} transport fails {times:d} times"))
def transport_flaky(kind, times, push_transport, email_transport, sms_transport):
    transports = {"push": push_transport, "email": email_transport, "sms": sms_transport}
    transports[kind].configure(fail_times=times)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
def _dispatch(service, error, payload):
    try:
        return service.process_notification(payload)
    except NotificationError as exc:
        error["exc"] = exc
        return None


@when(
    parsers.re(r'"(?P<event>[^"]+)" for order "(?P<order_id>[^"]+)" is sent to "(?P<recipient_id>[^"]+)"'),
    target_fixture="notification",
)
def send_event(service, error, event, order_id, recipient_id):
    data = dict(ORDER_DATA, order_id=order_id)
    return _dispatch(service, error, {"recipient_id": recipient_id, "event": event, "template_data": data})


@when(
    parsers.re(
        r'"(?P<event>[^"]+)" for order "(?P<order_id>[^"]+)" '
        r'is sent to "(?P<recipient_id>[^"]+)" on "(?P<channels>[^"]+)"'
    ),
    target_fixture="notification",
)
def send_event_on_channels(service, error, event, order_id, recipient_id, channels):
    data = dict(ORDER_DATA, order_id=order_id)
    payload = {
        "recipient_id": recipient_id,
        "event": event,
        "template_data": data,
        "channels": [channel.strip() for channel in channels.split(",")],
    }
    return _dispatch(service, error, payload)


@when(parsers.cfparse("{seconds:d} seconds pass and the retry sweep runs"))
def retry_sweep(service, clock, seconds):
    clock.advance(seconds=seconds)
    service.retry_due_notifications()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the notification status is "{status}"'))
def notification_status(service, notification, status):
    assert service.get_notification(notification.id).status == status


@then(parsers.cfparse("the retry count is {count:d}"))
def retry_count(service, notification, count):
    assert service.get_notification(notification.id).retry_count == count


@then(parsers.cfparse('the audit trail is "{trail}"'))
def audit_trail(service, notification, trail):
    expected = [step.strip() for step in trail.split(",")]
    actual = [f"{entry.channel}:{entry.event}" for entry in service.audit_trail(notification.id)]
    assert actual == expected


@then(parsers.cfparse('the dispatch fails with "{error_name}"'))
def dispatch_fails(error, notification, error_name):
    assert notification is None
    assert error["exc"].__class__.__name__ == error_name


@then("no notification is stored")
def nothing_stored(service):
    assert service.list_notifications("cust-bdd") == []
