from datetime import UTC, datetime, timedelta

import pytest
from courier.channel import get_transport, reset_transports
from courier.device.registry import DeviceRegistry
from courier.notification.service import build_notification_service
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(scope="session")
def courier_bed():
    from courier.domain import courier

    bed = DomainFixture(courier)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(courier_bed):
    with courier_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_transports()


@pytest.fixture()
def clock():
    return FrozenClock(datetime(2026, 3, 1, 12, 0, tzinfo=UTC))


@pytest.fixture()
def push_transport():
    return get_transport("push")


@pytest.fixture()
def email_transport():
    return get_transport("email")


@pytest.fixture()
def sms_transport():
    return get_transport("sms")


@pytest.fixture()
def socket_transport():
    return get_transport("socket")


@pytest.fixture()
def directory():
    return get_transport("directory")


@pytest.fixture()
def devices():
    return DeviceRegistry()


@pytest.fixture()
def service(clock, devices):
    return build_notification_service(clock=clock, devices=devices)
