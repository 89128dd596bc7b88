"""Application tests for DeviceRegistry."""

import pytest
from courier.device.device import DeviceToken
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain


class TestRegister:
    def test_register_persists_device(self, devices):
        device = devices.register("cust-1", "tok-1", "desktop")
        stored = current_domain.repository_for(DeviceToken).get(device.id)
        assert stored.push_token == "tok-1"
        assert stored.device_type == "desktop"

    def test_known_token_is_reactivated_not_duplicated(self, devices):
        first = devices.register("cust-1", "tok-1")
        devices.deactivate(first.id)

        again = devices.register("cust-1", "tok-1")

        assert again.id == first.id
        assert again.is_active is True
        assert len(devices.devices_for("cust-1")) == 1

    def test_same_token_for_other_recipient_is_separate(self, devices):
        devices.register("cust-1", "tok-1")
        devices.register("cust-2", "tok-1")
        assert devices.active_tokens("cust-2") == ["tok-1"]


class TestActiveTokens:
    def test_only_active_tokens_in_registration_order(self, devices):
        devices.register("cust-1", "tok-1")
        middle = devices.register("cust-1", "tok-2")
        devices.register("cust-1", "tok-3")
        devices.deactivate(middle.id)

        assert devices.active_tokens("cust-1") == ["tok-1", "tok-3"]
        assert len(devices.devices_for("cust-1")) == 3

    def test_every_token_returned_beyond_default_page(self, devices):
        for index in range(101):
            devices.register("cust-1", f"tok-{index}")

        assert len(devices.active_tokens("cust-1")) == 101

    def test_unknown_recipient_has_no_tokens(self, devices):
        assert devices.active_tokens("nobody") == []


class TestDeactivate:
    def test_deactivate_unknown_device(self, devices):
        with pytest.raises(ObjectNotFoundError):
            devices.deactivate("missing")

    def test_deactivate_twice(self, devices):
        device = devices.register("cust-1", "tok-1")
        devices.deactivate(device.id)
        with pytest.raises(ValidationError):
            devices.deactivate(device.id)
