"""Tests for inbound notification payload validation."""

import pytest
from courier.notification.notification import NotificationChannel, NotificationType
from courier.notification.payload import NotificationPayload
from courier.templates.template import TemplateRole
from pydantic import ValidationError


class TestPayload:
    def test_minimal_payload(self):
        payload = NotificationPayload(recipient_id="u-1", event="ORDER_PLACED")
        assert payload.template_data == {}
        assert payload.channels is None
        assert payload.notification_type is None
        assert payload.max_retries is None

    def test_type_accepted_by_alias_and_name(self):
        assert NotificationPayload(recipient_id="u", event="E", type="critical").notification_type == (
            NotificationType.CRITICAL
        )
        assert NotificationPayload(recipient_id="u", event="E", notification_type="marketing").notification_type == (
            NotificationType.MARKETING
        )

    def test_role_parsed(self):
        payload = NotificationPayload.model_validate({"recipient_id": "u", "event": "E", "role": "vendor"})
        assert payload.role == TemplateRole.VENDOR

    def test_channels_deduplicated_in_order(self):
        payload = NotificationPayload(recipient_id="u", event="E", channels=["email", "push", "email"])
        assert payload.channels == [NotificationChannel.EMAIL, NotificationChannel.PUSH]

    def test_empty_channels_rejected(self):
        with pytest.raises(ValidationError):
            NotificationPayload(recipient_id="u", event="E", channels=[])

    def test_unknown_channel_rejected(self):
        with pytest.raises(ValidationError):
            NotificationPayload(recipient_id="u", event="E", channels=["fax"])

    @pytest.mark.parametrize("field", ["recipient_id", "event"])
    def test_blank_required_field_rejected(self, field):
        data = {"recipient_id": "u", "event": "E", field: ""}
        with pytest.raises(ValidationError):
            NotificationPayload(**data)

    @pytest.mark.parametrize("max_retries", [-1, 11])
    def test_max_retries_bounds(self, max_retries):
        with pytest.raises(ValidationError):
            NotificationPayload(recipient_id="u", event="E", max_retries=max_retries)

    def test_payload_is_frozen(self):
        payload = NotificationPayload(recipient_id="u", event="E")
        with pytest.raises(ValidationError):
            payload.event = "OTHER"
