"""Tests for the courier command line."""

from datetime import UTC, datetime
from unittest.mock import MagicMock, patch

import pytest
from courier.cli import build_parser, main


class TestTemplatesCommand:
    def test_lists_every_template(self, capsys):
        assert main(["templates"]) == 0
        out = capsys.readouterr().out
        assert "customer_order_placed" in out
        assert "vendor_account_approved" in out
        assert "admin_fraud_alert" in out

    def test_filters_by_role(self, capsys):
        main(["templates", "--role", "driver"])
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines
        assert all(line.startswith("driver") for line in lines)

    def test_rejects_unknown_role(self):
        with pytest.raises(SystemExit):
            main(["templates", "--role", "robot"])


class TestRetryDueCommand:
    def test_parses_timestamp_and_batch_size(self):
        args = build_parser().parse_args(["retry-due", "--as-of", "2026-03-01T12:00:00+00:00", "--batch-size", "5"])
        assert args.as_of == datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
        assert args.batch_size == 5

    def test_prints_processed_ids(self, capsys):
        service = MagicMock()
        service.retry_due_notifications.return_value = ["n-1", "n-2"]

        with (
            patch("courier.cli.courier") as mock_domain,
            patch("courier.notification.service.build_notification_service", return_value=service),
        ):
            assert main(["retry-due"]) == 0

        mock_domain.init.assert_called_once()
        service.retry_due_notifications.assert_called_once_with(as_of=None, batch_size=100)
        assert capsys.readouterr().out.split() == ["n-1", "n-2"]

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])
