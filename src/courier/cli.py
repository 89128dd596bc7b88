"""Courier command line.

Usage:
    courier retry-due [--as-of 2026-01-01T00:00:00+00:00] [--batch-size 100]
    courier templates [--role customer]
"""

import argparse
from datetime import datetime

import structlog
from courier.domain import courier
from courier.templates import TEMPLATE_REGISTRY
from courier.templates.template import TemplateRole
from courier.utils.logging import configure_logging

logger = structlog.get_logger(__name__)


def retry_due(args):
    from courier.notification.service import build_notification_service

    courier.init()
    with courier.domain_context():
        service = build_notification_service()
        processed = service.retry_due_notifications(as_of=args.as_of, batch_size=args.batch_size)

    for notification_id in processed:
        print(notification_id)
    return 0


def list_templates(args):
    templates = sorted(TEMPLATE_REGISTRY.all(), key=lambda t: (t.role, t.event))
    for template in templates:
        if args.role and template.role != args.role:
            continue
        channels = ",".join(template.channels)
        print(f"{template.role:<9} {template.event:<26} {template.id:<34} {template.priority:<9} {channels}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="courier", description="Courier notification dispatch")
    subcommands = parser.add_subparsers(dest="command", required=True)

    retry = subcommands.add_parser("retry-due", help="Re-attempt notifications whose retry is due")
    retry.add_argument(
        "--as-of",
        type=datetime.fromisoformat,
        default=None,
        help="Process retries due at this ISO timestamp (default: now)",
    )
    retry.add_argument("--batch-size", type=int, default=100)
    retry.set_defaults(handler=retry_due)

    templates = subcommands.add_parser("templates", help="List registered templates")
    templates.add_argument("--role", choices=[role.value for role in TemplateRole])
    templates.set_defaults(handler=list_templates)

    return parser


def main(argv=None):
    configure_logging()
    args = build_parser().parse_args(argv)
    logger.debug("courier_command", command=args.command)
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
