"""
ChitChat - Command Line Entry Point

Send, store and report on short text messages for the registered user.
Messages are kept in a local JSON document.
"""

import argparse
import logging
import sys
from typing import List, Optional

from chitchat.config.settings import Settings, get_settings
from chitchat.domain.message_store import MessageStore
from chitchat.infrastructure.json_store import JsonMessageRepository
from chitchat.usecases.message_service import MessageService

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings."""
    level = logging.DEBUG if settings.debug else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def build_service(settings: Settings) -> MessageService:
    """Create a message service with the store loaded from disk."""
    service = MessageService(
        store=MessageStore(),
        repository=JsonMessageRepository(settings.messages_path),
        sender=settings.user_cell_number,
    )
    count = service.load()
    logger.debug(f"Store ready with {count} messages from {settings.messages_path}")
    return service


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chitchat", description="ChitChat messaging")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("send", "Validate and send a message"),
        ("store", "Store a message for later"),
        ("disregard", "Discard a message"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("recipient", help="Recipient cell number (+27...)")
        cmd.add_argument("payload", help="Message text (max 250 chars)")

    sub.add_parser("sent", help="List sent messages")
    sub.add_parser("longest", help="Show the longest sent message")

    find_id = sub.add_parser("find-id", help="Search by message ID")
    find_id.add_argument("message_id")

    find_recipient = sub.add_parser("find-recipient", help="Search by recipient cell number")
    find_recipient.add_argument("recipient")

    delete = sub.add_parser("delete", help="Delete a message by hash")
    delete.add_argument("message_hash")

    sub.add_parser("report", help="Full report of sent messages")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    configure_logging(settings)
    service = build_service(settings)
    reports = service.reports

    if args.command in ("send", "store", "disregard", "delete"):
        if args.command == "send":
            result = service.send_message(args.recipient, args.payload)
        elif args.command == "store":
            result = service.store_message(args.recipient, args.payload)
        elif args.command == "disregard":
            result = service.disregard_message(args.recipient, args.payload)
        else:
            result = service.delete_message(args.message_hash.strip())
        print(result.message)
        return 0 if result.ok else 1

    if args.command == "sent":
        print(reports.sent_messages_report())
    elif args.command == "longest":
        print(reports.longest_sent_message())
    elif args.command == "find-id":
        print(reports.find_by_id(args.message_id.strip()))
    elif args.command == "find-recipient":
        print(reports.find_by_recipient(args.recipient.strip()))
    elif args.command == "report":
        print(reports.full_report())

    return 0


if __name__ == "__main__":
    sys.exit(main())
