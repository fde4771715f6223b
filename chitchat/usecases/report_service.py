"""
Report service for queries over the message store.
"""

import logging
from typing import List, Optional

from chitchat.domain.message import Message, MessageStatus
from chitchat.domain.message_store import MessageStore
from chitchat.domain.operation_result import OperationResult, ResultKind

logger = logging.getLogger(__name__)

REPORT_DELIMITER = "-" * 33


class ReportService:
    """
    Read-only reports over the store, plus deletion by hash.

    Deletion only changes the in-memory store and leaves it dirty. Saving
    is the caller's job (see MessageService.delete_message).
    """

    def __init__(self, store: MessageStore):
        self.store = store

    def sent_messages(self) -> List[Message]:
        """All sent messages, in store order."""
        return self.store.filter(lambda m: m.sent)

    def sent_messages_report(self) -> str:
        """Sender, recipient and text of every sent message."""
        sent = self.sent_messages()
        if not sent:
            return "No messages have been sent."

        report = "--- Sent Messages ---\n"
        for msg in sent:
            report += f'From: {msg.sender}, To: {msg.recipient}, Message: "{msg.payload}"\n'

        return report

    def longest_sent_message(self) -> str:
        """The sent message with the longest text. Earlier messages win ties."""
        sent = self.sent_messages()
        if not sent:
            return "No sent messages to compare."

        longest = max(sent, key=lambda m: len(m.payload or ""))
        return f'Longest Message: "{longest.payload}"'

    def find_message(self, message_id: str) -> Optional[Message]:
        return self.store.find_first(lambda m: m.id == message_id)

    def find_by_id(self, message_id: str) -> str:
        """Recipient and text of the first message with this exact ID."""
        msg = self.find_message(message_id)
        if msg is None:
            return f"No message found with ID: {message_id}"

        return f'--- Message Found ---\nRecipient: {msg.recipient}\nMessage: "{msg.payload}"'

    def find_by_recipient(self, recipient: str) -> str:
        """
        Every sent or stored message addressed to a cell number.

        Disregarded messages are left out. Each line is labelled with the
        message status.
        """
        matches = self.store.filter(
            lambda m: m.recipient == recipient and (m.sent or m.stored)
        )
        if not matches:
            return f"No messages found for recipient: {recipient}"

        report = f"--- Messages for {recipient} ---\n"
        for msg in matches:
            label = "Sent" if msg.status == MessageStatus.SENT else "Stored"
            report += f'Status: {label} >> Message: "{msg.payload}"\n'

        return report

    def delete_by_hash(self, message_hash: Optional[str]) -> OperationResult:
        """
        Delete the first message whose hash matches, ignoring case.

        Hashes are not unique, so at most one message is removed per call.

        Args:
            message_hash: Hash to look for

        Returns:
            SUCCESS naming the deleted text, or NOT_FOUND echoing the hash
            in upper case
        """
        query = message_hash or ""
        target = self.store.find_first(
            lambda m: bool(m.hash) and m.hash.lower() == query.lower()
        )

        if target is None:
            return OperationResult.failure(
                ResultKind.NOT_FOUND,
                f"Message with hash '{query.upper()}' not found for deletion.",
            )

        self.store.remove(target)
        logger.info(f"Deleted message {target.id} with hash {target.hash}")

        return OperationResult.success(f'Message "{target.payload}" successfully deleted.')

    def full_report(self) -> str:
        """Hash, recipient and text of every sent message."""
        sent = self.sent_messages()
        if not sent:
            return "No sent messages to report."

        report = "--- Full Sent Message Report ---\n"
        for msg in sent:
            report += f"{REPORT_DELIMITER}\n"
            report += f"Message Hash: {msg.hash}\n"
            report += f"Recipient: {msg.recipient}\n"
            report += f'Message: "{msg.payload}"\n'
        report += f"{REPORT_DELIMITER}\n"

        return report
