"""
Message service: sends, stores and disregards messages for the
registered user and keeps the JSON document in sync.
"""

import logging

from chitchat.domain.message import Message
from chitchat.domain.message_store import MessageStore
from chitchat.domain.operation_result import OperationResult, ResultKind
from chitchat.infrastructure.json_store import JsonMessageRepository
from chitchat.usecases.report_service import ReportService

logger = logging.getLogger(__name__)


class MessageService:
    """Service class for message processing."""

    def __init__(
        self,
        store: MessageStore,
        repository: JsonMessageRepository,
        sender: str,
    ):
        self.store = store
        self.repository = repository
        self.sender = sender
        self.reports = ReportService(store)

    def load(self) -> int:
        """
        Fill the store from the repository.

        Returns:
            Number of messages loaded
        """
        messages = self.repository.load_all()
        self.store.extend(messages)
        return len(messages)

    def send_message(self, recipient: str, payload: str) -> OperationResult:
        """
        Validate and send a message to a recipient.

        The message only enters the store if validation passes.

        Args:
            recipient: Recipient cell number
            payload: Message text

        Returns:
            Result of the send
        """
        message = Message(self.sender, recipient, payload)
        result = message.send(self.store.next_index())

        if result.ok:
            self.store.append(message)
            self.flush()

        return result

    def store_message(self, recipient: str, payload: str) -> OperationResult:
        """Keep a message as a draft without delivery validation."""
        if not (recipient or "").strip() or not (payload or "").strip():
            return OperationResult.failure(
                ResultKind.EMPTY_INPUT, "Recipient and message cannot be empty to store."
            )

        message = Message(self.sender, recipient, payload)
        message.store(self.store.next_index())
        self.store.append(message)
        self.flush()

        return OperationResult.success("Message stored successfully!")

    def disregard_message(self, recipient: str, payload: str) -> OperationResult:
        """Record a message the user chose not to send."""
        message = Message(self.sender, recipient, payload)
        message.disregard()
        self.store.append(message)
        self.flush()

        return OperationResult.success("Message disregarded successfully.")

    def delete_message(self, message_hash: str) -> OperationResult:
        """Delete a message by hash and save the change."""
        result = self.reports.delete_by_hash(message_hash)

        if result.ok:
            self.flush()

        return result

    def flush(self) -> bool:
        """
        Write the store to disk if it has unsaved changes.

        A failed save is logged by the repository and the store stays
        dirty; the in-memory state is kept.

        Returns:
            True if nothing was pending or the save succeeded
        """
        if not self.store.dirty:
            return True

        if self.repository.save_all(self.store):
            self.store.mark_clean()
            return True

        logger.warning(f"{len(self.store)} messages kept in memory only, save failed")
        return False
