"""
Message domain model and schemas.
"""

import logging
import random
import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator

from chitchat.domain.exceptions import InvalidTransitionError
from chitchat.domain.operation_result import OperationResult, ResultKind
from chitchat.utils.text import first_and_last_words

logger = logging.getLogger(__name__)

MESSAGE_ID_LENGTH = 10
MAX_PAYLOAD_LENGTH = 250

MESSAGE_ID_PATTERN = re.compile(r"\d{10}", re.ASCII)
CELL_NUMBER_PATTERN = re.compile(r"\+27\d{9}", re.ASCII)


class MessageStatus(str, Enum):
    """Message processing status enumeration."""
    UNPROCESSED = "unprocessed"
    SENT = "sent"
    STORED = "stored"
    DISREGARDED = "disregarded"


class PhoneValidation(str, Enum):
    """Outcome of a cell number check."""
    VALID = "valid"
    INVALID = "invalid"


def generate_message_id() -> str:
    """Generate a random, zero padded 10-digit message ID."""
    return f"{random.randrange(10 ** MESSAGE_ID_LENGTH):0{MESSAGE_ID_LENGTH}d}"


def validate_phone(number: Optional[str]) -> PhoneValidation:
    """
    Validate a South African cell number.

    Args:
        number: Number to check, e.g. +27831234567

    Returns:
        VALID for "+27" followed by exactly nine digits, INVALID otherwise
    """
    if number is not None and CELL_NUMBER_PATTERN.fullmatch(number):
        return PhoneValidation.VALID
    return PhoneValidation.INVALID


class Message:
    """
    A text message addressed to a cell number.

    The ID and content are fixed at construction. Index, hash and status
    change exactly once, through send(), store() or disregard().
    """

    validate_phone = staticmethod(validate_phone)

    def __init__(
        self,
        sender: Optional[str],
        recipient: Optional[str],
        payload: Optional[str],
        message_id: Optional[str] = None,
        index: int = 0,
        message_hash: str = "",
        status: MessageStatus = MessageStatus.UNPROCESSED,
    ):
        self._id = message_id if message_id is not None else generate_message_id()
        self._sender = sender
        self._recipient = recipient
        self._payload = payload
        self._index = index
        self._hash = message_hash
        self._status = status

    @property
    def id(self) -> str:
        return self._id

    @property
    def sender(self) -> Optional[str]:
        return self._sender

    @property
    def recipient(self) -> Optional[str]:
        return self._recipient

    @property
    def payload(self) -> Optional[str]:
        return self._payload

    @property
    def index(self) -> int:
        return self._index

    @property
    def hash(self) -> str:
        return self._hash

    @property
    def status(self) -> MessageStatus:
        return self._status

    @property
    def sent(self) -> bool:
        return self._status == MessageStatus.SENT

    @property
    def stored(self) -> bool:
        return self._status == MessageStatus.STORED

    @property
    def disregarded(self) -> bool:
        return self._status == MessageStatus.DISREGARDED

    @property
    def processed(self) -> bool:
        return self._status != MessageStatus.UNPROCESSED

    def validate_id(self) -> bool:
        """Check that the ID is exactly ten digits."""
        if self._id is None or len(self._id) != MESSAGE_ID_LENGTH:
            return False
        return MESSAGE_ID_PATTERN.fullmatch(self._id) is not None

    def compute_hash(self) -> str:
        """
        Build the message hash from ID, index and payload.

        Format: <first two chars of ID>:<index>:<first word><last word>,
        uppercased. Returns an empty string when ID or payload is missing.
        """
        if self._id is None or self._payload is None:
            return ""

        return f"{self._id[:2]}:{self._index}:{first_and_last_words(self._payload)}".upper()

    def send(self, next_index: int) -> OperationResult:
        """
        Validate the message and mark it as sent.

        Args:
            next_index: Index to assign if validation passes

        Returns:
            SUCCESS result, or the first failing check's result
        """
        self._ensure_unprocessed("send")

        failure = self._check_deliverable()
        if failure is not None:
            logger.info(f"Message {self._id} not sent: {failure.kind.value}")
            return failure

        self._index = next_index
        self._hash = self.compute_hash()
        self._status = MessageStatus.SENT

        logger.info(f"Sent message {self._id} with index {self._index}")
        return OperationResult.success("Message sent successfully!")

    def store(self, next_index: int) -> None:
        """Keep the message as a draft. No delivery checks are applied."""
        self._ensure_unprocessed("store")

        self._index = next_index
        self._hash = self.compute_hash()
        self._status = MessageStatus.STORED

        logger.info(f"Stored message {self._id} with index {self._index}")

    def disregard(self) -> None:
        """Discard the message. Index and hash are never assigned."""
        self._ensure_unprocessed("disregard")
        self._status = MessageStatus.DISREGARDED

        logger.info(f"Disregarded message {self._id}")

    def _check_deliverable(self) -> Optional[OperationResult]:
        if not self.validate_id():
            return OperationResult.failure(ResultKind.INVALID_ID, "Failed: Invalid message ID.")
        if validate_phone(self._recipient) != PhoneValidation.VALID:
            return OperationResult.failure(
                ResultKind.INVALID_RECIPIENT, "Failed: Invalid recipient number."
            )
        if validate_phone(self._sender) != PhoneValidation.VALID:
            return OperationResult.failure(
                ResultKind.INVALID_SENDER, "Failed: Invalid sender number."
            )
        if self._payload is None or not self._payload.strip():
            return OperationResult.failure(
                ResultKind.EMPTY_PAYLOAD, "Failed: Message content cannot be empty."
            )
        if len(self._payload) > MAX_PAYLOAD_LENGTH:
            return OperationResult.failure(
                ResultKind.PAYLOAD_TOO_LONG,
                f"Failed: Message is too long (max {MAX_PAYLOAD_LENGTH} chars).",
            )
        return None

    def _ensure_unprocessed(self, action: str) -> None:
        if self._status != MessageStatus.UNPROCESSED:
            raise InvalidTransitionError(
                f"Cannot {action} message {self._id}: already {self._status.value}"
            )

    def to_record(self) -> "MessageRecord":
        """Convert to the persisted record schema."""
        return MessageRecord(
            id=self._id,
            sender=self._sender,
            recipient=self._recipient,
            payload=self._payload,
            index=self._index,
            hash=self._hash,
            sent=self.sent,
            stored=self.stored,
            disregarded=self.disregarded,
        )

    @classmethod
    def from_record(cls, record: "MessageRecord") -> "Message":
        """Rebuild a message from its persisted record."""
        return cls(
            sender=record.sender,
            recipient=record.recipient,
            payload=record.payload,
            message_id=record.id,
            index=record.index,
            message_hash=record.hash,
            status=record.status(),
        )

    def __repr__(self) -> str:
        return f"<Message(id={self._id}, index={self._index}, status={self._status.value})>"


# Pydantic Schemas

class MessageRecord(BaseModel):
    """Schema for one message in the JSON document."""
    id: str
    sender: Optional[str]
    recipient: Optional[str]
    payload: Optional[str]
    index: int = 0
    hash: str = ""
    sent: bool = False
    stored: bool = False
    disregarded: bool = False

    @field_validator("hash", mode="before")
    @classmethod
    def null_hash_as_empty(cls, v):
        return "" if v is None else v

    def status(self) -> MessageStatus:
        """Collapse the stored flags into a single status."""
        flags = [self.sent, self.stored, self.disregarded]
        if sum(flags) > 1:
            logger.warning(f"Record {self.id} has conflicting status flags {flags}, using the first set")

        if self.sent:
            return MessageStatus.SENT
        if self.stored:
            return MessageStatus.STORED
        if self.disregarded:
            return MessageStatus.DISREGARDED
        return MessageStatus.UNPROCESSED
