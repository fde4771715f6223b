"""
Outcome of a message operation.

Callers branch on ``kind`` (or ``ok``); ``message`` is the text shown to
the user. Every success text contains the word "successfully", which
older callers still match on.
"""

from enum import Enum

from pydantic import BaseModel


class ResultKind(str, Enum):
    """Result kind enumeration."""
    SUCCESS = "success"
    INVALID_ID = "invalid_id"
    INVALID_RECIPIENT = "invalid_recipient"
    INVALID_SENDER = "invalid_sender"
    EMPTY_PAYLOAD = "empty_payload"
    PAYLOAD_TOO_LONG = "payload_too_long"
    EMPTY_INPUT = "empty_input"
    NOT_FOUND = "not_found"


class OperationResult(BaseModel):
    """Schema for the result of send, store, disregard and delete."""
    kind: ResultKind
    message: str

    @property
    def ok(self) -> bool:
        return self.kind == ResultKind.SUCCESS

    def __str__(self) -> str:
        return self.message

    @classmethod
    def success(cls, message: str) -> "OperationResult":
        return cls(kind=ResultKind.SUCCESS, message=message)

    @classmethod
    def failure(cls, kind: ResultKind, message: str) -> "OperationResult":
        return cls(kind=kind, message=message)
