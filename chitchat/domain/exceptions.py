"""
Domain errors.
"""


class ChitChatError(Exception):
    """Base error for the messaging engine."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class InvalidTransitionError(ChitChatError):
    """Raised when a processed message is asked to change state again."""
