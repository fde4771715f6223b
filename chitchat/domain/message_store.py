"""
In-memory message store.

Holds every message of the session in insertion order. The whole
collection is the unit of persistence: it is loaded once and written back
in full after each change.
"""

from typing import Callable, Iterable, Iterator, List, Optional

from chitchat.domain.message import Message

MessagePredicate = Callable[[Message], bool]


class MessageStore:
    """Ordered collection of messages with a dirty flag for pending saves."""

    def __init__(self, messages: Optional[Iterable[Message]] = None):
        self._messages: List[Message] = list(messages or [])
        self._dirty = False

    @property
    def messages(self) -> List[Message]:
        """Snapshot of the messages in store order."""
        return list(self._messages)

    @property
    def dirty(self) -> bool:
        """True when the collection changed since the last successful save."""
        return self._dirty

    def mark_clean(self) -> None:
        self._dirty = False

    def next_index(self) -> int:
        """
        Index for the next processed message.

        Computed as the highest index in the store plus one, so gaps left
        by deletions are never reused.
        """
        return max((m.index for m in self._messages), default=0) + 1

    def append(self, message: Message) -> None:
        self._messages.append(message)
        self._dirty = True

    def extend(self, messages: Iterable[Message]) -> None:
        """Add loaded messages without marking the store dirty."""
        self._messages.extend(messages)

    def remove(self, message: Message) -> None:
        """Remove a message by identity."""
        for position, candidate in enumerate(self._messages):
            if candidate is message:
                del self._messages[position]
                self._dirty = True
                return
        raise ValueError(f"{message!r} is not in the store")

    def find_first(self, predicate: MessagePredicate) -> Optional[Message]:
        for message in self._messages:
            if predicate(message):
                return message
        return None

    def filter(self, predicate: MessagePredicate) -> List[Message]:
        return [m for m in self._messages if predicate(m)]

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"<MessageStore(size={len(self._messages)}, dirty={self._dirty})>"
