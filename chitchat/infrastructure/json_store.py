"""
JSON document persistence for the message store.

The whole collection lives in a single JSON array. It is read fully on
load and rewritten fully on every save.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List

from pydantic import TypeAdapter, ValidationError

from chitchat.domain.message import Message, MessageRecord

logger = logging.getLogger(__name__)

_document_adapter = TypeAdapter(List[Any])


class JsonMessageRepository:
    """Loads and saves all messages from/to one JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def temp_path(self) -> Path:
        """Sibling file a save is written to before replacing the document."""
        return self.path.with_name(f"{self.path.name}.tmp")

    def load_all(self) -> List[Message]:
        """
        Load every message from the document.

        A missing, empty, undecodable or malformed document yields an empty
        list. A single bad record is logged and skipped; the rest still load.

        Returns:
            Messages in document order
        """
        if not self.path.exists():
            logger.info(f"{self.path} not found, starting with no messages")
            return []

        try:
            raw = self.path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read {self.path}: {e}")
            return []

        if not raw.strip():
            logger.info(f"{self.path} is empty, starting with no messages")
            return []

        try:
            items = _document_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(f"Malformed message document {self.path}: {e}")
            return []

        messages = []
        for position, item in enumerate(items):
            try:
                record = MessageRecord.model_validate(item)
            except ValidationError as e:
                logger.error(f"Skipping malformed record {position} in {self.path}: {e}")
                continue
            messages.append(Message.from_record(record))

        logger.info(f"Loaded {len(messages)} messages from {self.path}")
        return messages

    def save_all(self, messages: Iterable[Message]) -> bool:
        """
        Overwrite the document with the given messages.

        The new document is written to a temporary sibling and then moved
        over the old one, so a failed write leaves the previous document.

        Args:
            messages: Full collection, in store order

        Returns:
            True if the document was written, False on an I/O error
        """
        payload = [message.to_record().model_dump() for message in messages]
        temp_path = self.temp_path

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            temp_path.replace(self.path)
        except OSError:
            logger.exception(f"Error saving messages to {self.path}")
            temp_path.unlink(missing_ok=True)
            return False

        logger.info(f"Saved {len(payload)} messages to {self.path}")
        return True
