"""
Pytest configuration and fixtures for ChitChat tests.
"""

from typing import List
from unittest.mock import MagicMock

import pytest

from chitchat.config.settings import get_settings
from chitchat.domain.message import Message
from chitchat.domain.message_store import MessageStore
from chitchat.infrastructure.json_store import JsonMessageRepository
from chitchat.usecases.message_service import MessageService
from chitchat.usecases.report_service import ReportService


USER_CELL = "+27000000000"


@pytest.fixture
def sender() -> str:
    """Cell number of the registered user."""
    return USER_CELL


@pytest.fixture
def scenario_messages(sender) -> List[Message]:
    """
    Five messages: sent@1, stored@2, disregarded, sent@3, stored@4.
    """
    msg1 = Message(sender, "+27834557896", "Did you get the cake?")
    msg1.send(1)

    msg2 = Message(sender, "+27838884567", "Where are you? You are late! I have asked you to be on time.")
    msg2.store(2)

    msg3 = Message(sender, "+27834484567", "Yohoooo, I am at your gate.")
    msg3.disregard()

    msg4 = Message(sender, "+27838884567", "It is dinner time!")
    msg4.send(3)

    msg5 = Message(sender, "+27838884567", "Ok, I am leaving without you.")
    msg5.store(4)

    return [msg1, msg2, msg3, msg4, msg5]


@pytest.fixture
def scenario_store(scenario_messages) -> MessageStore:
    """Store preloaded with the five scenario messages."""
    store = MessageStore()
    store.extend(scenario_messages)
    return store


@pytest.fixture
def report_service(scenario_store) -> ReportService:
    return ReportService(scenario_store)


@pytest.fixture
def messages_path(tmp_path):
    return tmp_path / "messages.json"


@pytest.fixture
def repository(messages_path) -> JsonMessageRepository:
    return JsonMessageRepository(messages_path)


@pytest.fixture
def message_service(repository, sender) -> MessageService:
    """Service over an empty store backed by a temporary JSON file."""
    return MessageService(MessageStore(), repository, sender)


@pytest.fixture
def failing_repository() -> MagicMock:
    """Repository whose saves always fail."""
    repo = MagicMock(spec=JsonMessageRepository)
    repo.load_all.return_value = []
    repo.save_all.return_value = False
    return repo


@pytest.fixture
def app_env(monkeypatch, tmp_path):
    """Environment for settings-driven code, with a fresh settings cache."""
    monkeypatch.setenv("USER_CELL_NUMBER", USER_CELL)
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.delenv("MESSAGES_FILENAME", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()
