"""Shared fixtures and port fakes for unit tests."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import pytest

from messages_core.config.settings import DatabaseSettings
from messages_core.domain.entities import Conversation, Participant
from messages_core.infra.config_store import SqlConfigStore
from messages_core.infra.db.base import DatabaseManager
from messages_core.shortcuts.builder import ConversationShortcutBuilder
from messages_core.shortcuts.inventory import InMemoryShortcutInventory
from messages_core.shortcuts.registry import ShortcutRegistry


class InMemoryConfigStore:
    """ConfigStore fake keeping everything in plain attributes."""

    def __init__(self, keywords: Sequence[str] = ()) -> None:
        self.keywords = list(keywords)
        self.export_path: Optional[str] = None
        self.writes = 0

    def get_blocked_keywords(self) -> list[str]:
        return list(self.keywords)

    def set_blocked_keywords(self, keywords: Sequence[str]) -> None:
        self.writes += 1
        self.keywords = list(keywords)

    def get_last_blocked_keyword_export_path(self) -> Optional[str]:
        return self.export_path

    def set_last_blocked_keyword_export_path(self, path: str) -> None:
        self.export_path = path


class FakeConversationSource:
    """ConversationSource fake backed by dictionaries."""

    def __init__(self) -> None:
        self.conversations: dict[int, list[Conversation]] = {}
        self.participants: dict[int, list[Participant]] = {}
        self.lookups: list[int] = []
        self.participant_lookups: list[int] = []

    def add(self, conversation: Conversation, *participants: Participant) -> Conversation:
        self.conversations.setdefault(conversation.thread_id, []).append(conversation)
        self.participants[conversation.thread_id] = list(participants)
        return conversation

    def get_conversations(self, thread_id: int) -> list[Conversation]:
        self.lookups.append(thread_id)
        return list(self.conversations.get(thread_id, []))

    def get_thread_participants(self, thread_id: int) -> list[Participant]:
        self.participant_lookups.append(thread_id)
        return list(self.participants.get(thread_id, []))


class FakeIconResolver:
    def resolve_icon(self, participant: Participant) -> str:
        return f"icon:{participant.name}"

    def colored_group_icon(self, title: str) -> str:
        return f"group:{title}"


@pytest.fixture
def config_store() -> InMemoryConfigStore:
    return InMemoryConfigStore()


@pytest.fixture
def db_manager(tmp_path: Path):
    manager = DatabaseManager(DatabaseSettings(url=f"sqlite:///{tmp_path / 'messages.db'}"))
    manager.init_db()
    yield manager
    manager.close()


@pytest.fixture
def sql_config_store(db_manager: DatabaseManager) -> SqlConfigStore:
    return SqlConfigStore(db_manager)


@pytest.fixture
def conversations() -> FakeConversationSource:
    return FakeConversationSource()


@pytest.fixture
def builder(conversations: FakeConversationSource) -> ConversationShortcutBuilder:
    return ConversationShortcutBuilder(conversations, FakeIconResolver())


@pytest.fixture
def inventory() -> InMemoryShortcutInventory:
    return InMemoryShortcutInventory()


@pytest.fixture
def registry(
    inventory: InMemoryShortcutInventory, builder: ConversationShortcutBuilder
) -> ShortcutRegistry:
    return ShortcutRegistry(inventory, builder)
