"""
Ports (interfaces) used by the shortcut engine.

Conversation lookup, icon resolution and the published shortcut inventory are
owned outside the core; these Protocols define the minimal contracts the core
needs from them.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from messages_core.domain.entities import Conversation, Participant, ShortcutDescriptor


class ConversationSource(Protocol):
    """Read access to the messaging store."""

    def get_conversations(self, thread_id: int) -> Sequence[Conversation]:
        ...

    def get_thread_participants(self, thread_id: int) -> Sequence[Participant]:
        ...


class IconResolver(Protocol):
    """Contact and group icon resolution."""

    def resolve_icon(self, participant: Participant) -> Any:
        ...

    def colored_group_icon(self, title: str) -> Any:
        ...


class ShortcutInventory(Protocol):
    """Platform-owned set of published shortcuts, keyed by id."""

    def list_shortcuts(self) -> list[ShortcutDescriptor]:
        ...

    def push(self, descriptor: ShortcutDescriptor) -> None:
        ...

    def update(self, descriptors: Sequence[ShortcutDescriptor]) -> None:
        ...

    def remove(self, ids: Sequence[str]) -> None:
        ...

    def remove_long_lived(self, ids: Sequence[str]) -> None:
        ...

    def remove_all_dynamic(self) -> None:
        ...
