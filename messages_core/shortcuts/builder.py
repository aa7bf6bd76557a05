"""
Conversation shortcut builder.

Turns a conversation record into a fresh ShortcutDescriptor: labels, icon,
participants, capability bindings and rank.
"""

import logging
from typing import Any, Iterable, Optional, Sequence, Union

from messages_core.config.settings import ShortcutSettings
from messages_core.domain.entities import (
    Conversation,
    IconKind,
    IconSource,
    Participant,
    ShortcutCapability,
    ShortcutDescriptor,
)
from messages_core.shortcuts.ports import ConversationSource, IconResolver
from messages_core.shortcuts.ranking import ShortcutRankingPolicy

logger = logging.getLogger(__name__)

DEFAULT_SHORT_LABEL_MAX_LENGTH = 11

Capability = Union[str, ShortcutCapability]


def truncate_short_label(title: str, max_length: int = DEFAULT_SHORT_LABEL_MAX_LENGTH) -> str:
    """
    Cut a conversation title down to a shortcut short label.

    Titles longer than ``max_length`` keep their first ``max_length``
    characters. Anything else loses its last character, so ``"Hi"`` becomes
    ``"H"`` and a title of exactly ``max_length`` characters comes out one
    shorter. Existing shortcuts were published with these labels.

    Args:
        title: Conversation title
        max_length: Display-length cap

    Returns:
        Short label (empty for titles of one character or less)
    """
    if len(title) > max_length:
        return title[:max_length]
    return title[: max(len(title) - 1, 0)]


class ConversationShortcutBuilder:
    """Build shortcut descriptors from conversations."""

    def __init__(
        self,
        conversations: ConversationSource,
        icons: IconResolver,
        ranking: Optional[ShortcutRankingPolicy] = None,
        settings: Optional[ShortcutSettings] = None,
    ) -> None:
        self._conversations = conversations
        self._icons = icons
        self._ranking = ranking or ShortcutRankingPolicy(settings)
        self._short_label_max = (
            settings.short_label_max_length if settings else DEFAULT_SHORT_LABEL_MAX_LENGTH
        )

    @property
    def ranking(self) -> ShortcutRankingPolicy:
        return self._ranking

    def build(
        self,
        conversation: Conversation,
        capabilities: Iterable[Capability] = (),
        participants: Optional[Sequence[Participant]] = None,
    ) -> ShortcutDescriptor:
        """
        Build a descriptor for a conversation.

        Args:
            conversation: Conversation the shortcut points at
            capabilities: Action capabilities to bind to the shortcut
            participants: Already-known participants; resolved from the
                conversation store when omitted

        Returns:
            New shortcut descriptor
        """
        if participants is None:
            participants = self._conversations.get_thread_participants(conversation.thread_id)
        participants = list(participants)
        title = conversation.title

        descriptor = ShortcutDescriptor(
            id=str(conversation.thread_id),
            short_label=truncate_short_label(title, self._short_label_max),
            long_label=title,
            icon=self._icon_for(conversation, participants),
            rank=self._ranking.rank_for(conversation),
            capabilities=tuple(capabilities),
            is_long_lived=True,
            is_conversation=True,
            persons=tuple(p.name for p in participants),
            launch_extras={
                "thread_id": conversation.thread_id,
                "thread_title": title,
                "is_recycle_bin": False,
            },
        )
        logger.debug(
            "Built shortcut",
            extra={"extra_data": {"id": descriptor.id, "rank": descriptor.rank}},
        )
        return descriptor

    def build_for_thread(
        self,
        thread_id: int,
        capabilities: Iterable[Capability] = (),
        allow_synchronous_lookup: bool = True,
    ) -> ShortcutDescriptor:
        """
        Build a descriptor when only the thread id is known.

        The conversation store is queried only when ``allow_synchronous_lookup``
        is set; callers on the interactive context pass False and get a
        placeholder without participants. A lookup that finds nothing also
        falls back to the placeholder titled with the id, so a descriptor is
        always produced.

        Args:
            thread_id: Thread identity
            capabilities: Action capabilities to bind to the shortcut
            allow_synchronous_lookup: Whether the conversation store may be queried

        Returns:
            New shortcut descriptor
        """
        if not allow_synchronous_lookup:
            logger.debug(
                "Lookup not allowed, using placeholder conversation",
                extra={"extra_data": {"thread_id": thread_id}},
            )
            return self.build(Conversation.placeholder(thread_id), capabilities, participants=())

        conversations = self._conversations.get_conversations(thread_id)
        if not conversations:
            logger.debug(
                "Conversation not found, using placeholder",
                extra={"extra_data": {"thread_id": thread_id}},
            )
            return self.build(Conversation.placeholder(thread_id), capabilities)

        return self.build(conversations[0], capabilities)

    def _icon_for(self, conversation: Conversation, participants: Sequence[Participant]) -> IconSource:
        if not conversation.is_group_conversation and participants:
            person = participants[0]
            payload: Any = self._icons.resolve_icon(person)
            return IconSource(kind=IconKind.PERSON, key=person.name, payload=payload)

        payload = self._icons.colored_group_icon(conversation.title)
        return IconSource(kind=IconKind.GROUP, key=conversation.title, payload=payload)
