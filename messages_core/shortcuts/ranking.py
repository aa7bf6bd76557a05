"""
Shortcut ranking policy.

Decides whether a conversation deserves a preferred shortcut. Conversations
that are not presentable still get a shortcut, ranked after everything else.
"""

from typing import Optional

from messages_core.config.settings import ShortcutSettings
from messages_core.domain.entities import DEFAULT_RANK, DEPRIORITIZED_RANK, Conversation


def is_digits_only(value: str) -> bool:
    """True when every character is a decimal digit; an empty string qualifies."""
    return all(ch.isdecimal() for ch in value)


class ShortcutRankingPolicy:
    """Eligibility and rank of conversation shortcuts."""

    def __init__(self, settings: Optional[ShortcutSettings] = None) -> None:
        if settings is None:
            self.default_rank = DEFAULT_RANK
            self.deprioritized_rank = DEPRIORITIZED_RANK
        else:
            self.default_rank = settings.default_rank
            self.deprioritized_rank = settings.deprioritized_rank

    def should_present_shortcut(self, conversation: Conversation) -> bool:
        """
        Check whether a conversation should be offered as a preferred shortcut.

        Group conversations always qualify. Archived conversations and senders
        whose address is not purely numeric (short codes, alphanumeric or email
        senders) do not.

        Args:
            conversation: Conversation to evaluate

        Returns:
            True if the conversation is presentable
        """
        if conversation.is_group_conversation:
            return True
        if conversation.is_archived or not is_digits_only(conversation.phone_number):
            return False
        return True

    def rank_for(self, conversation: Conversation) -> int:
        if self.should_present_shortcut(conversation):
            return self.default_rank
        return self.deprioritized_rank
