"""
Conversation shortcuts.

Builds, ranks and publishes quick-access shortcuts to conversations.
"""

from messages_core.shortcuts.builder import ConversationShortcutBuilder, truncate_short_label
from messages_core.shortcuts.inventory import InMemoryShortcutInventory
from messages_core.shortcuts.ports import ConversationSource, IconResolver, ShortcutInventory
from messages_core.shortcuts.ranking import ShortcutRankingPolicy, is_digits_only
from messages_core.shortcuts.registry import ShortcutRegistry, format_shortcut

__all__ = [
    "ConversationShortcutBuilder",
    "ConversationSource",
    "IconResolver",
    "InMemoryShortcutInventory",
    "ShortcutInventory",
    "ShortcutRankingPolicy",
    "ShortcutRegistry",
    "format_shortcut",
    "is_digits_only",
    "truncate_short_label",
]
