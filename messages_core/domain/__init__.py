"""
Domain layer module.

Contains business logic entities and domain models.
"""

from messages_core.domain.entities import (
    DEFAULT_RANK,
    DEPRIORITIZED_RANK,
    Conversation,
    ExportResult,
    IconKind,
    IconSource,
    ImportResult,
    Participant,
    ShortcutCapability,
    ShortcutDescriptor,
)
from messages_core.domain.keywords import KeywordSet, is_valid_keyword

__all__ = [
    "DEFAULT_RANK",
    "DEPRIORITIZED_RANK",
    "Conversation",
    "ExportResult",
    "IconKind",
    "IconSource",
    "ImportResult",
    "KeywordSet",
    "Participant",
    "ShortcutCapability",
    "ShortcutDescriptor",
    "is_valid_keyword",
]
