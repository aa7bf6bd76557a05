"""
Blocked keyword management.

Provides the text codec for keyword files and the store facade that persists
the keyword set.
"""

from messages_core.keywords.codec import KeywordCodec
from messages_core.keywords.ports import ConfigStore
from messages_core.keywords.store import KeywordStore

__all__ = [
    "ConfigStore",
    "KeywordCodec",
    "KeywordStore",
]
