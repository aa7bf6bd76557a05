"""
Application services.

Async wrappers that run the synchronous core on worker threads.
"""

from messages_core.services.background import (
    BackgroundKeywordService,
    BackgroundShortcutService,
    run_in_background,
)

__all__ = [
    "BackgroundKeywordService",
    "BackgroundShortcutService",
    "run_in_background",
]
