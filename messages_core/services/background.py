"""
Background execution for keyword and shortcut work.

The keyword store and shortcut registry are synchronous. These wrappers move
their file, database and inventory work off the event loop with
``asyncio.to_thread`` so the interactive side stays responsive, and serialize
keyword mutations against reads so a caller never sees a half-applied change.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import IO, Any, Callable, Optional, TypeVar, Union

from messages_core.domain.entities import ExportResult, ImportResult, ShortcutDescriptor
from messages_core.keywords.store import KeywordStore
from messages_core.shortcuts.builder import Capability
from messages_core.shortcuts.registry import ShortcutRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_in_background(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking callable on a worker thread and await its result."""
    return await asyncio.to_thread(func, *args, **kwargs)


class BackgroundKeywordService:
    """Awaitable front for a KeywordStore."""

    def __init__(self, store: KeywordStore) -> None:
        self._store = store
        self._lock = asyncio.Lock()

    async def keywords(self) -> list[str]:
        async with self._lock:
            return await run_in_background(self._store.keywords)

    async def add(self, keyword: str) -> bool:
        async with self._lock:
            return await run_in_background(self._store.add, keyword)

    async def remove(self, keyword: str) -> bool:
        async with self._lock:
            return await run_in_background(self._store.remove, keyword)

    async def replace(self, old: str, new: str) -> bool:
        async with self._lock:
            return await run_in_background(self._store.replace, old, new)

    async def import_from(self, path: Union[str, os.PathLike]) -> ImportResult:
        async with self._lock:
            return await run_in_background(self._store.import_from, path)

    async def export_to(self, stream: IO) -> ExportResult:
        async with self._lock:
            return await run_in_background(self._store.export_to, stream)

    async def export_to_path(self, path: Union[str, os.PathLike]) -> ExportResult:
        async with self._lock:
            return await run_in_background(self._store.export_to_path, path)

    async def last_export_path(self) -> Optional[str]:
        return await run_in_background(lambda: self._store.last_export_path)


class BackgroundShortcutService:
    """
    Awaitable front for a ShortcutRegistry.

    Work submitted here runs on a worker thread, where looking conversations up
    synchronously is allowed.
    """

    def __init__(self, registry: ShortcutRegistry) -> None:
        self._registry = registry

    async def create_or_update_for_thread(self, thread_id: int) -> ShortcutDescriptor:
        return await run_in_background(
            self._registry.create_or_update_for_thread, thread_id, True
        )

    async def report_usage(self, thread_id: int, capability: Capability) -> ShortcutDescriptor:
        return await run_in_background(self._registry.report_usage, thread_id, capability, True)

    async def remove_one(self, thread_id: int) -> bool:
        return await run_in_background(self._registry.remove_one, thread_id)

    async def remove_all(self) -> int:
        removed = await run_in_background(self._registry.remove_all)
        logger.debug("Background remove_all finished", extra={"extra_data": {"removed": removed}})
        return removed
