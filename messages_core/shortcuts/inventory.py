"""
In-memory shortcut inventory adapter.

Implements the ShortcutInventory port without a platform behind it. Used as
the default inventory in tests and headless runs; it mirrors how the platform
treats dynamic and long-lived shortcuts closely enough for the registry logic.
"""

import logging
import threading
from typing import Optional, Sequence

from messages_core.domain.entities import ShortcutDescriptor

logger = logging.getLogger(__name__)


class InMemoryShortcutInventory:
    """Thread-safe dictionary of published shortcuts keyed by id."""

    def __init__(self, max_shortcuts: Optional[int] = None) -> None:
        """
        Initialize the inventory.

        Args:
            max_shortcuts: Cap on published shortcuts. When a new shortcut is
                pushed into a full inventory, the lowest-priority entry
                (highest rank value, oldest first on ties) is evicted.
        """
        self._lock = threading.Lock()
        self._dynamic: dict[str, ShortcutDescriptor] = {}
        self._long_lived: set[str] = set()
        self.max_shortcuts = max_shortcuts
        # (operation, ids) in call order
        self.operations: list[tuple[str, tuple[str, ...]]] = []

    def list_shortcuts(self) -> list[ShortcutDescriptor]:
        with self._lock:
            return list(self._dynamic.values())

    def push(self, descriptor: ShortcutDescriptor) -> None:
        with self._lock:
            self.operations.append(("push", (descriptor.id,)))
            if (
                descriptor.id not in self._dynamic
                and self.max_shortcuts is not None
                and len(self._dynamic) >= self.max_shortcuts
            ):
                self._evict_lowest_priority()
            self._dynamic[descriptor.id] = descriptor
            if descriptor.is_long_lived:
                self._long_lived.add(descriptor.id)

    def update(self, descriptors: Sequence[ShortcutDescriptor]) -> None:
        with self._lock:
            self.operations.append(("update", tuple(d.id for d in descriptors)))
            for descriptor in descriptors:
                # Updating never publishes; unknown ids are ignored.
                if descriptor.id in self._dynamic:
                    self._dynamic[descriptor.id] = descriptor

    def remove(self, ids: Sequence[str]) -> None:
        with self._lock:
            self.operations.append(("remove", tuple(ids)))
            for shortcut_id in ids:
                self._dynamic.pop(shortcut_id, None)

    def remove_long_lived(self, ids: Sequence[str]) -> None:
        with self._lock:
            self.operations.append(("remove_long_lived", tuple(ids)))
            self._long_lived.difference_update(ids)

    def remove_all_dynamic(self) -> None:
        with self._lock:
            self.operations.append(("remove_all_dynamic", ()))
            self._dynamic.clear()

    def long_lived_ids(self) -> set[str]:
        """Ids the platform is still asked to retain."""
        with self._lock:
            return set(self._long_lived)

    def _evict_lowest_priority(self) -> None:
        victim = max(self._dynamic.values(), key=lambda d: d.rank)
        del self._dynamic[victim.id]
        logger.debug("Evicted shortcut", extra={"extra_data": {"id": victim.id, "rank": victim.rank}})
