"""
Shortcut registry.

Facade over the platform shortcut inventory. It is the only component that
mutates the inventory; callers react to conversation lifecycle events (new
message, archive, delete) by calling into it.
"""

import logging
from typing import Optional

from messages_core.domain.entities import Conversation, ShortcutCapability, ShortcutDescriptor
from messages_core.infra.logging.config import LogContext
from messages_core.shortcuts.builder import Capability, ConversationShortcutBuilder
from messages_core.shortcuts.ports import ShortcutInventory

logger = logging.getLogger(__name__)


def format_shortcut(descriptor: ShortcutDescriptor) -> str:
    """Multi-line debug rendering of a descriptor."""
    return (
        f"{descriptor!r} \n\t"
        f"id : {descriptor.id}\n\t"
        f"{descriptor.short_label} : {descriptor.long_label}\n\t"
        f"launch : {descriptor.launch_extras}"
    )


class ShortcutRegistry:
    """Enumerate, publish and remove conversation shortcuts."""

    def __init__(self, inventory: ShortcutInventory, builder: ConversationShortcutBuilder) -> None:
        self._inventory = inventory
        self._builder = builder

    @property
    def builder(self) -> ConversationShortcutBuilder:
        return self._builder

    def list_all(self) -> list[ShortcutDescriptor]:
        return self._inventory.list_shortcuts()

    def find_by_id(self, thread_id: int) -> Optional[ShortcutDescriptor]:
        """Published shortcut for a thread, or None."""
        wanted = str(thread_id)
        return next((d for d in self._inventory.list_shortcuts() if d.id == wanted), None)

    def upsert(self, descriptor: ShortcutDescriptor) -> bool:
        """
        Publish a descriptor, or refresh it in place if it is already published.

        Args:
            descriptor: Descriptor to apply

        Returns:
            True if the shortcut was newly published, False if it was updated
        """
        with LogContext(thread_id=descriptor.thread_id, operation="shortcut.upsert"):
            if self.find_by_id(descriptor.thread_id) is not None:
                self._inventory.update([descriptor])
                logger.debug("Shortcut updated:\n%s", format_shortcut(descriptor))
                return False

            self._inventory.push(descriptor)
            logger.info("Shortcut published", extra={"extra_data": {"rank": descriptor.rank}})
            return True

    def create_or_update(self, conversation: Conversation) -> ShortcutDescriptor:
        """Build a descriptor for a conversation and upsert it."""
        descriptor = self._builder.build(conversation)
        self.upsert(descriptor)
        return descriptor

    def create_or_update_for_thread(
        self, thread_id: int, allow_synchronous_lookup: bool = True
    ) -> ShortcutDescriptor:
        """Build a descriptor for a thread id and upsert it."""
        descriptor = self._builder.build_for_thread(
            thread_id, allow_synchronous_lookup=allow_synchronous_lookup
        )
        self.upsert(descriptor)
        return descriptor

    def remove_one(self, thread_id: int) -> bool:
        """Remove a thread's shortcut; returns False if none was published."""
        descriptor = self.find_by_id(thread_id)
        if descriptor is None:
            return False
        self._inventory.remove([descriptor.id])
        logger.info("Shortcut removed", extra={"extra_data": {"id": descriptor.id}})
        return True

    def remove_all(self) -> int:
        """
        Remove every published shortcut, including long-lived retention.

        Returns:
            Number of shortcuts removed (0 leaves the inventory untouched)
        """
        shortcuts = self._inventory.list_shortcuts()
        if not shortcuts:
            return 0
        self._inventory.remove_long_lived([d.id for d in shortcuts])
        self._inventory.remove_all_dynamic()
        logger.info("All shortcuts removed", extra={"extra_data": {"count": len(shortcuts)}})
        return len(shortcuts)

    def report_usage(
        self,
        thread_id: int,
        capability: Capability,
        allow_synchronous_lookup: bool = True,
    ) -> ShortcutDescriptor:
        """
        Signal that a thread was used for an action.

        Always pushes the descriptor, whether or not it was already published.
        """
        descriptor = self._builder.build_for_thread(
            thread_id, [capability], allow_synchronous_lookup=allow_synchronous_lookup
        )
        with LogContext(thread_id=thread_id, operation="shortcut.usage"):
            self._inventory.push(descriptor)
            logger.debug("Usage reported", extra={"extra_data": {"capability": descriptor.capabilities}})
        return descriptor

    def report_send_message_usage(
        self, thread_id: int, allow_synchronous_lookup: bool = True
    ) -> ShortcutDescriptor:
        return self.report_usage(
            thread_id, ShortcutCapability.SEND_MESSAGE, allow_synchronous_lookup
        )

    def report_receive_message_usage(
        self, thread_id: int, allow_synchronous_lookup: bool = True
    ) -> ShortcutDescriptor:
        return self.report_usage(
            thread_id, ShortcutCapability.RECEIVE_MESSAGE, allow_synchronous_lookup
        )
