"""
Domain entities for the messages core.

This module defines Pydantic models for the conversation records the core reads
and the shortcut descriptors it derives from them, independent of any platform
or storage layer.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_RANK = 1
DEPRIORITIZED_RANK = 99


class ImportResult(str, Enum):
    """Outcome of importing blocked keywords from a file."""

    OK = "ok"
    FAIL = "fail"


class ExportResult(str, Enum):
    """Outcome of exporting blocked keywords to a file or stream."""

    OK = "ok"
    FAIL = "fail"


class ShortcutCapability(str, Enum):
    """Semantic actions a conversation shortcut can be bound to."""

    SEND_MESSAGE = "actions.intent.SEND_MESSAGE"
    RECEIVE_MESSAGE = "actions.intent.RECEIVE_MESSAGE"


class IconKind(str, Enum):
    """Where a shortcut icon comes from."""

    PERSON = "person"
    GROUP = "group"


# ================================================================================
# Conversation Entities
# ================================================================================


class Conversation(BaseModel):
    """
    Domain representation of a conversation thread.

    Owned by the messaging store; the core only reads it.
    """

    thread_id: int = Field(description="Stable thread identity")
    title: str = Field(default="", description="Display title of the conversation")
    phone_number: str = Field(default="", description="Address of the other party")
    is_group_conversation: bool = Field(default=False, description="More than one recipient")
    is_archived: bool = Field(default=False, description="Conversation is archived")
    snippet: str = Field(default="", description="Preview of the latest message")
    date: int = Field(default=0, description="Timestamp of the latest message")
    read: bool = Field(default=False, description="Whether the latest message was read")
    photo_uri: str = Field(default="", description="Conversation photo, if any")
    is_scheduled: bool = Field(default=False, description="Thread holds scheduled messages only")
    uses_custom_title: bool = Field(default=False, description="Title was set by the user")

    @classmethod
    def placeholder(cls, thread_id: int) -> "Conversation":
        """
        Minimal stand-in used when the real conversation cannot be looked up.

        Args:
            thread_id: Thread identity the placeholder represents

        Returns:
            Conversation titled with the stringified id
        """
        return cls(
            thread_id=thread_id,
            snippet="",
            date=0,
            read=False,
            title=str(thread_id),
            photo_uri="",
            is_group_conversation=False,
            phone_number="",
            is_scheduled=False,
            uses_custom_title=False,
            is_archived=False,
        )


class Participant(BaseModel):
    """A contact taking part in a conversation."""

    contact_id: int = Field(default=0)
    name: str = Field(default="")
    phone_numbers: list[str] = Field(default_factory=list)
    photo_uri: str = Field(default="")


# ================================================================================
# Shortcut Entities
# ================================================================================


class IconSource(BaseModel):
    """Icon attached to a shortcut along with what it was derived from."""

    model_config = ConfigDict(frozen=True)

    kind: IconKind
    key: str = Field(description="Participant name or group title the icon was built for")
    payload: Any = Field(default=None, description="Opaque icon value from the resolver")


class ShortcutDescriptor(BaseModel):
    """
    Quick-access shortcut pointing at a conversation.

    Descriptors are immutable; a changed conversation produces a new descriptor
    that replaces the previous one by ``id``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Thread id as text")
    short_label: str = Field(description="Truncated title")
    long_label: str = Field(description="Full title")
    icon: Optional[IconSource] = Field(default=None)
    rank: int = Field(default=DEFAULT_RANK, ge=1, description="Lower ranks are presented first")
    capabilities: tuple[str, ...] = Field(default=(), description="Action capability bindings")
    is_long_lived: bool = Field(default=True)
    is_conversation: bool = Field(default=True)
    persons: tuple[str, ...] = Field(default=(), description="Participant names")
    launch_extras: dict[str, Any] = Field(
        default_factory=dict,
        description="Values handed to the conversation screen when the shortcut is opened",
    )

    @field_validator("capabilities", mode="before")
    @classmethod
    def dedupe_capabilities(cls, v: Any) -> Any:
        """Keep the first occurrence of each capability, in order."""
        if v is None:
            return ()
        seen: list[str] = []
        for item in v:
            value = item.value if isinstance(item, Enum) else str(item)
            if value not in seen:
                seen.append(value)
        return tuple(seen)

    @property
    def thread_id(self) -> int:
        """Thread identity the shortcut points at."""
        return int(self.id)

    @property
    def is_deprioritized(self) -> bool:
        """Present in the inventory but ranked after preferred shortcuts."""
        return self.rank > DEFAULT_RANK
