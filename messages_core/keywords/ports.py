"""
Ports (interfaces) used by the keyword store.

The configuration store owns the persisted keyword list and the export path
hint; adapters implement this contract for a concrete backend.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence


class ConfigStore(Protocol):
    """Configuration operations required by the keyword store."""

    def get_blocked_keywords(self) -> list[str]:
        ...

    def set_blocked_keywords(self, keywords: Sequence[str]) -> None:
        ...

    def get_last_blocked_keyword_export_path(self) -> Optional[str]:
        ...

    def set_last_blocked_keyword_export_path(self, path: str) -> None:
        ...
