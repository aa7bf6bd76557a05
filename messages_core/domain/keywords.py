"""
Blocked keyword set.

Keeps the user's blocked keywords unique under exact, case-sensitive comparison
while preserving the order they were added in for display.
"""

from typing import Iterable, Iterator

_LINE_BREAKS = ("\n", "\r")


def is_valid_keyword(keyword: str) -> bool:
    """
    Check whether a keyword can be stored.

    A keyword must contain something other than whitespace and must fit on one
    line of the export format.

    Args:
        keyword: Candidate keyword

    Returns:
        True if the keyword can be stored
    """
    if not keyword or not keyword.strip():
        return False
    return not any(ch in keyword for ch in _LINE_BREAKS)


class KeywordSet:
    """Ordered set of unique blocked keywords."""

    def __init__(self) -> None:
        # dicts keep insertion order; values are unused
        self._entries: dict[str, None] = {}

    @classmethod
    def from_iterable(cls, keywords: Iterable[str]) -> "KeywordSet":
        """Build a set, silently dropping invalid and duplicate entries."""
        keyword_set = cls()
        keyword_set.extend(keywords)
        return keyword_set

    def add(self, keyword: str) -> bool:
        """
        Append a keyword.

        Args:
            keyword: Keyword to add

        Returns:
            True if the keyword was added, False if it was invalid or already present
        """
        if not is_valid_keyword(keyword) or keyword in self._entries:
            return False
        self._entries[keyword] = None
        return True

    def extend(self, keywords: Iterable[str]) -> int:
        """Add several keywords and return how many were actually added."""
        return sum(1 for keyword in keywords if self.add(keyword))

    def remove(self, keyword: str) -> bool:
        """Remove an exact match; returns whether anything was removed."""
        if keyword not in self._entries:
            return False
        del self._entries[keyword]
        return True

    def replace(self, old: str, new: str) -> bool:
        """
        Swap ``old`` for ``new`` at the same position.

        Returns:
            True if replaced; False if ``old`` is absent or ``new`` is invalid
            or already present, in which case the set is unchanged
        """
        if old not in self._entries or not is_valid_keyword(new) or new in self._entries:
            return False
        self._entries = {(new if keyword == old else keyword): None for keyword in self._entries}
        return True

    def contains(self, keyword: str) -> bool:
        return keyword in self._entries

    def to_ordered_list(self) -> list[str]:
        """Snapshot of the keywords in their current order."""
        return list(self._entries)

    def __contains__(self, keyword: object) -> bool:
        return keyword in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_ordered_list())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeywordSet):
            return NotImplemented
        return self.to_ordered_list() == other.to_ordered_list()

    def __repr__(self) -> str:
        return f"<KeywordSet({self.to_ordered_list()!r})>"
