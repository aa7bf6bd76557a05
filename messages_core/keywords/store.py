"""
Blocked keyword store.

Facade used by the UI layer to read and mutate the persisted blocked keyword
set and to move it in and out of plain text files. Every mutation is written
through to the configuration store before the call returns.

The store is synchronous; file and stream work is expected to be scheduled on
a worker (see ``messages_core.services.background``).
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import IO, Optional, Union

from messages_core.config.settings import KeywordSettings, get_settings
from messages_core.domain.entities import ExportResult, ImportResult
from messages_core.domain.keywords import KeywordSet
from messages_core.infra.logging.config import LogContext
from messages_core.keywords.codec import KeywordCodec
from messages_core.keywords.ports import ConfigStore

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


class KeywordStore:
    """Read, mutate, import and export the persisted blocked keyword set."""

    def __init__(
        self,
        config: ConfigStore,
        codec: Optional[KeywordCodec] = None,
        settings: Optional[KeywordSettings] = None,
    ):
        """
        Initialize keyword store.

        Args:
            config: Configuration store holding the persisted keywords
            codec: Codec for the text file format. If None, one is built with
                the configured encoding.
            settings: Keyword settings. If None, will load from global settings.
        """
        if settings is None:
            settings = get_settings().keywords
        self._config = config
        self._settings = settings
        self._codec = codec or KeywordCodec(settings.encoding)

    def _load(self) -> KeywordSet:
        return KeywordSet.from_iterable(self._config.get_blocked_keywords())

    def _save(self, keyword_set: KeywordSet) -> None:
        self._config.set_blocked_keywords(keyword_set.to_ordered_list())

    # ------------------------------------------------------------------
    # Reads and single-keyword mutations
    # ------------------------------------------------------------------

    def keywords(self) -> list[str]:
        """Current keywords in stored order."""
        return self._load().to_ordered_list()

    def contains(self, keyword: str) -> bool:
        return self._load().contains(keyword)

    def add(self, keyword: str) -> bool:
        """
        Add a keyword and persist the change.

        Returns:
            True if the keyword was added, False if it was invalid or a duplicate
        """
        keyword_set = self._load()
        if not keyword_set.add(keyword):
            logger.debug("Keyword not added (invalid or duplicate)")
            return False
        self._save(keyword_set)
        logger.info("Blocked keyword added", extra={"extra_data": {"total": len(keyword_set)}})
        return True

    def remove(self, keyword: str) -> bool:
        """Remove a keyword and persist the change; False if it was absent."""
        keyword_set = self._load()
        if not keyword_set.remove(keyword):
            return False
        self._save(keyword_set)
        logger.info("Blocked keyword removed", extra={"extra_data": {"total": len(keyword_set)}})
        return True

    def replace(self, old: str, new: str) -> bool:
        """
        Edit a keyword in place, keeping its position, and persist the change.

        Returns:
            True if the keyword was replaced, False if ``old`` is absent or
            ``new`` is invalid or already present
        """
        keyword_set = self._load()
        if not keyword_set.replace(old, new):
            logger.debug("Keyword not replaced (absent, invalid or duplicate)")
            return False
        self._save(keyword_set)
        logger.info("Blocked keyword edited", extra={"extra_data": {"total": len(keyword_set)}})
        return True

    def clear(self) -> int:
        """Remove every keyword and return how many were removed."""
        count = len(self._load())
        if count:
            self._save(KeywordSet())
            logger.info("Blocked keywords cleared", extra={"extra_data": {"removed": count}})
        return count

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def import_from(self, path: PathLike) -> ImportResult:
        """
        Merge keywords from a text file into the persisted set.

        An unreadable file and a file without keywords both give FAIL; the
        persisted set is left untouched in that case. Duplicates are dropped.

        Args:
            path: Readable path supplied by the caller

        Returns:
            ImportResult.OK if the file yielded at least one keyword
        """
        with LogContext(operation="keywords.import"):
            try:
                decoded = self._codec.read(path)
            except OSError as e:
                logger.warning(
                    "Cannot read keyword file",
                    extra={"extra_data": {"path": str(path), "error": str(e)}},
                )
                return ImportResult.FAIL

            if not decoded:
                logger.info("Keyword file has no entries", extra={"extra_data": {"path": str(path)}})
                return ImportResult.FAIL

            keyword_set = self._load()
            added = keyword_set.extend(decoded)
            if added:
                self._save(keyword_set)

            logger.info(
                "Blocked keywords imported",
                extra={"extra_data": {"read": len(decoded), "added": added, "total": len(keyword_set)}},
            )
            return ImportResult.OK

    def export_to(self, stream: IO) -> ExportResult:
        """
        Write every keyword to a caller-provided stream.

        Nothing is written when there are no keywords. The payload is encoded
        in full before it is written, so an encoding problem can never leave a
        half-written stream behind. A closed stream, or a text stream that
        cannot carry the file encoding, counts as a write failure.

        Args:
            stream: Writable binary or text stream

        Returns:
            ExportResult.OK on success, FAIL when empty or the write failed
        """
        with LogContext(operation="keywords.export"):
            keywords = self.keywords()
            if not keywords:
                logger.info("No blocked keywords to export")
                return ExportResult.FAIL

            try:
                self._codec.write(keywords, stream)
            except (OSError, ValueError):
                logger.exception("Writing blocked keywords failed")
                return ExportResult.FAIL

            logger.info("Blocked keywords exported", extra={"extra_data": {"count": len(keywords)}})
            return ExportResult.OK

    def export_to_path(self, path: PathLike) -> ExportResult:
        """
        Export keywords to a file, replacing it atomically.

        The file is first written next to the target and then moved over it,
        so a failure never truncates an earlier export. On success the path is
        remembered as the last export path.
        """
        target = Path(path)
        with LogContext(operation="keywords.export"):
            keywords = self.keywords()
            if not keywords:
                logger.info("No blocked keywords to export")
                return ExportResult.FAIL

            tmp_name: Optional[str] = None
            try:
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
                )
                with os.fdopen(fd, "wb") as handle:
                    self._codec.write(keywords, handle)
                    os.fsync(handle.fileno())
                os.replace(tmp_name, target)
                tmp_name = None
            except OSError:
                logger.exception(
                    "Exporting blocked keywords failed", extra={"extra_data": {"path": str(target)}}
                )
                return ExportResult.FAIL
            finally:
                if tmp_name is not None and os.path.exists(tmp_name):
                    os.unlink(tmp_name)

            self.remember_export_path(str(target))
            logger.info(
                "Blocked keywords exported",
                extra={"extra_data": {"count": len(keywords), "path": str(target)}},
            )
            return ExportResult.OK

    # ------------------------------------------------------------------
    # Export path hint
    # ------------------------------------------------------------------

    @property
    def last_export_path(self) -> Optional[str]:
        """Path used by the previous export, to pre-fill the next one."""
        return self._config.get_last_blocked_keyword_export_path()

    def remember_export_path(self, path: str) -> None:
        self._config.set_last_blocked_keyword_export_path(path)

    @property
    def suggested_export_path(self) -> str:
        """Previous export path, or the configured default file name."""
        return self.last_export_path or self._settings.default_export_filename
