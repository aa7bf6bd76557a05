"""
SQL configuration store adapter.

Implements the ConfigStore port on top of the SQLAlchemy repositories. Each
call runs in its own transaction, so a write either lands completely or not at
all.
"""

import logging
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from messages_core.errors import StorageError
from messages_core.infra.db.base import DatabaseManager
from messages_core.infra.db.repositories import BlockedKeywordRepository, PreferenceRepository

logger = logging.getLogger(__name__)

LAST_EXPORT_PATH_KEY = "last_blocked_keyword_export_path"


class SqlConfigStore:
    """Configuration store backed by a SQL database."""

    def __init__(self, db_manager: DatabaseManager) -> None:
        self._db = db_manager

    def get_blocked_keywords(self) -> list[str]:
        try:
            with self._db.session() as session:
                return BlockedKeywordRepository(session).list_keywords()
        except SQLAlchemyError as e:
            raise StorageError("Failed to load blocked keywords") from e

    def set_blocked_keywords(self, keywords: Sequence[str]) -> None:
        try:
            with self._db.session() as session:
                stored = BlockedKeywordRepository(session).replace_all(list(keywords))
        except SQLAlchemyError as e:
            raise StorageError("Failed to save blocked keywords") from e
        logger.debug("Persisted %d blocked keyword(s)", stored)

    def get_last_blocked_keyword_export_path(self) -> Optional[str]:
        try:
            with self._db.session() as session:
                return PreferenceRepository(session).get_value(LAST_EXPORT_PATH_KEY)
        except SQLAlchemyError as e:
            raise StorageError("Failed to load export path") from e

    def set_last_blocked_keyword_export_path(self, path: str) -> None:
        try:
            with self._db.session() as session:
                PreferenceRepository(session).set_value(LAST_EXPORT_PATH_KEY, path)
        except SQLAlchemyError as e:
            raise StorageError("Failed to save export path") from e
