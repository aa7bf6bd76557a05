"""
Database infrastructure module.

This module provides database connectivity, ORM models, and repositories.
"""

from messages_core.infra.db.base import (
    DatabaseManager,
    close_database,
    get_db_manager,
    get_db_session,
    init_database,
)
from messages_core.infra.db.models import Base, BlockedKeyword, Preference
from messages_core.infra.db.repositories import (
    BaseRepository,
    BlockedKeywordRepository,
    PreferenceRepository,
)

__all__ = [
    # Base
    "Base",
    "DatabaseManager",
    "init_database",
    "close_database",
    "get_db_manager",
    "get_db_session",
    # Models
    "BlockedKeyword",
    "Preference",
    # Repositories
    "BaseRepository",
    "BlockedKeywordRepository",
    "PreferenceRepository",
]
