"""
Repository layer for database operations.

This module provides CRUD operations for persisted configuration:
- BlockedKeywordRepository: operations on BlockedKeyword model
- PreferenceRepository: operations on Preference model
"""

import logging
from typing import Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from messages_core.infra.db.models import Base, BlockedKeyword, Preference

logger = logging.getLogger(__name__)

# Generic type for models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Provides generic operations that can be reused across all repositories.
    """

    def __init__(self, model: Type[ModelType], session: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Database session
        """
        self.model = model
        self.session = session

    def get(self, id: object) -> Optional[ModelType]:
        """
        Get entity by primary key.

        Args:
            id: Primary key value

        Returns:
            Entity or None if not found
        """
        return self.session.get(self.model, id)

    def create(self, **kwargs) -> ModelType:
        """
        Create new entity.

        Args:
            **kwargs: Entity attributes

        Returns:
            Created entity
        """
        entity = self.model(**kwargs)
        self.session.add(entity)
        self.session.flush()
        return entity

    def count(self) -> int:
        """
        Count total number of entities.

        Returns:
            Total count
        """
        result = self.session.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()


class BlockedKeywordRepository(BaseRepository[BlockedKeyword]):
    """Repository for BlockedKeyword model."""

    def __init__(self, session: Session):
        super().__init__(BlockedKeyword, session)

    def list_keywords(self) -> List[str]:
        """
        Get all keywords in stored order.

        Returns:
            Keywords ordered by position
        """
        result = self.session.execute(
            select(BlockedKeyword.keyword).order_by(BlockedKeyword.position, BlockedKeyword.id)
        )
        return list(result.scalars().all())

    def replace_all(self, keywords: Sequence[str]) -> int:
        """
        Replace the stored keywords with the given sequence.

        Runs inside the caller's transaction, so readers see either the old or
        the new list.

        Args:
            keywords: Keywords in display order

        Returns:
            Number of keywords stored
        """
        self.session.execute(delete(BlockedKeyword))
        self.session.add_all(
            BlockedKeyword(position=position, keyword=keyword)
            for position, keyword in enumerate(keywords)
        )
        self.session.flush()
        return len(keywords)


class PreferenceRepository(BaseRepository[Preference]):
    """Repository for Preference model."""

    def __init__(self, session: Session):
        super().__init__(Preference, session)

    def get_value(self, key: str) -> Optional[str]:
        """
        Get a preference value.

        Args:
            key: Preference key

        Returns:
            Stored value or None if not set
        """
        entity = self.get(key)
        return entity.value if entity is not None else None

    def set_value(self, key: str, value: Optional[str]) -> Preference:
        """
        Insert or update a preference value.

        Args:
            key: Preference key
            value: New value

        Returns:
            Stored preference
        """
        entity = self.get(key)
        if entity is None:
            return self.create(key=key, value=value)
        entity.value = value
        self.session.flush()
        return entity
