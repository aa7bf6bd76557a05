"""
ORM models for the messages core configuration store.

This module defines SQLAlchemy ORM models for persisted configuration:
- BlockedKeyword: the user's blocked keywords, in display order
- Preference: simple key/value settings such as the last export path
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class BlockedKeyword(Base):
    """
    A single blocked keyword.

    ``position`` keeps the order keywords were added in; ``keyword`` is unique
    under exact comparison.
    """

    __tablename__ = "blocked_keywords"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    keyword: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<BlockedKeyword(id={self.id}, position={self.position}, keyword={self.keyword!r})>"


class Preference(Base):
    """Key/value configuration entry."""

    __tablename__ = "preferences"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Preference(key={self.key}, value={self.value!r})>"
