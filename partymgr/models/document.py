"""Key/value rows holding serialized application documents."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, String, Text, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from .base import Base


class StoredDocument(Base):
    """One opaque document stored under a well-known key.

    This is the local key/value store the persistence adapter writes the whole
    application state to. Values are JSON text; the table knows nothing about
    their shape.
    """

    __tablename__ = "app_documents"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    """Well-known key, e.g. ``party_manager_db_v1``."""

    value: Mapped[str] = mapped_column(Text, nullable=False)
    """Serialized document text."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    """Timestamp of the last write (last write wins)."""

    def __init__(
        self,
        *,
        key: str,
        value: str,
        updated_at: Optional[datetime] = None,
    ) -> None:
        self.key = key
        self.value = value
        if updated_at is not None:
            self.updated_at = updated_at

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return "<StoredDocument(key={key}, size={size})>".format(
            key=self.key,
            size=len(self.value or ""),
        )

    @classmethod
    def get_by_key(cls, session: Session, key: str) -> Optional["StoredDocument"]:
        """Return the document stored under ``key`` if it exists."""

        return session.scalar(select(cls).where(cls.key == key))


__all__ = ["StoredDocument"]
