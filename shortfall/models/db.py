"""
SQLAlchemy ORM models for persistent storage.

State is stored as JSON documents keyed by (user_id, key), one row per
logical value (the collection, the deck list).
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserStateDB(Base):
    """
    One stored value for one user.

    The payload is opaque to the database; serialization lives in
    db.operations.
    """

    __tablename__ = "user_state"
    __table_args__ = (UniqueConstraint("user_id", "key", name="uq_user_state_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    key: Mapped[str] = mapped_column(String(100))
    payload: Mapped[Any] = mapped_column(JSON)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<UserStateDB(user_id={self.user_id}, key={self.key})>"
