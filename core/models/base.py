"""Base model and mixins for all SQLAlchemy models.

Provides:
- Base: Declarative base class for all models
- IntegerIdMixin: Store-assigned integer primary key

Ids come from the database sequence and are never reused after a delete
(AUTOINCREMENT on SQLite, identity/serial on PostgreSQL).
"""

from typing import Any

from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all Bookstore models."""

    def to_dict(self) -> dict[str, Any]:
        """Serialise mapped columns to a plain dict keyed by column name."""
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}


class IntegerIdMixin:
    """Mixin providing an auto-incrementing integer primary key."""

    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
