"""SQLAlchemy models for the bookstore.

A single ``books`` table, no relationships. Column sizes come from
``bookstore.config`` so they match the request validation.
"""

from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.config import config
from core.models.base import Base, IntegerIdMixin

_catalog = config.catalog


class Book(IntegerIdMixin, Base):
    """A book in the catalog."""

    __tablename__ = "books"

    title: Mapped[str] = mapped_column(String(_catalog.title_max_length), nullable=False)
    author: Mapped[str] = mapped_column(String(_catalog.author_max_length), nullable=False)
    isbn: Mapped[str] = mapped_column(String(_catalog.isbn_length), nullable=False)
    price: Mapped[Decimal] = mapped_column(
        Numeric(_catalog.price_max_digits, _catalog.price_decimal_places),
        nullable=False,
    )
    genre: Mapped[str] = mapped_column(String(_catalog.genre_max_length), nullable=False)

    def __repr__(self) -> str:
        return f"<Book id={self.id} isbn={self.isbn!r}>"
