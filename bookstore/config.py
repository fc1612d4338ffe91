"""Bookstore catalog configuration.

The field limits for a Book live here once and are read by both the
pydantic schemas and the SQLAlchemy column definitions, so the API and
the table can never disagree.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CatalogConfig:
    """Field constraints for catalog records."""

    title_max_length: int = 200
    author_max_length: int = 150
    genre_max_length: int = 50
    isbn_length: int = 13
    # Largest precision a JSON float carries exactly
    price_max_digits: int = 15
    price_decimal_places: int = 2

    @property
    def isbn_pattern(self) -> str:
        return rf"^[0-9]{{{self.isbn_length}}}$"


@dataclass(frozen=True)
class BookstoreConfig:
    """Complete configuration for the bookstore package.

    Usage::

        config = BookstoreConfig.default()
        title: str = Field(..., max_length=config.catalog.title_max_length)
    """

    catalog: CatalogConfig = field(default_factory=CatalogConfig)

    @classmethod
    def default(cls) -> "BookstoreConfig":
        """Create config with all defaults."""
        return cls()


# Default configuration instance
config = BookstoreConfig.default()
