"""Pydantic schemas for API request/response validation."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

from bookstore.config import config

_catalog = config.catalog

# Emitted as a JSON number, validated as an exact Decimal
Price = Annotated[
    Decimal,
    Field(
        gt=0,
        max_digits=_catalog.price_max_digits,
        decimal_places=_catalog.price_decimal_places,
    ),
    PlainSerializer(float, return_type=float, when_used="json"),
]


# ---------------------------------------------------------------------------
# Shared fields
# ---------------------------------------------------------------------------

class BookBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=_catalog.title_max_length)
    author: str = Field(..., min_length=1, max_length=_catalog.author_max_length)
    isbn: str = Field(..., pattern=_catalog.isbn_pattern)
    price: Price
    genre: str = Field(..., min_length=1, max_length=_catalog.genre_max_length)

    @field_validator("title", "author", "genre")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class BookCreate(BookBase):
    # Accepted for symmetry with BookRead; the store assigns the real id.
    id: int = 0


class BookUpdate(BookBase):
    id: int = 0


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class BookRead(BookBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
