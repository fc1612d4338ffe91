"""Bookstore repository — async database access for the books table."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from core.errors import NotFoundError
from core.repository import BaseRepository
from bookstore.models.db_models import Book


class BookNotFoundError(NotFoundError):
    resource = "book"


# ---------------------------------------------------------------------------
# Book repository
# ---------------------------------------------------------------------------

class BookRepository(BaseRepository[Book]):
    """Repository for book CRUD operations."""

    model = Book
    not_found_error = BookNotFoundError


# ---------------------------------------------------------------------------
# FastAPI dependency factories
# ---------------------------------------------------------------------------

def get_book_repository(
    session: AsyncSession = Depends(get_session),
) -> BookRepository:
    """FastAPI dependency for BookRepository."""
    return BookRepository(session)
