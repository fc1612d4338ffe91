"""Async repository pattern for database access.

Provides a generic base repository with CRUD operations over a single
table and FastAPI dependency injection. Domain packages subclass this and
set ``model`` (and optionally ``not_found_error``).

Example: BookRepository extending BaseRepository.
"""

from typing import Any, Generic, TypeVar

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NotFoundError
from core.models.base import Base

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)

# Columns the caller may never write
_PROTECTED_COLUMNS = frozenset({"id"})

# Integer primary keys are int4 on PostgreSQL
MAX_ID = 2**31 - 1


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async repository with CRUD over one table.

    Subclass and set `model` to your SQLAlchemy model::

        class BookRepository(BaseRepository[Book]):
            model = Book
            not_found_error = BookNotFoundError

    Writes are flushed, not committed; the session owner (``get_session``)
    commits once per request.
    """

    model: type[ModelT]
    not_found_error: type[NotFoundError] = NotFoundError

    def __init__(self, session: AsyncSession):
        self.session = session

    def _writable(self, data: dict[str, Any]) -> dict[str, Any]:
        columns = self.model.__table__.columns.keys()
        return {
            key: value
            for key, value in data.items()
            if key in columns and key not in _PROTECTED_COLUMNS
        }

    async def _get_or_raise(self, item_id: int) -> ModelT:
        # Ids the column cannot hold were never created
        if not 1 <= item_id <= MAX_ID:
            raise self.not_found_error(item_id)

        item = await self.session.get(self.model, item_id)
        if item is None:
            raise self.not_found_error(item_id)
        return item

    # -- List --

    async def list(self) -> list[dict]:
        """Return every row, in whatever order the store yields them."""
        result = await self.session.execute(select(self.model))
        return [row.to_dict() for row in result.scalars().all()]

    # -- Get by ID --

    async def get(self, item_id: int) -> dict:
        """Get a single item by ID."""
        item = await self._get_or_raise(item_id)
        return item.to_dict()

    # -- Create --

    async def create(self, data: dict[str, Any]) -> dict:
        """Create a new item. The store assigns the id; any id in data is ignored."""
        item = self.model(**self._writable(data))
        self.session.add(item)
        await self.session.flush()
        logger.debug("Created {} id={}", self.model.__tablename__, item.id)
        return item.to_dict()

    # -- Update --

    async def update(self, item_id: int, data: dict[str, Any]) -> None:
        """Replace every writable column of an existing item."""
        item = await self._get_or_raise(item_id)

        for key, value in self._writable(data).items():
            setattr(item, key, value)

        await self.session.flush()
        logger.debug("Updated {} id={}", self.model.__tablename__, item_id)

    # -- Delete --

    async def delete(self, item_id: int) -> None:
        """Delete an item."""
        item = await self._get_or_raise(item_id)

        await self.session.delete(item)
        await self.session.flush()
        logger.debug("Deleted {} id={}", self.model.__tablename__, item_id)
