"""Bookstore catalog: CRUD over a single ``books`` table.

- SQLAlchemy model with an integer store-assigned id
- Pydantic request/response schemas carrying the field constraints
- Async repository over the generic BaseRepository
- FastAPI router mapping five REST verbs onto the repository
- Dataclass configuration for the catalog constraints
"""
