"""Bookstore API router — CRUD over /books.

Each endpoint maps one-to-one onto a repository call:
- Request bodies are validated by the pydantic schemas before the handler runs
- Missing rows surface as BookNotFoundError, turned into 404 by the app
- Repository injection via FastAPI Depends
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from bookstore.models.schemas import BookCreate, BookRead, BookUpdate
from bookstore.repository import BookRepository, get_book_repository

router = APIRouter()


@router.get("/books", response_model=list[BookRead])
async def list_books(
    repo: BookRepository = Depends(get_book_repository),
):
    """List every book in the catalog."""
    return await repo.list()


@router.get("/books/{book_id}", response_model=BookRead)
async def get_book(
    book_id: int,
    repo: BookRepository = Depends(get_book_repository),
):
    """Get a single book."""
    return await repo.get(book_id)


@router.post("/books", response_model=BookRead, status_code=status.HTTP_201_CREATED)
async def create_book(
    payload: BookCreate,
    request: Request,
    response: Response,
    repo: BookRepository = Depends(get_book_repository),
):
    """Add a new book to the catalog."""
    book = await repo.create(payload.model_dump(exclude={"id"}))
    response.headers["Location"] = str(request.url_for("get_book", book_id=book["id"]))
    return book


@router.put("/books/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_book(
    book_id: int,
    payload: BookUpdate,
    repo: BookRepository = Depends(get_book_repository),
):
    """Replace every field of a book."""
    if payload.id and payload.id != book_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Body id {payload.id} does not match path id {book_id}",
        )

    await repo.update(book_id, payload.model_dump(exclude={"id"}))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/books/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(
    book_id: int,
    repo: BookRepository = Depends(get_book_repository),
):
    """Remove a book from the catalog."""
    await repo.delete(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
