"""
Books API routes.
"""
import logging
from datetime import datetime
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from api.dependencies import get_service
from domain.errors import StorageError
from domain.models import Book
from services.book_lifecycle import BookLifecycleService

router = APIRouter()
logger = logging.getLogger(__name__)


class BookPayload(BaseModel):
    # Types are checked by the service so that bad input is a 400, not a 422
    title: Any = None
    price: Any = None
    genre: Any = None


class BookResponse(BaseModel):
    id: str
    title: str
    price: float
    genre: str


class BookDetailResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    price: float
    genre: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    image_url: Optional[str] = None


class DeleteResponse(BaseModel):
    id: str
    message: str


def book_to_response(book: Book) -> BookResponse:
    return BookResponse(id=book.id, title=book.title, price=book.price, genre=book.genre)


def book_to_detail(book: Book) -> BookDetailResponse:
    return BookDetailResponse(
        id=book.id,
        title=book.title,
        price=book.price,
        genre=book.genre,
        created_at=book.created_at,
        updated_at=book.updated_at,
        created_by=book.created_by,
        updated_by=book.updated_by,
        image_url=book.image_url,
    )


@router.post("", response_model=BookResponse, status_code=201)
def create_book(data: BookPayload, service: BookLifecycleService = Depends(get_service)):
    """Create a new book."""
    try:
        book = service.create(data.title, data.price, data.genre)
    except StorageError:
        logger.exception("Error creating book")
        raise HTTPException(status_code=500, detail="Could not create book")
    return book_to_response(book)


@router.get(
    "",
    response_model=List[BookDetailResponse],
    response_model_exclude_none=True,
)
def list_books(service: BookLifecycleService = Depends(get_service)):
    """List all books, newest first."""
    try:
        books = service.list_books()
    except StorageError:
        logger.exception("Fetch error")
        raise HTTPException(status_code=500, detail="Failed to retrieve books")
    return [book_to_detail(b) for b in books]


@router.get(
    "/{book_id}",
    response_model=BookDetailResponse,
    response_model_exclude_none=True,
)
def get_book(book_id: str, service: BookLifecycleService = Depends(get_service)):
    """Get a book by ID."""
    try:
        book = service.get_book(book_id)
    except StorageError:
        logger.exception("Fetch error for book %s", book_id)
        raise HTTPException(status_code=500, detail="Failed to retrieve book")
    return book_to_detail(book)


@router.put("/{book_id}", response_model=BookResponse)
def update_book(
    book_id: str,
    data: BookPayload,
    service: BookLifecycleService = Depends(get_service),
):
    """Overwrite title, price and genre. The cover is left as is."""
    try:
        book = service.update(book_id, data.title, data.price, data.genre)
    except StorageError:
        logger.exception("Update error for book %s", book_id)
        raise HTTPException(status_code=500, detail="Update failed")
    return book_to_response(book)


@router.delete("/{book_id}", response_model=DeleteResponse)
def delete_book(book_id: str, service: BookLifecycleService = Depends(get_service)):
    """Delete a book and, best effort, its cover."""
    try:
        service.delete(book_id)
    except StorageError:
        logger.exception("Delete error for book %s", book_id)
        raise HTTPException(status_code=500, detail="Delete failed")
    return DeleteResponse(id=book_id, message="Book deleted successfully")
