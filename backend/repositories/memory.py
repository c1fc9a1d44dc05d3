"""
In-memory catalog store for development and tests.
"""
from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, List

from domain.errors import NotFoundError
from domain.models import Book, BookFields


class InMemoryCatalogStore:
    def __init__(self, clock: Callable[[], datetime] = datetime.utcnow) -> None:
        self._clock = clock
        self._books: Dict[str, Book] = {}
        self._seq: Dict[str, int] = {}
        self._next_seq = 1

    def _require(self, book_id: str) -> Book:
        book = self._books.get(book_id)
        if book is None:
            raise NotFoundError(book_id)
        return book

    def _touch(self, book: Book, actor: str) -> None:
        book.updated_at = max(self._clock(), book.updated_at, book.created_at)
        book.updated_by = actor

    def insert(self, fields: BookFields, actor: str) -> str:
        now = self._clock()
        book = Book(
            id=Book.generate_id(),
            title=fields.title,
            price=fields.price,
            genre=fields.genre,
            created_at=now,
            updated_at=now,
            created_by=actor,
        )
        self._books[book.id] = book
        self._seq[book.id] = self._next_seq
        self._next_seq += 1
        return book.id

    def update(self, book_id: str, fields: BookFields, actor: str) -> None:
        book = self._require(book_id)
        book.title = fields.title
        book.price = fields.price
        book.genre = fields.genre
        self._touch(book, actor)

    def set_image(self, book_id: str, image_key: str, actor: str) -> None:
        book = self._require(book_id)
        book.image_key = image_key
        self._touch(book, actor)

    def get(self, book_id: str) -> Book:
        return replace(self._require(book_id))

    def list(self) -> List[Book]:
        ordered = sorted(
            self._books.values(),
            key=lambda b: (b.created_at, self._seq[b.id]),
            reverse=True,
        )
        return [replace(b) for b in ordered]

    def delete(self, book_id: str) -> None:
        self._books.pop(book_id, None)
        self._seq.pop(book_id, None)

    def __len__(self) -> int:
        return len(self._books)
