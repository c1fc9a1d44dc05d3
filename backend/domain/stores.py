"""
Store interfaces the lifecycle service depends on.

Implementations raise domain.errors.StorageError for backend failures and
NotFoundError where documented; they never leak driver exceptions.
"""
from typing import List, Protocol

from domain.models import Book, BookFields


class CatalogStore(Protocol):
    def insert(self, fields: BookFields, actor: str) -> str:
        """Create a record and return its new id."""
        ...

    def update(self, book_id: str, fields: BookFields, actor: str) -> None:
        """Overwrite title/price/genre. Raises NotFoundError if absent."""
        ...

    def set_image(self, book_id: str, image_key: str, actor: str) -> None:
        """Record the cover key. Raises NotFoundError if absent."""
        ...

    def get(self, book_id: str) -> Book:
        """Raises NotFoundError if absent."""
        ...

    def list(self) -> List[Book]:
        """All records, newest first; ties by later insertion first."""
        ...

    def delete(self, book_id: str) -> None:
        ...


class AssetStore(Protocol):
    bucket: str

    def put(self, key: str, data: bytes) -> None:
        ...

    def make_public(self, key: str) -> None:
        ...

    def public_url(self, key: str) -> str:
        """Pure function of bucket and key; no I/O."""
        ...

    def read(self, key: str) -> bytes:
        ...

    def exists(self, key: str) -> bool:
        ...

    def is_public(self, key: str) -> bool:
        ...

    def delete(self, key: str) -> None:
        """Deleting an absent key is a no-op."""
        ...
