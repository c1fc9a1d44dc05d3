"""
Core domain models for the book catalog.
These are framework-agnostic and shared by the stores, the lifecycle
service and the API layer.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional
import uuid

DEFAULT_ACTOR = "catalog-admin"


@dataclass
class BookFields:
    """Validated, coerced user-editable fields of a book."""
    title: str
    price: float
    genre: str

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "price": self.price, "genre": self.genre}


@dataclass
class Book:
    """
    A catalog record.

    image_key names the cover object in the asset store (equal to id by
    convention). image_url is derived from it on read and is never stored.
    """
    id: str
    title: str
    price: float
    genre: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: str = DEFAULT_ACTOR
    updated_by: Optional[str] = None
    image_key: Optional[str] = None
    image_url: Optional[str] = None

    @staticmethod
    def generate_id() -> str:
        return str(uuid.uuid4())
