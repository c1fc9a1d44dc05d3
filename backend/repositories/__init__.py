from .books import BooksRepository
from .memory import InMemoryCatalogStore
from . import models

__all__ = ["BooksRepository", "InMemoryCatalogStore", "models"]
