"""
Error taxonomy shared by the stores, the lifecycle service and the API.

ValidationError and NotFoundError carry messages that are safe to show a
client. StorageError messages stay server-side; the API replies with a
generic message per operation.
"""


class CatalogError(Exception):
    """Base class for catalog failures."""


class ValidationError(CatalogError):
    """A required field is missing or cannot be coerced."""


class NotFoundError(CatalogError):
    """The referenced book does not exist."""

    def __init__(self, book_id: str):
        super().__init__(f"Book not found: {book_id}")
        self.book_id = book_id


class StorageError(CatalogError):
    """An underlying catalog or asset store call failed."""


class UploadError(StorageError):
    """Writing an asset or making it public failed."""
