"""
Book lifecycle workflows over the catalog store and the asset store.

There is no transaction spanning the two stores. Ordering is what keeps
readers safe: a cover object is written and made public before the
record references it. The remaining gaps are accepted:

- record update fails after a public write: the object stays as an orphan
- upload for an id with no record: the object is written and then the
  record update fails (unless require_existing_book_for_upload is set)
- cover cleanup on delete is best effort
"""
import logging
import math
from dataclasses import replace
from typing import Any, List, Optional

from domain.errors import NotFoundError, StorageError, UploadError, ValidationError
from domain.models import DEFAULT_ACTOR, Book, BookFields
from domain.stores import AssetStore, CatalogStore

logger = logging.getLogger(__name__)


def _require_text(name: str, value: Any) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing required field: {name}")
    return value.strip()


def coerce_price(value: Any) -> float:
    """Coerce a price from a number or numeric string."""
    if value is None or isinstance(value, bool):
        raise ValidationError("Missing required field: price")
    if isinstance(value, str):
        if not value.strip():
            raise ValidationError("Missing required field: price")
        value = value.strip()
    try:
        price = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"Price must be a number, got {value!r}")
    if not math.isfinite(price):
        raise ValidationError(f"Price must be a finite number, got {value!r}")
    return price


def validate_fields(title: Any, price: Any, genre: Any) -> BookFields:
    return BookFields(
        title=_require_text("title", title),
        price=coerce_price(price),
        genre=_require_text("genre", genre),
    )


class BookLifecycleService:
    """Create, update, attach a cover to, and delete catalog books."""

    def __init__(
        self,
        catalog: CatalogStore,
        assets: AssetStore,
        actor: str = DEFAULT_ACTOR,
        require_existing_book_for_upload: bool = False,
    ) -> None:
        self.catalog = catalog
        self.assets = assets
        self.actor = actor
        self.require_existing_book_for_upload = require_existing_book_for_upload

    def _with_url(self, book: Book) -> Book:
        if book.image_key:
            return replace(book, image_url=self.assets.public_url(book.image_key))
        return book

    def create(self, title: Any, price: Any, genre: Any) -> Book:
        fields = validate_fields(title, price, genre)
        book_id = self.catalog.insert(fields, self.actor)
        logger.info("Created book %s", book_id, extra={"book_id": book_id})
        return Book(id=book_id, created_by=self.actor, **fields.to_dict())

    def attach_image(self, book_id: Any, image_bytes: Optional[bytes]) -> str:
        """Store the cover for book_id and point the record at it.

        Returns the public URL of the cover.
        """
        if not book_id or not isinstance(book_id, str):
            raise ValidationError("Missing required field: bookId")
        if not image_bytes:
            raise ValidationError("Missing required field: imageBase64")

        if self.require_existing_book_for_upload:
            self.catalog.get(book_id)

        key = book_id
        try:
            self.assets.put(key, image_bytes)
            self.assets.make_public(key)
        except StorageError as e:
            raise UploadError(f"upload failed for {key}") from e
        url = self.assets.public_url(key)

        try:
            self.catalog.set_image(book_id, key, self.actor)
        except (NotFoundError, StorageError) as e:
            logger.warning(
                "Cover %s/%s is public but book %s was not updated; leaving orphaned asset",
                self.assets.bucket,
                key,
                book_id,
                extra={"book_id": book_id, "asset_key": key},
            )
            if isinstance(e, NotFoundError):
                raise StorageError(f"no book record for uploaded cover {key}") from e
            raise
        logger.info("Attached cover to book %s", book_id, extra={"book_id": book_id})
        return url

    def update(self, book_id: str, title: Any, price: Any, genre: Any) -> Book:
        fields = validate_fields(title, price, genre)
        try:
            self.catalog.update(book_id, fields, self.actor)
        except NotFoundError as e:
            # updates of unknown ids surface as store failures, not 404s
            raise StorageError(f"update failed: {e}") from e
        logger.info("Updated book %s", book_id, extra={"book_id": book_id})
        return Book(id=book_id, updated_by=self.actor, **fields.to_dict())

    def delete(self, book_id: str) -> None:
        book = self.catalog.get(book_id)

        key = book.image_key
        if key:
            try:
                self.assets.delete(key)
            except Exception:
                logger.warning(
                    "Error deleting cover %s for book %s",
                    key,
                    book_id,
                    exc_info=True,
                    extra={"book_id": book_id, "asset_key": key},
                )

        self.catalog.delete(book_id)
        logger.info("Deleted book %s", book_id, extra={"book_id": book_id})

    def get_book(self, book_id: str) -> Book:
        return self._with_url(self.catalog.get(book_id))

    def list_books(self) -> List[Book]:
        return [self._with_url(b) for b in self.catalog.list()]
