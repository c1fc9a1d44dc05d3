"""
Build a BookLifecycleService from settings.
"""
import logging

from db import init_db, make_engine, make_session_factory
from repositories import BooksRepository, InMemoryCatalogStore
from services.book_lifecycle import BookLifecycleService
from settings import Settings
from storage.file_storage import FileStorage
from storage.memory_storage import InMemoryAssetStorage

logger = logging.getLogger(__name__)


def build_catalog_store(settings: Settings):
    if settings.CATALOG_BACKEND == "memory":
        return InMemoryCatalogStore()
    if settings.CATALOG_BACKEND != "sql":
        raise ValueError(f"Unknown CATALOG_BACKEND: {settings.CATALOG_BACKEND}")
    engine = make_engine(settings.DATABASE_URL)
    init_db(engine)
    return BooksRepository(make_session_factory(engine))


def build_asset_store(settings: Settings):
    if settings.ASSET_BACKEND == "memory":
        return InMemoryAssetStorage(
            bucket=settings.ASSET_BUCKET,
            public_base_url=settings.ASSET_PUBLIC_BASE_URL,
        )
    if settings.ASSET_BACKEND != "file":
        raise ValueError(f"Unknown ASSET_BACKEND: {settings.ASSET_BACKEND}")
    return FileStorage(
        media_root=settings.MEDIA_ROOT,
        bucket=settings.ASSET_BUCKET,
        public_base_url=settings.ASSET_PUBLIC_BASE_URL,
    )


def build_service(settings: Settings) -> BookLifecycleService:
    logger.info(
        "Catalog backend=%s, asset backend=%s, bucket=%s",
        settings.CATALOG_BACKEND,
        settings.ASSET_BACKEND,
        settings.ASSET_BUCKET,
    )
    return BookLifecycleService(
        catalog=build_catalog_store(settings),
        assets=build_asset_store(settings),
        actor=settings.DEFAULT_ACTOR,
        require_existing_book_for_upload=settings.UPLOAD_REQUIRE_EXISTING_BOOK,
    )
