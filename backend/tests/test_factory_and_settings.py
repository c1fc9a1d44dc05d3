import json
import logging

import pytest

from logging_config import JSONFormatter, setup_logging
from repositories import BooksRepository, InMemoryCatalogStore
from services.factory import build_service
from settings import Settings
from storage.file_storage import FileStorage
from storage.memory_storage import InMemoryAssetStorage


def test_settings_defaults(monkeypatch):
    for name in ("CATALOG_BACKEND", "ASSET_BUCKET", "ASSET_PUBLIC_BASE_URL", "DEFAULT_ACTOR"):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert s.CATALOG_BACKEND == "sql"
    assert s.ASSET_BUCKET == "book-images"
    assert s.ASSET_PUBLIC_BASE_URL == "https://storage.googleapis.com"
    assert s.UPLOAD_REQUIRE_EXISTING_BOOK is False


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("ASSET_PUBLIC_BASE_URL", "http://localhost:8000/")
    monkeypatch.setenv("UPLOAD_REQUIRE_EXISTING_BOOK", "yes")
    monkeypatch.setenv("CATALOG_BACKEND", "MEMORY")
    s = Settings()
    assert s.ASSET_PUBLIC_BASE_URL == "http://localhost:8000"
    assert s.UPLOAD_REQUIRE_EXISTING_BOOK is True
    assert s.CATALOG_BACKEND == "memory"


def test_build_service_memory(monkeypatch):
    monkeypatch.setenv("CATALOG_BACKEND", "memory")
    monkeypatch.setenv("ASSET_BACKEND", "memory")
    monkeypatch.setenv("DEFAULT_ACTOR", "librarian")
    service = build_service(Settings())
    assert isinstance(service.catalog, InMemoryCatalogStore)
    assert isinstance(service.assets, InMemoryAssetStorage)
    assert service.create("Dune", 1, "Sci-Fi").created_by == "librarian"


def test_build_service_sql_and_file(monkeypatch, tmp_path):
    monkeypatch.setenv("CATALOG_BACKEND", "sql")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'c.db'}")
    monkeypatch.setenv("ASSET_BACKEND", "file")
    monkeypatch.setenv("MEDIA_ROOT", str(tmp_path / "media"))
    service = build_service(Settings())
    assert isinstance(service.catalog, BooksRepository)
    assert isinstance(service.assets, FileStorage)

    book = service.create("Dune", 15.99, "Sci-Fi")
    url = service.attach_image(book.id, b"cover")
    assert service.list_books()[0].image_url == url
    assert (tmp_path / "media" / "book-images" / book.id).read_bytes() == b"cover"


def test_build_service_unknown_backend(monkeypatch):
    monkeypatch.setenv("CATALOG_BACKEND", "firestore")
    with pytest.raises(ValueError):
        build_service(Settings())


def test_json_formatter_includes_extras():
    record = logging.LogRecord("catalog", logging.WARNING, __file__, 1, "hello %s", ("x",), None)
    record.book_id = "abc"
    out = json.loads(JSONFormatter().format(record))
    assert out["message"] == "hello x"
    assert out["level"] == "WARNING"
    assert out["book_id"] == "abc"


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    named = [h for h in root.handlers if h.get_name() == "book-catalog"]
    assert len(named) == 1
    assert root.level == logging.INFO
