import os
from pathlib import Path

# Basic settings helper to read environment configuration.

BACKEND_ROOT = Path(__file__).resolve().parent


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self) -> None:
        self.CATALOG_BACKEND: str = os.getenv("CATALOG_BACKEND", "sql").lower()
        self.DATABASE_URL: str = os.getenv(
            "DATABASE_URL", f"sqlite:///{BACKEND_ROOT / 'catalog.db'}"
        )
        self.ASSET_BACKEND: str = os.getenv("ASSET_BACKEND", "file").lower()
        self.MEDIA_ROOT: str = os.getenv("MEDIA_ROOT", "media")
        self.ASSET_BUCKET: str = os.getenv("ASSET_BUCKET", "book-images")
        self.ASSET_PUBLIC_BASE_URL: str = os.getenv(
            "ASSET_PUBLIC_BASE_URL", "https://storage.googleapis.com"
        ).rstrip("/")
        self.SERVE_LOCAL_ASSETS: bool = _as_bool(os.getenv("SERVE_LOCAL_ASSETS"), False)
        self.DEFAULT_ACTOR: str = os.getenv("DEFAULT_ACTOR", "catalog-admin")
        self.UPLOAD_REQUIRE_EXISTING_BOOK: bool = _as_bool(
            os.getenv("UPLOAD_REQUIRE_EXISTING_BOOK"), False
        )
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FORMAT: str = os.getenv("LOG_FORMAT", "text")


settings = Settings()
