"""
File storage for book cover assets.

Objects live in a bucket directory on the local filesystem:
- {media_root}/{bucket}/{key}

An object is written owner-only and becomes world-readable once
make_public() is called. Public URLs follow the object-store convention
{public_base_url}/{bucket}/{key} and are computed without touching disk.
"""
import logging
import os
import stat
import tempfile
from pathlib import Path

from domain.errors import StorageError, ValidationError

logger = logging.getLogger(__name__)

PRIVATE_MODE = 0o600
PUBLIC_MODE = 0o644


def validate_key(key: str) -> str:
    """Object keys are single path segments."""
    if not key or not isinstance(key, str):
        raise ValidationError("Asset key is required")
    if "/" in key or "\\" in key or key in (".", "..") or "\x00" in key:
        raise ValidationError(f"Invalid asset key: {key!r}")
    return key


def build_public_url(public_base_url: str, bucket: str, key: str) -> str:
    return f"{public_base_url.rstrip('/')}/{bucket}/{key}"


class FileStorage:
    """
    Local bucket storage implementation.

    Mirrors the small surface the catalog needs from a managed object
    store: put, make_public, public_url, read and delete.
    """

    def __init__(
        self,
        media_root: str = "media",
        bucket: str = "book-images",
        public_base_url: str = "https://storage.googleapis.com",
    ):
        self.media_root = Path(media_root)
        self.bucket = bucket
        self.public_base_url = public_base_url
        self.bucket_dir = self.media_root / bucket
        self.bucket_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.bucket_dir / validate_key(key)

    def put(self, key: str, data: bytes) -> None:
        """
        Write an object, replacing any existing one with the same key.

        The write goes through a temp file in the bucket directory so a
        reader never sees a partially written object.
        """
        path = self._path(key)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.bucket_dir, prefix=".upload-")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.chmod(tmp_name, PRIVATE_MODE)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.exception("Failed to write asset %s/%s", self.bucket, key)
            raise StorageError(f"write failed for {key}") from e
        logger.debug("Wrote asset %s/%s (%d bytes)", self.bucket, key, len(data))

    def make_public(self, key: str) -> None:
        path = self._path(key)
        try:
            os.chmod(path, PUBLIC_MODE)
        except OSError as e:
            logger.exception("Failed to make asset %s/%s public", self.bucket, key)
            raise StorageError(f"make_public failed for {key}") from e

    def is_public(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        return bool(path.stat().st_mode & stat.S_IROTH)

    def public_url(self, key: str) -> str:
        return build_public_url(self.public_base_url, self.bucket, validate_key(key))

    def exists(self, key: str) -> bool:
        return self._path(key).exists()

    def read(self, key: str) -> bytes:
        path = self._path(key)
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageError(f"read failed for {key}") from e

    def delete(self, key: str) -> None:
        """Delete an object. A missing object counts as already deleted."""
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug("Asset %s/%s already absent", self.bucket, key)
        except OSError as e:
            raise StorageError(f"delete failed for {key}") from e
