"""
In-memory asset storage for development and tests.
"""
from typing import Dict, Set

from domain.errors import StorageError
from storage.file_storage import build_public_url, validate_key


class InMemoryAssetStorage:
    def __init__(
        self,
        bucket: str = "book-images",
        public_base_url: str = "https://storage.googleapis.com",
    ):
        self.bucket = bucket
        self.public_base_url = public_base_url
        self.objects: Dict[str, bytes] = {}
        self.public_keys: Set[str] = set()

    def put(self, key: str, data: bytes) -> None:
        validate_key(key)
        self.objects[key] = bytes(data)
        # a fresh write is private until made public again
        self.public_keys.discard(key)

    def make_public(self, key: str) -> None:
        validate_key(key)
        if key not in self.objects:
            raise StorageError(f"no such object: {key}")
        self.public_keys.add(key)

    def is_public(self, key: str) -> bool:
        return key in self.public_keys

    def public_url(self, key: str) -> str:
        return build_public_url(self.public_base_url, self.bucket, validate_key(key))

    def exists(self, key: str) -> bool:
        return key in self.objects

    def read(self, key: str) -> bytes:
        try:
            return self.objects[key]
        except KeyError as e:
            raise StorageError(f"no such object: {key}") from e

    def delete(self, key: str) -> None:
        validate_key(key)
        self.objects.pop(key, None)
        self.public_keys.discard(key)
