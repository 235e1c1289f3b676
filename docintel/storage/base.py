from abc import ABC, abstractmethod
from pathlib import PurePath
from uuid import uuid4


def build_storage_key(original_name: str) -> str:
    """Build a unique object key: documents/{uuid4}{ext}"""
    return f"documents/{uuid4()}{PurePath(original_name).suffix.lower()}"


class BaseStorage(ABC):
    """Contract for raw document byte storage."""

    @abstractmethod
    def put(self, data: bytes, content_type: str, original_name: str) -> str:
        """Store bytes under a freshly generated key and return the key.

        Raises:
            StorageUnavailableError: if the object cannot be written.
        """

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Return the bytes stored under ``key``.

        Raises:
            StorageUnavailableError: if the object cannot be read.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the object stored under ``key``.

        Raises:
            StorageUnavailableError: if the backend rejects the deletion.
        """
