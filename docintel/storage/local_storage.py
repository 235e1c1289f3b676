from pathlib import Path, PurePosixPath

from docintel.storage.base import BaseStorage, build_storage_key
from docintel.storage.exceptions import StorageUnavailableError


class LocalStorage(BaseStorage):
    """Stores documents as flat files under a root directory."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)

    def put(self, data: bytes, content_type: str, original_name: str) -> str:
        _ = content_type
        key = build_storage_key(original_name)
        try:
            self._resolve_path(key).write_bytes(data)
        except OSError as exc:
            raise StorageUnavailableError(f"File upload failed: {exc}") from exc
        return key

    def get(self, key: str) -> bytes:
        path = self._resolve_path(key)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageUnavailableError(f"File retrieval failed: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._resolve_path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageUnavailableError(f"File deletion failed: {exc}") from exc

    def _resolve_path(self, key: str) -> Path:
        return self._root / PurePosixPath(key).name
