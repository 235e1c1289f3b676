from pathlib import Path

from docintel.config.settings import Settings
from docintel.storage.base import BaseStorage
from docintel.storage.local_storage import LocalStorage
from docintel.storage.s3_storage import S3Storage


class StorageFactory:
    """Creates the configured storage backend."""

    BACKENDS = ("local", "s3")

    @classmethod
    def create(cls, settings: Settings) -> BaseStorage:
        backend = settings.storage_backend.lower()
        if backend == "local":
            return LocalStorage(Path(settings.upload_dir))
        if backend == "s3":
            return S3Storage(bucket=settings.aws_s3_bucket, region=settings.aws_region)
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
