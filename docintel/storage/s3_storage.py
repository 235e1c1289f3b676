import boto3
from botocore.exceptions import BotoCoreError, ClientError

from docintel.storage.base import BaseStorage, build_storage_key
from docintel.storage.exceptions import StorageUnavailableError


class S3Storage(BaseStorage):
    """Stores documents as objects in an S3 bucket."""

    def __init__(self, bucket: str, region: str = "us-east-1") -> None:
        """
        Initialize S3 client for the document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for the bucket
        """
        if not bucket:
            raise ValueError("aws_s3_bucket is required for storage_backend=s3")
        self._bucket = bucket
        self._s3_client = boto3.client("s3", region_name=region)

    def put(self, data: bytes, content_type: str, original_name: str) -> str:
        key = build_storage_key(original_name)
        try:
            self._s3_client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageUnavailableError(f"File upload failed: {exc}") from exc
        return key

    def get(self, key: str) -> bytes:
        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=key)
            return response["Body"].read()
        except (BotoCoreError, ClientError) as exc:
            raise StorageUnavailableError(f"File retrieval failed: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._s3_client.delete_object(Bucket=self._bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise StorageUnavailableError(f"File deletion failed: {exc}") from exc
