"""S3-backed implementation of ImageBucketRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from image_bucket.core.infrastructure.adapters.s3_adapter import S3Adapter
from image_bucket.core.repositories.storage_repository import (
    ImageBlob,
    ImageBucketRepository,
)
from image_bucket.core.utils.constants import S3_MISSING_OBJECT_CODES

logger = Logger(UTC=True)


def _is_missing_object(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") in S3_MISSING_OBJECT_CODES


class S3ImageBlob(ImageBlob):
    """Handle to one object key in an S3 bucket."""

    def __init__(self, adapter: S3Adapter, path: str) -> None:
        self._s3 = adapter
        self.path = path

    def exists(self) -> bool:
        try:
            self._s3.head_object(key=self.path)
        except ClientError as exc:
            if _is_missing_object(exc):
                return False
            logger.exception("S3 existence check failed", extra={"key": self.path})
            raise

        return True

    def delete(self) -> None:
        logger.debug("Deleting image", extra={"key": self.path})

        try:
            self._s3.delete_object(key=self.path)
        except ClientError:
            logger.exception("S3 deletion failed", extra={"key": self.path})
            raise

        logger.info("Image deleted successfully", extra={"key": self.path})


class S3ImageBucket(ImageBucketRepository):
    """Image bucket implementation backed by Amazon S3.

    Client errors are logged and re-raised untouched; callers decide
    how to present storage failures.
    """

    def __init__(self, adapter: S3Adapter | None = None) -> None:
        """Create the bucket using the provided S3 adapter."""
        self._s3 = adapter or S3Adapter()

    def get(self, path: str) -> S3ImageBlob | None:
        blob = S3ImageBlob(self._s3, path)
        return blob if blob.exists() else None

    def create(self, path: str, data: bytes, content_type: str) -> S3ImageBlob:
        logger.debug(
            "Uploading image",
            extra={"key": path, "content_type": content_type, "size": len(data)},
        )

        try:
            self._s3.put_object(key=path, body=data, content_type=content_type)
        except ClientError:
            logger.exception("S3 upload failed", extra={"key": path})
            raise

        logger.info("Image uploaded successfully", extra={"key": path})
        return S3ImageBlob(self._s3, path)
