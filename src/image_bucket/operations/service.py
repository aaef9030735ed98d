"""Application-facing facade over the upload and delete operations."""

import os
from typing import BinaryIO

from aws_lambda_powertools import Logger

from image_bucket.core.infrastructure.adapters.s3_adapter import S3Adapter
from image_bucket.core.infrastructure.aws.s3_image_bucket import S3ImageBucket
from image_bucket.core.models.image import (
    ImageExtension,
    PreprocessingFn,
    no_preprocessing,
)
from image_bucket.core.repositories.storage_repository import ImageBucketRepository
from image_bucket.core.utils.constants import ENV_IMAGE_PUBLIC_BASE_URL
from image_bucket.core.utils.url_builder import URLBuilder
from image_bucket.operations.delete_image.service import delete_image
from image_bucket.operations.upload_image.service import upload_image

logger = Logger(UTC=True)


class ImageStorageService:
    """Uploads and deletes images in one bucket.

    The bucket and URL builder are supplied by the hosting application,
    which also owns their lifecycle.
    """

    def __init__(self, bucket: ImageBucketRepository, url_builder: URLBuilder) -> None:
        self.bucket = bucket
        self.url_builder = url_builder

    def upload_image(
        self,
        file: BinaryIO | bytes,
        original_file_name: str | None,
        *,
        path: str | None = None,
        file_extension: ImageExtension = ImageExtension.ORIGINAL_FILE_EXTENSION,
        preprocessing: PreprocessingFn = no_preprocessing,
    ) -> str:
        """Upload an image and return its public download URL."""
        return upload_image(
            self.bucket,
            self.url_builder,
            file,
            original_file_name,
            path=path,
            file_extension=file_extension,
            preprocessing=preprocessing,
        )

    def delete_image(self, path: str) -> bool:
        """Delete the image at ``path``; False if it did not exist."""
        return delete_image(self.bucket, path)


def create_image_storage_service(
    *,
    bucket_name: str | None = None,
    region: str | None = None,
    endpoint_url: str | None = None,
    public_base_url: str | None = None,
) -> ImageStorageService:
    """Build an S3-backed service from arguments or environment configuration.

    Raises:
        ConfigurationError: If no bucket name is configured
    """
    adapter = S3Adapter(bucket_name=bucket_name, region=region, endpoint_url=endpoint_url)

    public_base_url = public_base_url or os.getenv(ENV_IMAGE_PUBLIC_BASE_URL)
    if public_base_url:
        url_builder = URLBuilder(public_base_url)
    else:
        url_builder = URLBuilder.for_bucket(
            adapter.bucket_name,
            region=adapter.region,
            endpoint_url=adapter.endpoint_url,
        )

    logger.debug(
        "Image storage service configured",
        extra={"bucket": adapter.bucket_name, "base_url": url_builder.base_url},
    )
    return ImageStorageService(S3ImageBucket(adapter), url_builder)
