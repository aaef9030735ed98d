"""Image upload/delete helper for S3-compatible object storage."""

from image_bucket.core.models.image import ImageExtension, ImagePreprocessing
from image_bucket.operations.delete_image.service import delete_image
from image_bucket.operations.service import (
    ImageStorageService,
    create_image_storage_service,
)
from image_bucket.operations.upload_image.service import upload_image

__version__ = "1.0.0"
__description__ = (
    "Uploads and deletes images in an object-storage bucket with EXIF-aware preprocessing"
)

__all__ = [
    "ImageExtension",
    "ImagePreprocessing",
    "ImageStorageService",
    "create_image_storage_service",
    "delete_image",
    "upload_image",
]
