"""Business logic for image uploads.

An upload reads the whole file, corrects EXIF orientation, runs the caller's
preprocessing, and stores the result under a deterministic name. Failures
from the stream, the transforms or the bucket reach the caller unchanged.
"""

from typing import BinaryIO

from aws_lambda_powertools import Logger

from image_bucket.core.models.image import (
    ImageExtension,
    ImagePreprocessing,
    PreprocessingFn,
    no_preprocessing,
)
from image_bucket.core.repositories.storage_repository import ImageBucketRepository
from image_bucket.core.utils.constants import PORTRAIT_ROTATION_ANGLE
from image_bucket.core.utils.exif import is_portrait_image
from image_bucket.core.utils.mime import resolve_content_type
from image_bucket.core.utils.url_builder import URLBuilder

logger = Logger(UTC=True)


def read_file(file: BinaryIO | bytes) -> bytes:
    """Read an upload eagerly into memory."""
    if isinstance(file, (bytes, bytearray)):
        return bytes(file)
    return file.read()


def object_key(path: str | None, file_name: str) -> str:
    """Return the storage key of a file under an optional folder path."""
    if path is None:
        return file_name
    return f"{path}/{file_name}"


def download_url(url_builder: URLBuilder, path: str | None, file_name: str) -> str:
    """Return the public URL mirroring ``object_key(path, file_name)``."""
    url = url_builder.init_path()
    if path is not None:
        for segment in path.split("/"):
            url = url.reference(segment)
    return url.get_download_url(file_name)


def upload_image(
    bucket: ImageBucketRepository,
    url_builder: URLBuilder,
    file: BinaryIO | bytes,
    original_file_name: str | None,
    *,
    path: str | None = None,
    file_extension: ImageExtension = ImageExtension.ORIGINAL_FILE_EXTENSION,
    preprocessing: PreprocessingFn = no_preprocessing,
) -> str:
    """Upload an image and return its public download URL.

    The upload flow is:
    1. Read the whole file into memory
    2. Detect a portrait EXIF orientation (fails open)
    3. Run the caller's preprocessing with an ImagePreprocessing context
    4. Rotate portrait images by 90 degrees
    5. Store the bytes with a content type derived from the extension

    Args:
        bucket: Bucket that receives the object
        url_builder: Builder rooted at the bucket's public address
        file: Binary stream or raw bytes of the image
        original_file_name: File name supplied by the uploader
        path: Optional folder prefix, "/"-separated; None stores at the root
        file_extension: Output extension; defaults to the original one
        preprocessing: Transform applied to the raw bytes

    Returns:
        Public download URL of the stored object
    """
    logger.debug(
        "Starting image upload",
        extra={"path": path, "original_file_name": original_file_name},
    )

    file_data = read_file(file)
    is_portrait = is_portrait_image(file_data)

    context = ImagePreprocessing(
        file_extension=file_extension,
        is_portrait=is_portrait,
        original_file_name=original_file_name,
    )

    try:
        processed = preprocessing(context, file_data)
        if is_portrait:
            processed = context.rotate(processed, PORTRAIT_ROTATION_ANGLE)
    except Exception:
        logger.exception(
            "Image preprocessing failed",
            extra={"original_file_name": original_file_name},
        )
        raise

    file_name = context.get_file_name()
    content_type = resolve_content_type(file_extension, original_file_name)
    key = object_key(path, file_name)

    bucket.create(key, processed, content_type)

    url = download_url(url_builder, path, file_name)
    logger.info(
        "Image upload completed",
        extra={
            "key": key,
            "content_type": content_type,
            "is_portrait": is_portrait,
            "size": len(processed),
        },
    )
    return url
