"""Business logic for image deletion."""

from aws_lambda_powertools import Logger

from image_bucket.core.repositories.storage_repository import ImageBucketRepository

logger = Logger(UTC=True)


def delete_image(bucket: ImageBucketRepository, path: str) -> bool:
    """Delete the object stored at ``path`` if there is one.

    A missing object is not an error: nothing is deleted and False is
    returned. Storage failures propagate.

    Args:
        bucket: Bucket holding the object
        path: Full object key

    Returns:
        True if an existing object was found and deleted, False otherwise
    """
    logger.debug("Starting image deletion", extra={"key": path})

    blob = bucket.get(path)
    if blob is None or not blob.exists():
        logger.info("Image not found, nothing to delete", extra={"key": path})
        return False

    blob.delete()
    return True
