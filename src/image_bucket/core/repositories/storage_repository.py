"""Abstract contract for the bucket that stores uploaded images."""

from abc import ABC, abstractmethod


class ImageBlob(ABC):
    """Handle to a single object in the bucket."""

    path: str

    @abstractmethod
    def exists(self) -> bool:
        """Return True if the object is currently stored.

        Raises:
            Whatever the storage client raises for failures other than
            a missing object
        """

    @abstractmethod
    def delete(self) -> None:
        """Remove the object from the bucket."""


class ImageBucketRepository(ABC):
    """Contract for storing and removing image objects.

    Implementations could be S3, GCS, local disk, etc.
    Operations depend on this interface, not the implementation.
    Authentication is the implementation's concern.
    """

    @abstractmethod
    def get(self, path: str) -> ImageBlob | None:
        """Return a handle for the object at ``path``.

        Args:
            path: Full object key

        Returns:
            The object handle, or None when no such object exists
        """

    @abstractmethod
    def create(self, path: str, data: bytes, content_type: str) -> ImageBlob:
        """Store bytes at ``path``, replacing any existing object.

        Args:
            path: Full object key
            data: Binary image content
            content_type: MIME type (e.g., 'image/jpeg')

        Returns:
            Handle to the stored object
        """
