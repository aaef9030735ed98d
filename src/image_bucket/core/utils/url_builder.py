"""Public download URL composition mirroring the storage key layout."""

from urllib.parse import quote

from image_bucket.core.utils.constants import DEFAULT_AWS_REGION


class URLBuilder:
    """Immutable accumulator of path segments under a public base URL.

    Example:
        URLBuilder("https://cdn.example.com").init_path()
            .reference("avatars").reference("2024")
            .get_download_url("me.png")
        -> "https://cdn.example.com/avatars/2024/me.png"
    """

    def __init__(self, base_url: str, segments: tuple[str, ...] = ()) -> None:
        self.base_url = base_url.rstrip("/")
        self.segments = segments

    @classmethod
    def for_bucket(
        cls,
        bucket_name: str,
        *,
        region: str | None = None,
        endpoint_url: str | None = None,
    ) -> "URLBuilder":
        """Create a builder rooted at a bucket's public S3 address.

        Custom endpoints (LocalStack, MinIO, R2) use path-style addressing.
        """
        if endpoint_url:
            return cls(f"{endpoint_url.rstrip('/')}/{bucket_name}")

        return cls(f"https://{bucket_name}.s3.{region or DEFAULT_AWS_REGION}.amazonaws.com")

    def init_path(self) -> "URLBuilder":
        """Return a builder pointing at the root of the base URL."""
        return URLBuilder(self.base_url)

    def reference(self, segment: str) -> "URLBuilder":
        """Return a new builder with one more path segment appended."""
        return URLBuilder(self.base_url, (*self.segments, quote(segment, safe="")))

    def get_download_url(self, file_name: str) -> str:
        """Return the full download URL of a file under the current path."""
        return "/".join((self.base_url, *self.segments, quote(file_name, safe="")))
