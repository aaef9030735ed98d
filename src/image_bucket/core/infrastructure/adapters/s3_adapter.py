"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Mapping
import os
from typing import Any, Protocol

import boto3

from image_bucket.core.models.errors import ConfigurationError
from image_bucket.core.utils.constants import (
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_IMAGE_S3_BUCKET_NAME,
)


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
    ) -> Any: ...

    def head_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Mapping[str, Any]: ...

    def delete_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Any: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Does NOT handle errors (lets them bubble up)
    - Falls back to environment configuration for anything not passed in
    """

    def __init__(
        self,
        *,
        bucket_name: str | None = None,
        region: str | None = None,
        endpoint_url: str | None = None,
        client: Any | None = None,
    ) -> None:
        """Create S3 client from arguments or environment configuration."""
        bucket_name = bucket_name or os.getenv(ENV_IMAGE_S3_BUCKET_NAME)
        if not bucket_name:
            raise ConfigurationError(
                message=f"{ENV_IMAGE_S3_BUCKET_NAME} environment variable is not set",
                details={"variable": ENV_IMAGE_S3_BUCKET_NAME},
            )

        self.bucket_name = bucket_name
        self.region = region or os.getenv(ENV_AWS_REGION)
        self.endpoint_url = endpoint_url or os.getenv(ENV_AWS_ENDPOINT_URL)
        self._client: _Boto3S3Client = client or boto3.client(
            "s3",
            endpoint_url=self.endpoint_url,
            region_name=self.region,
        )

    def put_object(self, *, key: str, body: bytes, content_type: str) -> None:
        """Store object in S3.
        Raises boto3 exceptions.
        """
        self._client.put_object(
            Bucket=self.bucket_name,
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    def head_object(self, *, key: str) -> Mapping[str, Any]:
        """Fetch object headers from S3.
        Raises boto3 exceptions, including a 404 ClientError for missing keys.
        """
        return self._client.head_object(
            Bucket=self.bucket_name,
            Key=key,
        )

    def delete_object(self, *, key: str) -> None:
        """Delete object from S3.
        Raises boto3 exceptions.
        """
        self._client.delete_object(
            Bucket=self.bucket_name,
            Key=key,
        )
