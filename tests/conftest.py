"""
Pytest configuration and fixtures for image-bucket tests.
Provides AWS mocking, S3 fixtures with proper cleanup and Pillow-generated images.
"""

import io
import os
from collections.abc import Callable
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws
from PIL import Image, ImageCms

TEST_BUCKET_NAME = "test-image-bucket"
TEST_REGION = "us-east-1"

EXIF_MAKE_TAG = 0x010F


@pytest.fixture(autouse=True)
def aws_environment(monkeypatch):
    """Point every test at a fake account and a fixed bucket."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.setenv("AWS_REGION", TEST_REGION)
    monkeypatch.setenv("IMAGE_S3_BUCKET_NAME", TEST_BUCKET_NAME)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("IMAGE_PUBLIC_BASE_URL", raising=False)


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete all objects from S3 bucket efficiently."""
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            objects = page.get("Contents", [])
            if objects:
                delete_keys = [{"Key": obj["Key"]} for obj in objects]
                s3_client.delete_objects(
                    Bucket=bucket_name, Delete={"Objects": delete_keys}
                )
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")

    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError:
        s3_client.create_bucket(Bucket=bucket_name)

    yield s3_client

    _cleanup_s3_objects(s3_client, bucket_name)


@pytest.fixture
def s3_put_object(s3_client) -> Callable[[str, bytes, str], dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        response = s3_put_object("avatars/me.jpg", image_bytes, "image/jpeg")
    """

    def _put(key: str, body: bytes, content_type: str = "application/octet-stream"):
        bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")
        return s3_client.put_object(
            Bucket=bucket_name, Key=key, Body=body, ContentType=content_type
        )

    return _put


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str], dict[str, Any]]:
    """
    Helper to get an object from S3, returning body bytes and content type.

    Usage:
        obj = s3_get_object("avatars/me.jpg")
        obj["Body"], obj["ContentType"]
    """

    def _get(key: str) -> dict[str, Any]:
        bucket_name = os.getenv("IMAGE_S3_BUCKET_NAME")
        response: dict[str, Any] = s3_client.get_object(Bucket=bucket_name, Key=key)
        return {
            "Body": response["Body"].read(),
            "ContentType": response.get("ContentType"),
        }

    return _get


def build_image(
    *,
    image_format: str = "JPEG",
    size: tuple[int, int] = (4, 2),
    orientation: int | None = None,
    make: str | None = None,
    icc_profile: bytes | None = None,
    quality: int | None = None,
) -> bytes:
    """Encode a solid-colour image, optionally carrying EXIF tags and an ICC profile."""
    image = Image.new("RGB", size, (200, 30, 30))
    exif = Image.Exif()
    if orientation is not None:
        exif[274] = orientation
    if make is not None:
        exif[EXIF_MAKE_TAG] = make

    options: dict[str, Any] = {}
    if len(exif):
        options["exif"] = exif.tobytes()
    if icc_profile is not None:
        options["icc_profile"] = icc_profile
    if quality is not None:
        options["quality"] = quality

    buffer = io.BytesIO()
    image.save(buffer, format=image_format, **options)
    return buffer.getvalue()


@pytest.fixture
def image_factory() -> Callable[..., bytes]:
    """Factory fixture returning encoded image bytes.

    Usage:
        data = image_factory(orientation=6)
    """
    return build_image


@pytest.fixture
def landscape_jpeg() -> bytes:
    """4x2 JPEG without EXIF data."""
    return build_image()


@pytest.fixture
def portrait_jpeg() -> bytes:
    """4x2 JPEG whose EXIF orientation asks for a 90 degree turn."""
    return build_image(orientation=6)


@pytest.fixture
def srgb_profile() -> bytes:
    """Serialized sRGB ICC profile."""
    return ImageCms.ImageCmsProfile(ImageCms.createProfile("sRGB")).tobytes()
