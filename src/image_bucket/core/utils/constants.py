"""Global constants used throughout the package.

This module centralizes the magic numbers, string literals, and environment
variable names shared across modules.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"


# ============================================================================
# EXIF
# ============================================================================

# IFD0 orientation tag (0x0112)
EXIF_ORIENTATION_TAG: Final[int] = 274

# Orientation values that mean the stored pixels are rotated by 90 or 270 degrees
PORTRAIT_ORIENTATIONS: Final[frozenset[int]] = frozenset({6, 8})

PORTRAIT_ROTATION_ANGLE: Final[float] = 90.0


# ============================================================================
# Naming / Content Types
# ============================================================================

CONTENT_TYPE_PREFIX = "image/"
DEFAULT_FILE_STEM = "image"
DEFAULT_FILE_EXTENSION = "bin"
FILE_STEM_INVALID_CHARS = r"[^a-z0-9_-]+"

MIN_QUALITY = 1
MAX_QUALITY = 100

# ============================================================================
# S3
# ============================================================================

S3_MISSING_OBJECT_CODES: Final[frozenset[str]] = frozenset(
    {"404", "NoSuchKey", "NotFound"}
)

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_PUBLIC_BASE_URL = "IMAGE_PUBLIC_BASE_URL"

DEFAULT_AWS_REGION = "us-east-1"
