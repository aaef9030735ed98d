"""Image extension selector and the per-upload preprocessing context."""

import io
from collections.abc import Callable
from enum import Enum
from typing import Any

from aws_lambda_powertools import Logger
from PIL import Image, JpegImagePlugin
from pydantic import BaseModel, ConfigDict, Field

from image_bucket.core.models.errors import ValidationError
from image_bucket.core.utils.constants import MAX_QUALITY, MIN_QUALITY
from image_bucket.core.utils.naming import file_stem, original_extension

logger = Logger(UTC=True)


class ImageExtension(Enum):
    """Target extension of an uploaded image.

    Each member carries the extension label used for the object name and
    content type, plus the Pillow encoder used when re-encoding.
    """

    ORIGINAL_FILE_EXTENSION = ("", None)
    JPEG = ("jpeg", "JPEG")
    PNG = ("png", "PNG")
    WEBP = ("webp", "WEBP")
    GIF = ("gif", "GIF")

    def __init__(self, extension: str, pillow_format: str | None) -> None:
        self.extension = extension
        self.pillow_format = pillow_format


class ImagePreprocessing(BaseModel):
    """Context handed to preprocessing functions during a single upload.

    It knows the requested output extension, whether the source image is
    stored rotated (portrait EXIF orientation) and the original file name,
    and offers the transforms a preprocessing function usually needs.
    """

    model_config = ConfigDict(frozen=True)

    file_extension: ImageExtension = Field(
        ImageExtension.ORIGINAL_FILE_EXTENSION,
        description="Requested output extension",
    )
    is_portrait: bool = Field(
        False, description="Source EXIF orientation needs a 90 degree turn"
    )
    original_file_name: str | None = Field(
        None, description="File name supplied by the uploader"
    )

    def get_file_name(self) -> str:
        """Return the object name for this upload.

        The name only depends on the original file name and the requested
        extension, so uploading the same file twice targets the same object.
        """
        if self.file_extension is ImageExtension.ORIGINAL_FILE_EXTENSION:
            extension = original_extension(self.original_file_name)
        else:
            extension = self.file_extension.extension

        return f"{file_stem(self.original_file_name)}.{extension}"

    def output_format(self, image: Image.Image) -> str:
        """Return the Pillow format used to encode a transformed image."""
        return self.file_extension.pillow_format or image.format or "PNG"

    def rotate(self, data: bytes, angle: float) -> bytes:
        """Rotate image bytes clockwise by ``angle`` degrees."""
        with Image.open(io.BytesIO(data)) as image:
            image_format = self.output_format(image)
            options = _encoder_options(image, image_format)
            rotated = image.rotate(-angle, expand=True)

        logger.debug(
            "Image rotated",
            extra={"angle": angle, "format": image_format, "size": rotated.size},
        )
        return _encode(rotated, image_format, options)

    def resize(
        self,
        data: bytes,
        *,
        max_width: int | None = None,
        max_height: int | None = None,
    ) -> bytes:
        """Shrink an image to fit the given bounds, keeping its aspect ratio.

        Images already within bounds are returned unchanged.

        Raises:
            ValidationError: If a bound is not a positive integer
        """
        for name, bound in (("max_width", max_width), ("max_height", max_height)):
            if bound is not None and bound <= 0:
                raise ValidationError(
                    message=f"{name} must be a positive integer",
                    details={name: bound},
                )

        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size
            target_width = min(max_width or width, width)
            target_height = min(max_height or height, height)

            if (target_width, target_height) == (width, height):
                return data

            image_format = self.output_format(image)
            options = _encoder_options(image, image_format)
            resized = image.copy()
            resized.thumbnail((target_width, target_height), Image.Resampling.LANCZOS)

        logger.debug(
            "Image resized",
            extra={"from": (width, height), "to": resized.size},
        )
        return _encode(resized, image_format, options)

    def convert(self, data: bytes, *, quality: int | None = None) -> bytes:
        """Re-encode image bytes into the requested extension's format.

        Raises:
            ValidationError: If quality is outside 1..100
        """
        if quality is not None and not MIN_QUALITY <= quality <= MAX_QUALITY:
            raise ValidationError(
                message=f"quality must be between {MIN_QUALITY} and {MAX_QUALITY}",
                details={"quality": quality},
            )

        with Image.open(io.BytesIO(data)) as image:
            image_format = self.output_format(image)
            image.load()
            return _encode(
                image, image_format, _encoder_options(image, image_format, quality=quality)
            )


PreprocessingFn = Callable[[ImagePreprocessing, bytes], bytes]


def no_preprocessing(context: ImagePreprocessing, data: bytes) -> bytes:
    """Default preprocessing step: keep the bytes as uploaded."""
    return data


def _encoder_options(
    source: Image.Image, image_format: str, *, quality: int | None = None
) -> dict[str, Any]:
    """Return save options that carry the source colour profile and JPEG tables over.

    JPEG to JPEG re-encodes reuse the source quantization tables and chroma
    subsampling unless an explicit quality is requested.
    """
    options: dict[str, Any] = {}

    icc_profile = source.info.get("icc_profile")
    if icc_profile:
        options["icc_profile"] = icc_profile

    if quality is not None:
        options["quality"] = quality
    elif image_format == "JPEG" and isinstance(source, JpegImagePlugin.JpegImageFile):
        options["qtables"] = source.quantization
        options["subsampling"] = JpegImagePlugin.get_sampling(source)

    return options


def _encode(image: Image.Image, image_format: str, options: dict[str, Any]) -> bytes:
    # JPEG has no alpha channel or palette
    if image_format == "JPEG" and image.mode not in ("RGB", "L", "CMYK"):
        image = image.convert("RGB")

    buffer = io.BytesIO()
    image.save(buffer, format=image_format, **options)
    return buffer.getvalue()
