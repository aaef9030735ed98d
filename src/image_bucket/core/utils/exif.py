"""EXIF orientation lookup for uploaded images."""

import io

from aws_lambda_powertools import Logger
from PIL import Image, TiffImagePlugin

from image_bucket.core.utils.constants import (
    EXIF_ORIENTATION_TAG,
    PORTRAIT_ORIENTATIONS,
)

logger = Logger(UTC=True)


def read_orientation(data: bytes) -> int:
    """Return the IFD0 orientation tag of an image, or 0 when absent.

    Only the embedded EXIF block is read (IFD0 tags for TIFF files); XMP
    orientation hints are ignored. Raises whatever Pillow raises for bytes
    it cannot parse.
    """
    with Image.open(io.BytesIO(data)) as image:
        if isinstance(image, TiffImagePlugin.TiffImageFile):
            return int(image.tag_v2.get(EXIF_ORIENTATION_TAG, 0))

        raw_exif = image.info.get("exif")

    if not raw_exif:
        return 0

    exif = Image.Exif()
    exif.load(raw_exif)
    return int(exif.get(EXIF_ORIENTATION_TAG, 0))


def is_portrait_image(data: bytes) -> bool:
    """Return True when the EXIF orientation says the pixels are turned 90 degrees.

    Orientation 6 and 8 need a quarter turn; every other value, a missing
    tag and unreadable metadata count as not portrait. Parse failures are
    logged and never raised so one malformed file cannot block an upload.
    """
    try:
        orientation = read_orientation(data)
    except Exception:
        logger.warning(
            "Unable to read EXIF orientation, assuming not portrait",
            extra={"size": len(data)},
            exc_info=True,
        )
        return False

    return orientation in PORTRAIT_ORIENTATIONS
