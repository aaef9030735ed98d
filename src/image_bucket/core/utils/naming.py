"""Helpers for deriving object names from uploaded file names."""

import re
from pathlib import PurePosixPath

from image_bucket.core.utils.constants import (
    DEFAULT_FILE_EXTENSION,
    DEFAULT_FILE_STEM,
    FILE_STEM_INVALID_CHARS,
)


def last_dot_segment(file_name: str | None) -> str | None:
    """Return the text after the last "." of a file name, case preserved.

    A name without any dot is returned whole, and ``None`` stays ``None``.
    """
    if file_name is None:
        return None
    return file_name.split(".")[-1]


def original_extension(file_name: str | None) -> str:
    """Return the original file extension, or ``bin`` when there is none."""
    if not file_name or "." not in file_name:
        return DEFAULT_FILE_EXTENSION

    extension = last_dot_segment(file_name)
    return extension or DEFAULT_FILE_EXTENSION


def file_stem(file_name: str | None) -> str:
    """Return a lower-case, URL-safe stem for an uploaded file name.

    Example:
        "My Holiday Photo.JPG" -> "my-holiday-photo"
    """
    if not file_name:
        return DEFAULT_FILE_STEM

    stem = PurePosixPath(file_name).name.rsplit(".", 1)[0].lower()
    stem = re.sub(FILE_STEM_INVALID_CHARS, "-", stem).strip("-")

    return stem or DEFAULT_FILE_STEM
