from image_bucket.core.models.image import ImageExtension
from image_bucket.core.utils.constants import CONTENT_TYPE_PREFIX
from image_bucket.core.utils.naming import last_dot_segment


def resolve_content_type(
    file_extension: ImageExtension,
    original_file_name: str | None,
) -> str:
    """Return the content type stored alongside an uploaded image.

    The original-extension branch trusts the uploaded file name; the bytes
    are not inspected.
    """
    if file_extension is ImageExtension.ORIGINAL_FILE_EXTENSION:
        return f"{CONTENT_TYPE_PREFIX}{last_dot_segment(original_file_name)}"

    return f"{CONTENT_TYPE_PREFIX}{file_extension.extension}"
