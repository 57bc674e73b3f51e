from blog_api.errors import HttpError
from blog_api.extensions.file_storage import file_size


ALLOWED_IMAGE_MIME_TYPES = {
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/gif",
}


def require_non_empty_string(value):
    return isinstance(value, str) and value.strip()


def has_upload(file_storage) -> bool:
    return file_storage is not None and bool(getattr(file_storage, "filename", ""))


def check_image_upload(file_storage, max_bytes: int, too_big_message: str, too_big_code: int):
    """Validate type and size of an upload before anything is written."""
    mimetype = getattr(file_storage, "mimetype", None) or ""
    if mimetype not in ALLOWED_IMAGE_MIME_TYPES:
        raise HttpError(f"Unsupported media type: {mimetype or 'unknown'}", 422)

    size = file_size(file_storage)
    if size < 0:
        raise HttpError("Could not determine file size.", 400)
    if size > max_bytes:
        raise HttpError(too_big_message, too_big_code)
