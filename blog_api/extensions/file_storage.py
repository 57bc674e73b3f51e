import logging
import os
import uuid

from flask import current_app
from werkzeug.utils import secure_filename


logger = logging.getLogger(__name__)


def upload_folder() -> str:
    return current_app.config["UPLOAD_FOLDER"]


def upload_path(filename: str) -> str:
    return os.path.join(upload_folder(), filename)


def unique_filename(original: str, prefix: str | None = None) -> str:
    """Build a collision-free name from the uploaded name and a UUID.

    ``prefix`` replaces the original stem (avatars use ``"avatar"``); the
    original extension is kept either way.
    """
    stem, extension = os.path.splitext(original or "")
    extension = secure_filename(extension.lstrip(".")).lower()
    base = prefix if prefix is not None else secure_filename(stem)
    suffix = f".{extension}" if extension else ""
    return f"{base}{uuid.uuid4()}{suffix}"


def file_size(file_storage) -> int:
    """Return the upload size in bytes, or -1 if the stream cannot seek."""
    stream = getattr(file_storage, "stream", file_storage)
    try:
        stream.seek(0, os.SEEK_END)
        length = stream.tell()
        stream.seek(0)
        return length
    except (AttributeError, OSError):
        return -1


def save_upload(file_storage, filename: str) -> str:
    folder = upload_folder()
    os.makedirs(folder, exist_ok=True)

    try:
        file_storage.stream.seek(0)
    except (AttributeError, OSError):
        pass

    absolute_path = os.path.join(folder, filename)
    file_storage.save(absolute_path)
    return absolute_path


def remove_upload(filename: str | None) -> bool:
    """Delete a stored upload. A file that is already gone is not an error."""
    if not filename:
        return False

    try:
        os.remove(upload_path(filename))
    except FileNotFoundError:
        logger.warning("Upload %s was already missing", filename)
        return False
    return True
