from flask import Blueprint, current_app, send_from_directory

from blog_api.extensions.file_storage import upload_folder


upload_bp = Blueprint("uploads", __name__)


@upload_bp.route("/<path:filename>", methods=["GET"])
def get_upload(filename: str):
    cache_max_age = max(
        int(current_app.config.get("UPLOAD_CACHE_MAX_AGE_SECONDS", 0)),
        0,
    )
    return send_from_directory(upload_folder(), filename, max_age=cache_max_age)
