import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from blog_api.db import db
from blog_api.errors import HttpError
from blog_api.extensions.file_storage import remove_upload, save_upload, unique_filename
from blog_api.repositories import user_repository
from blog_api.schemas.user_schema import user_schema, users_schema
from blog_api.services.auth_service import MIN_PASSWORD_LENGTH, normalize_email
from blog_api.services.validation import check_image_upload, require_non_empty_string


logger = logging.getLogger(__name__)


def _get_user_or_404(user_id: int):
    user = user_repository.get_by_id(user_id)
    if not user:
        raise HttpError("User not found.", 404)
    return user


def get_user(user_id: int):
    return user_schema.dump(_get_user_or_404(user_id))


def get_authors():
    return users_schema.dump(user_repository.list_users())


def change_avatar(identity, avatar):
    if avatar is None:
        raise HttpError("Please choose an image.", 422)
    if not getattr(avatar, "filename", ""):
        raise HttpError("Invalid file upload. File name missing.", 400)

    check_image_upload(
        avatar,
        current_app.config["AVATAR_MAX_BYTES"],
        "Profile picture too big. Should be less than 500KB.",
        422,
    )

    user = _get_user_or_404(identity.id)

    if user.avatar:
        try:
            remove_upload(user.avatar)
        except OSError:
            logger.warning("Could not remove old avatar %s", user.avatar, exc_info=True)

    filename = unique_filename(avatar.filename, prefix="avatar")
    try:
        save_upload(avatar, filename)
    except OSError as e:
        logger.error("Failed to save avatar for user %s: %s", user.id, e)
        raise HttpError("Failed to upload avatar.", 500) from e

    user.avatar = filename
    db.session.commit()

    logger.info("User %s changed avatar to %s", user.id, filename)
    return {
        "message": "Avatar updated successfully",
        "user": user_schema.dump(user),
    }


def edit_user(identity, name, email, current_password, new_password, confirm_new_password):
    if not all(
        require_non_empty_string(value)
        for value in (name, email, current_password, new_password)
    ):
        raise HttpError("Fill in all fields.", 422)

    user = _get_user_or_404(identity.id)

    email = normalize_email(email)
    existing = user_repository.get_by_email(email)
    if existing and existing.id != user.id:
        raise HttpError("Email already exists.", 422)

    if not check_password_hash(user.password_hash, current_password):
        raise HttpError("Invalid current password.", 422)

    if new_password != confirm_new_password:
        raise HttpError("New passwords do not match.", 422)

    if len(new_password.strip()) < MIN_PASSWORD_LENGTH:
        raise HttpError(
            f"Password should be at least {MIN_PASSWORD_LENGTH} characters.", 422
        )

    user.name = name.strip()
    user.email = email
    user.password_hash = generate_password_hash(new_password)
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise HttpError("Email already exists.", 422) from e

    logger.info("User %s updated profile", user.id)
    return user_schema.dump(user)
