import logging
from datetime import datetime

from flask import current_app

from blog_api.db import db
from blog_api.errors import HttpError
from blog_api.extensions.file_storage import remove_upload, save_upload, unique_filename
from blog_api.repositories import post_repository, user_repository
from blog_api.schemas.post_schema import post_schema, posts_schema
from blog_api.services.validation import (
    check_image_upload,
    has_upload,
    require_non_empty_string,
)


logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 12


def _check_thumbnail(thumbnail):
    check_image_upload(
        thumbnail,
        current_app.config["THUMBNAIL_MAX_BYTES"],
        "Thumbnail too big. File should be less than 2MB.",
        400,
    )


def _get_owned_post(identity, post_id: int, forbidden_message: str):
    post = post_repository.get_by_id(post_id)
    if not post:
        raise HttpError("Post not found.", 404)
    if post.creator != identity.id:
        raise HttpError(forbidden_message, 403)
    return post


def create_post(identity, title, category, description, thumbnail):
    if not all(require_non_empty_string(v) for v in (title, category, description)):
        raise HttpError("Fill in all fields and choose a thumbnail.", 422)

    if not has_upload(thumbnail):
        raise HttpError("Thumbnail is required.", 400)

    _check_thumbnail(thumbnail)

    filename = unique_filename(thumbnail.filename)
    save_upload(thumbnail, filename)

    try:
        post = post_repository.create_post(
            title=title.strip(),
            category=category.strip(),
            description=description.strip(),
            thumbnail=filename,
            creator_id=identity.id,
        )
        user_repository.adjust_post_count(identity.id, 1)
        db.session.commit()
    except Exception:
        db.session.rollback()
        remove_upload(filename)
        raise

    logger.info("User %s created post %s", identity.id, post.id)
    return post_schema.dump(post)


def get_posts():
    return posts_schema.dump(post_repository.list_recently_updated())


def get_post(post_id: int):
    post = post_repository.get_by_id(post_id)
    if not post:
        raise HttpError("Post not found.", 404)
    return post_schema.dump(post)


def get_category_posts(category: str):
    return posts_schema.dump(post_repository.list_by_category(category))


def get_user_posts(user_id: int):
    return posts_schema.dump(post_repository.list_by_creator(user_id))


def edit_post(identity, post_id: int, title, category, description, thumbnail=None):
    if (
        not require_non_empty_string(title)
        or not require_non_empty_string(category)
        or not isinstance(description, str)
        or len(description.strip()) < MIN_DESCRIPTION_LENGTH
    ):
        raise HttpError("Fill in all fields.", 422)

    post = _get_owned_post(identity, post_id, "Unauthorized to edit this post.")

    new_filename = None
    if has_upload(thumbnail):
        _check_thumbnail(thumbnail)
        new_filename = unique_filename(thumbnail.filename)
        save_upload(thumbnail, new_filename)

    old_filename = post.thumbnail
    post.title = title.strip()
    post.category = category.strip()
    post.description = description.strip()
    post.updated_at = datetime.utcnow()
    if new_filename:
        post.thumbnail = new_filename

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        remove_upload(new_filename)
        raise

    if new_filename:
        try:
            remove_upload(old_filename)
        except OSError:
            logger.warning("Could not remove old thumbnail %s", old_filename, exc_info=True)

    logger.info("User %s edited post %s", identity.id, post.id)
    return post_schema.dump(post)


def delete_post(identity, post_id: int):
    post = _get_owned_post(identity, post_id, "Post couldn't be deleted.")

    remove_upload(post.thumbnail)
    post_repository.delete_post(post)
    user_repository.adjust_post_count(post.creator, -1)
    db.session.commit()

    logger.info("User %s deleted post %s", identity.id, post_id)
    return f"Post {post_id} deleted successfully."
