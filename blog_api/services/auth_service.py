import logging

from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from blog_api.auth import issue_token
from blog_api.db import db
from blog_api.errors import HttpError
from blog_api.repositories import user_repository
from blog_api.services.validation import require_non_empty_string


logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


def register(name, email, password, password2):
    if not all(
        require_non_empty_string(value)
        for value in (name, email, password, password2)
    ):
        raise HttpError("Fill in all fields.", 422)

    email = normalize_email(email)
    if user_repository.get_by_email(email):
        raise HttpError("Email already exists.", 422)

    if len(password.strip()) < MIN_PASSWORD_LENGTH:
        raise HttpError(
            f"Password should be at least {MIN_PASSWORD_LENGTH} characters.", 422
        )

    if password != password2:
        raise HttpError("Passwords do not match.", 422)

    try:
        user_repository.create_user(
            name=name.strip(),
            email=email,
            password_hash=generate_password_hash(password),
        )
        db.session.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email.
        db.session.rollback()
        raise HttpError("Email already exists.", 422) from e

    logger.info("Registered user %s", email)
    return f"New user {email} registered."


def login(email, password):
    if not require_non_empty_string(email) or not require_non_empty_string(password):
        raise HttpError("Fill in all fields.", 422)

    user = user_repository.get_by_email(normalize_email(email))
    if not user or not check_password_hash(user.password_hash, password):
        raise HttpError("Invalid credentials.", 422)

    return {
        "token": issue_token(user.id, user.name),
        "id": user.id,
        "name": user.name,
    }
