from blog_api.db import db
from blog_api.models.user_model import User


def get_by_id(user_id: int):
    return db.session.get(User, user_id)


def get_by_email(email: str):
    return User.query.filter_by(email=email).first()


def list_users():
    return User.query.order_by(User.id.asc()).all()


def create_user(name, email, password_hash):
    user = User(
        name=name,
        email=email,
        password_hash=password_hash,
        posts=0,
    )
    db.session.add(user)
    db.session.flush()
    return user


def adjust_post_count(user_id: int, delta: int) -> int:
    """Shift a user's post counter in one UPDATE; it never drops below zero."""
    query = User.query.filter(User.id == user_id)
    if delta < 0:
        query = query.filter(User.posts >= -delta)

    return query.update(
        {User.posts: User.posts + delta},
        synchronize_session=False,
    )
