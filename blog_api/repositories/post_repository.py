from blog_api.db import db
from blog_api.models.post_model import Post


def create_post(title, category, description, thumbnail, creator_id):
    post = Post(
        title=title,
        category=category,
        description=description,
        thumbnail=thumbnail,
        creator=creator_id,
    )
    db.session.add(post)
    db.session.flush()

    return post


def get_by_id(post_id: int):
    return db.session.get(Post, post_id)


def list_recently_updated():
    return Post.query.order_by(Post.updated_at.desc(), Post.id.desc()).all()


def list_by_category(category: str):
    return (
        Post.query
        .filter(Post.category == category)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .all()
    )


def list_by_creator(creator_id: int):
    return (
        Post.query
        .filter(Post.creator == creator_id)
        .order_by(Post.created_at.desc(), Post.id.desc())
        .all()
    )


def delete_post(post):
    db.session.delete(post)
