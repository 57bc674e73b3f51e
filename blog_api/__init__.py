from flask import Flask

from blog_api.config import Config
from blog_api.db import db
from blog_api.errors import register_error_handlers
from blog_api.extensions.extensions import cors, jwt, ma


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.from_mapping(test_config)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ALLOWED_ORIGINS"]}},
        supports_credentials=True,
    )

    from blog_api.models import post_model, user_model  # noqa: F401
    from blog_api.routes.post_routes import post_bp
    from blog_api.routes.upload_routes import upload_bp
    from blog_api.routes.user_routes import user_bp

    app.register_blueprint(user_bp, url_prefix="/api/users")
    app.register_blueprint(post_bp, url_prefix="/api/posts")
    app.register_blueprint(upload_bp, url_prefix="/uploads")
    register_error_handlers(app)

    with app.app_context():
        db.create_all()

    return app
