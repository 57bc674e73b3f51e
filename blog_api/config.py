import os
from datetime import timedelta

from dotenv import load_dotenv


load_dotenv()

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Credentialed CORS cannot use a wildcard origin.
_DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
]


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


def _cors_origins():
    raw = ",".join(
        filter(None, [os.getenv("CORS_ALLOWED_ORIGINS"), os.getenv("FRONTEND_URL")])
    )
    env_origins = [
        item.strip() for item in raw.split(",")
        if item.strip() and item.strip() != "*"
    ]
    return env_origins + [
        origin for origin in _DEFAULT_CORS_ORIGINS if origin not in env_origins
    ]


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///blog.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv("JWT_SECRET", "dev-secret")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=1)
    JWT_TOKEN_LOCATION = ["headers"]

    PORT = _env_int("PORT", 8000)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "").strip() or os.path.join(
        _PROJECT_ROOT, "uploads"
    )
    UPLOAD_CACHE_MAX_AGE_SECONDS = _env_int(
        "UPLOAD_CACHE_MAX_AGE_SECONDS", 7 * 24 * 60 * 60
    )
    # Hard ceiling on any request body; per-kind limits are checked in services.
    MAX_CONTENT_LENGTH = _env_int("MAX_CONTENT_LENGTH", 10 * 1024 * 1024)
    AVATAR_MAX_BYTES = 500000
    THUMBNAIL_MAX_BYTES = 2 * 1024 * 1024

    CORS_ALLOWED_ORIGINS = _cors_origins()
