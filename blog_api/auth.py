from dataclasses import dataclass
from functools import wraps

from flask_jwt_extended import create_access_token, get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import (
    InvalidHeaderError,
    JWTExtendedException,
    NoAuthorizationError,
)
from jwt.exceptions import PyJWTError

from blog_api.errors import HttpError


@dataclass(frozen=True)
class Identity:
    id: int
    name: str


def issue_token(user_id: int, name: str) -> str:
    return create_access_token(
        identity=str(user_id),
        additional_claims={"id": user_id, "name": name},
    )


def _identity_from_claims(claims) -> Identity:
    try:
        return Identity(id=int(claims["id"]), name=claims.get("name") or "")
    except (KeyError, TypeError, ValueError) as e:
        raise HttpError("Unauthorized. Invalid token.", 403) from e


def auth_required(view):
    """Reject the request unless it carries a valid bearer token.

    The decoded identity is passed to the view as its first positional
    argument.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            verify_jwt_in_request()
        except (NoAuthorizationError, InvalidHeaderError) as e:
            raise HttpError("Unauthorized. No token provided.", 402) from e
        except (JWTExtendedException, PyJWTError) as e:
            raise HttpError("Unauthorized. Invalid token.", 403) from e

        identity = _identity_from_claims(get_jwt())
        return view(identity, *args, **kwargs)

    return wrapper
