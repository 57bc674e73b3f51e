from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from blog_api.db import db


class HttpError(Exception):
    """Failure carrying the message and status code sent back to the client."""

    def __init__(self, message: str, code: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code or 500


def _error_response(message: str, code: int):
    return jsonify({"message": message}), code


def handle_http_error(error: HttpError):
    return _error_response(error.message or "An unknown error occurred.", error.code)


def handle_not_found(error):
    return _error_response(f"Not found - {request.path}", 404)


def handle_werkzeug_error(error: HTTPException):
    return _error_response(error.description or error.name, error.code or 500)


def handle_unexpected_error(error: Exception):
    db.session.rollback()
    current_app.logger.exception(
        "Unhandled error on %s %s", request.method, request.path
    )
    return _error_response("An unknown error occurred.", 500)


def register_error_handlers(app):
    app.register_error_handler(HttpError, handle_http_error)
    # An unmatched method is reported like an unmatched route.
    app.register_error_handler(NotFound, handle_not_found)
    app.register_error_handler(MethodNotAllowed, handle_not_found)
    app.register_error_handler(HTTPException, handle_werkzeug_error)
    app.register_error_handler(Exception, handle_unexpected_error)
