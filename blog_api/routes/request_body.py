from flask import request

from blog_api.errors import HttpError


_FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def read_body() -> dict:
    """Return the request fields whether they arrived as a form or as JSON."""
    content_type = (request.content_type or "").lower()
    if any(kind in content_type for kind in _FORM_CONTENT_TYPES):
        return request.form.to_dict()

    if not request.get_data(cache=True):
        return {}

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise HttpError("Invalid JSON body", 400)
    return data
