from flask import request

from services.errors import ValidationError


def get_json_object():
    """Return the request's JSON body as a dict.

    A missing or unparseable body counts as empty. Valid JSON that is not an
    object raises ``ValidationError``.
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
