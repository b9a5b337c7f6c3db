from flask import request

from errors import ValidationError


def request_data():
    """JSON body when there is one, otherwise form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form


def text_field(data, name, default=None):
    """A string field from request_data(); other JSON types are a ValidationError."""
    value = data.get(name, default)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f'{name} must be a string')
    return value
