from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from errors import Forbidden

TOKEN_SALT = 'auth-token'


def _serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)


def issue_token(user):
    return _serializer().dumps({'id': user.id, 'email': user.email})


def verify_token(token):
    """Return the claims carried by token, or raise Forbidden."""
    try:
        claims = _serializer().loads(token, max_age=current_app.config.get('TOKEN_MAX_AGE'))
    except SignatureExpired:
        raise Forbidden('Token expired')
    except BadSignature:
        raise Forbidden('Invalid token')
    if not isinstance(claims, dict) or 'id' not in claims:
        raise Forbidden('Invalid token')
    return claims
