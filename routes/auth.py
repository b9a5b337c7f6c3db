from flask import Blueprint, current_app, g, jsonify, request

import accounts
import tokens
from errors import AppError, Forbidden, Unauthorized
from extensions import login_manager, store
from routes import request_data, text_field
from uploads import discard_upload, save_upload

auth_bp = Blueprint('auth', __name__, url_prefix='/api')


@login_manager.request_loader
def load_user_from_request(req):
    scheme, _, token = req.headers.get('Authorization', '').partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        g.auth_error = Unauthorized()
        return None
    try:
        claims = tokens.verify_token(token.strip())
    except Forbidden as e:
        g.auth_error = e
        return None
    user = store.find('users', lambda u: u.id == claims['id'])
    if user is None:
        g.auth_error = Forbidden('Invalid token')
    return user


@login_manager.unauthorized_handler
def unauthorized():
    raise g.get('auth_error') or Unauthorized()


def _session(user, token):
    return jsonify({'user': user.private(), 'token': token})


@auth_bp.post('/register')
def register():
    data = request_data()
    fields = {name: text_field(data, name) for name in ('name', 'email', 'password', 'birthday')}
    avatar = save_upload(request.files.get('avatar'), 'avatars')
    try:
        user, token = accounts.register(avatar=avatar, **fields)
    except AppError:
        discard_upload(avatar)
        raise
    return _session(user, token)


@auth_bp.post('/login')
def login():
    data = request_data()
    email = text_field(data, 'email')
    try:
        user, token = accounts.login(email, text_field(data, 'password'))
    except AppError as e:
        current_app.logger.info('failed login for %s: %s', email, e.message)
        raise
    return _session(user, token)
