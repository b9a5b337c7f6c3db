from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

import accounts
from errors import AppError
from routes import request_data, text_field
from uploads import discard_upload, save_upload

profile_bp = Blueprint('profile', __name__, url_prefix='/api')


@profile_bp.get('/me')
@login_required
def me():
    return jsonify(current_user.private())


@profile_bp.put('/me')
@login_required
def edit_profile():
    data = request_data()
    name, bio = text_field(data, 'name'), text_field(data, 'bio')
    uploaded = save_upload(request.files.get('avatar'), 'avatars')
    try:
        user = accounts.update_profile(current_user.id, name=name, bio=bio,
                                       avatar=uploaded or text_field(data, 'avatar'))
    except AppError:
        discard_upload(uploaded)
        raise
    return jsonify(user.private())


@profile_bp.get('/users/<user_id>')
@login_required
def view_profile(user_id):
    return jsonify(accounts.get_user(user_id).public())
