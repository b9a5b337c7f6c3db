from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

import accounts

search_bp = Blueprint('search', __name__, url_prefix='/api')


@search_bp.get('/users/search')
@login_required
def search():
    users = accounts.search_users(current_user.id, request.args.get('q', ''))
    return jsonify([u.public() for u in users])
