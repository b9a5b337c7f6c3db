from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

import posts
from errors import ValidationError
from routes import request_data, text_field
from uploads import save_upload

feed_bp = Blueprint('feed', __name__, url_prefix='/api/posts')


def _int_arg(name):
    value = request.args.get(name)
    if value is None or value == '':
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f'{name} must be a number')


@feed_bp.post('')
@login_required
def create_post():
    data = request_data()
    media = [save_upload(f, 'posts') for f in request.files.getlist('media')[:5]]
    if not request.files and isinstance(data.get('media'), list):
        media = [m for m in data['media'] if isinstance(m, str)]
    post = posts.create_post(current_user.id, text_field(data, 'content', ''), media)
    return jsonify(post.to_dict())


@feed_bp.get('')
@login_required
def home():
    feed = posts.get_feed(current_user.id, page=_int_arg('page'),
                          per_page=_int_arg('per_page'))
    return jsonify([p.to_dict() for p in feed])


@feed_bp.post('/<post_id>/like')
@login_required
def like(post_id):
    return jsonify({'likes': posts.toggle_like(post_id, current_user.id)})


@feed_bp.post('/<post_id>/comment')
@login_required
def comment(post_id):
    c = posts.add_comment(post_id, current_user.id, text_field(request_data(), 'text', ''))
    return jsonify(c.to_dict())


@feed_bp.post('/<post_id>/share')
@login_required
def share(post_id):
    return jsonify({'shares': posts.share_post(post_id, current_user.id)})
