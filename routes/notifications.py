from flask import Blueprint, jsonify
from flask_login import current_user, login_required

import notify

notifications_bp = Blueprint('notifications', __name__, url_prefix='/api/notifications')


@notifications_bp.get('')
@login_required
def api_notifications():
    return jsonify([n.to_dict() for n in notify.list_notifications(current_user.id)])


@notifications_bp.get('/unread_count')
@login_required
def unread_count():
    return jsonify({'count': notify.unread_count(current_user.id)})


@notifications_bp.post('/<notif_id>/read')
@login_required
def mark_read(notif_id):
    notify.mark_read(notif_id, current_user.id)
    return jsonify({'success': True})
