from flask import Blueprint, jsonify
from flask_login import current_user, login_required

import chat
from routes import request_data, text_field

messages_bp = Blueprint('messages', __name__, url_prefix='/api/messages')


@messages_bp.get('/conversations')
@login_required
def conversations():
    return jsonify([{
        'user': s['user'].public() if s['user'] else None,
        'last_message': s['last_message'].to_dict(),
        'unread_count': s['unread_count'],
    } for s in chat.list_conversations(current_user.id)])


@messages_bp.get('/<user_id>')
@login_required
def thread(user_id):
    return jsonify([m.to_dict() for m in chat.list_thread(current_user.id, user_id)])


@messages_bp.post('')
@login_required
def send():
    data = request_data()
    m = chat.send_message(current_user.id, text_field(data, 'receiver_id'),
                           text_field(data, 'text'))
    return jsonify(m.to_dict())
